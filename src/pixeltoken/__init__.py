"""Pixel Token: seeded trait selection and run-length part -> SVG rendering."""
from .assets import AssetStore, LockState
from .descriptor import TokenDescriptor
from .errors import (
    ConfigurationLocked,
    EmptyAssetCollection,
    LayerBoundsMismatch,
    MalformedRecord,
    PixelTokenError,
    UnknownToken,
)
from .metadata import assemble
from .palette import Palette, PaletteTable
from .rle import DecodedLayer, Run, decode, encode
from .seed import Seed, generate
from .svg import compose

__version__ = "0.1.0"
