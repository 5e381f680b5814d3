"""
Pillow bridge.

- import side: layered PNG artwork (assets/<category>/*.png) -> part records
  plus a shared palette
- preview side: decoded layers -> RGBA PNG, painted in the same order as the SVG
"""
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from PIL import Image, ImageDraw

from . import rle
from .assets import CATEGORIES
from .errors import LayerBoundsMismatch
from .palette import MAX_COLORS, Palette, hex_from_rgb, normalize_hex
from .svg import common_bounds

IMAGE_SUFFIXES = (".png", ".webp")


# ----------------------------------------- Utilities -----------------------------------------
# filter a folder down to image file names, sorted
def list_images(folder: Path) -> List[str]:
    if not folder.exists() or not folder.is_dir():
        return []
    return [f.name for f in sorted(folder.iterdir()) if f.suffix.lower() in IMAGE_SUFFIXES]

def gather_assets(assets_root: Path) -> Dict[str, List[str]]:
    return {c: list_images(assets_root / c) for c in CATEGORIES}


class PaletteBuilder:
    """Collects colours as images are imported; index 0 stays transparent."""

    def __init__(self, seed_colors: Optional[Iterable[str]] = None):
        self.colors: List[str] = []
        self._index: Dict[str, int] = {}
        for c in seed_colors or ():
            self.index_of(normalize_hex(c))

    def index_of(self, color_hex: str) -> int:
        idx = self._index.get(color_hex)
        if idx is None:
            if len(self.colors) >= MAX_COLORS:
                raise ValueError(f"artwork uses more than {MAX_COLORS} colours")
            self.colors.append(color_hex)
            idx = self._index[color_hex] = len(self.colors)
        return idx

    def palette(self) -> Palette:
        return Palette(self.colors)


# ----------------------------------------- Import -----------------------------------------
def image_to_record(img: Image.Image, palette: PaletteBuilder, threshold: int = 0) -> bytes:
    """
    Encode one RGBA image as a part record. Pixels with alpha <= threshold are
    transparent; anything else is treated as opaque and looked up in the palette.
    """
    img = img.convert("RGBA")
    width, height = img.size
    pixels = img.load()
    runs: List[Tuple[int, int]] = []
    for y in range(height):
        row = []
        for x in range(width):
            r, g, b, a = pixels[x, y]
            row.append(rle.TRANSPARENT if a <= threshold else palette.index_of(hex_from_rgb((r, g, b))))
        runs.extend(rle.row_runs(row))
    return rle.encode(width, height, runs)


def import_assets(assets_root: Path, seed_colors: Optional[Sequence[str]] = None,
                  threshold: int = 0) -> Tuple[Dict[str, List[bytes]], Palette]:
    """Read every category folder under assets_root into part records."""
    assets_map = gather_assets(assets_root)
    builder = PaletteBuilder(seed_colors)
    parts: Dict[str, List[bytes]] = {}
    size = None
    for category in CATEGORIES:
        parts[category] = []
        for name in assets_map[category]:
            with Image.open(assets_root / category / name) as img:
                if size is None:
                    size = img.size
                elif img.size != size:
                    raise LayerBoundsMismatch(
                        f"{category}/{name} is {img.size[0]}x{img.size[1]}, expected {size[0]}x{size[1]}")
                parts[category].append(image_to_record(img, builder, threshold))
    return parts, builder.palette()


# ----------------------------------------- Preview -----------------------------------------
def render_png(layers: Sequence[rle.DecodedLayer], palette: Palette, resolution: Optional[int] = None) -> Image.Image:
    """Paint decoded layers onto a transparent canvas, optionally scaled up (nearest)."""
    width, height = common_bounds(layers)
    canvas = Image.new("RGBA", (width, height), (255, 255, 255, 0))
    draw = ImageDraw.Draw(canvas)
    for layer in layers:
        for run in layer.runs:
            x0, y = run.column, run.row
            draw.rectangle((x0, y, x0 + run.length - 1, y), fill=palette.rgb(run.color_index) + (255,))
    if resolution and (width, height) != (resolution, resolution) and width and height:
        canvas = canvas.resize((resolution, resolution), Image.NEAREST)
    return canvas
