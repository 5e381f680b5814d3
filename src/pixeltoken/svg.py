"""
SVG compositor.

Layers are drawn body -> face -> eyes -> mouth, each run becoming one 1-unit
tall <rect>. Document order is paint order, so later layers land on top.
"""
from typing import List, Sequence

from .errors import LayerBoundsMismatch
from .palette import Palette
from .rle import DecodedLayer

LAYER_NAMES = ("body", "face", "eyes", "mouth")

SVG_OPEN = ('<svg width="{w}" height="{h}" viewBox="0 0 {w} {h}" '
            'xmlns="http://www.w3.org/2000/svg" shape-rendering="crispEdges">')
RECT = '<rect width="{length}" height="1" x="{x}" y="{y}" fill="{fill}" />'
SVG_CLOSE = "</svg>"


def common_bounds(layers: Sequence[DecodedLayer]):
    """Return the (width, height) every layer shares."""
    if not layers:
        raise ValueError("nothing to compose")
    bounds = layers[0].bounds
    for name, layer in zip(LAYER_NAMES, layers):
        if layer.bounds != bounds:
            raise LayerBoundsMismatch(
                f"{name} layer is {layer.width}x{layer.height}, expected {bounds[0]}x{bounds[1]}")
    return bounds


def compose(layers: Sequence[DecodedLayer], palette: Palette) -> str:
    if len(layers) != len(LAYER_NAMES):
        raise ValueError(f"expected {len(LAYER_NAMES)} layers ({', '.join(LAYER_NAMES)}), got {len(layers)}")
    width, height = common_bounds(layers)

    parts: List[str] = [SVG_OPEN.format(w=width, h=height)]
    for layer in layers:
        for run in layer.runs:
            parts.append(RECT.format(length=run.length, x=run.column, y=run.row,
                                     fill=palette.color(run.color_index)))
    parts.append(SVG_CLOSE)
    return "".join(parts)
