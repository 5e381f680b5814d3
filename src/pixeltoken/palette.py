"""
Palette table: colour index -> "#rrggbb" string.

Index 0 of a part record means "transparent" and never reaches the palette,
so record colour index N resolves to palette position N-1.
"""
import re
from typing import Dict, Iterable, List, Optional, Tuple

from .errors import MalformedRecord

_HEX_RE = re.compile(r"^#?([0-9a-fA-F]{6})$")

# Colour index is a single byte and 0 is reserved
MAX_COLORS = 255


# ----------------------------------------- Colour helpers -----------------------------------------
# RGB -> HEX
def hex_from_rgb(rgb) -> str:
    return "#{:02x}{:02x}{:02x}".format(*rgb[:3])

# HEX -> RGB
def rgb_from_hex(hexstr: str) -> Tuple[int, int, int]:
    hs = normalize_hex(hexstr).lstrip("#")
    return tuple(int(hs[i:i+2], 16) for i in (0, 2, 4))

def normalize_hex(color: str) -> str:
    """Accept "rrggbb" or "#RRGGBB" and return lowercase "#rrggbb"."""
    m = _HEX_RE.match(color.strip()) if isinstance(color, str) else None
    if not m:
        raise ValueError(f"not a hex colour: {color!r}")
    return "#" + m.group(1).lower()


# ----------------------------------------- Palette -----------------------------------------
class Palette:
    """Immutable ordered list of colours."""

    __slots__ = ("_colors",)

    def __init__(self, colors: Iterable[str]):
        colors = tuple(normalize_hex(c) for c in colors)
        if len(colors) > MAX_COLORS:
            raise ValueError(f"palette holds at most {MAX_COLORS} colours, got {len(colors)}")
        self._colors = colors

    def __len__(self):
        return len(self._colors)

    def __iter__(self):
        return iter(self._colors)

    def __eq__(self, other):
        return isinstance(other, Palette) and self._colors == other._colors

    def __hash__(self):
        return hash(self._colors)

    def __repr__(self):
        return f"Palette({list(self._colors)!r})"

    def color(self, index: int) -> str:
        """Resolve a record colour index (1-based) to its hex string."""
        if index < 1 or index > len(self._colors):
            raise MalformedRecord(f"colour index {index} outside palette of {len(self._colors)}")
        return self._colors[index - 1]

    def rgb(self, index: int) -> Tuple[int, int, int]:
        return rgb_from_hex(self.color(index))

    def to_list(self) -> List[str]:
        return list(self._colors)


class PaletteTable:
    """
    Palettes keyed by palette id. Only id 0 is ever populated, but the table
    keeps the keyed shape so records could name another palette later.
    """

    DEFAULT_ID = 0

    def __init__(self):
        self._palettes: Dict[int, Palette] = {}

    def set(self, palette: Palette, palette_id: int = DEFAULT_ID):
        self._palettes[palette_id] = palette

    def get(self, palette_id: int = DEFAULT_ID) -> Optional[Palette]:
        return self._palettes.get(palette_id)

    def __contains__(self, palette_id):
        return palette_id in self._palettes

    def __getitem__(self, palette_id: int) -> Palette:
        return self._palettes[palette_id]
