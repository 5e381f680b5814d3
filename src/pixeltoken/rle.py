"""
Run-length part records.

Layout (little-endian):
    bytes 0-1   grid width  (uint16)
    bytes 2-3   grid height (uint16)
    then pairs  (run length: uint8, colour index: uint8)

Runs fill the grid row-major. Colour index 0 is transparent: it advances the
cursor but produces no draw command. A run reaching past the end of its row
wraps the cursor onto the next row and is still emitted as a single run. The
run lengths must add up to exactly width * height.
"""
import struct
from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple

from .errors import MalformedRecord

HEADER = struct.Struct("<HH")
RUN = struct.Struct("<BB")
TRANSPARENT = 0
MAX_RUN = 0xFF


@dataclass(frozen=True)
class Run:
    row: int
    column: int
    length: int
    color_index: int


@dataclass(frozen=True)
class DecodedLayer:
    width: int
    height: int
    runs: Tuple[Run, ...]

    @property
    def bounds(self) -> Tuple[int, int]:
        return self.width, self.height


def decode(record: bytes) -> DecodedLayer:
    """Decode one part record into its visible runs, in row-major order."""
    record = bytes(record)
    if len(record) < HEADER.size:
        raise MalformedRecord(f"record is {len(record)} bytes, header needs {HEADER.size}")
    if (len(record) - HEADER.size) % RUN.size:
        raise MalformedRecord("record body is not a whole number of runs")

    width, height = HEADER.unpack_from(record, 0)
    area = width * height
    row = col = 0
    painted = 0
    runs: List[Run] = []

    for length, color_index in RUN.iter_unpack(record[HEADER.size:]):
        if not length:
            continue
        if painted + length > area:
            raise MalformedRecord(f"runs overflow the {width}x{height} grid")
        # a run reaching past the row edge is kept whole, wrapping the cursor
        if color_index != TRANSPARENT:
            runs.append(Run(row, col, length, color_index))
        painted += length
        row, col = divmod(row * width + col + length, width)

    if painted != area:
        raise MalformedRecord(f"runs cover {painted} pixels, {width}x{height} grid needs {area}")
    return DecodedLayer(width, height, tuple(runs))


def encode(width: int, height: int, runs: Iterable[Sequence[int]]) -> bytes:
    """Build a part record from (length, colour index) pairs."""
    if not (0 <= width <= 0xFFFF and 0 <= height <= 0xFFFF):
        raise ValueError(f"grid {width}x{height} does not fit the 16-bit header")
    out = bytearray(HEADER.pack(width, height))
    total = 0
    for length, color_index in runs:
        if not 1 <= length <= MAX_RUN:
            raise ValueError(f"run length {length} outside 1..{MAX_RUN}")
        if not 0 <= color_index <= 0xFF:
            raise ValueError(f"colour index {color_index} outside 0..255")
        out += RUN.pack(length, color_index)
        total += length
    if total != width * height:
        raise MalformedRecord(f"runs cover {total} pixels, {width}x{height} grid needs {width * height}")
    return bytes(out)


def row_runs(indices: Sequence[int]) -> List[Tuple[int, int]]:
    """Split one row of colour indices into (length, index) runs of at most 255 pixels."""
    out: List[Tuple[int, int]] = []
    for idx in indices:
        if out and out[-1][1] == idx and out[-1][0] < MAX_RUN:
            out[-1] = (out[-1][0] + 1, idx)
        else:
            out.append((1, idx))
    return out
