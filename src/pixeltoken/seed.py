"""
Trait seed generation.

The 256-bit entropy value is cut into 48-bit windows at bit offsets 0, 48, 96
and 144. Window order is body, face, mouth, eyes; the Seed itself lists eyes
before mouth. Tokens minted so far depend on that mapping, so keep it.
"""
from dataclasses import asdict, dataclass
from typing import Dict

from .errors import EmptyAssetCollection

WINDOW_BITS = 48
WINDOW_MASK = (1 << WINDOW_BITS) - 1
ENTROPY_BITS = 256

BODY_SHIFT = 0
FACE_SHIFT = 48
MOUTH_SHIFT = 96
EYES_SHIFT = 144

TRAITS = ("body", "face", "eyes", "mouth")


@dataclass(frozen=True)
class Seed:
    body: int
    face: int
    eyes: int
    mouth: int

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, int]) -> "Seed":
        return cls(**{t: int(data[t]) for t in TRAITS})


def _window(entropy: int, shift: int) -> int:
    return (entropy >> shift) & WINDOW_MASK


def generate(entropy: int, body_count: int, face_count: int, mouth_count: int, eyes_count: int) -> Seed:
    if not isinstance(entropy, int) or isinstance(entropy, bool):
        raise TypeError(f"entropy must be an int, got {type(entropy).__name__}")
    if not 0 <= entropy < (1 << ENTROPY_BITS):
        raise ValueError("entropy must be an unsigned 256-bit value")

    counts = {"body": body_count, "face": face_count, "mouth": mouth_count, "eyes": eyes_count}
    empty = [name for name, count in counts.items() if count <= 0]
    if empty:
        raise EmptyAssetCollection(f"no parts loaded for: {', '.join(empty)}")

    return Seed(
        body=_window(entropy, BODY_SHIFT) % body_count,
        face=_window(entropy, FACE_SHIFT) % face_count,
        eyes=_window(entropy, EYES_SHIFT) % eyes_count,
        mouth=_window(entropy, MOUTH_SHIFT) % mouth_count,
    )
