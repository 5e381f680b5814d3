"""
Asset store: the four trait collections plus the palette, written once.

Also reads and writes the JSON asset bundle the CLI stores imported parts in.
"""
import enum
import json
import threading
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

from .errors import ConfigurationLocked
from .palette import Palette, PaletteTable

CATEGORIES = ("bodies", "faces", "eyes", "mouths")


class LockState(enum.Enum):
    UNLOCKED = "unlocked"
    LOCKED = "locked"


class AssetStore:
    def __init__(self):
        self._state = LockState.UNLOCKED
        self._guard = threading.Lock()
        self._parts: Dict[str, Tuple[bytes, ...]] = {c: () for c in CATEGORIES}
        self.palettes = PaletteTable()

    @property
    def state(self) -> LockState:
        return self._state

    @property
    def locked(self) -> bool:
        return self._state is LockState.LOCKED

    def populate(self, bodies: Sequence[bytes], faces: Sequence[bytes], eyes: Sequence[bytes],
                 mouths: Sequence[bytes], palette) -> None:
        """
        Store all parts and the palette, then lock. A second call raises
        ConfigurationLocked and leaves the stored data as it was.
        """
        with self._guard:
            if self._state is LockState.LOCKED:
                raise ConfigurationLocked("asset store is already populated")
            if not isinstance(palette, Palette):
                palette = Palette(palette)
            parts = {}
            for name, records in zip(CATEGORIES, (bodies, faces, eyes, mouths)):
                parts[name] = tuple(bytes(r) for r in records)
            self._parts = parts
            self.palettes.set(palette)
            self._state = LockState.LOCKED

    def parts(self, category: str) -> Tuple[bytes, ...]:
        return self._parts[category]

    @property
    def bodies(self):
        return self._parts["bodies"]

    @property
    def faces(self):
        return self._parts["faces"]

    @property
    def eyes(self):
        return self._parts["eyes"]

    @property
    def mouths(self):
        return self._parts["mouths"]

    @property
    def palette(self) -> Optional[Palette]:
        return self.palettes.get()

    def counts(self) -> Dict[str, int]:
        return {c: len(self._parts[c]) for c in CATEGORIES}


# ----------------------------------------- Bundle files -----------------------------------------
def ensure_dir(p: Path):
    p.mkdir(parents=True, exist_ok=True)

def load_json(path: Path) -> Dict:
    if not path.exists():
        return {}
    with path.open("r", encoding="utf-8") as f:
        return json.load(f)

def save_bundle(path: Path, parts: Dict[str, List[bytes]], palette: Sequence[str]):
    bundle = {"palette": list(Palette(palette))}
    for c in CATEGORIES:
        bundle[c] = [bytes(r).hex() for r in parts.get(c, [])]
    ensure_dir(path.parent)
    with path.open("w", encoding="utf-8") as f:
        json.dump(bundle, f, ensure_ascii=False, indent=2)

def load_bundle(path: Path) -> Tuple[Dict[str, List[bytes]], Palette]:
    data = load_json(path)
    if not data:
        raise FileNotFoundError(f"asset bundle not found or empty: {path}")
    missing = [k for k in ("palette",) + CATEGORIES if k not in data]
    if missing:
        raise ValueError(f"asset bundle {path} is missing: {', '.join(missing)}")
    parts = {c: [bytes.fromhex(h) for h in data[c]] for c in CATEGORIES}
    return parts, Palette(data["palette"])
