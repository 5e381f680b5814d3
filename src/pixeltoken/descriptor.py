"""
TokenDescriptor ties the pieces together:

    populate -> AssetStore (once)
    mint     -> seed.generate -> persisted Seed
    token_uri-> rle.decode x4 -> svg.compose -> metadata.assemble

Seeds live in a plain dict keyed by token id; ownership, payments and supply
are left to whatever registry sits in front of this.
"""
import threading
from typing import Dict, List, Sequence

from . import metadata, rle, seed as seeds_mod, svg
from .assets import CATEGORIES, AssetStore
from .errors import ConfigurationLocked, UnknownToken
from .imaging import render_png
from .palette import Palette
from .seed import Seed


class TokenDescriptor:
    def __init__(self, name_prefix: str = metadata.DEFAULT_PREFIX,
                 description: str = metadata.DEFAULT_DESCRIPTION, store: AssetStore = None):
        self.name_prefix = name_prefix
        self.description = description
        self.store = store if store is not None else AssetStore()
        self._seeds: Dict[int, Seed] = {}
        self._mint_guard = threading.Lock()

    # ----------------------------------------- Setup -----------------------------------------
    def populate(self, bodies: Sequence[bytes], faces: Sequence[bytes], eyes: Sequence[bytes],
                 mouths: Sequence[bytes], palette) -> None:
        """Load every trait collection and the palette. Callable once."""
        if self.store.locked:
            raise ConfigurationLocked("asset store is already populated")
        empty = [name for name, parts in zip(CATEGORIES, (bodies, faces, eyes, mouths)) if not parts]
        if empty:
            raise ValueError(f"cannot populate with empty collections: {', '.join(empty)}")
        if not isinstance(palette, Palette):
            palette = Palette(palette)
        if not len(palette):
            raise ValueError("cannot populate with an empty palette")
        self.store.populate(bodies, faces, eyes, mouths, palette)

    # ----------------------------------------- Minting -----------------------------------------
    def mint(self, token_id: int, entropy: int) -> Seed:
        """Generate and persist the seed for a new token. Nothing is stored on failure."""
        with self._mint_guard:
            if token_id in self._seeds:
                raise ValueError(f"token {token_id} already minted")
            counts = self.store.counts()
            new_seed = seeds_mod.generate(
                entropy,
                counts["bodies"],
                counts["faces"],
                counts["mouths"],
                counts["eyes"],
            )
            self._seeds[token_id] = new_seed
            return new_seed

    def restore(self, token_id: int, token_seed: Seed) -> None:
        """Register a seed persisted elsewhere so its metadata can be read back."""
        counts = self.store.counts()
        limits = {"body": counts["bodies"], "face": counts["faces"],
                  "eyes": counts["eyes"], "mouth": counts["mouths"]}
        for trait, limit in limits.items():
            value = getattr(token_seed, trait)
            if not 0 <= value < limit:
                raise ValueError(f"seed {trait}={value} outside 0..{limit - 1}")
        with self._mint_guard:
            if token_id in self._seeds:
                raise ValueError(f"token {token_id} already has a seed")
            self._seeds[token_id] = token_seed

    def seeds(self, token_id: int) -> Seed:
        try:
            return self._seeds[token_id]
        except KeyError:
            raise UnknownToken(token_id) from None

    def exists(self, token_id: int) -> bool:
        return token_id in self._seeds

    def minted(self) -> List[int]:
        return sorted(self._seeds)

    # ----------------------------------------- Rendering -----------------------------------------
    def layers(self, seed: Seed) -> List[rle.DecodedLayer]:
        """Decode the four parts a seed selects, in draw order."""
        store = self.store
        records = (store.bodies[seed.body], store.faces[seed.face],
                   store.eyes[seed.eyes], store.mouths[seed.mouth])
        return [rle.decode(r) for r in records]

    def generate_svg_image(self, seed: Seed) -> str:
        return svg.compose(self.layers(seed), self.store.palette)

    def token_uri(self, token_id: int) -> str:
        image = self.generate_svg_image(self.seeds(token_id))
        return metadata.assemble(token_id, image, self.name_prefix, self.description)

    def data_uri(self, token_id: int) -> str:
        return self.token_uri(token_id)

    def render_preview(self, token_id: int, resolution: int = 320):
        return render_png(self.layers(self.seeds(token_id)), self.store.palette, resolution)
