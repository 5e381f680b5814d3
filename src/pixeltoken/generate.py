"""
Pixel Token generator: command line front end.

- import: layered PNG artwork (assets/bodies, faces, eyes, mouths) -> asset bundle JSON
- mint:   asset bundle -> seeded tokens, each written as SVG + metadata JSON (+ optional PNG)
- show:   print the token URI for one token

Entropy per token is SHA256("<seed>:<token id>"), so a run is reproducible from --seed.

Run as `pixeltoken ...` once installed, or `python -m pixeltoken.generate ...`.
"""
import argparse
import hashlib
import json
import sys
from pathlib import Path
from typing import Dict, List, Optional

from tqdm import tqdm

from . import metadata
from .assets import CATEGORIES, ensure_dir, load_bundle, load_json, save_bundle
from .descriptor import TokenDescriptor
from .errors import PixelTokenError
from .imaging import gather_assets, import_assets
from .seed import Seed


# ----------------------------------------- Helpers -----------------------------------------
def entropy_for(seed: int, token_id: int) -> int:
    digest = hashlib.sha256(f"{seed}:{token_id}".encode()).digest()
    return int.from_bytes(digest, "big")

def load_descriptor(bundle_path: Path, name_prefix: str, description: str) -> TokenDescriptor:
    parts, palette = load_bundle(bundle_path)
    descriptor = TokenDescriptor(name_prefix, description)
    descriptor.populate(parts["bodies"], parts["faces"], parts["eyes"], parts["mouths"], palette)
    return descriptor


# ----------------------------------------- Commands -----------------------------------------
def import_collection(assets_root: Path, bundle_path: Path, palette: Optional[List[str]] = None,
                      threshold: int = 0):
    assets_map = gather_assets(assets_root)
    print("Detected assets (per layer):")
    for category in CATEGORIES:
        print(f" {category}: {len(assets_map[category])}")

    parts, pal = import_assets(assets_root, palette, threshold)
    save_bundle(bundle_path, parts, pal)
    print(f"Palette colours: {len(pal)}")
    print(f"Done. Asset bundle saved to: {bundle_path}")


def mint_collection(
        descriptor: TokenDescriptor,
        out_dir: Path,
        num: int,
        start_id: int = 1,
        seed: int = 0,
        resolution: Optional[int] = None,
) -> List[Dict]:
    """Mint num tokens from start_id and write their files; returns the index entries."""
    ensure_dir(out_dir)
    counts = descriptor.store.counts()
    total = 1
    for c in counts.values():
        total *= c
    print(f"Max unique combinations (theoretical) : {total}")

    index = []
    pbar = tqdm(total=num, desc="Minting")
    for token_id in range(start_id, start_id + num):
        token_seed = descriptor.mint(token_id, entropy_for(seed, token_id))
        uri = descriptor.token_uri(token_id)
        doc = metadata.read_document(uri)

        stem = f"token_{token_id:06d}"
        (out_dir / f"{stem}.svg").write_text(metadata.read_image(uri), encoding="utf-8")
        with open(out_dir / f"{stem}.json", "w", encoding="utf-8") as f:
            json.dump(doc, f, ensure_ascii=False, indent=2)
        if resolution:
            descriptor.render_preview(token_id, resolution).save(out_dir / f"{stem}.png")

        index.append({"id": token_id, "name": doc["name"], "seed": token_seed.to_dict()})
        pbar.update(1)
    pbar.close()

    with open(out_dir / "metadata_index.json", "w", encoding="utf-8") as f:
        json.dump(index, f, ensure_ascii=False, indent=2)

    print(f"Done. Minted {len(index)} tokens. Files saved to: {out_dir}")
    return index


def show_token(descriptor: TokenDescriptor, token_id: int, seed: int = 0, token_seed: Optional[Seed] = None) -> str:
    if token_seed is None:
        descriptor.mint(token_id, entropy_for(seed, token_id))
    else:
        descriptor.restore(token_id, token_seed)
    return descriptor.token_uri(token_id)


# ------------------------------------------------ CLI ------------------------------------------------
def parse_traits(text: str) -> Seed:
    """Parse "body,face,eyes,mouth" into a Seed."""
    try:
        values = [int(v) for v in text.split(",")]
    except ValueError:
        raise argparse.ArgumentTypeError(f"traits must be integers: {text!r}") from None
    if len(values) != 4 or min(values) < 0:
        raise argparse.ArgumentTypeError(f"traits need 4 non-negative values body,face,eyes,mouth: {text!r}")
    return Seed(*values)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="pixeltoken", description="Pixel Token generator (run-length parts -> SVG)")
    parser.add_argument("--config", type=str, default="config.json", help="config json path")
    parser.add_argument("--bundle", type=str, default=None, help="asset bundle json (overrides config)")
    sub = parser.add_subparsers(dest="command", required=True)

    p_import = sub.add_parser("import", help="encode PNG layers into an asset bundle")
    p_import.add_argument("--assets", type=str, default=None, help="assets root folder")

    p_mint = sub.add_parser("mint", help="mint tokens and write their images + metadata")
    p_mint.add_argument("--num", type=int, default=10, help="How many tokens to mint")
    p_mint.add_argument("--start", type=int, default=1, help="first token id")
    p_mint.add_argument("--seed", type=int, default=0, help="entropy seed")
    p_mint.add_argument("--resolution", type=int, default=None, help="PNG preview resolution (overrides config, 0 = none)")

    p_show = sub.add_parser("show", help="print the token URI for one token")
    p_show.add_argument("token_id", type=int)
    p_show.add_argument("--seed", type=int, default=0, help="entropy seed")
    p_show.add_argument("--traits", type=parse_traits, default=None,
                        help="explicit seed as body,face,eyes,mouth (skips entropy)")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    cfg = load_json(Path(args.config))
    bundle_path = Path(args.bundle or cfg.get("bundle", "assets.json"))
    name_prefix = cfg.get("name_prefix", metadata.DEFAULT_PREFIX)
    description = cfg.get("description", metadata.DEFAULT_DESCRIPTION)

    try:
        if args.command == "import":
            assets_root = Path(args.assets or cfg.get("assets_root", "assets"))
            import_collection(assets_root, bundle_path, cfg.get("palette") or None, cfg.get("alpha_threshold", 0))
            return 0

        descriptor = load_descriptor(bundle_path, name_prefix, description)
        if args.command == "mint":
            resolution = args.resolution if args.resolution is not None else cfg.get("resolution", 0)
            mint_collection(
                descriptor,
                out_dir=Path(cfg.get("output_dir", "output")),
                num=args.num,
                start_id=args.start,
                seed=args.seed,
                resolution=resolution,
            )
        elif args.command == "show":
            print(show_token(descriptor, args.token_id, args.seed, args.traits))
    except (PixelTokenError, ValueError, FileNotFoundError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
