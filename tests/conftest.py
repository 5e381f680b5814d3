"""Shared fixtures: tiny 2x2 parts, one visible run each, so output is easy to predict."""
from __future__ import annotations

import pytest

from pixeltoken import rle
from pixeltoken.descriptor import TokenDescriptor

PALETTE = ["#ff0000", "#00ff00", "#0000ff", "#ffff00"]


@pytest.fixture
def palette():
    return list(PALETTE)


@pytest.fixture
def parts():
    """One record per category; each paints a single run on a 2x2 grid."""
    return {
        "bodies": [rle.encode(2, 2, [(2, 1), (2, 0)])],   # row 0, red
        "faces": [rle.encode(2, 2, [(2, 0), (2, 2)])],    # row 1, green
        "eyes": [rle.encode(2, 2, [(1, 3), (3, 0)])],     # (0,0), blue
        "mouths": [rle.encode(2, 2, [(3, 0), (1, 4)])],   # (1,1), yellow
    }


@pytest.fixture
def descriptor(parts, palette):
    d = TokenDescriptor("Test Token", "A test token")
    d.populate(parts["bodies"], parts["faces"], parts["eyes"], parts["mouths"], palette)
    return d
