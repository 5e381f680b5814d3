"""SVG compositor: exact output, layer order, bounds checks."""
from __future__ import annotations

import pytest

from pixeltoken.errors import LayerBoundsMismatch, MalformedRecord
from pixeltoken.palette import Palette
from pixeltoken.rle import decode, encode
from pixeltoken.svg import compose

EXPECTED = (
    '<svg width="2" height="2" viewBox="0 0 2 2" xmlns="http://www.w3.org/2000/svg" shape-rendering="crispEdges">'
    '<rect width="2" height="1" x="0" y="0" fill="#ff0000" />'
    '<rect width="2" height="1" x="0" y="1" fill="#00ff00" />'
    '<rect width="1" height="1" x="0" y="0" fill="#0000ff" />'
    '<rect width="1" height="1" x="1" y="1" fill="#ffff00" />'
    "</svg>"
)


@pytest.fixture
def layers(parts):
    return [decode(parts[c][0]) for c in ("bodies", "faces", "eyes", "mouths")]


class TestCompose:
    def test_exact_document(self, layers, palette):
        assert compose(layers, Palette(palette)) == EXPECTED

    def test_deterministic(self, layers, palette):
        assert compose(layers, Palette(palette)) == compose(list(layers), Palette(palette))

    def test_layer_order_matters(self, layers, palette):
        swapped = [layers[1], layers[0], layers[2], layers[3]]
        assert compose(swapped, Palette(palette)) != compose(layers, Palette(palette))

    def test_later_layers_emitted_after_earlier(self, layers, palette):
        doc = compose(layers, Palette(palette))
        assert doc.index("#ff0000") < doc.index("#00ff00") < doc.index("#0000ff") < doc.index("#ffff00")

    def test_colour_index_is_one_based(self, palette):
        one = decode(encode(1, 1, [(1, 1)]))
        empty = decode(encode(1, 1, [(1, 0)]))
        doc = compose([one, empty, empty, empty], Palette(palette))
        assert 'fill="#ff0000"' in doc
        assert doc.count("<rect") == 1

    def test_runs_not_coalesced(self, palette):
        split = decode(encode(4, 1, [(2, 1), (2, 1)]))
        empty = decode(encode(4, 1, [(4, 0)]))
        doc = compose([split, empty, empty, empty], Palette(palette))
        assert doc.count("<rect") == 2


class TestComposeFailures:
    def test_bounds_mismatch(self, layers, palette):
        wide = decode(encode(3, 2, [(3, 1), (3, 0)]))
        with pytest.raises(LayerBoundsMismatch):
            compose([layers[0], layers[1], wide, layers[3]], Palette(palette))

    def test_wrong_layer_count(self, layers, palette):
        with pytest.raises(ValueError):
            compose(layers[:3], Palette(palette))

    def test_colour_outside_palette(self, layers):
        with pytest.raises(MalformedRecord):
            compose(layers, Palette(["#000000"]))
