"""Trait seed generation: window offsets, field mapping, bounds, purity."""
from __future__ import annotations

import random

import pytest

from pixeltoken.errors import EmptyAssetCollection
from pixeltoken.seed import WINDOW_MASK, Seed, generate


def crafted(body, face, mouth, eyes):
    return body | (face << 48) | (mouth << 96) | (eyes << 144)


class TestWindows:
    def test_fields_follow_documented_offsets(self):
        seed = generate(crafted(5, 7, 11, 13), 100, 100, 100, 100)
        assert seed == Seed(body=5, face=7, eyes=13, mouth=11)

    def test_mouth_reads_window_two_and_eyes_window_three(self):
        seed = generate(crafted(0, 0, 2, 1), 10, 10, 10, 10)
        assert seed.mouth == 2
        assert seed.eyes == 1

    def test_each_window_is_reduced_by_its_own_count(self):
        # counts passed as body, face, mouth, eyes
        seed = generate(crafted(5, 7, 11, 13), 3, 4, 6, 5)
        assert seed == Seed(body=5 % 3, face=7 % 4, eyes=13 % 5, mouth=11 % 6)

    def test_windows_are_48_bits_wide(self):
        # a bit just above the body window must not leak into body
        seed = generate(1 << 48, 1 << 50, 1 << 50, 1 << 50, 1 << 50)
        assert seed.body == 0
        assert seed.face == 1

    def test_bits_above_192_are_ignored(self):
        base = crafted(1, 2, 3, 4)
        assert generate(base, 9, 9, 9, 9) == generate(base | (0xFFFF << 200), 9, 9, 9, 9)

    def test_all_ones_entropy(self):
        seed = generate((1 << 256) - 1, 7, 11, 13, 17)
        assert seed == Seed(body=WINDOW_MASK % 7, face=WINDOW_MASK % 11,
                            eyes=WINDOW_MASK % 17, mouth=WINDOW_MASK % 13)


class TestBounds:
    def test_fields_stay_below_counts(self):
        rng = random.Random(1234)
        for _ in range(200):
            counts = [rng.randint(1, 40) for _ in range(4)]
            b, f, m, y = counts
            seed = generate(rng.getrandbits(256), b, f, m, y)
            assert 0 <= seed.body < b
            assert 0 <= seed.face < f
            assert 0 <= seed.mouth < m
            assert 0 <= seed.eyes < y

    def test_pure(self):
        e = 0xDEADBEEF << 100
        assert generate(e, 3, 5, 7, 9) == generate(e, 3, 5, 7, 9)

    def test_single_choice_everywhere_gives_zero_seed(self):
        assert generate(random.Random(7).getrandbits(256), 1, 1, 1, 1) == Seed(0, 0, 0, 0)


class TestFailures:
    @pytest.mark.parametrize("counts", [(0, 1, 1, 1), (1, 0, 1, 1), (1, 1, 0, 1), (1, 1, 1, 0)])
    def test_empty_collection(self, counts):
        with pytest.raises(EmptyAssetCollection):
            generate(12345, *counts)

    def test_entropy_out_of_range(self):
        with pytest.raises(ValueError):
            generate(1 << 256, 1, 1, 1, 1)
        with pytest.raises(ValueError):
            generate(-1, 1, 1, 1, 1)

    def test_entropy_must_be_int(self):
        with pytest.raises(TypeError):
            generate("0x01", 1, 1, 1, 1)


def test_seed_dict_round_trip():
    seed = Seed(body=1, face=2, eyes=3, mouth=4)
    assert seed.to_dict() == {"body": 1, "face": 2, "eyes": 3, "mouth": 4}
    assert Seed.from_dict(seed.to_dict()) == seed
