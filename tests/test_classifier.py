"""
Tests for save file format classification
"""
import pytest

from savefile.classifier import CANONICAL_SIZES, SIZE_TOLERANCE, canonical_size, classify
from savefile.result import DetectedFormat


def _nearest(length):
    best_size, best_format = CANONICAL_SIZES[0]
    for size, fmt in CANONICAL_SIZES[1:]:
        if abs(size - length) < abs(best_size - length):
            best_size, best_format = size, fmt
    return best_format


class TestExactSizes:
    """Canonical sizes map to their format"""

    @pytest.mark.parametrize("size,expected", [
        (8192, DetectedFormat.GAME_BOY),
        (32768, DetectedFormat.GAME_BOY_COLOR),
        (131072, DetectedFormat.GAME_BOY_ADVANCE),
        (524288, DetectedFormat.NINTENDO_DS),
    ])
    def test_canonical_size(self, size, expected):
        assert classify(size) == expected
        assert canonical_size(expected) == size

    def test_unknown_has_no_canonical_size(self):
        assert canonical_size(DetectedFormat.UNKNOWN) is None


class TestToleranceBands:
    """Padded saves (emulator headers/footers) stay in their band"""

    def test_gba_with_footer(self):
        # 131072 + 16 byte RTC footer
        assert classify(131088) == DetectedFormat.GAME_BOY_ADVANCE

    def test_band_edges(self):
        for size, fmt in CANONICAL_SIZES:
            margin = int(size * SIZE_TOLERANCE)
            assert classify(size - margin) == fmt
            assert classify(size + margin) == fmt

    def test_gbc_slightly_short(self):
        assert classify(31200) == DetectedFormat.GAME_BOY_COLOR


class TestNearestFallback:
    """Sizes outside every band still get a format"""

    def test_zero_length(self):
        assert classify(0) == DetectedFormat.GAME_BOY

    def test_negative_length_treated_as_zero(self):
        assert classify(-10) == DetectedFormat.GAME_BOY

    def test_huge_file(self):
        assert classify(10 * 1024 * 1024) == DetectedFormat.NINTENDO_DS

    def test_tie_goes_to_smaller_size(self):
        # Exactly halfway between 8192 and 32768
        assert classify(20480) == DetectedFormat.GAME_BOY

    def test_just_outside_gb_band(self):
        assert classify(8700) == DetectedFormat.GAME_BOY

    def test_never_unknown(self):
        for length in range(0, 700000, 4099):
            assert classify(length) != DetectedFormat.UNKNOWN

    def test_out_of_band_lengths_pick_nearest_size(self):
        for length in range(0, 700000, 997):
            in_band = [fmt for size, fmt in CANONICAL_SIZES if abs(length - size) <= size * SIZE_TOLERANCE]
            expected = in_band[0] if in_band else _nearest(length)
            assert classify(length) == expected, length
