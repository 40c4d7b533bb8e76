"""
Tests for the per-generation save extractors
"""
import pytest
from unittest.mock import patch

from savefile.extractors import DSExtractor, GBAExtractor, Gen1Extractor, Gen2Extractor, SPECIES_TOTALS
from savefile.extractors.base import completion_percent, count_run_bits, popcount, read_u16le
from savefile.result import DetectedFormat

# Large enough for the Gen1 offset tables (last one is 0x2CED)
GEN1_SAVE_SIZE = 12288

ALL_EXTRACTORS = [
    (Gen1Extractor, 8192),
    (Gen2Extractor, 32768),
    (GBAExtractor, 131072),
    (DSExtractor, 524288),
]


class TestHelpers:
    """Bit and bounds helpers"""

    def test_popcount(self):
        assert popcount(0) == 0
        assert popcount(0xFF) == 8
        assert popcount(0b10100001) == 3

    def test_count_run_bits_out_of_bounds(self):
        assert count_run_bits(b"\xff" * 10, 5, 6) is None
        assert count_run_bits(b"\xff" * 10, 4, 6) == 48

    def test_read_u16le(self):
        assert read_u16le(b"\x2c\x01", 0) == 300
        assert read_u16le(b"\x2c", 0) is None

    def test_completion_percent_rounds_half_up(self):
        assert completion_percent(1, 200) == 1
        assert completion_percent(30, 151) == 20
        assert completion_percent(151, 151) == 100
        assert completion_percent(0, 151) == 0


class TestGen1Extractor:
    """Red/Blue/Yellow"""

    def test_all_zero_buffer(self, make_save):
        outcome = Gen1Extractor().extract(make_save(8192))
        result = outcome.result
        assert not outcome.degraded
        assert result.badges == 0
        assert result.dex_completion_percent == 0
        assert result.playtime_hours == 0
        assert result.estimated_game_label == "Pokemon Red/Blue/Yellow"

    def test_all_badges_marks_complete(self, make_save):
        result = Gen1Extractor().extract(make_save(GEN1_SAVE_SIZE, {0x2625: 0xFF})).result
        assert result.badges == 8
        assert result.estimated_game_label == "Pokemon Red/Blue/Yellow (Complete)"

    def test_first_plausible_badge_byte_wins(self, make_save):
        data = make_save(GEN1_SAVE_SIZE, {0x25F8: 0b00000111, 0x260D: 0b00011111})
        assert Gen1Extractor().extract(data).result.badges == 3

    def test_dex_percentage(self, make_save):
        # 30 owned species out of 151
        data = make_save(GEN1_SAVE_SIZE, {0x25B6: b"\xff\xff\xff\x3f"})
        assert Gen1Extractor().extract(data).result.dex_completion_percent == 20

    def test_dex_above_ceiling_is_ignored(self, make_save):
        # 19 full bytes = 152 bits, more than 151 species
        data = make_save(GEN1_SAVE_SIZE, {0x25B5: b"\xff" * 21})
        assert Gen1Extractor().extract(data).result.dex_completion_percent == 0

    def test_playtime_hours(self, make_save):
        assert Gen1Extractor().extract(make_save(GEN1_SAVE_SIZE, {0x2CED: 42})).result.playtime_hours == 42

    def test_canonical_8k_save_is_shorter_than_offset_tables(self, trace_events):
        # Every Gen1 offset sits past 0x2000, an exact 8 KiB save always reads as zeros
        outcome = Gen1Extractor().extract(b"\xff" * 8192, trace=trace_events)

        assert not outcome.degraded
        assert outcome.result.badges == 0
        assert outcome.result.dex_completion_percent == 0
        assert outcome.result.playtime_hours == 0
        probes = [fields for event, fields in trace_events.events if event in ("badge_probe", "dex_probe")]
        assert len(probes) == 6
        assert all(fields["skipped"] for fields in probes)

    def test_patch_outside_the_save_is_rejected(self, make_save):
        with pytest.raises(ValueError):
            make_save(8192, {0x2625: 0xFF})


class TestGen2Extractor:
    """Gold/Silver/Crystal"""

    def test_label(self, make_save):
        assert Gen2Extractor().extract(make_save(32768)).result.estimated_game_label == "Pokemon Gold/Silver/Crystal"

    def test_badges(self, make_save):
        assert Gen2Extractor().extract(make_save(32768, {0x26: 0xFF})).result.badges == 8

    def test_badges_from_later_candidate(self, make_save):
        assert Gen2Extractor().extract(make_save(32768, {0x3025: 0b0101})).result.badges == 2

    def test_full_run_dex(self, make_save):
        # 25 bytes = 200 owned out of 251
        data = make_save(32768, {0x3C06: b"\xff" * 25})
        assert Gen2Extractor().extract(data).result.dex_completion_percent == 80


class TestGBAExtractor:
    """Ruby/Sapphire/Emerald/FireRed/LeafGreen"""

    def test_badge_byte_all_set(self, make_save):
        result = GBAExtractor().extract(make_save(131072, {0x20: 0xFF})).result
        assert result.badges == 8
        assert result.estimated_game_label == "Pokemon Emerald/Ruby/Sapphire"
        assert result.dex_completion_percent == 0

    def test_no_badges_label(self, make_save):
        assert GBAExtractor().extract(make_save(131072)).result.estimated_game_label == "Pokemon Emerald"

    def test_best_dex_run(self, make_save):
        data = make_save(131072, {0x27A: b"\x01" * 26, 0x500: b"\xff" * 26})
        assert GBAExtractor().extract(data).result.dex_completion_percent == 54

    def test_playtime_is_clamped(self, make_save):
        data = make_save(131072, {0x800: b"\x10\x27"})
        assert GBAExtractor().extract(data).result.playtime_hours == 9999


class TestDSExtractor:
    """Diamond/Pearl/Platinum/Black/White"""

    def test_label(self, make_save):
        result = DSExtractor().extract(make_save(524288)).result
        assert result.estimated_game_label == "Pokemon Diamond/Pearl/Platinum/Black/White"
        assert result.badges == 0

    def test_implausible_dex_run_is_skipped(self, make_save):
        data = make_save(524288, {0x21D00: b"\xff" * 68, 0x20000: b"\x0f" * 68})
        assert DSExtractor().extract(data).result.dex_completion_percent == 55

    def test_playtime(self, make_save):
        assert DSExtractor().extract(make_save(524288, {0x400: b"\x2c\x01"})).result.playtime_hours == 300

    def test_short_buffer_skips_far_offsets(self, make_save):
        # Only the badge offsets fit in 0x300 bytes
        result = DSExtractor().extract(make_save(0x300, {0x15: 0b11})).result
        assert result.badges == 2
        assert result.dex_completion_percent == 0
        assert result.playtime_hours == 0


class TestBounds:
    """Any buffer gives values within the per-generation limits"""

    @pytest.mark.parametrize("extractor_cls,size", ALL_EXTRACTORS)
    @pytest.mark.parametrize("fill", [None, 0x00, 0xFF, 0x0F])
    def test_values_in_range(self, extractor_cls, size, fill):
        extractor = extractor_cls()
        data = b"" if fill is None else bytes([fill]) * size
        outcome = extractor.extract(data)

        assert outcome.ok
        assert not outcome.degraded
        assert 0 <= outcome.result.badges <= extractor.badge_cap
        assert 0 <= outcome.result.dex_completion_percent <= 100
        assert 0 <= outcome.result.playtime_hours <= 9999

    def test_none_input(self):
        assert Gen1Extractor().extract(None).result.badges == 0

    def test_species_totals(self):
        assert SPECIES_TOTALS[DetectedFormat.GAME_BOY] == 151
        assert SPECIES_TOTALS[DetectedFormat.NINTENDO_DS] == 493


class TestFailSoft:
    """Internal errors become degraded outcomes, never exceptions"""

    def test_unexpected_error_gives_default_result(self, make_save):
        with patch("savefile.extractors.gen1.max_plausible_dex", side_effect=RuntimeError("corrupt")):
            outcome = Gen1Extractor().extract(make_save(GEN1_SAVE_SIZE, {0x2625: 0xFF}))

        assert outcome.ok
        assert outcome.degraded
        assert outcome.error == "corrupt"
        assert outcome.result.estimated_game_label == "Pokemon (Gen 1)"
        assert outcome.result.badges == 0
        assert outcome.result.dex_completion_percent == 0

    @pytest.mark.parametrize("extractor_cls,module,label", [
        (Gen2Extractor, "gen2", "Pokemon (Gen 2)"),
        (GBAExtractor, "gba", "Pokemon Emerald"),
        (DSExtractor, "ds", "Pokemon (DS)"),
    ])
    def test_fallback_labels(self, extractor_cls, module, label):
        with patch(f"savefile.extractors.{module}.first_plausible_badges", side_effect=ValueError("bad")):
            outcome = extractor_cls().extract(b"\x00" * 64)
        assert outcome.degraded
        assert outcome.result.estimated_game_label == label


class TestTraceHook:
    """Optional diagnostic sink"""

    def test_probe_events(self, make_save, trace_events):
        Gen1Extractor().extract(make_save(GEN1_SAVE_SIZE, {0x2625: 0b11}), trace=trace_events)
        names = [event for event, _ in trace_events.events]

        assert names[0] == "badge_probe"
        assert names.count("dex_probe") == 3
        assert "playtime" in names
        assert trace_events.events[0][1] == {"offset": 0x2625, "value": 3, "bits": 2}

    def test_out_of_bounds_probes_are_reported_as_skipped(self, trace_events):
        GBAExtractor().extract(b"", trace=trace_events)
        badge_probes = [fields for event, fields in trace_events.events if event == "badge_probe"]
        assert len(badge_probes) == 6
        assert all(fields["skipped"] for fields in badge_probes)
