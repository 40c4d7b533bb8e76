"""Diamond/Pearl/Platinum and Black/White (512KB saves)"""
from savefile.extractors.base import (
    GenerationExtractor,
    clamp,
    clamp_playtime,
    completion_percent,
    first_plausible_badges,
    max_plausible_dex,
    read_u16le,
)
from savefile.result import DetectedFormat, ExtractionResult

BADGE_OFFSETS = [0x15, 0x16, 0x100, 0x200]
DEX_OWNED_OFFSETS = [0x21D00, 0x20000, 0x21000]
DEX_RUN_LENGTH = 68
PLAYTIME_HOURS_OFFSET = 0x400


class DSExtractor(GenerationExtractor):
    detected_format = DetectedFormat.NINTENDO_DS
    fallback_label = "Pokemon (DS)"
    badge_cap = 8
    species_total = 493

    def _extract(self, data, trace):
        badges = first_plausible_badges(data, BADGE_OFFSETS, self.badge_cap, trace)
        owned = max_plausible_dex(data, DEX_OWNED_OFFSETS, DEX_RUN_LENGTH, self.species_total, trace)

        hours = read_u16le(data, PLAYTIME_HOURS_OFFSET)
        trace("playtime", offset=PLAYTIME_HOURS_OFFSET, hours=hours)

        return ExtractionResult(
            estimated_game_label="Pokemon Diamond/Pearl/Platinum/Black/White",
            badges=clamp(badges, 0, self.badge_cap),
            dex_completion_percent=completion_percent(owned, self.species_total),
            playtime_hours=clamp_playtime(hours),
            format=self.detected_format,
        )
