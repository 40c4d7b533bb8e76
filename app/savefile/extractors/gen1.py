"""Red/Blue/Yellow (8KB battery saves)"""
from savefile.extractors.base import (
    GenerationExtractor,
    clamp,
    clamp_playtime,
    completion_percent,
    first_plausible_badges,
    max_plausible_dex,
    read_byte,
)
from savefile.result import DetectedFormat, ExtractionResult

BADGE_OFFSETS = [0x2625, 0x25F8, 0x260D]
DEX_OWNED_OFFSETS = [0x25B6, 0x25B5, 0x2605]
DEX_RUN_LENGTH = 19
PLAYTIME_HOURS_OFFSET = 0x2CED


class Gen1Extractor(GenerationExtractor):
    detected_format = DetectedFormat.GAME_BOY
    fallback_label = "Pokemon (Gen 1)"
    badge_cap = 8
    species_total = 151

    def _extract(self, data, trace):
        badges = first_plausible_badges(data, BADGE_OFFSETS, self.badge_cap, trace)
        owned = max_plausible_dex(data, DEX_OWNED_OFFSETS, DEX_RUN_LENGTH, self.species_total, trace)

        # Playtime is stored as hours/minutes/seconds bytes, only hours are kept
        hours = read_byte(data, PLAYTIME_HOURS_OFFSET)
        trace("playtime", offset=PLAYTIME_HOURS_OFFSET, hours=hours)

        label = "Pokemon Red/Blue/Yellow"
        if badges >= self.badge_cap:
            label = "Pokemon Red/Blue/Yellow (Complete)"

        return ExtractionResult(
            estimated_game_label=label,
            badges=clamp(badges, 0, self.badge_cap),
            dex_completion_percent=completion_percent(owned, self.species_total),
            playtime_hours=clamp_playtime(hours),
            format=self.detected_format,
        )
