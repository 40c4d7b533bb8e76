"""Gold/Silver/Crystal (32KB battery saves)"""
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

# Johto badges first, then the Kanto post-game byte
BADGE_OFFSETS = [0x26, 0x2626, 0x3025, 0x22, 0x25]
DEX_OWNED_OFFSETS = [0x3C06, 0x3C00, 0x38]
DEX_RUN_LENGTH = 25
PLAYTIME_HOURS_OFFSET = 0x2CED


class Gen2Extractor(GenerationExtractor):
    detected_format = DetectedFormat.GAME_BOY_COLOR
    fallback_label = "Pokemon (Gen 2)"
    # Johto + Kanto
    badge_cap = 16
    species_total = 251

    def _extract(self, data, trace):
        badges = first_plausible_badges(data, BADGE_OFFSETS, self.badge_cap, trace)
        owned = max_plausible_dex(data, DEX_OWNED_OFFSETS, DEX_RUN_LENGTH, self.species_total, trace)

        hours = read_byte(data, PLAYTIME_HOURS_OFFSET)
        trace("playtime", offset=PLAYTIME_HOURS_OFFSET, hours=hours)

        label = "Pokemon Gold/Silver/Crystal"
        if badges >= self.badge_cap:
            label = "Pokemon Gold/Silver/Crystal (Complete)"

        return ExtractionResult(
            estimated_game_label=label,
            badges=clamp(badges, 0, self.badge_cap),
            dex_completion_percent=completion_percent(owned, self.species_total),
            playtime_hours=clamp_playtime(hours),
            format=self.detected_format,
        )
