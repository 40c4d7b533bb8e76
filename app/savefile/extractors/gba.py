"""Ruby/Sapphire/Emerald/FireRed/LeafGreen (128KB flash saves)"""
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

BADGE_OFFSETS = [0x20, 0x21, 0x29, 0x2A, 0x100, 0x200]
DEX_OWNED_OFFSETS = [0x27A, 0x2A0, 0x300, 0x338, 0x500]
DEX_RUN_LENGTH = 26
PLAYTIME_HOURS_OFFSET = 0x800


class GBAExtractor(GenerationExtractor):
    detected_format = DetectedFormat.GAME_BOY_ADVANCE
    fallback_label = "Pokemon Emerald"
    badge_cap = 8
    species_total = 386

    def _extract(self, data, trace):
        badges = first_plausible_badges(data, BADGE_OFFSETS, self.badge_cap, trace)
        owned = max_plausible_dex(data, DEX_OWNED_OFFSETS, DEX_RUN_LENGTH, self.species_total, trace)

        hours = read_u16le(data, PLAYTIME_HOURS_OFFSET)
        trace("playtime", offset=PLAYTIME_HOURS_OFFSET, hours=hours)

        # Without badges there is nothing to tell Hoenn saves apart
        label = "Pokemon Emerald"
        if badges > 0:
            label = "Pokemon Emerald/Ruby/Sapphire"

        return ExtractionResult(
            estimated_game_label=label,
            badges=clamp(badges, 0, self.badge_cap),
            dex_completion_percent=completion_percent(owned, self.species_total),
            playtime_hours=clamp_playtime(hours),
            format=self.detected_format,
        )
