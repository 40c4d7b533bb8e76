"""Guess the catalog game a save file belongs to.

Used by bulk import, where the user uploads many save files without telling
which game each one comes from. The parser only gives a free-text estimate
("Pokemon Emerald/Ruby/Sapphire") and a format label, which are matched back
to a catalog entry with three passes:

1. keyword table (most specific titles first)
2. platform compatible entries sharing a word with the estimate
3. GBA saves only: any Game Boy Advance entry

No match returns None. Callers must report it, never fall back to an
arbitrary game.
"""

import unicodedata
from enum import Enum

import structlog

logger = structlog.get_logger('catalog_matcher')

# Ordered, first hit wins
GAME_KEYWORDS = [
    ("emerald", "Emerald"),
    ("ruby", "Ruby"),
    ("sapphire", "Sapphire"),
    ("firered", "FireRed"),
    ("fire red", "FireRed"),
    ("leafgreen", "LeafGreen"),
    ("leaf green", "LeafGreen"),
    ("pokemon red", "Red"),
    ("pokemon blue", "Blue"),
    ("pokemon yellow", "Yellow"),
    ("pokemon gold", "Gold"),
    ("pokemon silver", "Silver"),
    ("pokemon crystal", "Crystal"),
]

GAME_BOY_PLATFORMS = ["game boy", "game boy color", "game boy advance"]


def normalize_text(text):
    """Lowercase, fold accents (pokémon -> pokemon), trim"""
    text = (text or "").lower().strip().replace("pokémon", "pokemon")
    return "".join(c for c in unicodedata.normalize("NFKD", text) if not unicodedata.combining(c))


def format_label(detected_format):
    if isinstance(detected_format, Enum):
        return detected_format.value
    return detected_format or ""


def _tokens(text):
    return [w for w in text.split() if len(w) > 2]


def _platform_compatible(platform, label):
    platform = normalize_text(platform)
    if "Game Boy" in label:
        return any(p in platform for p in GAME_BOY_PLATFORMS)
    if "DS" in label:
        return "ds" in platform
    return True


class CatalogMatcher:
    """Match parser estimates against a list of catalog games"""

    def __init__(self, games):
        self.games = list(games)

    def match(self, estimated_label, detected_format):
        estimated = normalize_text(estimated_label)
        label = format_label(detected_format)

        game = self._match_keyword(estimated)
        if game is None:
            game = self._match_tokens(estimated, label)
        if game is None and "Game Boy Advance" in label:
            game = self._match_gba_platform()

        if game is None:
            logger.info("No catalog game matches save file", estimated_game=estimated_label, format=label)
        return game

    def _match_keyword(self, estimated):
        for keyword, title in GAME_KEYWORDS:
            if keyword not in estimated:
                continue
            title = title.lower()
            for game in self.games:
                if title in normalize_text(game.name):
                    return game
        return None

    def _match_tokens(self, estimated, label):
        estimated_words = _tokens(estimated)
        for game in self.games:
            if not _platform_compatible(game.platform, label):
                continue
            game_words = _tokens(normalize_text(game.name))
            if any(gw in ew or ew in gw for gw in game_words for ew in estimated_words):
                return game
        return None

    def _match_gba_platform(self):
        for game in self.games:
            if "game boy advance" in normalize_text(game.platform):
                return game
        return None


def matches_game(estimated_label, detected_format, game):
    """
    True when the estimate names the given game.

    Stricter than ``CatalogMatcher.match``: the platform family must agree and
    one of the distinctive words of the game name (not "pokemon") must appear
    in the estimate.
    """
    if game is None:
        return False
    if not _platform_compatible(game.platform, format_label(detected_format)):
        return False
    estimated = normalize_text(estimated_label).replace(" ", "")
    words = [w for w in _tokens(normalize_text(game.name)) if w != "pokemon"]
    return any(w in estimated for w in words)
