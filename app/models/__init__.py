"""
Models package

One module per table:
- game.py: games catalog
- game_content.py: per-game checklist items (gyms, dex milestones...)
- user_progress.py: per-user per-game status
- content_tracker.py: per-user checklist completion
- user_pokemon.py: caught creature records
- activitylog.py: activity log

For convenience, models can also be imported from db.py:
    from db import Game, UserProgress, etc.
"""

from .game import Game
from .game_content import GameContent
from .user_progress import UserProgress
from .content_tracker import ContentTracker
from .user_pokemon import UserPokemon
from .activitylog import ActivityLog

__all__ = [
    "Game",
    "GameContent",
    "UserProgress",
    "ContentTracker",
    "UserPokemon",
    "ActivityLog",
]
