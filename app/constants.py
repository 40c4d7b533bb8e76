import os

APP_DIR = os.path.dirname(os.path.abspath(__file__))
DATA_DIR = os.environ.get('TRACKER_DATA_DIR', os.path.join(APP_DIR, 'data'))
CONFIG_DIR = os.environ.get('TRACKER_CONFIG_DIR', os.path.join(APP_DIR, 'config'))
DB_FILE = os.path.join(CONFIG_DIR, 'tracker.db')
CONFIG_FILE = os.path.join(CONFIG_DIR, 'settings.yaml')
ALEMBIC_DIR = os.path.join(APP_DIR, 'migrations')
ALEMBIC_CONF = os.path.join(ALEMBIC_DIR, 'alembic.ini')

TRACKER_DB = os.environ.get('DATABASE_URL') or 'sqlite:///' + DB_FILE

BUILD_VERSION = '20261019_1200'

DEFAULT_SETTINGS = {
    "savefile": {
        "strict_game_match": False,
        "dex_milestone_threshold": 10,
        "roster_mode": "reference",
        "debug_trace": False,
        "max_upload_mb": 10,
        "allowed_extensions": [".sav", ".3ds"],
    },
    "server": {
        "rate_limits": ["1000 per day", "200 per hour"],
        "cors_origins": "*",
    },
}

# Progress statuses
STATUS_NOT_STARTED = 'not_started'
STATUS_IN_PROGRESS = 'in_progress'
STATUS_PAUSED = 'paused'
STATUS_COMPLETED = 'completed'

PROGRESS_STATUSES = [
    STATUS_NOT_STARTED,
    STATUS_IN_PROGRESS,
    STATUS_PAUSED,
    STATUS_COMPLETED,
]

# Content catalog types
CONTENT_TYPE_GYM = 'gym'
CONTENT_TYPE_POKEMON_CATCH = 'pokemon_catch'
CONTENT_TYPE_ELITE_FOUR = 'elite_four'
CONTENT_TYPE_STORY = 'story'

ROSTER_MODE_REFERENCE = 'reference'
ROSTER_MODE_GENERATION = 'generation'
ROSTER_MODES = [ROSTER_MODE_REFERENCE, ROSTER_MODE_GENERATION]

MAX_PLAYTIME_HOURS = 9999
