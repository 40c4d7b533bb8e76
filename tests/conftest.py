"""
Pytest fixtures and configuration for Pokemon Tracker tests
"""
import os
import sys
import tempfile
import pytest

# Isolated config/data directories, must be set before constants is imported
_TEST_ROOT = tempfile.mkdtemp(prefix="tracker-tests-")
os.environ.setdefault('TRACKER_CONFIG_DIR', os.path.join(_TEST_ROOT, 'config'))
os.environ.setdefault('TRACKER_DATA_DIR', os.path.join(_TEST_ROOT, 'data'))

# Add app directory to path
sys.path.insert(0, os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'app'))


@pytest.fixture(autouse=True)
def clean_settings():
    """Every test starts from the default settings file"""
    import settings
    from constants import CONFIG_FILE

    if os.path.exists(CONFIG_FILE):
        os.remove(CONFIG_FILE)
    settings._cached_settings = None
    yield
    settings._cached_settings = None


@pytest.fixture
def app():
    """Application on an in-memory SQLite database"""
    from app import create_app
    from db import db

    app = create_app({
        'TESTING': True,
        'SECRET_KEY': 'test-secret-key',
        'SQLALCHEMY_DATABASE_URI': 'sqlite://',
        'DB_AUTO_MIGRATE': False,
        'RATELIMIT_ENABLED': False,
    })
    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def session(app):
    from db import db
    return db.session


@pytest.fixture
def catalog(app):
    """Default catalog: 16 games, each with gyms, a dex milestone and the Elite Four"""
    from scripts.seed_catalog import seed_catalog
    from repositories.games_repository import GamesRepository

    seed_catalog()
    return {game.name: game for game in GamesRepository.get_all()}


@pytest.fixture
def red(catalog):
    return catalog["Pokemon Red"]


@pytest.fixture
def make_save():
    """
    Build a save blob of the given size, zero filled, with ``{offset: bytes}``
    patches applied. A patch that does not fit in the buffer is an error.
    """
    def _make(size, patches=None):
        data = bytearray(size)
        for offset, value in (patches or {}).items():
            if isinstance(value, int):
                value = bytes([value])
            if offset < 0 or offset + len(value) > size:
                raise ValueError(f"Patch at {offset:#x} does not fit in a {size} byte save")
            data[offset:offset + len(value)] = value
        return bytes(data)
    return _make


@pytest.fixture
def trace_events():
    """Trace sink recording (event, fields) tuples"""
    events = []

    def _trace(event, **fields):
        events.append((event, fields))

    _trace.events = events
    return _trace

