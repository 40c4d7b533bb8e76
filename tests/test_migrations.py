"""
Tests for the Alembic environment shipped with the application
"""
import os

from alembic.script import ScriptDirectory

from constants import ALEMBIC_CONF, ALEMBIC_DIR
from db import get_alembic_cfg


class TestAlembicEnvironment:
    """Migration files resolve from ALEMBIC_DIR"""

    def test_environment_files_present(self):
        assert os.path.isfile(ALEMBIC_CONF)
        assert os.path.isfile(os.path.join(ALEMBIC_DIR, "env.py"))
        assert os.path.isfile(os.path.join(ALEMBIC_DIR, "script.py.mako"))

    def test_single_head_is_initial_schema(self):
        script = ScriptDirectory.from_config(get_alembic_cfg())

        assert script.get_heads() == ["a1b2c3d4e5f6"]
        assert script.get_revision("a1b2c3d4e5f6").down_revision is None
