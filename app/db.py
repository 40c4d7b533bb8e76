from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import create_engine
from sqlalchemy import event
from sqlalchemy.exc import SQLAlchemyError
from flask_migrate import Migrate, upgrade
from alembic.runtime.migration import MigrationContext
from alembic.config import Config
from alembic.script import ScriptDirectory
from alembic import command
import os
import shutil
import logging
from constants import DB_FILE, CONFIG_DIR, ALEMBIC_DIR, ALEMBIC_CONF
from datetime import datetime
from utils import now_utc, isoformat_or_none

# Retrieve main logger
logger = logging.getLogger("main")

db = SQLAlchemy()
migrate = Migrate()


# Alembic functions
def get_alembic_cfg():
    cfg = Config(ALEMBIC_CONF)
    cfg.set_main_option("script_location", ALEMBIC_DIR)
    return cfg


def get_current_db_version(db_uri):
    engine = create_engine(db_uri)
    with engine.connect() as connection:
        context = MigrationContext.configure(connection)
        current_rev = context.get_current_revision()
        return current_rev or "0"


def create_db_backup(db_uri):
    if not db_uri.startswith("sqlite:///") or not os.path.exists(DB_FILE):
        return
    current_revision = get_current_db_version(db_uri)
    timestamp = now_utc().strftime("%Y%m%d_%H%M%S")
    backup_filename = f".backup_v{current_revision}_{timestamp}.db"
    backup_path = os.path.join(CONFIG_DIR, backup_filename)
    shutil.copy2(DB_FILE, backup_path)
    logger.info(f"Database backup created: {backup_path}")


def is_migration_needed(db_uri):
    alembic_cfg = get_alembic_cfg()
    script = ScriptDirectory.from_config(alembic_cfg)
    latest_revision = script.get_current_head()
    current_revision = get_current_db_version(db_uri)
    if current_revision != latest_revision:
        logger.info(f"Database migration needed, from {current_revision} to {latest_revision}")
        return True
    else:
        logger.info(f"Database version is up to date ({current_revision})")
        return False


def to_dict(db_results):
    return {c.name: getattr(db_results, c.name) for c in db_results.__table__.columns}


def to_json_dict(db_results):
    """to_dict with datetimes as ISO 8601 UTC strings"""
    data = to_dict(db_results)
    for key, value in data.items():
        if isinstance(value, datetime):
            data[key] = isoformat_or_none(value)
    return data



def upsert_insert(model):
    """Dialect specific INSERT supporting ON CONFLICT for the bound engine"""
    if db.engine.dialect.name == "postgresql":
        from sqlalchemy.dialects.postgresql import insert
    else:
        from sqlalchemy.dialects.sqlite import insert
    return insert(model.__table__)


def log_activity(action_type, game_id=None, user_id=None, **details):
    """Utility function to log activity"""
    import json
    from flask import has_app_context

    if not has_app_context():
        logger.debug(f"Skipping log_activity (no app context): {action_type}")
        return

    try:
        log = ActivityLog(user_id=user_id, action_type=action_type, game_id=game_id, details=json.dumps(details))
        db.session.add(log)
        db.session.commit()
    except SQLAlchemyError as e:
        logger.error(f"Failed to log activity: {e}")
        db.session.rollback()


def init_db(app):
    with app.app_context():
        # Ensure foreign keys, WAL mode, and timeout are set when connection is opened
        @event.listens_for(db.engine, "connect")
        def set_sqlite_pragma(dbapi_connection, connection_record):
            import sqlite3
            if not isinstance(dbapi_connection, sqlite3.Connection):
                return

            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON;")
            cursor.execute("PRAGMA journal_mode=WAL;")
            cursor.execute("PRAGMA busy_timeout=30000;")
            cursor.close()

        db_uri = app.config["SQLALCHEMY_DATABASE_URI"]
        auto_migrate = app.config.get("DB_AUTO_MIGRATE", True)

        from sqlalchemy import inspect
        inspector = inspect(db.engine)
        if not inspector.has_table("games"):
            logger.info("Initializing database tables...")
            db.create_all()
            if auto_migrate:
                command.stamp(get_alembic_cfg(), "head")
                logger.info("Database created and stamped to the latest migration version.")
        elif auto_migrate:
            logger.info("Checking database migration...")
            if is_migration_needed(db_uri):
                create_db_backup(db_uri)
                upgrade(directory=ALEMBIC_DIR)
                logger.info("Database migration applied successfully.")


from models import *  # noqa: E402,F401,F403
