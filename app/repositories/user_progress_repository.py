"""
Repository for UserProgress database operations
"""

from sqlalchemy import case, func
from sqlalchemy.exc import SQLAlchemyError
from db import db, upsert_insert
from models.game import Game
from models.user_progress import UserProgress
from constants import STATUS_COMPLETED, STATUS_IN_PROGRESS, STATUS_NOT_STARTED, STATUS_PAUSED
from utils import now_utc


class UserProgressRepository:
    """Repository for UserProgress database operations"""

    @staticmethod
    def get_by_user(user_id):
        """Get all progress records of a user, newest first"""
        return (
            UserProgress.query.filter_by(user_id=user_id)
            .order_by(UserProgress.created_at.desc(), UserProgress.id.desc())
            .all()
        )

    @staticmethod
    def get_by_user_and_game(user_id, game_id):
        """Get the progress record for a user and game"""
        return UserProgress.query.filter_by(user_id=user_id, game_id=game_id).first()

    @staticmethod
    def create(**kwargs):
        """Create new UserProgress record"""
        try:
            item = UserProgress(**kwargs)
            db.session.add(item)
            db.session.commit()
            db.session.refresh(item)
            return item
        except SQLAlchemyError as e:
            db.session.rollback()
            raise e

    @staticmethod
    def update(id, **kwargs):
        """Update UserProgress record"""
        item = db.session.get(UserProgress, id)
        if not item:
            return None

        for key, value in kwargs.items():
            if hasattr(item, key):
                setattr(item, key, value)

        db.session.commit()
        return item

    @staticmethod
    def mark_save_file_imported(user_id, game_id, save_file_path=None):
        """
        Insert an in_progress record flagged as imported, or flag the existing one.

        The status of an existing record is left alone. Relies on the
        (user_id, game_id) unique constraint.
        """
        now = now_utc()
        table = UserProgress.__table__
        stmt = upsert_insert(UserProgress).values(
            user_id=user_id,
            game_id=game_id,
            status=STATUS_IN_PROGRESS,
            save_file_imported=True,
            save_file_path=save_file_path,
            started_at=now,
            created_at=now,
            updated_at=now,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=["user_id", "game_id"],
            set_={
                "save_file_imported": True,
                "save_file_path": db.func.coalesce(stmt.excluded.save_file_path, table.c.save_file_path),
                "started_at": db.func.coalesce(table.c.started_at, stmt.excluded.started_at),
                "updated_at": stmt.excluded.updated_at,
            },
        )
        try:
            db.session.execute(stmt)
            db.session.commit()
        except SQLAlchemyError as e:
            db.session.rollback()
            raise e
        return UserProgressRepository.get_by_user_and_game(user_id, game_id)

    @staticmethod
    def delete_by_user(user_id):
        """Delete every progress record of a user"""
        deleted = UserProgress.query.filter_by(user_id=user_id).delete()
        db.session.commit()
        return deleted

    @staticmethod
    def stats(user_id):
        """Per-status game counts and hours of completed games"""
        def status_count(status):
            return func.sum(case((UserProgress.status == status, 1), else_=0))

        row = (
            db.session.query(
                func.count(UserProgress.id).label("total_games"),
                status_count(STATUS_COMPLETED).label("completed_games"),
                status_count(STATUS_IN_PROGRESS).label("in_progress_games"),
                status_count(STATUS_PAUSED).label("paused_games"),
                status_count(STATUS_NOT_STARTED).label("not_started_games"),
                func.sum(
                    case((UserProgress.status == STATUS_COMPLETED, Game.completion_time_hours), else_=0)
                ).label("total_hours_completed"),
            )
            .join(Game, UserProgress.game_id == Game.id)
            .filter(UserProgress.user_id == user_id)
            .first()
        )
        return {key: int(getattr(row, key) or 0) for key in row._fields}
