"""
Repository for ContentTracker database operations
"""

from sqlalchemy.exc import SQLAlchemyError
from db import db, upsert_insert
from models.content_tracker import ContentTracker
from utils import now_utc


class ContentTrackerRepository:
    """Repository for ContentTracker database operations"""

    @staticmethod
    def get_by_id(id):
        """Get ContentTracker by ID"""
        return db.session.get(ContentTracker, id)

    @staticmethod
    def get_by_user_and_game(user_id, game_id):
        """Get all tracker entries of a user for a game"""
        return (
            ContentTracker.query.filter_by(user_id=user_id, game_id=game_id)
            .order_by(ContentTracker.content_id.asc())
            .all()
        )

    @staticmethod
    def get_entry(user_id, game_id, content_id):
        """Get the tracker entry for a catalog item"""
        return ContentTracker.query.filter_by(user_id=user_id, game_id=game_id, content_id=content_id).first()

    @staticmethod
    def set_completed(id, is_completed):
        """Toggle a tracker entry, clearing the completion date when unchecked"""
        item = db.session.get(ContentTracker, id)
        if not item:
            return None

        item.is_completed = bool(is_completed)
        if item.is_completed:
            item.completed_at = item.completed_at or now_utc()
        else:
            item.completed_at = None
        db.session.commit()
        return item

    @staticmethod
    def upsert_completed(user_id, game_id, content_id):
        """
        Mark a catalog item completed for a user (insert or update on conflict).

        An entry that is already completed keeps its original completion date.
        """
        now = now_utc()
        table = ContentTracker.__table__
        stmt = upsert_insert(ContentTracker).values(
            user_id=user_id,
            game_id=game_id,
            content_id=content_id,
            is_completed=True,
            completed_at=now,
            created_at=now,
            updated_at=now,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=["user_id", "game_id", "content_id"],
            set_={
                "is_completed": True,
                "completed_at": db.func.coalesce(table.c.completed_at, stmt.excluded.completed_at),
                "updated_at": stmt.excluded.updated_at,
            },
        )
        try:
            db.session.execute(stmt)
            db.session.commit()
        except SQLAlchemyError as e:
            db.session.rollback()
            raise e

    @staticmethod
    def delete_by_user(user_id):
        """Delete every tracker entry of a user"""
        deleted = ContentTracker.query.filter_by(user_id=user_id).delete()
        db.session.commit()
        return deleted

    @staticmethod
    def count_by_user_and_game(user_id, game_id):
        return ContentTracker.query.filter_by(user_id=user_id, game_id=game_id).count()
