"""
Repository for Game database operations
"""

from sqlalchemy.exc import SQLAlchemyError
from db import db
from models.game import Game


class GamesRepository:
    """Repository for Game database operations"""

    @staticmethod
    def get_all():
        """Get all games, oldest release first"""
        return Game.query.order_by(Game.release_year.asc(), Game.id.asc()).all()

    @staticmethod
    def get_by_id(id):
        """Get Game by ID"""
        return db.session.get(Game, id)

    @staticmethod
    def get_by_name(name):
        """Get Game by exact name"""
        return Game.query.filter_by(name=name).first()

    @staticmethod
    def create(**kwargs):
        """Create new Game record"""
        try:
            item = Game(**kwargs)
            db.session.add(item)
            db.session.commit()
            db.session.refresh(item)
            return item
        except SQLAlchemyError as e:
            db.session.rollback()
            raise e

    @staticmethod
    def count():
        """Count total Game records"""
        return Game.query.count()
