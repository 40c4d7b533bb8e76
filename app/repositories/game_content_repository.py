"""
Repository for GameContent (catalog) database operations
"""

from sqlalchemy.exc import SQLAlchemyError
from db import db
from models.game_content import GameContent


class GameContentRepository:
    """Repository for GameContent database operations"""

    @staticmethod
    def get_by_id(id):
        """Get GameContent by ID"""
        return db.session.get(GameContent, id)

    @staticmethod
    def get_by_game(game_id):
        """Get the ordered catalog of a game"""
        return (
            GameContent.query.filter_by(game_id=game_id)
            .order_by(GameContent.order_num.asc(), GameContent.id.asc())
            .all()
        )

    @staticmethod
    def create(**kwargs):
        """Create new GameContent record"""
        try:
            item = GameContent(**kwargs)
            db.session.add(item)
            db.session.commit()
            db.session.refresh(item)
            return item
        except SQLAlchemyError as e:
            db.session.rollback()
            raise e
