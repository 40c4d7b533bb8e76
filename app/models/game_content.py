"""
Model: GameContent
Ordered checklist entries of a game (catalog, read-only for users)
"""

from db import db


class GameContent(db.Model):
    __tablename__ = "game_content"

    id = db.Column(db.Integer, primary_key=True)
    game_id = db.Column(db.Integer, db.ForeignKey("games.id", ondelete="CASCADE"), nullable=False)
    content_type = db.Column(db.String(30), nullable=False)  # gym | pokemon_catch | elite_four | story
    name = db.Column(db.String(150), nullable=False)
    description = db.Column(db.Text)
    order_num = db.Column(db.Integer, nullable=False, default=0)

    __table_args__ = (db.Index("idx_game_content_game_order", "game_id", "order_num"),)
