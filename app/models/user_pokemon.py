"""
Model: UserPokemon
"""

from db import db
from utils import now_utc


class UserPokemon(db.Model):
    __tablename__ = "user_pokemon"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.String(64), nullable=False, index=True)
    game_id = db.Column(db.Integer, db.ForeignKey("games.id", ondelete="CASCADE"), nullable=False)
    pokemon_id = db.Column(db.Integer, nullable=False)  # national dex number
    pokemon_name = db.Column(db.String(50), nullable=False)
    origin_game_id = db.Column(db.Integer)
    origin_game_name = db.Column(db.String(100))
    caught_at = db.Column(db.DateTime, default=now_utc)
    updated_at = db.Column(db.DateTime, default=now_utc, onupdate=now_utc)

    __table_args__ = (
        db.UniqueConstraint("user_id", "game_id", "pokemon_id", name="uq_user_pokemon_user_game_pokemon"),
    )
