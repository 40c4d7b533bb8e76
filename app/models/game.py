"""
Model: Game
"""

from db import db


class Game(db.Model):
    __tablename__ = "games"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False, index=True)
    platform = db.Column(db.String(50), nullable=False)  # "Game Boy", "Game Boy Advance", "Nintendo DS"...
    generation = db.Column(db.Integer)
    region = db.Column(db.String(50))
    release_year = db.Column(db.Integer, index=True)
    completion_time_hours = db.Column(db.Integer)
    description = db.Column(db.Text)

    content = db.relationship(
        "GameContent",
        backref="game",
        order_by="GameContent.order_num",
        cascade="all, delete-orphan",
        lazy=True,
    )
