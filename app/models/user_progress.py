"""
Model: UserProgress
"""

from db import db
from utils import now_utc
from constants import STATUS_NOT_STARTED


class UserProgress(db.Model):
    __tablename__ = "user_progress"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.String(64), nullable=False, index=True)  # client generated, opaque
    game_id = db.Column(db.Integer, db.ForeignKey("games.id", ondelete="CASCADE"), nullable=False)
    status = db.Column(db.String(20), nullable=False, default=STATUS_NOT_STARTED)
    started_at = db.Column(db.DateTime)
    completed_at = db.Column(db.DateTime)
    save_file_imported = db.Column(db.Boolean, nullable=False, default=False)
    save_file_path = db.Column(db.String(255))
    notes = db.Column(db.Text)
    created_at = db.Column(db.DateTime, default=now_utc)
    updated_at = db.Column(db.DateTime, default=now_utc, onupdate=now_utc)

    game = db.relationship("Game", lazy=True)

    __table_args__ = (db.UniqueConstraint("user_id", "game_id", name="uq_user_progress_user_game"),)
