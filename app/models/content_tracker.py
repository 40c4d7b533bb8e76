"""
Model: ContentTracker
Completion state of a catalog item for one user
"""

from db import db
from utils import now_utc


class ContentTracker(db.Model):
    __tablename__ = "game_content_tracker"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.String(64), nullable=False, index=True)
    game_id = db.Column(db.Integer, db.ForeignKey("games.id", ondelete="CASCADE"), nullable=False)
    content_id = db.Column(db.Integer, db.ForeignKey("game_content.id", ondelete="CASCADE"), nullable=False)
    is_completed = db.Column(db.Boolean, nullable=False, default=False)
    completed_at = db.Column(db.DateTime)
    created_at = db.Column(db.DateTime, default=now_utc)
    updated_at = db.Column(db.DateTime, default=now_utc, onupdate=now_utc)

    __table_args__ = (
        # Natural key, upserts conflict on it
        db.UniqueConstraint("user_id", "game_id", "content_id", name="uq_tracker_user_game_content"),
    )
