"""Activity log model.

This module intentionally only contains the SQLAlchemy model.
The `log_activity` helper lives in `app/db.py`.
"""

from db import db
from utils import now_utc


class ActivityLog(db.Model):
    __tablename__ = "activity_log"

    id = db.Column(db.Integer, primary_key=True)
    timestamp = db.Column(db.DateTime, default=now_utc, index=True)
    user_id = db.Column(db.String(64), nullable=True)
    action_type = db.Column(db.String(50), index=True)  # 'savefile_imported', 'bulk_import_completed'...
    game_id = db.Column(db.Integer, nullable=True)
    details = db.Column(db.Text)  # Stored as JSON string

    __table_args__ = (db.Index("idx_activity_timestamp_action", "timestamp", "action_type"),)
