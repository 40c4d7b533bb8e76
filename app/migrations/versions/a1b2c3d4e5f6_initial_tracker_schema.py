"""initial tracker schema

Revision ID: a1b2c3d4e5f6
Revises:
Create Date: 2026-10-19 12:00:00.000000
"""

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "a1b2c3d4e5f6"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        "games",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("platform", sa.String(length=50), nullable=False),
        sa.Column("generation", sa.Integer(), nullable=True),
        sa.Column("region", sa.String(length=50), nullable=True),
        sa.Column("release_year", sa.Integer(), nullable=True),
        sa.Column("completion_time_hours", sa.Integer(), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
    )
    op.create_index("ix_games_name", "games", ["name"])
    op.create_index("ix_games_release_year", "games", ["release_year"])

    op.create_table(
        "game_content",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("game_id", sa.Integer(), sa.ForeignKey("games.id", ondelete="CASCADE"), nullable=False),
        sa.Column("content_type", sa.String(length=30), nullable=False),
        sa.Column("name", sa.String(length=150), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("order_num", sa.Integer(), nullable=False, server_default="0"),
    )
    op.create_index("idx_game_content_game_order", "game_content", ["game_id", "order_num"])

    op.create_table(
        "user_progress",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.String(length=64), nullable=False),
        sa.Column("game_id", sa.Integer(), sa.ForeignKey("games.id", ondelete="CASCADE"), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="not_started"),
        sa.Column("started_at", sa.DateTime(), nullable=True),
        sa.Column("completed_at", sa.DateTime(), nullable=True),
        sa.Column("save_file_imported", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("save_file_path", sa.String(length=255), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
        sa.UniqueConstraint("user_id", "game_id", name="uq_user_progress_user_game"),
    )
    op.create_index("ix_user_progress_user_id", "user_progress", ["user_id"])

    op.create_table(
        "game_content_tracker",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.String(length=64), nullable=False),
        sa.Column("game_id", sa.Integer(), sa.ForeignKey("games.id", ondelete="CASCADE"), nullable=False),
        sa.Column("content_id", sa.Integer(), sa.ForeignKey("game_content.id", ondelete="CASCADE"), nullable=False),
        sa.Column("is_completed", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("completed_at", sa.DateTime(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
        sa.UniqueConstraint("user_id", "game_id", "content_id", name="uq_tracker_user_game_content"),
    )
    op.create_index("ix_game_content_tracker_user_id", "game_content_tracker", ["user_id"])

    op.create_table(
        "user_pokemon",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.String(length=64), nullable=False),
        sa.Column("game_id", sa.Integer(), sa.ForeignKey("games.id", ondelete="CASCADE"), nullable=False),
        sa.Column("pokemon_id", sa.Integer(), nullable=False),
        sa.Column("pokemon_name", sa.String(length=50), nullable=False),
        sa.Column("origin_game_id", sa.Integer(), nullable=True),
        sa.Column("origin_game_name", sa.String(length=100), nullable=True),
        sa.Column("caught_at", sa.DateTime(), nullable=True),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
        sa.UniqueConstraint("user_id", "game_id", "pokemon_id", name="uq_user_pokemon_user_game_pokemon"),
    )
    op.create_index("ix_user_pokemon_user_id", "user_pokemon", ["user_id"])

    op.create_table(
        "activity_log",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("timestamp", sa.DateTime(), nullable=True),
        sa.Column("user_id", sa.String(length=64), nullable=True),
        sa.Column("action_type", sa.String(length=50), nullable=True),
        sa.Column("game_id", sa.Integer(), nullable=True),
        sa.Column("details", sa.Text(), nullable=True),
    )
    op.create_index("ix_activity_log_timestamp", "activity_log", ["timestamp"])
    op.create_index("ix_activity_log_action_type", "activity_log", ["action_type"])
    op.create_index("idx_activity_timestamp_action", "activity_log", ["timestamp", "action_type"])


def downgrade():
    op.drop_table("activity_log")
    op.drop_table("user_pokemon")
    op.drop_table("game_content_tracker")
    op.drop_table("user_progress")
    op.drop_table("game_content")
    op.drop_table("games")
