"""create daily_game_plays table (one credited play per user, game and day)

Revision ID: 002
Revises: 001
Create Date: 2026-10-19

"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

revision: str = "002"
down_revision: Union[str, None] = "001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "daily_game_plays",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("user_id", sa.String(255), nullable=False),
        sa.Column("game_id", sa.String(255), nullable=False),
        sa.Column("played_date", sa.Date(), nullable=False),
        sa.Column("xp_earned", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint("user_id", "game_id", "played_date", name="uq_daily_game_plays_user_game_date"),
    )
    op.create_index("ix_daily_game_plays_user_date", "daily_game_plays", ["user_id", "played_date"])


def downgrade() -> None:
    op.drop_index("ix_daily_game_plays_user_date", table_name="daily_game_plays")
    op.drop_table("daily_game_plays")
