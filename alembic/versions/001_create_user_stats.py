"""create user_stats table (progress ledger)

Revision ID: 001
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "user_stats",
        sa.Column("user_id", sa.String(255), primary_key=True),
        sa.Column("total_xp", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("current_streak", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("longest_streak", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("last_activity_date", sa.Date(), nullable=True),
        sa.Column("games_played_today", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("last_game_date", sa.Date(), nullable=True),
        sa.Column("tests_completed", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("quizzes_completed", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("total_test_score", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("total_quiz_score", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint("longest_streak >= current_streak", name="ck_user_stats_longest_streak"),
    )
    op.create_index("ix_user_stats_total_xp", "user_stats", ["total_xp"])


def downgrade() -> None:
    op.drop_index("ix_user_stats_total_xp", table_name="user_stats")
    op.drop_table("user_stats")
