"""
Progress ledger persistence: UserStats (one row per user), DailyGamePlay replay
guard, TestResult history.
Nothing here commits; callers wrap calls in app.database.transaction so every
ledger change is all-or-nothing. Creation and replay detection rely on
INSERT ... ON CONFLICT DO NOTHING, never select-then-insert.
"""
from datetime import date, datetime

from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.orm import Session

from app.models.daily_game_play import DailyGamePlay
from app.models.test_result import TestResult
from app.models.user_stats import UserStats


def _insert_for(db: Session, model):
    """Dialect-specific INSERT supporting ON CONFLICT (PostgreSQL or SQLite)."""
    if db.get_bind().dialect.name == "postgresql":
        return pg_insert(model.__table__)
    return sqlite_insert(model.__table__)


def get_stats(db: Session, user_id: str) -> UserStats | None:
    return (
        db.query(UserStats)
        .filter(UserStats.user_id == user_id)
        .populate_existing()
        .first()
    )


def get_or_create_stats(db: Session, user_id: str) -> UserStats:
    """
    Return the user's ledger row, inserting an all-zero row if none exists.
    Safe when two requests create the same user at once: the loser's insert is a no-op.
    """
    now = datetime.utcnow()
    stmt = (
        _insert_for(db, UserStats)
        .values(user_id=user_id, created_at=now, updated_at=now)
        .on_conflict_do_nothing(index_elements=["user_id"])
    )
    db.execute(stmt)
    return get_stats(db, user_id)


def apply_update(db: Session, user_id: str, values: dict, *conditions) -> int:
    """
    Apply `values` (column -> SQL expression) to the user's row in one UPDATE.
    Expressions see the row as it was before the statement, so dependent fields
    are computed from a single consistent snapshot. Extra `conditions` guard the
    update; returns the number of rows matched (0 or 1).
    """
    values = {**values, UserStats.updated_at: datetime.utcnow()}
    return (
        db.query(UserStats)
        .filter(UserStats.user_id == user_id, *conditions)
        .update(values, synchronize_session=False)
    )


def insert_game_play(db: Session, user_id: str, game_id: str, played_date: date) -> bool:
    """Log a game play for the day. Returns False when (user, game, day) was already logged."""
    stmt = (
        _insert_for(db, DailyGamePlay)
        .values(user_id=user_id, game_id=game_id, played_date=played_date, xp_earned=0)
        .on_conflict_do_nothing(index_elements=["user_id", "game_id", "played_date"])
    )
    result = db.execute(stmt)
    return result.rowcount == 1


def add_test_result(db: Session, **fields) -> TestResult:
    """Append one submission to the history log; flushed so the id is available."""
    row = TestResult(**fields)
    db.add(row)
    db.flush()
    return row


class StatsRepository:
    """Thin wrapper for dependency injection; delegates to module functions."""

    @staticmethod
    def get_stats(db: Session, user_id: str) -> UserStats | None:
        return get_stats(db, user_id)

    @staticmethod
    def get_or_create_stats(db: Session, user_id: str) -> UserStats:
        return get_or_create_stats(db, user_id)

    @staticmethod
    def apply_update(db: Session, user_id: str, values: dict, *conditions) -> int:
        return apply_update(db, user_id, values, *conditions)

    @staticmethod
    def insert_game_play(db: Session, user_id: str, game_id: str, played_date: date) -> bool:
        return insert_game_play(db, user_id, game_id, played_date)

    @staticmethod
    def add_test_result(db: Session, **fields) -> TestResult:
        return add_test_result(db, **fields)
