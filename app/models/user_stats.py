"""Per-user progress ledger row: streaks, daily game counter, XP and score totals."""
from datetime import datetime
from sqlalchemy import CheckConstraint, Column, Date, DateTime, Integer, String
from app.database import Base


class UserStats(Base):
    __tablename__ = "user_stats"

    # Opaque id from the identity provider (JWT `sub`)
    user_id = Column(String(255), primary_key=True)
    total_xp = Column(Integer, nullable=False, default=0, index=True)
    current_streak = Column(Integer, nullable=False, default=0)
    longest_streak = Column(Integer, nullable=False, default=0)
    last_activity_date = Column(Date, nullable=True)  # last game day, drives the streak
    games_played_today = Column(Integer, nullable=False, default=0)
    last_game_date = Column(Date, nullable=True)  # day games_played_today was last incremented
    tests_completed = Column(Integer, nullable=False, default=0)
    quizzes_completed = Column(Integer, nullable=False, default=0)
    # Sums of percentage scores (0-100 per submission)
    total_test_score = Column(Integer, nullable=False, default=0)
    total_quiz_score = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    __table_args__ = (
        CheckConstraint("longest_streak >= current_streak", name="ck_user_stats_longest_streak"),
    )
