import uuid
from datetime import datetime
from sqlalchemy import Column, Date, DateTime, Index, Integer, String, UniqueConstraint
from app.database import Base


class DailyGamePlay(Base):
    """One row per (user, game, day). The unique key is the replay guard for game plays."""
    __tablename__ = "daily_game_plays"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(255), nullable=False)
    game_id = Column(String(255), nullable=False)
    played_date = Column(Date, nullable=False)
    xp_earned = Column(Integer, nullable=False, default=0)  # games never grant XP
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    __table_args__ = (
        UniqueConstraint("user_id", "game_id", "played_date", name="uq_daily_game_plays_user_game_date"),
        Index("ix_daily_game_plays_user_date", "user_id", "played_date"),
    )
