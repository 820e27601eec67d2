from typing import Literal
from pydantic import BaseModel, Field


class StatsSummaryResponse(BaseModel):
    total_xp: int  # XP from tests/quizzes only
    current_streak: int
    longest_streak: int
    games_played_today: int
    tests_completed: int
    quizzes_completed: int
    total_test_score: int
    total_quiz_score: int


class ScorePoints(BaseModel):
    """Bare score (percentage) for POST /api/stats; no question counts."""
    type: Literal["test", "quiz"]
    score: float = Field(default=0, allow_inf_nan=False)


class StatsUpdateRequest(BaseModel):
    game_id: str | None = Field(default=None, alias="gameId", min_length=1, max_length=255)
    test_result: ScorePoints | None = Field(default=None, alias="testResult")

    class Config:
        populate_by_name = True


class StatsUpdateResponse(BaseModel):
    success: bool = True
    applied: bool
