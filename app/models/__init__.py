from app.models.user_stats import UserStats
from app.models.daily_game_play import DailyGamePlay
from app.models.test_result import TestResult, SubmissionType

__all__ = ["UserStats", "DailyGamePlay", "TestResult", "SubmissionType"]
