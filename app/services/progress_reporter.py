"""
Progress summary for one user. Day rollover for the games counter happens here:
the first read of a new day stores games_played_today = 0 so later reads agree.
"""
from dataclasses import asdict, dataclass
from datetime import date

from sqlalchemy import or_
from sqlalchemy.orm import Session

from app.database import transaction
from app.models.user_stats import UserStats
from app.repositories.stats_repository import StatsRepository


@dataclass(frozen=True)
class Summary:
    total_xp: int
    current_streak: int
    longest_streak: int
    games_played_today: int
    tests_completed: int
    quizzes_completed: int
    total_test_score: int
    total_quiz_score: int

    def to_dict(self) -> dict:
        return asdict(self)


class ProgressReporter:
    def __init__(self, repository: StatsRepository | None = None):
        self._repo = repository or StatsRepository()

    def get_summary(self, db: Session, user_id: str, today: date) -> Summary:
        with transaction(db):
            self._repo.get_or_create_stats(db, user_id)
            # Conditional so a game play already recorded today is never clobbered
            self._repo.apply_update(
                db,
                user_id,
                {UserStats.games_played_today: 0},
                or_(UserStats.last_game_date.is_(None), UserStats.last_game_date != today),
                UserStats.games_played_today != 0,
            )
            stats = self._repo.get_stats(db, user_id)
            summary = Summary(
                total_xp=stats.total_xp,
                current_streak=stats.current_streak,
                longest_streak=stats.longest_streak,
                games_played_today=stats.games_played_today if stats.last_game_date == today else 0,
                tests_completed=stats.tests_completed,
                quizzes_completed=stats.quizzes_completed,
                total_test_score=stats.total_test_score,
                total_quiz_score=stats.total_quiz_score,
            )
        return summary


def get_progress_reporter() -> ProgressReporter:
    return ProgressReporter()
