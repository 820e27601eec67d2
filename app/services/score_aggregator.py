"""
Leaderboard read path over the progress ledger.
Metrics:
- overall: total_test_score + total_quiz_score, tie-break tests + quizzes completed
- tests:   total_test_score, tie-break tests_completed
- quizzes: total_quiz_score, tie-break quizzes_completed
Listing skips users whose metric is 0; rank lookup does not.
"""
from dataclasses import dataclass
from typing import Iterator

from sqlalchemy import and_, func, or_
from sqlalchemy.orm import Session

from app.config import get_settings
from app.errors import InvalidInput
from app.models.user_stats import UserStats


@dataclass(frozen=True)
class Metric:
    name: str
    primary: object
    secondary: object
    fields: tuple[str, ...]


_TOTAL_POINTS = (UserStats.total_test_score + UserStats.total_quiz_score).label("total_points")
_TOTAL_ACTIVITIES = (UserStats.tests_completed + UserStats.quizzes_completed).label("total_activities")

METRICS: dict[str, Metric] = {
    "overall": Metric(
        name="overall",
        primary=UserStats.total_test_score + UserStats.total_quiz_score,
        # Tie-break on activity count; points-only ranking would let tied users share a rank
        secondary=UserStats.tests_completed + UserStats.quizzes_completed,
        fields=(
            "user_id", "total_xp", "current_streak", "longest_streak",
            "tests_completed", "quizzes_completed", "total_test_score", "total_quiz_score",
        ),
    ),
    "tests": Metric(
        name="tests",
        primary=UserStats.total_test_score,
        secondary=UserStats.tests_completed,
        fields=("user_id", "total_xp", "tests_completed", "total_test_score"),
    ),
    "quizzes": Metric(
        name="quizzes",
        primary=UserStats.total_quiz_score,
        secondary=UserStats.quizzes_completed,
        fields=("user_id", "total_xp", "quizzes_completed", "total_quiz_score"),
    ),
}


def get_metric(name: str | None) -> Metric:
    metric = METRICS.get(name or "overall")
    if metric is None:
        raise InvalidInput("type must be one of: overall, tests, quizzes")
    return metric


class Leaderboard:
    """
    Ranked view of one metric. Iterating runs the query against current state,
    so the same object can be iterated again to get a fresh ranking.
    """

    def __init__(self, db: Session, metric: Metric, limit: int):
        self._db = db
        self.metric = metric
        self.limit = limit

    def _ordering(self):
        return (self.metric.primary.desc(), self.metric.secondary.desc(), UserStats.user_id.asc())

    def __iter__(self) -> Iterator[dict]:
        rank = func.row_number().over(order_by=self._ordering()).label("rank")
        columns = [getattr(UserStats, f) for f in self.metric.fields]
        if self.metric.name == "overall":
            columns += [_TOTAL_POINTS, _TOTAL_ACTIVITIES]
        q = (
            self._db.query(*columns, rank)
            .filter(self.metric.primary > 0)
            .order_by(*self._ordering())
            .limit(self.limit)
        )
        for row in q:
            yield dict(row._mapping)


def get_leaderboard(db: Session, metric: str = "overall", limit: int | None = None) -> Leaderboard:
    max_limit = get_settings().leaderboard_limit
    if limit is None:
        limit = max_limit
    if limit < 1:
        raise InvalidInput("limit must be at least 1")
    return Leaderboard(db, get_metric(metric), min(limit, max_limit))


def get_user_rank(db: Session, user_id: str, metric: str = "overall") -> int | None:
    """
    1 + number of users strictly ahead (higher metric, or equal metric and higher
    tie-break). Counts every ledger row, including zero-activity users.
    None when the user has no ledger row.
    """
    m = get_metric(metric)
    mine = (
        db.query(m.primary.label("primary"), m.secondary.label("secondary"))
        .filter(UserStats.user_id == user_id)
        .first()
    )
    if mine is None:
        return None
    ahead = (
        db.query(func.count(UserStats.user_id))
        .filter(
            or_(
                m.primary > mine.primary,
                and_(m.primary == mine.primary, m.secondary > mine.secondary),
            )
        )
        .scalar()
    )
    return (ahead or 0) + 1
