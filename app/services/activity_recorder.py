"""
Write path of the progress ledger.
- Game play: streak and daily game counter, applied by one conditional UPDATE.
  A replay of the same (user, game, day) is detected by the play log's unique
  key inside the same transaction and changes nothing.
- Test/quiz submission: history row, then XP and score totals.
Streak fields are only ever touched by game plays; XP only by submissions.
"""
import logging
import math
from dataclasses import dataclass
from datetime import date

from sqlalchemy import case, or_
from sqlalchemy.orm import Session

from app.clock import previous_day
from app.config import get_settings
from app.database import transaction
from app.errors import DailyLimitReached, InvalidInput
from app.models.test_result import SubmissionType
from app.models.user_stats import UserStats
from app.repositories.stats_repository import StatsRepository

logger = logging.getLogger(__name__)

# Tests give more XP than quizzes
XP_MULTIPLIER = {
    SubmissionType.TEST: 2,
    SubmissionType.QUIZ: 1,
}


@dataclass(frozen=True)
class LedgerSnapshot:
    """Plain copy of the streak fields, safe to read after the session closes."""
    current_streak: int
    longest_streak: int
    games_played_today: int
    last_activity_date: date | None
    last_game_date: date | None

    @classmethod
    def from_stats(cls, stats: UserStats) -> "LedgerSnapshot":
        return cls(
            current_streak=stats.current_streak,
            longest_streak=stats.longest_streak,
            games_played_today=stats.games_played_today,
            last_activity_date=stats.last_activity_date,
            last_game_date=stats.last_game_date,
        )


@dataclass(frozen=True)
class GamePlayResult:
    applied: bool  # False for a replay of an already credited (user, game, day)
    stats: LedgerSnapshot


@dataclass(frozen=True)
class SubmissionResult:
    result_id: str
    score: int
    xp_earned: int


def clamp_score(value: float) -> int:
    """Round half-up to a whole percentage in [0, 100]."""
    if not math.isfinite(value):
        raise InvalidInput("score must be a finite number")
    return max(0, min(100, math.floor(value + 0.5)))


def percentage_score(correct_answers: int, total_questions: int) -> int:
    if total_questions <= 0:
        raise InvalidInput("totalQuestions must be greater than 0")
    return clamp_score(correct_answers / total_questions * 100)


def submission_type(value) -> SubmissionType:
    try:
        return SubmissionType(value)
    except ValueError:
        raise InvalidInput("testType must be 'test' or 'quiz'") from None


def xp_for(score: int, test_type: SubmissionType) -> int:
    return round(score * XP_MULTIPLIER[test_type])


def game_play_values(today: date) -> dict:
    """SET clause for one game play, evaluated against the row's current values."""
    streak = case(
        (UserStats.last_activity_date == today, UserStats.current_streak),
        (UserStats.last_activity_date == previous_day(today), UserStats.current_streak + 1),
        else_=1,
    )
    return {
        UserStats.current_streak: streak,
        UserStats.longest_streak: case(
            (streak > UserStats.longest_streak, streak),
            else_=UserStats.longest_streak,
        ),
        UserStats.last_activity_date: today,
        UserStats.games_played_today: case(
            (UserStats.last_game_date == today, UserStats.games_played_today + 1),
            else_=1,
        ),
        UserStats.last_game_date: today,
    }


def score_values(test_type: SubmissionType, score: int, xp_earned: int) -> dict:
    values = {UserStats.total_xp: UserStats.total_xp + xp_earned}
    if test_type is SubmissionType.TEST:
        values[UserStats.tests_completed] = UserStats.tests_completed + 1
        values[UserStats.total_test_score] = UserStats.total_test_score + score
    else:
        values[UserStats.quizzes_completed] = UserStats.quizzes_completed + 1
        values[UserStats.total_quiz_score] = UserStats.total_quiz_score + score
    return values


class ActivityRecorder:
    """Applies completed activities to the ledger. One transaction per call."""

    def __init__(
        self,
        repository: StatsRepository | None = None,
        *,
        max_games_per_day: int | None = None,
        dedupe_game_plays: bool | None = None,
    ):
        settings = get_settings()
        self._repo = repository or StatsRepository()
        self.max_games_per_day = (
            settings.max_games_per_day if max_games_per_day is None else max_games_per_day
        )
        self.dedupe_game_plays = (
            settings.dedupe_game_plays if dedupe_game_plays is None else dedupe_game_plays
        )

    # ---------- Game play ----------

    def record_game_play(self, db: Session, user_id: str, game_id: str, today: date) -> GamePlayResult:
        if not game_id:
            raise InvalidInput("gameId is required")
        with transaction(db):
            applied = self._apply_game_play(db, user_id, game_id, today)
            stats = LedgerSnapshot.from_stats(self._repo.get_stats(db, user_id))
        return GamePlayResult(applied=applied, stats=stats)

    def _cap_conditions(self, today: date) -> tuple:
        if self.max_games_per_day <= 0:
            return ()
        return (
            or_(
                UserStats.last_game_date.is_(None),
                UserStats.last_game_date != today,
                UserStats.games_played_today < self.max_games_per_day,
            ),
        )

    def _apply_game_play(self, db: Session, user_id: str, game_id: str, today: date) -> bool:
        self._repo.get_or_create_stats(db, user_id)

        if self.dedupe_game_plays and not self._repo.insert_game_play(db, user_id, game_id, today):
            logger.debug("Game %s already credited for %s on %s", game_id, user_id, today)
            return False

        matched = self._repo.apply_update(
            db, user_id, game_play_values(today), *self._cap_conditions(today)
        )
        if not matched:
            logger.info("Daily game cap (%d) reached for %s", self.max_games_per_day, user_id)
            raise DailyLimitReached(self.max_games_per_day)

        if not self.dedupe_game_plays:
            self._repo.insert_game_play(db, user_id, game_id, today)
        return True

    # ---------- Test / quiz ----------

    def record_submission(
        self,
        db: Session,
        user_id: str,
        *,
        test_type,
        total_questions: int,
        correct_answers: int,
        class_value: str,
        board: str,
        subject: str,
        topic: str | None = None,
        time_taken: int | None = None,
    ) -> SubmissionResult:
        """Score a submission, append it to the history and credit XP and score totals."""
        kind = submission_type(test_type)
        score = percentage_score(correct_answers, total_questions)
        xp_earned = xp_for(score, kind)

        with transaction(db):
            result = self._repo.add_test_result(
                db,
                user_id=user_id,
                class_value=class_value,
                board=board,
                subject=subject,
                topic=topic or None,
                test_type=kind.value,
                total_questions=total_questions,
                correct_answers=correct_answers,
                score=score,
                xp_earned=xp_earned,
                time_taken=time_taken or None,
            )
            result_id = result.id
            self._apply_score(db, user_id, kind, score, xp_earned)

        return SubmissionResult(result_id=result_id, score=score, xp_earned=xp_earned)

    def _apply_score(self, db: Session, user_id: str, kind: SubmissionType, score: int, xp_earned: int) -> None:
        self._repo.get_or_create_stats(db, user_id)
        self._repo.apply_update(db, user_id, score_values(kind, score, xp_earned))

    # ---------- Combined (POST /api/stats) ----------

    def record_activity(
        self,
        db: Session,
        user_id: str,
        today: date,
        *,
        game_id: str | None = None,
        test_type=None,
        score: float | None = None,
    ) -> bool:
        """
        Apply a game play and/or a bare test score in one transaction.
        A bare score has no question counts, so no history row is written.
        Returns whether the ledger changed.
        """
        has_score = test_type is not None
        if not game_id and not has_score:
            raise InvalidInput("gameId or testResult is required")
        kind = submission_type(test_type) if has_score else None
        points = clamp_score(score or 0) if has_score else 0

        with transaction(db):
            applied = False
            if game_id:
                applied = self._apply_game_play(db, user_id, game_id, today)
            if kind is not None:
                self._apply_score(db, user_id, kind, points, xp_for(points, kind))
                applied = True
        return applied


def get_activity_recorder() -> ActivityRecorder:
    """FastAPI dependency; policy comes from settings."""
    return ActivityRecorder()
