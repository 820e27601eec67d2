"""
Progress stats for the current user.
- GET  /api/stats: summary (creates an empty ledger row on first visit)
- POST /api/stats: record a finished game ({ gameId }) and/or a bare score ({ testResult })
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app.auth import get_current_user_id
from app.clock import Clock, get_clock
from app.database import get_db
from app.schemas.stats import StatsSummaryResponse, StatsUpdateRequest, StatsUpdateResponse
from app.services.activity_recorder import ActivityRecorder, get_activity_recorder
from app.services.progress_reporter import ProgressReporter, get_progress_reporter

router = APIRouter(prefix="/api/stats", tags=["stats"])


@router.get("", response_model=StatsSummaryResponse)
def get_stats(
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
    reporter: ProgressReporter = Depends(get_progress_reporter),
):
    """Current streak, games played today and XP/score totals."""
    return reporter.get_summary(db, user_id, clock.today()).to_dict()


@router.post("", response_model=StatsUpdateResponse)
def update_stats(
    body: StatsUpdateRequest,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
    recorder: ActivityRecorder = Depends(get_activity_recorder),
):
    """
    gameId: advances the streak and the daily games counter (no XP).
    testResult: { type: "test"|"quiz", score: 0-100 } adds XP and score totals.
    """
    points = body.test_result
    applied = recorder.record_activity(
        db,
        user_id,
        clock.today(),
        game_id=body.game_id,
        test_type=points.type if points else None,
        score=points.score if points else None,
    )
    return StatsUpdateResponse(applied=applied)
