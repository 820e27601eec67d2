from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from app.auth import get_current_user_id
from app.database import get_db
from app.schemas.leaderboard import LeaderboardResponse
from app.services.score_aggregator import get_leaderboard, get_user_rank

router = APIRouter(prefix="/api/leaderboard", tags=["leaderboard"])


@router.get("", response_model=LeaderboardResponse)
def leaderboard(
    type: str = Query("overall"),
    limit: int | None = Query(None),
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """
    Ranked users for type=overall|tests|quizzes (users with no points are left out)
    plus the caller's own rank, which counts every user.
    """
    board = get_leaderboard(db, type, limit)
    return LeaderboardResponse(
        leaderboard=list(board),
        user_rank=get_user_rank(db, user_id, board.metric.name),
        type=board.metric.name,
    )
