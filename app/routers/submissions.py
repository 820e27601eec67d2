from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app.auth import get_current_user_id
from app.database import get_db
from app.schemas.submissions import SubmissionRequest, SubmissionResponse
from app.services.activity_recorder import ActivityRecorder, get_activity_recorder

router = APIRouter(prefix="/api/tests", tags=["tests"])


@router.post("/submit", response_model=SubmissionResponse)
def submit_test(
    body: SubmissionRequest,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    recorder: ActivityRecorder = Depends(get_activity_recorder),
):
    """Score a finished test/quiz, store it and credit XP (tests x2, quizzes x1)."""
    result = recorder.record_submission(
        db,
        user_id,
        test_type=body.test_type,
        total_questions=body.total_questions,
        correct_answers=body.correct_answers,
        class_value=body.class_value,
        board=body.board,
        subject=body.subject,
        topic=body.topic,
        time_taken=body.time_taken,
    )
    return SubmissionResponse(
        result_id=result.result_id,
        score=result.score,
        xp_earned=result.xp_earned,
    )
