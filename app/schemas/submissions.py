"""Wire models for test/quiz submission. Keys are camelCase on the wire."""
from typing import Literal
from pydantic import BaseModel, Field


class SubmissionRequest(BaseModel):
    class_value: str = Field(alias="classValue", min_length=1, max_length=10)
    board: str = Field(min_length=1, max_length=50)
    subject: str = Field(min_length=1, max_length=100)
    topic: str | None = Field(default=None, max_length=255)
    test_type: Literal["test", "quiz"] = Field(alias="testType")
    total_questions: int = Field(alias="totalQuestions", ge=0)
    correct_answers: int = Field(alias="correctAnswers", ge=0)
    time_taken: int | None = Field(default=None, alias="timeTaken", ge=0)

    class Config:
        populate_by_name = True


class SubmissionResponse(BaseModel):
    success: bool = True
    result_id: str = Field(alias="resultId")
    score: int
    xp_earned: int = Field(alias="xpEarned")

    class Config:
        populate_by_name = True
