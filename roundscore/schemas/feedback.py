from pydantic import BaseModel, Field, field_validator
from typing import Optional, Union
from datetime import datetime
from roundscore.schemas.question import Question, UserAnswer, check_uniform_questions


class CategoryScore(BaseModel):
    name: str
    score: int = Field(ge=0, le=100)
    comment: str = ""


class RoundFeedback(BaseModel):
    """Feedback for one attempt of one round."""
    id: Optional[int] = None
    interview_id: Optional[int] = None
    user_id: Optional[str] = None
    template_id: Optional[int] = None

    round_id: str
    round_name: str
    round_type: Optional[str] = None
    attempt: int = Field(default=1, ge=1)

    total_score: int = Field(ge=0, le=100)
    passing_score: Optional[int] = None
    passed: Optional[bool] = None

    category_scores: list[CategoryScore] = []
    strengths: list[str] = []
    areas_for_improvement: list[str] = []
    final_assessment: Optional[str] = None
    answers: list[UserAnswer] = []

    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class RoundScore(BaseModel):
    round_id: str
    round_name: str
    round_type: Optional[str] = None
    score: int
    attempt: int
    passed: Optional[bool] = None


class CumulativeFeedback(BaseModel):
    """Read-time rollup of the latest attempt of every round."""
    total_rounds: int
    completed_rounds: int
    average_score: int
    round_scores: list[RoundScore]
    overall_strengths: list[str]
    overall_areas_for_improvement: list[str]
    final_assessment: str


# Request / response contracts


class RoundSubmissionRequest(BaseModel):
    answers: list[UserAnswer]


class RoundSubmissionResponse(BaseModel):
    success: bool = True
    feedback_id: int
    attempt: int
    score: int
    passed: bool
    is_update: bool  # True when an earlier attempt already existed


class GradedFeedbackRequest(BaseModel):
    """Feedback produced by the language-model grader for voice/text rounds."""
    total_score: int = Field(ge=0, le=100)
    category_scores: list[CategoryScore] = []
    strengths: list[str] = []
    areas_for_improvement: list[str] = []
    final_assessment: str = ""
    answers: list[UserAnswer] = []


class ScoreRequest(BaseModel):
    questions: list[Union[Question, str]]
    answers: list[UserAnswer]

    @field_validator("questions")
    @classmethod
    def questions_uniform(cls, questions):
        return check_uniform_questions(questions)


class ScoreResponse(BaseModel):
    score: int
    question_count: int
    answered_count: int
