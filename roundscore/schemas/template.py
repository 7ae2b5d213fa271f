from pydantic import BaseModel, Field, field_validator
from typing import Optional, Union, Literal
from datetime import datetime
from roundscore.schemas.question import Question, check_uniform_questions

RoundType = Literal["voice", "text", "code", "aptitude"]


def _check_unique_round_ids(rounds):
    ids = [r.id for r in rounds]
    if len(ids) != len(set(ids)):
        raise ValueError("Round ids must be unique within a template")
    return rounds


class Round(BaseModel):
    id: str
    name: str  # "Aptitude", "Coding", "System Design", "Behavioral"
    type: RoundType
    duration: int = Field(gt=0)  # minutes
    question_bank_id: Optional[int] = None
    question_count: Optional[int] = Field(default=None, ge=1)
    difficulty: Optional[Literal["easy", "medium", "hard", "mixed"]] = None
    questions: Optional[list[Union[Question, str]]] = None  # legacy rounds store plain strings
    passing_score: Optional[int] = Field(default=None, ge=0, le=100)

    @field_validator("questions")
    @classmethod
    def questions_uniform(cls, questions):
        return check_uniform_questions(questions)


class CompanyTemplateCreate(BaseModel):
    company_name: str = Field(min_length=1)
    company_logo: Optional[str] = None
    description: str = ""
    rounds: list[Round] = []
    is_active: bool = True

    @field_validator("rounds")
    @classmethod
    def round_ids_unique(cls, rounds: list[Round]) -> list[Round]:
        return _check_unique_round_ids(rounds)


class CompanyTemplateUpdate(BaseModel):
    company_name: Optional[str] = None
    company_logo: Optional[str] = None
    description: Optional[str] = None
    rounds: Optional[list[Round]] = None
    is_active: Optional[bool] = None

    @field_validator("rounds")
    @classmethod
    def round_ids_unique(cls, rounds: Optional[list[Round]]) -> Optional[list[Round]]:
        if rounds is not None:
            _check_unique_round_ids(rounds)
        return rounds


class CompanyTemplateResponse(BaseModel):
    id: int
    company_name: str
    company_logo: Optional[str]
    description: Optional[str]
    rounds: list[Round]
    is_active: bool
    created_at: datetime

    class Config:
        from_attributes = True
