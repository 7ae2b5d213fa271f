from pydantic import BaseModel
from datetime import datetime


class CompanyInterviewCreate(BaseModel):
    template_id: int


class CompanyInterviewResponse(BaseModel):
    id: int
    template_id: int
    company_name: str
    user_id: str
    completed_rounds: list[str]
    created_at: datetime

    class Config:
        from_attributes = True


class RoundCompleteResponse(BaseModel):
    success: bool = True
    interview_id: int
    round_id: str
    completed_rounds: list[str]
