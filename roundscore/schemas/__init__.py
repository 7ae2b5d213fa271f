from roundscore.schemas.question import (
    CodeTestCase,
    Question,
    UserAnswer,
    CandidateQuestion,
    QuestionCreate,
    QuestionUpdate,
    QuestionBankCreate,
    QuestionBankUpdate,
    QuestionBankResponse,
)
from roundscore.schemas.feedback import (
    CategoryScore,
    RoundFeedback,
    RoundScore,
    CumulativeFeedback,
    RoundSubmissionRequest,
    RoundSubmissionResponse,
    GradedFeedbackRequest,
    ScoreRequest,
    ScoreResponse,
)
from roundscore.schemas.template import (
    Round,
    CompanyTemplateCreate,
    CompanyTemplateUpdate,
    CompanyTemplateResponse,
)
from roundscore.schemas.interview import (
    CompanyInterviewCreate,
    CompanyInterviewResponse,
    RoundCompleteResponse,
)

__all__ = [
    "CodeTestCase",
    "Question",
    "UserAnswer",
    "CandidateQuestion",
    "QuestionCreate",
    "QuestionUpdate",
    "QuestionBankCreate",
    "QuestionBankUpdate",
    "QuestionBankResponse",
    "CategoryScore",
    "RoundFeedback",
    "RoundScore",
    "CumulativeFeedback",
    "RoundSubmissionRequest",
    "RoundSubmissionResponse",
    "GradedFeedbackRequest",
    "ScoreRequest",
    "ScoreResponse",
    "Round",
    "CompanyTemplateCreate",
    "CompanyTemplateUpdate",
    "CompanyTemplateResponse",
    "CompanyInterviewCreate",
    "CompanyInterviewResponse",
    "RoundCompleteResponse",
]
