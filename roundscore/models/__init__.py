from roundscore.models.template import CompanyTemplate
from roundscore.models.interview import CompanyInterview
from roundscore.models.feedback import RoundFeedbackRecord
from roundscore.models.question_bank import QuestionBank, QuestionRecord

__all__ = [
    "CompanyTemplate",
    "CompanyInterview",
    "RoundFeedbackRecord",
    "QuestionBank",
    "QuestionRecord",
]
