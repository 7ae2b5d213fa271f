from pydantic import BaseModel, Field
from typing import Optional, Union, Literal
from datetime import datetime

QuestionType = Literal["mcq", "text", "code"]
QuestionDifficulty = Literal["easy", "medium", "hard"]
BankDifficulty = Literal["easy", "medium", "hard", "mixed"]
BankType = Literal["aptitude", "coding", "text"]


class CodeTestCase(BaseModel):
    input: str
    expected_output: str
    is_hidden: bool = False


class Question(BaseModel):
    id: str
    text: str
    type: QuestionType
    options: Optional[list[str]] = None  # mcq only
    correct_answer: Optional[Union[int, str]] = None  # option index or option text
    test_cases: Optional[list[CodeTestCase]] = None  # code only
    difficulty: Optional[QuestionDifficulty] = None
    points: int = Field(default=1, ge=1)


class UserAnswer(BaseModel):
    question_id: str
    answer: Union[int, str]  # option index for mcq, free text otherwise
    code: Optional[str] = None
    language: Optional[str] = None
    is_correct: Optional[bool] = None
    score: Optional[float] = None  # points already granted by the code judge


class CandidateQuestion(BaseModel):
    """A question as served to the candidate, without the answer key."""
    id: str
    text: str
    type: QuestionType
    options: Optional[list[str]] = None
    test_cases: Optional[list[CodeTestCase]] = None
    difficulty: Optional[QuestionDifficulty] = None
    points: int = 1

    @classmethod
    def from_question(cls, question: Question) -> "CandidateQuestion":
        visible_cases = None
        if question.test_cases is not None:
            visible_cases = [case for case in question.test_cases if not case.is_hidden]
        return cls(
            id=question.id,
            text=question.text,
            type=question.type,
            options=question.options,
            test_cases=visible_cases,
            difficulty=question.difficulty,
            points=question.points,
        )


class QuestionCreate(BaseModel):
    text: str = Field(min_length=1)
    type: QuestionType
    options: Optional[list[str]] = None
    correct_answer: Optional[Union[int, str]] = None
    test_cases: Optional[list[CodeTestCase]] = None
    difficulty: Optional[QuestionDifficulty] = None
    points: int = Field(default=1, ge=1)


class QuestionUpdate(BaseModel):
    text: Optional[str] = None
    options: Optional[list[str]] = None
    correct_answer: Optional[Union[int, str]] = None
    test_cases: Optional[list[CodeTestCase]] = None
    difficulty: Optional[QuestionDifficulty] = None
    points: Optional[int] = Field(default=None, ge=1)


class QuestionBankCreate(BaseModel):
    name: str = Field(min_length=1)
    description: str = ""
    type: BankType
    difficulty: BankDifficulty = "mixed"
    is_active: bool = True


class QuestionBankUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    difficulty: Optional[BankDifficulty] = None
    is_active: Optional[bool] = None


class QuestionBankResponse(BaseModel):
    id: int
    name: str
    description: Optional[str]
    type: str
    difficulty: str
    is_active: bool
    created_at: datetime
    updated_at: Optional[datetime]
    questions: list[Question] = []


def mcq_problem(options: Optional[list[str]], correct_answer) -> Optional[str]:
    """Why an mcq answer key can never be matched, or None when it is usable."""
    if not options or len(options) < 2:
        return "MCQ questions must have at least 2 options"
    if correct_answer is None:
        return "MCQ questions must have a correct answer"
    if isinstance(correct_answer, int) and not isinstance(correct_answer, bool):
        if not 0 <= correct_answer < len(options):
            return "Correct answer index is out of range"
    elif correct_answer not in options:
        return "Correct answer must be one of the options"
    return None


def check_uniform_questions(questions):
    """Reject lists mixing plain-text and structured questions, or broken mcq keys."""
    if questions:
        kinds = {isinstance(q, str) for q in questions}
        if len(kinds) > 1:
            raise ValueError("Questions must be all plain text or all structured")
        for question in questions:
            if isinstance(question, Question) and question.type == "mcq":
                problem = mcq_problem(question.options, question.correct_answer)
                if problem:
                    raise ValueError(f"Question {question.id}: {problem}")
    return questions
