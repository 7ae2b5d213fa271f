from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from roundscore.database import get_db
from roundscore.dependencies import CurrentUser, get_current_user
from roundscore.models.interview import CompanyInterview
from roundscore.models.template import CompanyTemplate
from roundscore.schemas.feedback import (
    CumulativeFeedback,
    GradedFeedbackRequest,
    RoundFeedback,
    RoundSubmissionRequest,
    RoundSubmissionResponse,
)
from roundscore.schemas.interview import (
    CompanyInterviewCreate,
    CompanyInterviewResponse,
    RoundCompleteResponse,
)
from roundscore.schemas.question import CandidateQuestion
from roundscore.schemas.template import Round
from roundscore.services.feedback import (
    get_cumulative_feedback,
    get_latest_round_feedback,
    list_round_attempts,
    record_graded_feedback,
    submit_round,
)
from roundscore.services.interviews import (
    create_company_interview,
    get_company_interview,
    get_interviews_for_user,
    mark_round_complete,
)
from roundscore.services.question_banks import select_questions_for_round
from roundscore.services.templates import get_round, get_template

router = APIRouter(prefix="/api/interviews", tags=["interviews"])

# Rounds graded by the language model from a transcript rather than scored on submission
GRADED_ROUND_TYPES = {"voice", "text"}


def _get_interview_or_404(db: Session, interview_id: int, user: CurrentUser) -> CompanyInterview:
    interview = get_company_interview(db, interview_id, user.id)
    if not interview:
        raise HTTPException(status_code=404, detail="Interview not found")
    return interview


def _get_interview_template(db: Session, interview: CompanyInterview) -> CompanyTemplate:
    # Interviews already started stay usable after their template is deactivated
    template = get_template(db, interview.template_id, active_only=False)
    if not template:
        raise HTTPException(status_code=404, detail="Template not found")
    return template


def _get_round_or_404(template: CompanyTemplate, round_id: str) -> Round:
    round_ = get_round(template, round_id)
    if not round_:
        raise HTTPException(status_code=404, detail="Round not found")
    return round_


@router.post("", response_model=CompanyInterviewResponse, status_code=status.HTTP_201_CREATED)
async def start_interview(
    request: CompanyInterviewCreate,
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Start a company interview from an active template."""
    template = get_template(db, request.template_id)
    if not template:
        raise HTTPException(status_code=404, detail="Template not found")
    return create_company_interview(db, current_user.id, template)


@router.get("", response_model=list[CompanyInterviewResponse])
async def list_my_interviews(
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return get_interviews_for_user(db, current_user.id)


@router.get("/{interview_id}", response_model=CompanyInterviewResponse)
async def get_interview(
    interview_id: int,
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return _get_interview_or_404(db, interview_id, current_user)


@router.get("/{interview_id}/rounds/{round_id}/questions", response_model=list[CandidateQuestion])
async def get_round_questions(
    interview_id: int,
    round_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Questions for one sitting of a round, without answer keys."""
    interview = _get_interview_or_404(db, interview_id, current_user)
    round_ = _get_round_or_404(_get_interview_template(db, interview), round_id)
    return [CandidateQuestion.from_question(q) for q in select_questions_for_round(db, round_)]


@router.post("/{interview_id}/rounds/{round_id}/submit", response_model=RoundSubmissionResponse)
async def submit_round_answers(
    interview_id: int,
    round_id: str,
    request: RoundSubmissionRequest,
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Score submitted answers and store them as a new attempt."""
    interview = _get_interview_or_404(db, interview_id, current_user)
    round_ = _get_round_or_404(_get_interview_template(db, interview), round_id)
    if round_.type == "voice":
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Voice rounds are graded from the transcript, not submitted answers",
        )

    record = submit_round(db, interview, round_, request.answers)
    return RoundSubmissionResponse(
        feedback_id=record.id,
        attempt=record.attempt,
        score=record.total_score,
        passed=record.passed,
        is_update=record.attempt > 1,
    )


@router.post("/{interview_id}/rounds/{round_id}/feedback", response_model=RoundFeedback)
async def record_round_feedback(
    interview_id: int,
    round_id: str,
    request: GradedFeedbackRequest,
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Store feedback produced by the language-model grader for a voice or text round."""
    interview = _get_interview_or_404(db, interview_id, current_user)
    round_ = _get_round_or_404(_get_interview_template(db, interview), round_id)
    if round_.type not in GRADED_ROUND_TYPES:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"{round_.type} rounds are scored on submission",
        )
    return record_graded_feedback(db, interview, round_, request)


@router.get("/{interview_id}/rounds/{round_id}/feedback", response_model=RoundFeedback)
async def get_round_feedback(
    interview_id: int,
    round_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Feedback of the latest attempt of a round."""
    interview = _get_interview_or_404(db, interview_id, current_user)
    feedback = get_latest_round_feedback(db, interview, round_id)
    if not feedback:
        raise HTTPException(status_code=404, detail="Round feedback not found")
    return feedback


@router.get("/{interview_id}/rounds/{round_id}/attempts", response_model=list[RoundFeedback])
async def get_round_attempts(
    interview_id: int,
    round_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Every stored attempt of a round, newest first."""
    interview = _get_interview_or_404(db, interview_id, current_user)
    return list_round_attempts(db, interview, round_id)


@router.post("/{interview_id}/rounds/{round_id}/complete", response_model=RoundCompleteResponse)
async def complete_round(
    interview_id: int,
    round_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    interview = _get_interview_or_404(db, interview_id, current_user)
    _get_round_or_404(_get_interview_template(db, interview), round_id)
    interview = mark_round_complete(db, interview, round_id)
    return RoundCompleteResponse(
        interview_id=interview.id,
        round_id=round_id,
        completed_rounds=interview.completed_rounds,
    )


@router.get("/{interview_id}/feedback", response_model=CumulativeFeedback)
async def get_interview_feedback(
    interview_id: int,
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Cumulative feedback across the latest attempt of every round."""
    interview = _get_interview_or_404(db, interview_id, current_user)
    template = _get_interview_template(db, interview)
    return get_cumulative_feedback(db, interview, template)
