from fastapi import APIRouter, Depends
from roundscore.dependencies import CurrentUser, get_current_user
from roundscore.schemas.feedback import ScoreRequest, ScoreResponse
from roundscore.services.scoring import normalize_questions, score_answers

router = APIRouter(prefix="/api/scoring", tags=["scoring"])


@router.post("/score", response_model=ScoreResponse)
async def score_submission(
    request: ScoreRequest,
    current_user: CurrentUser = Depends(get_current_user),
):
    """Score answers against an inline question list without storing anything."""
    questions = normalize_questions(request.questions)
    question_ids = {q.id for q in questions}
    answered = {a.question_id for a in request.answers if a.question_id in question_ids}
    return ScoreResponse(
        score=score_answers(request.answers, questions),
        question_count=len(questions),
        answered_count=len(answered),
    )
