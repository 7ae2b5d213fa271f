"""Round feedback persistence.

Every submission stores a new attempt row. Cumulative feedback is never
stored; it is rebuilt from the attempt rows on each read.
"""

import logging
from typing import Optional
from sqlalchemy import func
from sqlalchemy.orm import Session
from roundscore.models.feedback import RoundFeedbackRecord
from roundscore.models.interview import CompanyInterview
from roundscore.models.template import CompanyTemplate
from roundscore.schemas.feedback import (
    CategoryScore,
    CumulativeFeedback,
    GradedFeedbackRequest,
    RoundFeedback,
)
from roundscore.schemas.question import UserAnswer
from roundscore.schemas.template import Round
from roundscore.services.interviews import mark_round_complete
from roundscore.services.question_banks import load_round_questions
from roundscore.services.scoring import (
    aggregate_cumulative_feedback,
    is_passing,
    score_answers,
    summarize_round,
)

logger = logging.getLogger(__name__)


def _next_attempt(db: Session, interview: CompanyInterview, round_id: str) -> int:
    latest = (
        db.query(func.max(RoundFeedbackRecord.attempt))
        .filter(
            RoundFeedbackRecord.interview_id == interview.id,
            RoundFeedbackRecord.user_id == interview.user_id,
            RoundFeedbackRecord.round_id == round_id,
        )
        .scalar()
    )
    return (latest or 0) + 1


def _store_attempt(
    db: Session,
    interview: CompanyInterview,
    round_: Round,
    total_score: int,
    category_scores: list[CategoryScore],
    strengths: list[str],
    areas_for_improvement: list[str],
    final_assessment: str,
    answers: list[UserAnswer],
) -> RoundFeedbackRecord:
    attempt = _next_attempt(db, interview, round_.id)
    record = RoundFeedbackRecord(
        interview_id=interview.id,
        user_id=interview.user_id,
        template_id=interview.template_id,
        round_id=round_.id,
        round_name=round_.name,
        round_type=round_.type,
        attempt=attempt,
        total_score=total_score,
        passing_score=round_.passing_score,
        passed=is_passing(total_score, round_.passing_score),
        category_scores=[c.model_dump() for c in category_scores],
        strengths=strengths,
        areas_for_improvement=areas_for_improvement,
        final_assessment=final_assessment,
        answers=[a.model_dump() for a in answers],
    )
    db.add(record)
    db.commit()
    db.refresh(record)
    logger.info(
        "Round feedback %s stored for interview %s round %s (attempt #%s)",
        record.id, interview.id, round_.id, attempt,
    )

    mark_round_complete(db, interview, round_.id)
    return record


def submit_round(
    db: Session,
    interview: CompanyInterview,
    round_: Round,
    answers: list[UserAnswer],
) -> RoundFeedbackRecord:
    """Score a round submission against its question pool and store the attempt."""
    questions = load_round_questions(db, round_)
    score = score_answers(answers, questions)
    passed = is_passing(score, round_.passing_score)
    strengths, areas = summarize_round(round_.type, score, passed)

    outcome = "Passed" if passed else "Did not pass"
    final_assessment = f"Scored {score}/100 in {round_.name}. {outcome} this round."

    return _store_attempt(
        db,
        interview,
        round_,
        total_score=score,
        category_scores=[CategoryScore(name=round_.name, score=score)],
        strengths=strengths,
        areas_for_improvement=areas,
        final_assessment=final_assessment,
        answers=answers,
    )


def record_graded_feedback(
    db: Session,
    interview: CompanyInterview,
    round_: Round,
    payload: GradedFeedbackRequest,
) -> RoundFeedbackRecord:
    """Store feedback produced by the language-model grader as a new attempt."""
    return _store_attempt(
        db,
        interview,
        round_,
        total_score=payload.total_score,
        category_scores=payload.category_scores,
        strengths=payload.strengths,
        areas_for_improvement=payload.areas_for_improvement,
        final_assessment=payload.final_assessment,
        answers=payload.answers,
    )


def list_round_attempts(
    db: Session,
    interview: CompanyInterview,
    round_id: Optional[str] = None,
) -> list[RoundFeedbackRecord]:
    """All stored attempts, newest first."""
    query = db.query(RoundFeedbackRecord).filter(
        RoundFeedbackRecord.interview_id == interview.id,
        RoundFeedbackRecord.user_id == interview.user_id,
    )
    if round_id is not None:
        query = query.filter(RoundFeedbackRecord.round_id == round_id)
    return query.order_by(
        RoundFeedbackRecord.attempt.desc(),
        RoundFeedbackRecord.created_at.desc(),
    ).all()


def get_latest_round_feedback(
    db: Session,
    interview: CompanyInterview,
    round_id: str,
) -> Optional[RoundFeedbackRecord]:
    attempts = list_round_attempts(db, interview, round_id)
    return attempts[0] if attempts else None


def get_cumulative_feedback(
    db: Session,
    interview: CompanyInterview,
    template: CompanyTemplate,
) -> CumulativeFeedback:
    """Roll up the latest attempt of each round still present in the template."""
    round_ids = {r.get("id") for r in template.rounds or []}
    feedbacks = [
        RoundFeedback.model_validate(record)
        for record in list_round_attempts(db, interview)
        if record.round_id in round_ids
    ]
    return aggregate_cumulative_feedback(feedbacks, len(round_ids))
