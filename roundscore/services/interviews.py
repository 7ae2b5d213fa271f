"""Company interview instances and round completion tracking."""

import logging
from typing import Optional
from sqlalchemy.orm import Session
from roundscore.models.interview import CompanyInterview
from roundscore.models.template import CompanyTemplate

logger = logging.getLogger(__name__)


def create_company_interview(
    db: Session,
    user_id: str,
    template: CompanyTemplate,
) -> CompanyInterview:
    """Start a new interview for a user from a template."""
    interview = CompanyInterview(
        template_id=template.id,
        company_name=template.company_name,
        user_id=user_id,
        completed_rounds=[],
    )
    db.add(interview)
    db.commit()
    db.refresh(interview)
    logger.info("Company interview %s created for user %s", interview.id, user_id)
    return interview


def get_interviews_for_user(db: Session, user_id: str) -> list[CompanyInterview]:
    return (
        db.query(CompanyInterview)
        .filter(CompanyInterview.user_id == user_id)
        .order_by(CompanyInterview.created_at.desc(), CompanyInterview.id.desc())
        .all()
    )


def get_company_interview(db: Session, interview_id: int, user_id: str) -> Optional[CompanyInterview]:
    """Get an interview by ID for a specific user."""
    return db.query(CompanyInterview).filter(
        CompanyInterview.id == interview_id,
        CompanyInterview.user_id == user_id,
    ).first()


def mark_round_complete(db: Session, interview: CompanyInterview, round_id: str) -> CompanyInterview:
    """Add a round to the completed list. Completing a round twice is a no-op."""
    completed = list(interview.completed_rounds or [])
    if round_id not in completed:
        completed.append(round_id)
        # Assign a new list so SQLAlchemy notices the JSON change
        interview.completed_rounds = completed
        db.commit()
        db.refresh(interview)
        logger.info("Round %s marked complete for interview %s", round_id, interview.id)
    return interview
