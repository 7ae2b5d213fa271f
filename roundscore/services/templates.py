"""Company interview templates."""

import logging
from typing import Optional
from sqlalchemy.orm import Session
from roundscore.models.template import CompanyTemplate
from roundscore.schemas.template import CompanyTemplateCreate, CompanyTemplateUpdate, Round

logger = logging.getLogger(__name__)


def _dump_rounds(rounds: list[Round]) -> list[dict]:
    return [r.model_dump(mode="json", exclude_none=True) for r in rounds]


def get_active_templates(db: Session) -> list[CompanyTemplate]:
    return (
        db.query(CompanyTemplate)
        .filter(CompanyTemplate.is_active == True)  # noqa: E712
        .order_by(CompanyTemplate.created_at.desc())
        .all()
    )


def get_template(db: Session, template_id: int, active_only: bool = True) -> Optional[CompanyTemplate]:
    query = db.query(CompanyTemplate).filter(CompanyTemplate.id == template_id)
    if active_only:
        query = query.filter(CompanyTemplate.is_active == True)  # noqa: E712
    return query.first()


def create_template(db: Session, data: CompanyTemplateCreate) -> CompanyTemplate:
    template = CompanyTemplate(
        company_name=data.company_name,
        company_logo=data.company_logo,
        description=data.description,
        rounds=_dump_rounds(data.rounds),
        is_active=data.is_active,
    )
    db.add(template)
    db.commit()
    db.refresh(template)
    logger.info("Company template created with id %s", template.id)
    return template


def update_template(db: Session, template: CompanyTemplate, data: CompanyTemplateUpdate) -> CompanyTemplate:
    if data.company_name is not None:
        template.company_name = data.company_name
    if data.company_logo is not None:
        template.company_logo = data.company_logo
    if data.description is not None:
        template.description = data.description
    if data.rounds is not None:
        template.rounds = _dump_rounds(data.rounds)
    if data.is_active is not None:
        template.is_active = data.is_active

    db.commit()
    db.refresh(template)
    logger.info("Company template %s updated", template.id)
    return template


def delete_template(db: Session, template: CompanyTemplate) -> None:
    db.delete(template)
    db.commit()
    logger.info("Company template %s deleted", template.id)


def get_round(template: CompanyTemplate, round_id: str) -> Optional[Round]:
    """Return the validated round with the given id, or None."""
    round_data = template.find_round(round_id)
    if round_data is None:
        return None
    return Round.model_validate(round_data)
