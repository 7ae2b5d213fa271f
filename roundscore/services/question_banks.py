"""Question banks and question loading for rounds."""

import logging
import random
from typing import Optional
from sqlalchemy.orm import Session
from roundscore.models.feedback import RoundFeedbackRecord
from roundscore.models.question_bank import QuestionBank, QuestionRecord
from roundscore.models.template import CompanyTemplate
from roundscore.schemas.question import (
    Question,
    QuestionBankCreate,
    QuestionBankResponse,
    QuestionBankUpdate,
    QuestionCreate,
    QuestionUpdate,
)
from roundscore.schemas.template import Round
from roundscore.services.scoring import normalize_questions

logger = logging.getLogger(__name__)

# Bank type that feeds each round type
BANK_TYPE_FOR_ROUND = {
    "aptitude": "aptitude",
    "code": "coding",
    "text": "text",
}


def to_question(record: QuestionRecord) -> Question:
    return Question(
        id=str(record.id),
        text=record.text,
        type=record.type,
        options=record.options,
        correct_answer=record.correct_answer,
        test_cases=record.test_cases,
        difficulty=record.difficulty,
        points=record.points or 1,
    )


def to_bank_response(bank: QuestionBank) -> QuestionBankResponse:
    return QuestionBankResponse(
        id=bank.id,
        name=bank.name,
        description=bank.description,
        type=bank.type,
        difficulty=bank.difficulty,
        is_active=bank.is_active,
        created_at=bank.created_at,
        updated_at=bank.updated_at,
        questions=[to_question(q) for q in bank.questions],
    )


def get_question_banks(db: Session, bank_type: Optional[str] = None) -> list[QuestionBank]:
    query = db.query(QuestionBank)
    if bank_type:
        query = query.filter(QuestionBank.type == bank_type)
    return query.order_by(QuestionBank.id).all()


def get_question_bank(db: Session, bank_id: int) -> Optional[QuestionBank]:
    return db.query(QuestionBank).filter(QuestionBank.id == bank_id).first()


def create_question_bank(db: Session, data: QuestionBankCreate) -> QuestionBank:
    bank = QuestionBank(
        name=data.name,
        description=data.description,
        type=data.type,
        difficulty=data.difficulty,
        is_active=data.is_active,
    )
    db.add(bank)
    db.commit()
    db.refresh(bank)
    logger.info("Question bank %s (%s) created", bank.id, bank.type)
    return bank


def update_question_bank(db: Session, bank: QuestionBank, data: QuestionBankUpdate) -> QuestionBank:
    for field, value in data.model_dump(exclude_none=True).items():
        setattr(bank, field, value)
    db.commit()
    db.refresh(bank)
    return bank


def delete_question_bank(db: Session, bank: QuestionBank) -> None:
    db.delete(bank)
    db.commit()
    logger.info("Question bank %s deleted", bank.id)


def add_question(db: Session, bank: QuestionBank, data: QuestionCreate) -> QuestionRecord:
    record = QuestionRecord(
        bank_id=bank.id,
        text=data.text,
        type=data.type,
        options=data.options,
        correct_answer=data.correct_answer,
        test_cases=[case.model_dump() for case in data.test_cases] if data.test_cases else None,
        difficulty=data.difficulty,
        points=data.points,
    )
    db.add(record)
    db.commit()
    db.refresh(record)
    logger.info("Question %s added to bank %s", record.id, bank.id)
    return record


def get_question(db: Session, bank_id: int, question_id: int) -> Optional[QuestionRecord]:
    return db.query(QuestionRecord).filter(
        QuestionRecord.id == question_id,
        QuestionRecord.bank_id == bank_id,
    ).first()


def update_question(db: Session, record: QuestionRecord, data: QuestionUpdate) -> QuestionRecord:
    for field, value in data.model_dump(exclude_none=True).items():
        setattr(record, field, value)
    db.commit()
    db.refresh(record)
    return record


def _rounds_drawing_from(db: Session, bank_id: int) -> set[tuple[int, str]]:
    """(template id, round id) of every round served from the bank."""
    rounds = set()
    for template in db.query(CompanyTemplate).all():
        for round_data in template.rounds or []:
            # Inline questions take precedence over the bank
            if round_data.get("question_bank_id") == bank_id and not round_data.get("questions"):
                rounds.add((template.id, round_data.get("id")))
    return rounds


def scored_question_ids(db: Session, bank_id: int) -> set[str]:
    """Ids of the bank's questions that appear in a stored attempt."""
    rounds = _rounds_drawing_from(db, bank_id)
    if not rounds:
        return set()
    records = db.query(RoundFeedbackRecord).filter(
        RoundFeedbackRecord.template_id.in_({template_id for template_id, _ in rounds})
    )
    used = set()
    for record in records:
        if (record.template_id, record.round_id) in rounds:
            used.update(str(answer.get("question_id")) for answer in record.answers or [])
    return used


def is_question_scored(db: Session, record: QuestionRecord) -> bool:
    return str(record.id) in scored_question_ids(db, record.bank_id)


def delete_question(db: Session, record: QuestionRecord) -> None:
    db.delete(record)
    db.commit()
    logger.info("Question %s removed from bank %s", record.id, record.bank_id)


def _default_question(round_: Round, reason: str) -> Question:
    return Question(
        id=f"default-{round_.id}",
        text=f"This is a default question for {round_.name}. {reason}",
        type="text",
        points=1,
    )


def _bank_questions(db: Session, round_: Round) -> list[Question]:
    bank = get_question_bank(db, round_.question_bank_id)
    if bank is None or bank.type != BANK_TYPE_FOR_ROUND.get(round_.type):
        return []
    records = bank.questions
    if round_.difficulty and round_.difficulty != "mixed":
        records = [r for r in records if r.difficulty in (None, round_.difficulty)]
    return [to_question(r) for r in records]


def load_round_questions(db: Session, round_: Round) -> list[Question]:
    """Every question a round can draw from, with answer keys.

    Used for scoring: answers are matched against the full pool, so it does
    not matter which subset was served.
    """
    if round_.questions:
        return list(normalize_questions(round_.questions))
    if round_.question_bank_id is not None:
        questions = _bank_questions(db, round_)
        if questions:
            return questions
        logger.warning("No questions found for bank %s", round_.question_bank_id)
        return [_default_question(round_, "No questions were found in the question bank.")]
    return [_default_question(round_, "No question bank was specified.")]


def select_questions_for_round(db: Session, round_: Round, rng: Optional[random.Random] = None) -> list[Question]:
    """Questions to serve for one sitting of a round."""
    questions = load_round_questions(db, round_)
    count = round_.question_count
    if count and len(questions) > count:
        questions = (rng or random).sample(questions, count)
    logger.info("Loaded %d questions for round %s", len(questions), round_.name)
    return questions
