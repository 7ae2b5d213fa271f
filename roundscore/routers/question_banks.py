from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import Optional
from roundscore.database import get_db
from roundscore.dependencies import CurrentUser, require_admin
from roundscore.schemas.question import (
    Question,
    QuestionBankCreate,
    QuestionBankResponse,
    QuestionBankUpdate,
    QuestionCreate,
    QuestionUpdate,
    mcq_problem,
)
from roundscore.services import question_banks as banks

router = APIRouter(prefix="/api/question-banks", tags=["question-banks"])


def _get_bank_or_404(db: Session, bank_id: int):
    bank = banks.get_question_bank(db, bank_id)
    if not bank:
        raise HTTPException(status_code=404, detail="Question bank not found")
    return bank


def _check_question_fits_bank(bank_type: str, question_type: str) -> None:
    allowed = {
        "aptitude": {"mcq", "text"},
        "coding": {"code"},
        "text": {"text"},
    }
    if question_type not in allowed.get(bank_type, set()):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"A {bank_type} bank cannot hold {question_type} questions",
        )


def _check_mcq(options, correct_answer) -> None:
    problem = mcq_problem(options, correct_answer)
    if problem:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=problem)


def _get_unscored_question_or_error(db: Session, bank_id: int, question_id: int):
    # Stored attempts reference questions by id, so scored questions stay as they were
    record = banks.get_question(db, bank_id, question_id)
    if not record:
        raise HTTPException(status_code=404, detail="Question not found")
    if banks.is_question_scored(db, record):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Question has been used in a scored submission and cannot be changed",
        )
    return record


@router.get("", response_model=list[QuestionBankResponse])
async def list_question_banks(
    type: Optional[str] = None,  # "aptitude", "coding", "text"
    admin: CurrentUser = Depends(require_admin),
    db: Session = Depends(get_db),
):
    return [banks.to_bank_response(bank) for bank in banks.get_question_banks(db, type)]


@router.get("/{bank_id}", response_model=QuestionBankResponse)
async def get_question_bank(
    bank_id: int,
    admin: CurrentUser = Depends(require_admin),
    db: Session = Depends(get_db),
):
    return banks.to_bank_response(_get_bank_or_404(db, bank_id))


@router.post("", response_model=QuestionBankResponse, status_code=status.HTTP_201_CREATED)
async def create_question_bank(
    request: QuestionBankCreate,
    admin: CurrentUser = Depends(require_admin),
    db: Session = Depends(get_db),
):
    return banks.to_bank_response(banks.create_question_bank(db, request))


@router.put("/{bank_id}", response_model=QuestionBankResponse)
async def update_question_bank(
    bank_id: int,
    request: QuestionBankUpdate,
    admin: CurrentUser = Depends(require_admin),
    db: Session = Depends(get_db),
):
    bank = _get_bank_or_404(db, bank_id)
    return banks.to_bank_response(banks.update_question_bank(db, bank, request))


@router.delete("/{bank_id}")
async def delete_question_bank(
    bank_id: int,
    admin: CurrentUser = Depends(require_admin),
    db: Session = Depends(get_db),
):
    bank = _get_bank_or_404(db, bank_id)
    if banks.scored_question_ids(db, bank.id):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Question bank has questions used in scored submissions",
        )
    banks.delete_question_bank(db, bank)
    return {"success": True}


@router.post("/{bank_id}/questions", response_model=Question, status_code=status.HTTP_201_CREATED)
async def add_question(
    bank_id: int,
    request: QuestionCreate,
    admin: CurrentUser = Depends(require_admin),
    db: Session = Depends(get_db),
):
    bank = _get_bank_or_404(db, bank_id)
    _check_question_fits_bank(bank.type, request.type)
    if request.type == "mcq":
        _check_mcq(request.options, request.correct_answer)
    return banks.to_question(banks.add_question(db, bank, request))


@router.put("/{bank_id}/questions/{question_id}", response_model=Question)
async def update_question(
    bank_id: int,
    question_id: int,
    request: QuestionUpdate,
    admin: CurrentUser = Depends(require_admin),
    db: Session = Depends(get_db),
):
    record = _get_unscored_question_or_error(db, bank_id, question_id)
    if record.type == "mcq":
        options = request.options if request.options is not None else record.options
        correct_answer = request.correct_answer if request.correct_answer is not None else record.correct_answer
        _check_mcq(options, correct_answer)
    return banks.to_question(banks.update_question(db, record, request))


@router.delete("/{bank_id}/questions/{question_id}")
async def remove_question(
    bank_id: int,
    question_id: int,
    admin: CurrentUser = Depends(require_admin),
    db: Session = Depends(get_db),
):
    record = _get_unscored_question_or_error(db, bank_id, question_id)
    banks.delete_question(db, record)
    return {"success": True}
