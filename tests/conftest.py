import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from backend import app
from roundscore.database import get_db, init_db
from roundscore.dependencies import CurrentUser, get_current_user
from roundscore.schemas.question import QuestionBankCreate, QuestionCreate
from roundscore.schemas.template import CompanyTemplateCreate
from roundscore.services.question_banks import add_question, create_question_bank
from roundscore.services.templates import create_template


class AuthState:
    """Which user the overridden auth dependency returns."""

    def __init__(self):
        self.as_candidate()

    def as_candidate(self, user_id="user-1"):
        self.user = CurrentUser(id=user_id, email=f"{user_id}@example.com")

    def as_admin(self):
        self.user = CurrentUser(id="admin-1", email="admin@example.com", is_admin=True)


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine):
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def auth():
    return AuthState()


@pytest.fixture
def client(db, auth):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_current_user] = lambda: auth.user
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def aptitude_bank(db):
    bank = create_question_bank(db, QuestionBankCreate(name="Basics", type="aptitude"))
    add_question(
        db,
        bank,
        QuestionCreate(text="What is 2 + 2?", type="mcq", options=["2", "4", "6"], correct_answer=1),
    )
    add_question(
        db,
        bank,
        QuestionCreate(text="Which colour is the sky?", type="mcq", options=["red", "blue"], correct_answer="blue"),
    )
    db.refresh(bank)
    return bank


@pytest.fixture
def template(db, aptitude_bank):
    return create_template(
        db,
        CompanyTemplateCreate(
            company_name="Acme",
            description="Acme interview loop",
            rounds=[
                {
                    "id": "round-apt",
                    "name": "Aptitude",
                    "type": "aptitude",
                    "duration": 10,
                    "question_bank_id": aptitude_bank.id,
                    "passing_score": 70,
                },
                {
                    "id": "round-code",
                    "name": "Coding",
                    "type": "code",
                    "duration": 30,
                    "passing_score": 60,
                    "questions": [
                        {
                            "id": "c1",
                            "text": "Reverse a string",
                            "type": "code",
                            "points": 2,
                            "test_cases": [
                                {"input": "abc", "expected_output": "cba"},
                                {"input": "x", "expected_output": "x", "is_hidden": True},
                            ],
                        }
                    ],
                },
                {
                    "id": "round-voice",
                    "name": "Behavioral",
                    "type": "voice",
                    "duration": 20,
                },
            ],
        ),
    )
