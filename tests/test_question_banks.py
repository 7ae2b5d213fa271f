import random

from roundscore.schemas.question import QuestionBankCreate, QuestionCreate
from roundscore.schemas.template import Round
from roundscore.services.question_banks import (
    add_question,
    create_question_bank,
    load_round_questions,
    select_questions_for_round,
)


def _aptitude_round(**overrides):
    data = {"id": "r1", "name": "Aptitude", "type": "aptitude", "duration": 10}
    data.update(overrides)
    return Round(**data)


def test_question_bank_routes_require_admin(client):
    assert client.get("/api/question-banks").status_code == 403
    assert client.post("/api/question-banks", json={"name": "X", "type": "aptitude"}).status_code == 403


def test_admin_manages_bank_and_questions(client, auth):
    auth.as_admin()
    bank = client.post("/api/question-banks", json={"name": "Logic", "type": "aptitude"}).json()
    assert bank["questions"] == []
    assert bank["difficulty"] == "mixed"

    created = client.post(
        f"/api/question-banks/{bank['id']}/questions",
        json={"text": "2 + 3?", "type": "mcq", "options": ["4", "5"], "correct_answer": 1, "points": 2},
    )
    assert created.status_code == 201
    question = created.json()
    assert question["correct_answer"] == 1
    assert question["points"] == 2

    updated = client.put(
        f"/api/question-banks/{bank['id']}/questions/{question['id']}",
        json={"difficulty": "easy"},
    )
    assert updated.json()["difficulty"] == "easy"
    assert updated.json()["text"] == "2 + 3?"

    fetched = client.get(f"/api/question-banks/{bank['id']}").json()
    assert [q["id"] for q in fetched["questions"]] == [question["id"]]

    removed = client.delete(f"/api/question-banks/{bank['id']}/questions/{question['id']}")
    assert removed.json() == {"success": True}
    assert client.get(f"/api/question-banks/{bank['id']}").json()["questions"] == []


def test_question_type_must_fit_bank(client, auth):
    auth.as_admin()
    bank = client.post("/api/question-banks", json={"name": "Algorithms", "type": "coding"}).json()

    response = client.post(
        f"/api/question-banks/{bank['id']}/questions",
        json={"text": "Pick", "type": "mcq", "options": ["a"], "correct_answer": 0},
    )

    assert response.status_code == 400


def test_mcq_needs_options(client, auth):
    auth.as_admin()
    bank = client.post("/api/question-banks", json={"name": "Logic", "type": "aptitude"}).json()

    response = client.post(
        f"/api/question-banks/{bank['id']}/questions",
        json={"text": "Pick", "type": "mcq", "correct_answer": 0},
    )

    assert response.status_code == 400


def test_points_must_be_positive(client, auth):
    auth.as_admin()
    bank = client.post("/api/question-banks", json={"name": "Logic", "type": "aptitude"}).json()

    response = client.post(
        f"/api/question-banks/{bank['id']}/questions",
        json={"text": "Explain", "type": "text", "points": 0},
    )

    assert response.status_code == 422


def test_list_banks_by_type(client, auth):
    auth.as_admin()
    client.post("/api/question-banks", json={"name": "Logic", "type": "aptitude"})
    client.post("/api/question-banks", json={"name": "Algorithms", "type": "coding"})

    banks = client.get("/api/question-banks", params={"type": "coding"}).json()

    assert [b["name"] for b in banks] == ["Algorithms"]


def test_missing_bank_is_404(client, auth):
    auth.as_admin()

    assert client.get("/api/question-banks/999").status_code == 404


def test_round_without_questions_gets_default_question(db):
    questions = load_round_questions(db, _aptitude_round())

    assert len(questions) == 1
    assert questions[0].id == "default-r1"
    assert questions[0].type == "text"
    assert "No question bank was specified." in questions[0].text


def test_empty_bank_gets_default_question(db):
    bank = create_question_bank(db, QuestionBankCreate(name="Empty", type="aptitude"))

    questions = load_round_questions(db, _aptitude_round(question_bank_id=bank.id))

    assert [q.id for q in questions] == ["default-r1"]
    assert "No questions were found in the question bank." in questions[0].text


def test_bank_of_wrong_type_is_not_used(db, aptitude_bank):
    round_ = Round(id="r2", name="Coding", type="code", duration=30, question_bank_id=aptitude_bank.id)

    assert [q.id for q in load_round_questions(db, round_)] == ["default-r2"]


def test_round_difficulty_filters_bank(db):
    bank = create_question_bank(db, QuestionBankCreate(name="Mixed", type="aptitude"))
    add_question(db, bank, QuestionCreate(text="Easy one", type="text", difficulty="easy"))
    add_question(db, bank, QuestionCreate(text="Hard one", type="text", difficulty="hard"))
    add_question(db, bank, QuestionCreate(text="Unrated", type="text"))
    db.refresh(bank)

    hard = load_round_questions(db, _aptitude_round(question_bank_id=bank.id, difficulty="hard"))
    mixed = load_round_questions(db, _aptitude_round(question_bank_id=bank.id, difficulty="mixed"))

    assert [q.text for q in hard] == ["Hard one", "Unrated"]
    assert len(mixed) == 3


def test_question_count_serves_a_subset(db, aptitude_bank):
    round_ = _aptitude_round(question_bank_id=aptitude_bank.id, question_count=1)

    served = select_questions_for_round(db, round_, rng=random.Random(7))
    pool = load_round_questions(db, round_)

    assert len(served) == 1
    assert served[0] in pool
    assert len(pool) == 2


def _aptitude_bank_id(client):
    return client.post("/api/question-banks", json={"name": "Logic", "type": "aptitude"}).json()["id"]


def test_mcq_without_correct_answer_is_rejected(client, auth):
    auth.as_admin()
    bank_id = _aptitude_bank_id(client)

    response = client.post(
        f"/api/question-banks/{bank_id}/questions",
        json={"text": "2 + 3?", "type": "mcq", "options": ["4", "5"]},
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "MCQ questions must have a correct answer"


def test_mcq_with_single_option_is_rejected(client, auth):
    auth.as_admin()
    bank_id = _aptitude_bank_id(client)

    response = client.post(
        f"/api/question-banks/{bank_id}/questions",
        json={"text": "2 + 3?", "type": "mcq", "options": ["5"], "correct_answer": 0},
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "MCQ questions must have at least 2 options"


def test_mcq_index_out_of_range_is_rejected(client, auth):
    auth.as_admin()
    bank_id = _aptitude_bank_id(client)

    response = client.post(
        f"/api/question-banks/{bank_id}/questions",
        json={"text": "2 + 3?", "type": "mcq", "options": ["4", "5"], "correct_answer": 7},
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "Correct answer index is out of range"


def test_mcq_answer_text_must_be_an_option(client, auth):
    auth.as_admin()
    bank_id = _aptitude_bank_id(client)

    response = client.post(
        f"/api/question-banks/{bank_id}/questions",
        json={"text": "2 + 3?", "type": "mcq", "options": ["4", "5"], "correct_answer": "6"},
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "Correct answer must be one of the options"


def test_mcq_update_is_checked_against_stored_options(client, auth, aptitude_bank):
    auth.as_admin()
    question_id = aptitude_bank.questions[0].id
    url = f"/api/question-banks/{aptitude_bank.id}/questions/{question_id}"

    assert client.put(url, json={"correct_answer": 3}).status_code == 400
    assert client.put(url, json={"options": ["4"]}).status_code == 400
    assert client.put(url, json={"correct_answer": 2}).json()["correct_answer"] == 2


def test_scored_questions_cannot_be_changed(client, auth, aptitude_bank, template):
    interview_id = client.post("/api/interviews", json={"template_id": template.id}).json()["id"]
    served = client.get(f"/api/interviews/{interview_id}/rounds/round-apt/questions").json()
    ids = {q["text"]: q["id"] for q in served}
    client.post(
        f"/api/interviews/{interview_id}/rounds/round-apt/submit",
        json={"answers": [{"question_id": ids["What is 2 + 2?"], "answer": 1}]},
    )

    auth.as_admin()
    scored_url = f"/api/question-banks/{aptitude_bank.id}/questions/{ids['What is 2 + 2?']}"
    unscored_url = f"/api/question-banks/{aptitude_bank.id}/questions/{ids['Which colour is the sky?']}"

    rewritten = client.put(scored_url, json={"correct_answer": 0})
    assert rewritten.status_code == 409
    assert client.delete(scored_url).status_code == 409
    assert client.delete(f"/api/question-banks/{aptitude_bank.id}").status_code == 409

    assert client.put(unscored_url, json={"difficulty": "easy"}).status_code == 200
    assert client.delete(unscored_url).status_code == 200


def test_questions_of_unused_bank_stay_editable(client, auth, aptitude_bank):
    auth.as_admin()
    question_id = aptitude_bank.questions[0].id

    response = client.put(
        f"/api/question-banks/{aptitude_bank.id}/questions/{question_id}",
        json={"correct_answer": 0},
    )

    assert response.status_code == 200
    assert client.delete(f"/api/question-banks/{aptitude_bank.id}").json() == {"success": True}
