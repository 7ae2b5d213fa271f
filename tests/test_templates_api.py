TEMPLATE = {
    "company_name": "Globex",
    "description": "Two round loop",
    "rounds": [
        {"id": "r1", "name": "Aptitude", "type": "aptitude", "duration": 5, "questions": ["What is 1 + 1?"]},
        {"id": "r2", "name": "Behavioral", "type": "voice", "duration": 20, "passing_score": 60},
    ],
}


def test_candidates_cannot_create_templates(client):
    response = client.post("/api/templates", json=TEMPLATE)

    assert response.status_code == 403
    assert response.json()["detail"] == "Admin access required"


def test_admin_creates_and_lists_template(client, auth):
    auth.as_admin()
    created = client.post("/api/templates", json=TEMPLATE)

    assert created.status_code == 201
    data = created.json()
    assert data["company_name"] == "Globex"
    assert [r["id"] for r in data["rounds"]] == ["r1", "r2"]
    assert data["rounds"][0]["questions"] == ["What is 1 + 1?"]

    listed = client.get("/api/templates").json()
    assert [t["id"] for t in listed] == [data["id"]]


def test_duplicate_round_ids_are_rejected(client, auth):
    auth.as_admin()
    payload = dict(TEMPLATE, rounds=[TEMPLATE["rounds"][0], TEMPLATE["rounds"][0]])

    assert client.post("/api/templates", json=payload).status_code == 422


def test_deactivated_template_is_hidden_from_candidates(client, auth):
    auth.as_admin()
    template_id = client.post("/api/templates", json=TEMPLATE).json()["id"]
    updated = client.put(f"/api/templates/{template_id}", json={"is_active": False})
    assert updated.json()["is_active"] is False

    auth.as_candidate()
    assert client.get("/api/templates").json() == []
    assert client.get(f"/api/templates/{template_id}").status_code == 404
    assert client.post("/api/interviews", json={"template_id": template_id}).status_code == 404


def test_legacy_round_questions_are_normalized(client, auth):
    auth.as_admin()
    template_id = client.post("/api/templates", json=TEMPLATE).json()["id"]
    interview_id = client.post("/api/interviews", json={"template_id": template_id}).json()["id"]

    questions = client.get(f"/api/interviews/{interview_id}/rounds/r1/questions").json()
    assert questions == [
        {
            "id": "q-0",
            "text": "What is 1 + 1?",
            "type": "text",
            "options": None,
            "test_cases": None,
            "difficulty": None,
            "points": 1,
        }
    ]

    submitted = client.post(
        f"/api/interviews/{interview_id}/rounds/r1/submit",
        json={"answers": [{"question_id": "q-0", "answer": "2"}]},
    )
    assert submitted.json()["score"] == 100


def test_delete_template(client, auth):
    auth.as_admin()
    template_id = client.post("/api/templates", json=TEMPLATE).json()["id"]

    assert client.delete(f"/api/templates/{template_id}").json() == {"success": True}
    assert client.get(f"/api/templates/{template_id}").status_code == 404
    assert client.delete(f"/api/templates/{template_id}").status_code == 404


def test_inline_mcq_without_usable_key_is_rejected(client, auth):
    auth.as_admin()
    broken = {
        "id": "r1",
        "name": "Aptitude",
        "type": "aptitude",
        "duration": 5,
        "questions": [{"id": "m1", "text": "Pick", "type": "mcq", "options": ["a", "b"], "correct_answer": 5}],
    }

    response = client.post("/api/templates", json=dict(TEMPLATE, rounds=[broken]))

    assert response.status_code == 422
