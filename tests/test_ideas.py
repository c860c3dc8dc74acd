from conftest import auth_headers
from learnhub.models import Idea, User

IDEA = {
    "title": "Campus food sharing",
    "original_input": "An app that lets students share leftover food from events with each other.",
    "context": "startup",
}


def create(client, headers, **overrides):
    return client.post("/api/ideas", json={**IDEA, **overrides}, headers=headers)


def test_create_idea_completes_when_enrichment_succeeds(client, headers, gateway):
    response = create(client, headers)

    assert response.status_code == 201
    idea = response.json()
    assert idea["status"] == "completed"
    assert idea["structured_content"]
    assert idea["views"] == 0
    assert idea["feedback"]["overall_score"] == 8
    assert idea["outputs"]["pitch_script"] == "A startup pitch"
    assert idea["customization"] == {"tone": "persuasive"}
    assert [op for op, _ in gateway.calls] == ["structure", "feedback", "outputs"]


def test_create_idea_marks_error_when_enrichment_fails(client, headers, gateway):
    gateway.failing.add("structure")

    response = create(client, headers)

    assert response.status_code == 201
    idea = response.json()
    assert idea["status"] == "error"
    assert idea["structured_content"] == {}
    assert idea["feedback"] == {"error": "AI processing failed. Please try again."}


def test_failure_late_in_chain_keeps_no_partial_content(client, headers, gateway):
    gateway.failing.add("outputs")

    idea = create(client, headers).json()

    assert idea["status"] == "error"
    assert idea["structured_content"] == {}
    assert idea["outputs"] == {}


def test_successful_refinement_counts_towards_user_stats(client, headers, user, gateway, db_session):
    create(client, headers)
    gateway.failing.add("feedback")
    create(client, headers)

    db_session.expire_all()
    stats = db_session.get(User, user.id).stats
    assert stats["ideas_refined"] == 1


def test_reading_an_idea_increments_views(client, headers):
    idea_id = create(client, headers).json()["id"]

    first = client.get(f"/api/ideas/{idea_id}", headers=headers).json()
    second = client.get(f"/api/ideas/{idea_id}", headers=headers).json()

    assert first["views"] == 1
    assert second["views"] == 2


def test_other_users_idea_is_not_found(client, headers, make_user):
    idea_id = create(client, headers).json()["id"]
    intruder = auth_headers(make_user())

    missing = client.get("/api/ideas/9999", headers=intruder)
    for response in (
        client.get(f"/api/ideas/{idea_id}", headers=intruder),
        client.put(f"/api/ideas/{idea_id}", json={"title": "Mine now"}, headers=intruder),
        client.delete(f"/api/ideas/{idea_id}", headers=intruder),
        client.post(f"/api/ideas/{idea_id}/reprocess", headers=intruder),
        client.post(f"/api/ideas/{idea_id}/summary", headers=intruder),
    ):
        assert response.status_code == 404
        assert response.json() == missing.json()

    # Untouched, including the view counter.
    assert client.get(f"/api/ideas/{idea_id}", headers=headers).json()["views"] == 1


def test_update_merges_only_supplied_fields(client, headers, gateway):
    original = create(client, headers).json()
    calls_before = len(gateway.calls)

    response = client.put(
        f"/api/ideas/{original['id']}",
        json={"title": "Food rescue", "tone": "casual", "tags": ["food", "campus"]},
        headers=headers,
    )

    assert response.status_code == 200
    idea = response.json()
    assert idea["title"] == "Food rescue"
    assert idea["tags"] == ["food", "campus"]
    assert idea["customization"]["tone"] == "casual"
    assert idea["original_input"] == original["original_input"]
    assert idea["structured_content"] == original["structured_content"]
    assert idea["status"] == "completed"
    assert len(gateway.calls) == calls_before


def test_delete_removes_the_idea(client, headers, db_session):
    idea_id = create(client, headers).json()["id"]

    assert client.delete(f"/api/ideas/{idea_id}", headers=headers).status_code == 200
    assert client.get(f"/api/ideas/{idea_id}", headers=headers).status_code == 404
    assert db_session.get(Idea, idea_id) is None


def test_reprocess_recovers_an_errored_idea(client, headers, gateway):
    gateway.failing.add("structure")
    idea_id = create(client, headers).json()["id"]
    gateway.failing.clear()

    response = client.post(
        f"/api/ideas/{idea_id}/reprocess",
        json={"tone": "formal", "context": "hackathon"},
        headers=headers,
    )

    assert response.status_code == 200
    idea = response.json()
    assert idea["status"] == "completed"
    assert idea["structured_content"]
    assert idea["context"] == "hackathon"
    assert idea["customization"]["tone"] == "formal"
    raw_input, context, tone = gateway.called("structure")[-1]
    assert (context, tone) == ("hackathon", "formal")
    assert raw_input == IDEA["original_input"]


def test_reprocessing_idea_shows_no_stale_content(client, headers, gateway, db_session):
    idea_id = create(client, headers).json()["id"]
    seen = []
    structure = gateway.structure

    async def observed_structure(raw_input, context, tone):
        db_session.expire_all()
        stored = db_session.get(Idea, idea_id)
        seen.append((stored.status, stored.structured_content, stored.outputs))
        return await structure(raw_input, context, tone)

    gateway.structure = observed_structure
    response = client.post(f"/api/ideas/{idea_id}/reprocess", headers=headers)

    assert seen == [("processing", {}, {})]
    assert response.json()["status"] == "completed"
    assert response.json()["structured_content"]


def test_reprocess_uses_stored_context_and_tone_by_default(client, headers, gateway):
    idea_id = create(client, headers, tone="professional").json()["id"]

    client.post(f"/api/ideas/{idea_id}/reprocess", headers=headers)

    _, context, tone = gateway.called("structure")[-1]
    assert (context, tone) == ("startup", "professional")


def test_failed_reprocess_is_reported_as_entity_status(client, headers, gateway):
    idea_id = create(client, headers).json()["id"]
    gateway.failing.add("feedback")

    response = client.post(f"/api/ideas/{idea_id}/reprocess", headers=headers)

    assert response.status_code == 200
    idea = response.json()
    assert idea["status"] == "error"
    assert idea["structured_content"] == {}


def test_summary_requires_processed_idea(client, headers, gateway):
    gateway.failing.add("structure")
    idea_id = create(client, headers).json()["id"]

    response = client.post(f"/api/ideas/{idea_id}/summary", headers=headers)

    assert response.status_code == 400
    assert response.json()["detail"] == "Idea must be processed first"


def test_summary_is_returned_but_not_persisted(client, headers, db_session):
    idea_id = create(client, headers).json()["id"]

    response = client.post(f"/api/ideas/{idea_id}/summary", headers=headers)

    assert response.status_code == 200
    assert response.json() == {"id": idea_id, "summary": "A short summary."}
    idea = db_session.get(Idea, idea_id)
    assert "summary" not in idea.outputs


def test_summary_gateway_failure_is_bad_gateway(client, headers, gateway):
    idea_id = create(client, headers).json()["id"]
    gateway.failing.add("summary")

    response = client.post(f"/api/ideas/{idea_id}/summary", headers=headers)

    assert response.status_code == 502
    assert client.get(f"/api/ideas/{idea_id}", headers=headers).json()["status"] == "completed"


def test_list_is_paginated_and_filtered(client, headers, gateway, make_user):
    create(client, headers)
    create(client, headers, context="hackathon")
    gateway.failing.add("structure")
    create(client, headers)
    create(client, auth_headers(make_user()))

    page = client.get("/api/ideas?page=1&limit=2", headers=headers).json()
    assert page["total"] == 3
    assert page["pages"] == 2
    assert len(page["items"]) == 2

    errored = client.get("/api/ideas?status=error", headers=headers).json()
    assert [i["status"] for i in errored["items"]] == ["error"]

    hackathon = client.get("/api/ideas?context=hackathon", headers=headers).json()
    assert hackathon["total"] == 1


def test_create_validation_errors_are_field_level(client, headers):
    response = create(client, headers, original_input="too short", context="party")

    assert response.status_code == 400
    body = response.json()
    assert body["detail"] == "Validation failed"
    fields = {error["field"] for error in body["errors"]}
    assert {"original_input", "context"} <= fields


def test_ideas_require_authentication(client):
    assert client.get("/api/ideas").status_code == 401
    assert client.post("/api/ideas", json=IDEA).status_code == 401
