from __future__ import annotations

from fastapi.testclient import TestClient

from selfer.dependencies.repos import get_generator
from selfer.services import channel_service as channel_service_module
from selfer.services.topic_prompts import FALLBACK_TOPICS

from conftest import FailingGenerator, FakeGenerator


def _create(client: TestClient, **body) -> dict:
    res = client.post("/api/v1/channels", json=body or None)
    assert res.status_code == 201
    return res.json()["data"]


def test_health(client: TestClient) -> None:
    res = client.get("/api/v1/health")

    assert res.status_code == 200
    assert res.json()["data"] == {"status": "healthy", "version": "1.0.0", "service": "selfer-icebreaker"}


def test_create_channel_without_body(client: TestClient) -> None:
    res = client.post("/api/v1/channels")

    assert res.status_code == 201
    body = res.json()
    assert body["success"] is True
    data = body["data"]
    assert len(data["code"]) == 6
    assert data["participants"] == []
    assert data["topics"] == []
    assert data["currentTopicIndex"] == -1
    assert data["status"] == "waiting"


def test_create_channel_with_host(client: TestClient) -> None:
    data = _create(client, targetParticipants=4, hostInfo={"id": "host1", "name": "Host", "mbti": "entj"})

    assert data["targetParticipants"] == 4
    assert data["participants"] == [{"id": "host1", "name": "Host", "mbti": "ENTJ"}]


def test_create_channel_host_without_name(client: TestClient) -> None:
    res = client.post("/api/v1/channels", json={"hostInfo": {"id": "host1"}})

    assert res.status_code == 400
    assert res.json()["error_code"] == "NAME_REQUIRED"


def test_create_channel_rejects_bad_target(client: TestClient) -> None:
    res = client.post("/api/v1/channels", json={"targetParticipants": 0})

    assert res.status_code == 422
    assert res.json()["error_code"] == "VALIDATION_ERROR"


def test_fetch_channel_both_forms(client: TestClient) -> None:
    code = _create(client)["code"]

    by_path = client.get(f"/api/v1/channels/{code.lower()}")
    by_query = client.get("/api/v1/channels", params={"code": code.lower()})

    assert by_path.status_code == by_query.status_code == 200
    assert by_path.json()["data"] == by_query.json()["data"]


def test_fetch_unknown_and_missing_code(client: TestClient) -> None:
    missing = client.get("/api/v1/channels/ZZZZZZ")
    no_code = client.get("/api/v1/channels")

    assert missing.status_code == 404
    assert missing.json() == {
        "success": False,
        "data": None,
        "message": "Channel not found",
        "error_code": "CHANNEL_NOT_FOUND",
    }
    assert no_code.status_code == 400
    assert no_code.json()["error_code"] == "CODE_REQUIRED"


def test_join_requires_name(client: TestClient) -> None:
    code = _create(client)["code"]

    res = client.post(f"/api/v1/channels/{code}/join", json={"name": "   ", "id": "u1"})

    assert res.status_code == 400
    assert res.json()["error_code"] == "NAME_REQUIRED"


def test_join_unknown_channel(client: TestClient) -> None:
    res = client.post("/api/v1/channels/ZZZZZZ/join", json={"name": "Mina"})

    assert res.status_code == 404


def test_join_generates_id_and_is_idempotent(client: TestClient) -> None:
    code = _create(client)["code"]

    first = client.post(f"/api/v1/channels/{code}/join", json={"name": "Jun", "job": "chef"})
    pid = first.json()["data"]["participant"]["id"]
    again = client.post(f"/api/v1/channels/{code}/join", json={"name": "Jun", "id": pid})

    assert first.status_code == again.status_code == 200
    assert pid
    participants = client.get(f"/api/v1/channels/{code}").json()["data"]["participants"]
    assert [p["id"] for p in participants] == [pid]


def test_patch_invalid_action(client: TestClient) -> None:
    code = _create(client)["code"]

    res = client.patch(f"/api/v1/channels/{code}", params={"action": "rewind"})

    assert res.status_code == 400
    assert res.json()["error_code"] == "INVALID_ACTION"


def test_advance_without_topics_reports_false(client: TestClient) -> None:
    code = _create(client)["code"]

    res = client.patch("/api/v1/channels", params={"code": code, "action": "next"})

    assert res.status_code == 200
    assert res.json()["data"]["success"] is False


def test_advance_unknown_channel_reports_false(client: TestClient) -> None:
    by_path = client.patch("/api/v1/channels/ZZZZZZ", params={"action": "next"})
    by_query = client.patch("/api/v1/channels", params={"code": "ZZZZZZ", "action": "next"})

    for res in (by_path, by_query):
        assert res.status_code == 200
        assert res.json()["data"] == {"success": False, "channel": None}


def test_start_unknown_channel(client: TestClient) -> None:
    res = client.patch("/api/v1/channels/ZZZZZZ", params={"action": "start"})

    assert res.status_code == 404
    assert res.json()["error_code"] == "CHANNEL_NOT_FOUND"


def test_start_channel(client: TestClient) -> None:
    code = _create(client)["code"]

    res = client.patch(f"/api/v1/channels/{code}", params={"action": "start"})

    assert res.status_code == 200
    assert res.json()["data"]["success"] is True
    assert res.json()["data"]["channel"]["status"] == "playing"


def test_delete_channel(client: TestClient) -> None:
    code = _create(client)["code"]

    assert client.delete(f"/api/v1/channels/{code}").status_code == 200
    assert client.get(f"/api/v1/channels/{code}").status_code == 404
    assert client.delete(f"/api/v1/channels/{code}").status_code == 404


def test_topics_require_code_channel_and_participant(app, client: TestClient) -> None:
    app.dependency_overrides[get_generator] = lambda: FakeGenerator()
    code = _create(client)["code"]

    assert client.post("/api/v1/topics", json={}).json()["error_code"] == "CODE_REQUIRED"
    assert client.post("/api/v1/topics", json={"code": "ZZZZZZ"}).status_code == 404

    empty = client.post("/api/v1/topics", json={"code": code})
    assert empty.status_code == 400
    assert empty.json()["error_code"] == "NOT_ENOUGH_PARTICIPANTS"


def test_topics_generated(app, client: TestClient) -> None:
    app.dependency_overrides[get_generator] = lambda: FakeGenerator(["a", "b"])
    code = _create(client, hostInfo={"name": "Host", "id": "h"})["code"]

    res = client.post("/api/v1/topics", json={"code": code})

    assert res.status_code == 200
    assert res.json()["data"] == {"topics": ["a", "b"]}


def test_icebreaker_scenario_with_provider_failure(app, client: TestClient, monkeypatch) -> None:
    app.dependency_overrides[get_generator] = lambda: FailingGenerator()
    monkeypatch.setattr(channel_service_module, "generate_channel_code", lambda: "X7F2Q1")

    created = _create(client)
    assert created["code"] == "X7F2Q1"
    assert created["participants"] == []
    assert created["currentTopicIndex"] == -1

    joined = client.post("/api/v1/channels/x7f2q1/join", json={"name": "Mina", "id": "u1"})
    assert joined.json()["data"]["participant"] == {"id": "u1", "name": "Mina"}

    topics = client.post("/api/v1/topics", json={"code": "X7F2Q1"})
    assert topics.status_code == 200
    assert topics.json()["data"]["topics"] == FALLBACK_TOPICS
    assert "warning" in topics.json()["data"]

    channel = client.get("/api/v1/channels/X7F2Q1").json()["data"]
    assert channel["topics"] == FALLBACK_TOPICS
    assert channel["currentTopicIndex"] == 0

    for _ in range(2):
        client.patch("/api/v1/channels/X7F2Q1", params={"action": "next"})
    assert client.get("/api/v1/channels/X7F2Q1").json()["data"]["currentTopicIndex"] == 2

    for _ in range(3):
        client.patch("/api/v1/channels/X7F2Q1", params={"action": "advance"})
    assert client.get("/api/v1/channels/X7F2Q1").json()["data"]["currentTopicIndex"] == 0
