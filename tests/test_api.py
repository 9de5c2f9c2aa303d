import pytest
from fastapi.testclient import TestClient

from student_bot.bot_app import get_processor
from student_bot.main import app


@pytest.fixture
def client(processor):
    app.dependency_overrides[get_processor] = lambda: processor
    # no context manager: the lifespan would start the polling thread
    yield TestClient(app)
    app.dependency_overrides.clear()


def _post(client, text, user_id=1):
    return client.post("/api/student_bot/", json={
        "chat_id": 10, "user_id": user_id, "message_text": text})


def test_root(client):
    assert client.get("/").json()["service"] == "student_bot"


def test_status_reports_sessions(client):
    assert client.get("/api/student_bot/status").json()["sessions"] == 0
    _post(client, "hello")
    body = client.get("/api/student_bot/status").json()
    assert body["status"] == "running"
    assert body["sessions"] == 1


def test_login_flow(client):
    body = _post(client, "nope").json()
    assert body["decision"] == "auth_failed"

    body = _post(client, "ASU1001").json()
    assert body["chat_id"] == 10
    assert body["decision"] == "auth_succeeded"
    assert len(body["replies"]) == 2
    assert "Login approved" in body["admin_notices"][0]

    body = _post(client, "transcript please").json()
    assert body["decision"] == "proceed"
    assert body["replies"][0]["text"].endswith("https://example.org/transcript")


def test_blank_messages_count_toward_rate_limit(client):
    resp = _post(client, "   ")
    assert resp.status_code == 200
    assert resp.json()["decision"] == "auth_failed"

    for _ in range(4):
        _post(client, "")
    assert _post(client, "  ").json()["decision"] == "rate_limited"


def test_invalid_payload(client):
    resp = client.post("/api/student_bot/", json={"chat_id": 1})
    assert resp.status_code == 422
