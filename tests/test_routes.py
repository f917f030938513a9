from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

import main
from activation import security
from conftest import async_value
from conversations import service as conversation_service
from conversations import templates
from core import llm
from event_users import repository as event_user_repository
from event_users import service as event_user_service
from parking import service as parking_service


@pytest.fixture
def client() -> TestClient:
    # No context manager: the lifespan (DB pool) is not started.
    return TestClient(main.app)


def test_health_and_root(client: TestClient) -> None:
    assert client.get("/health").json() == {"status": "ok"}
    assert client.get("/").status_code == 200


def test_unknown_route(client: TestClient) -> None:
    resp = client.get("/api/nowhere")
    assert resp.status_code == 404
    assert resp.json() == {"error": "Route not found"}


def test_create_message(monkeypatch: pytest.MonkeyPatch, client: TestClient) -> None:
    calls: list = []
    row = {"id": 1, "conversation_id": "eu-1", "event_user_id": "eu-1", "sender": "user", "message": "hi"}
    monkeypatch.setattr(conversation_service, "create_message", async_value(row, calls=calls))

    resp = client.post("/api/conversations/", json={"event_user_id": "eu-1", "sender": "user", "message": "hi"})

    assert resp.status_code == 201
    assert resp.json()["conversation_id"] == "eu-1"
    assert calls[0][1] == {"event_user_id": "eu-1", "sender": "user", "message": "hi"}


def test_create_message_rejects_unknown_sender(client: TestClient) -> None:
    resp = client.post("/api/conversations/", json={"event_user_id": "eu-1", "sender": "admin", "message": "hi"})
    assert resp.status_code == 422


def test_list_messages(monkeypatch: pytest.MonkeyPatch, client: TestClient) -> None:
    payload = {"event_user_id": "eu-1", "messages": [], "count": 0}
    monkeypatch.setattr(conversation_service, "list_messages", async_value(payload))

    assert client.get("/api/conversations/eu-1").json() == payload


def test_smart_response_route(monkeypatch: pytest.MonkeyPatch, client: TestClient) -> None:
    calls: list = []
    monkeypatch.setattr(conversation_service, "smart_response", async_value({"message": "hello"}, calls=calls))

    resp = client.post("/api/conversations/smart-response", json={"event_user_id": "eu-1", "message": "hi"})

    assert resp.json() == {"message": "hello"}
    assert calls == [(("eu-1", "hi"), {})]


def test_chat_route_returns_error_template_on_llm_failure(monkeypatch: pytest.MonkeyPatch, client: TestClient) -> None:
    monkeypatch.setattr(conversation_service, "complete", async_value(llm.LLMError("down")))

    resp = client.post("/api/conversations/chat", json={"message": "hello", "user": {}, "event": {}})

    assert resp.status_code == 500
    assert resp.json() == templates.ERROR_RESPONSE


def test_chat_route_returns_error_template_on_unexpected_failure(monkeypatch: pytest.MonkeyPatch, client: TestClient) -> None:
    monkeypatch.setattr(conversation_service, "quick_chat", async_value(KeyError("first_name")))

    resp = client.post("/api/conversations/chat", json={"message": "hello", "user": {}, "event": {}})

    assert resp.status_code == 500
    assert resp.json() == templates.ERROR_RESPONSE


def test_chat_route_no_reply(client: TestClient) -> None:
    user = {"first_name": "Dana"}
    event = {"name": "Spring Summit", "organizer_email": "noa@example.com"}

    resp = client.post("/api/conversations/chat", json={"message": "no", "user": user, "event": event})

    assert resp.status_code == 200
    assert resp.json() == templates.contact_admin(user, event)


def test_register_plate_route(monkeypatch: pytest.MonkeyPatch, client: TestClient, event_user) -> None:
    calls: list = []
    monkeypatch.setattr(event_user_service, "register_plate", async_value(event_user, calls=calls))

    resp = client.post("/api/conversations/register-plate", json={"event_user_id": "eu-1", "car_plate": "abc 1"})

    assert resp.status_code == 200
    assert resp.json()["id"] == "eu-1"
    assert calls == [(("eu-1", "abc 1"), {})]


def test_event_user_not_found_keeps_detail(monkeypatch: pytest.MonkeyPatch, client: TestClient) -> None:
    monkeypatch.setattr(event_user_repository, "get_event_user", async_value(None))

    resp = client.get("/api/event-users/missing")

    assert resp.status_code == 404
    assert resp.json() == {"detail": "Event user not found."}


def test_activate_sets_cookie_and_session_reads_it(
    monkeypatch: pytest.MonkeyPatch, client: TestClient, event_user
) -> None:
    event_user["status"] = "active"
    monkeypatch.setattr(event_user_repository, "activate_link", async_value({"id": "eu-1"}))
    monkeypatch.setattr(event_user_repository, "get_event_user", async_value(event_user))

    resp = client.post("/api/activate/eu-1")
    assert resp.status_code == 200
    assert "copilot_session" in resp.cookies

    session = client.get("/api/session")
    assert session.status_code == 200
    assert session.json()["event_user"]["id"] == "eu-1"


def test_session_accepts_bearer_token(monkeypatch: pytest.MonkeyPatch, client: TestClient, event_user) -> None:
    event_user["status"] = "active"
    monkeypatch.setattr(event_user_repository, "get_event_user", async_value(event_user))
    token = security.build_session_token(event_user_id="eu-1")

    resp = client.get("/api/session", headers={"Authorization": f"Bearer {token}"})

    assert resp.status_code == 200


def test_session_without_cookie(client: TestClient) -> None:
    resp = client.get("/api/session")
    assert resp.status_code == 401


def test_parking_assignment_route(monkeypatch: pytest.MonkeyPatch, client: TestClient) -> None:
    result = {"id": 1, "event_user_id": "eu-1", "lot_id": "lot-1", "lot": {"id": "lot-1"}}
    monkeypatch.setattr(parking_service, "assign", async_value(result))

    resp = client.post("/api/parking/assignments", json={"event_user_id": "eu-1"})

    assert resp.status_code == 200
    assert resp.json()["lot"]["id"] == "lot-1"


def test_create_lot_validation(client: TestClient) -> None:
    resp = client.post("/api/parking/lots", json={"event_id": "e", "name": "A", "capacity": -1})
    assert resp.status_code == 422
