from __future__ import annotations

import pytest
from fastapi import HTTPException

from conftest import async_value
from event_users import repository, schemas, service
from events import repository as event_repository


def test_normalize_plate() -> None:
    assert service.normalize_plate("  abc   123 ") == "ABC 123"
    assert service.normalize_plate("   ") is None
    assert service.normalize_plate(None) is None


@pytest.mark.asyncio
async def test_create_event_user_upserts_user_and_link(monkeypatch: pytest.MonkeyPatch, event, event_user) -> None:
    upserts: list = []
    links: list = []
    monkeypatch.setattr(event_repository, "get_event", async_value(event))
    monkeypatch.setattr(repository, "upsert_user", async_value({"id": "user-1"}, calls=upserts))
    monkeypatch.setattr(repository, "get_or_create_link", async_value(({"id": "eu-1"}, True), calls=links))
    monkeypatch.setattr(repository, "get_event_user", async_value(event_user))

    payload = schemas.CreateEventUserRequest(
        email="  Dana@Example.com ",
        first_name=" Dana ",
        last_name="Levi",
        event_id="event-1",
        car_plate="abc 123",
        special_needs="  ",
    )
    result = await service.create_event_user(payload)

    assert result == event_user
    assert upserts[0][1] == {
        "email": "dana@example.com",
        "first_name": "Dana",
        "last_name": "Levi",
        "car_plate": "ABC 123",
        "phone": None,
    }
    assert links[0][1] == {"user_id": "user-1", "event_id": "event-1", "special_needs": None}


@pytest.mark.asyncio
async def test_create_event_user_unknown_event(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(event_repository, "get_event", async_value(None))
    payload = schemas.CreateEventUserRequest(email="a@b.co", first_name="A", event_id="nope")

    with pytest.raises(HTTPException) as info:
        await service.create_event_user(payload)
    assert info.value.status_code == 404


@pytest.mark.asyncio
async def test_create_event_user_rejects_bad_email() -> None:
    payload = schemas.CreateEventUserRequest(email="not-an-email", first_name="A", event_id="event-1")

    with pytest.raises(HTTPException) as info:
        await service.create_event_user(payload)
    assert info.value.status_code == 400


@pytest.mark.asyncio
async def test_register_plate_updates_user(monkeypatch: pytest.MonkeyPatch, event_user) -> None:
    updates: list = []
    monkeypatch.setattr(repository, "get_link", async_value({"id": "eu-1", "user_id": "user-1"}))
    monkeypatch.setattr(repository, "update_user_car_plate", async_value({"id": "user-1"}, calls=updates))
    monkeypatch.setattr(repository, "get_event_user", async_value(event_user))

    result = await service.register_plate("eu-1", " tlv 55 ")

    assert result == event_user
    assert updates == [(("user-1", "TLV 55"), {})]


@pytest.mark.asyncio
async def test_register_plate_missing_event_user(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(repository, "get_link", async_value(None))

    with pytest.raises(HTTPException) as info:
        await service.register_plate("missing", "ABC")
    assert info.value.status_code == 404


@pytest.mark.asyncio
async def test_register_plate_rejects_blank() -> None:
    with pytest.raises(HTTPException) as info:
        await service.register_plate("eu-1", "   ")
    assert info.value.status_code == 400


@pytest.mark.asyncio
async def test_update_clears_special_needs_on_empty_string(monkeypatch: pytest.MonkeyPatch, event_user) -> None:
    updates: list = []
    monkeypatch.setattr(repository, "update_link", async_value({"id": "eu-1"}, calls=updates))
    monkeypatch.setattr(repository, "get_event_user", async_value(event_user))

    await service.update_event_user("eu-1", schemas.UpdateEventUserRequest(special_needs=""))

    assert updates[0][1] == {"special_needs": None, "clear_special_needs": True, "status": None}


@pytest.mark.asyncio
async def test_delete_event_user_releases_parking_space(fake_db) -> None:
    fake_db.queue("DELETE FROM event_users", "DELETE 1")

    result = await service.delete_event_user("eu-1")

    assert result["event_user_id"] == "eu-1"
    assert any("UPDATE parking_lots" in sql and "reserved" in sql for _, sql, _ in fake_db.calls)


@pytest.mark.asyncio
async def test_delete_missing_event_user(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(repository, "delete_link", async_value(False))

    with pytest.raises(HTTPException) as info:
        await service.delete_event_user("missing")
    assert info.value.status_code == 404
