"""
Shared test fixtures.

- `fake_db`: replaces `core.db` query helpers with an in-memory recorder
- sample attendee / event / event-user records
- `async_value`: wrap a value (or exception) as an async function
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Callable

import pytest

from core import db


class FakeDB:
    """
    Records every query and answers from queued results.

    Results are matched on a SQL substring; the first queued entry whose
    needle appears in the query wins and is consumed.
    """

    def __init__(self) -> None:
        self.calls: list[tuple[str, str, tuple]] = []
        self._results: list[tuple[str, Any]] = []

    def queue(self, needle: str, result: Any) -> None:
        self._results.append((needle, result))

    def _take(self, sql: str, default: Any) -> Any:
        for i, (needle, result) in enumerate(self._results):
            if needle in sql:
                del self._results[i]
                return result
        return default

    async def fetch_one(self, sql: str, *args: Any) -> dict | None:
        self.calls.append(("fetch_one", sql, args))
        return self._take(sql, None)

    async def fetch_all(self, sql: str, *args: Any) -> list[dict]:
        self.calls.append(("fetch_all", sql, args))
        return list(self._take(sql, []))

    async def execute(self, sql: str, *args: Any) -> str:
        self.calls.append(("execute", sql, args))
        return self._take(sql, "OK 0")


@pytest.fixture
def fake_db(monkeypatch: pytest.MonkeyPatch) -> FakeDB:
    fake = FakeDB()
    monkeypatch.setattr(db, "fetch_one", fake.fetch_one)
    monkeypatch.setattr(db, "fetch_all", fake.fetch_all)
    monkeypatch.setattr(db, "execute", fake.execute)
    return fake


def async_value(value: Any = None, *, calls: list | None = None) -> Callable[..., Any]:
    async def _fn(*args: Any, **kwargs: Any) -> Any:
        if calls is not None:
            calls.append((args, kwargs))
        if isinstance(value, BaseException):
            raise value
        return value

    return _fn


@pytest.fixture
def user() -> dict:
    return {
        "id": "user-1",
        "email": "dana@example.com",
        "first_name": "Dana",
        "last_name": "Levi",
        "car_plate": None,
        "phone": None,
    }


@pytest.fixture
def event() -> dict:
    return {
        "id": "event-1",
        "name": "Spring Summit",
        "venue": "Harbor Hall",
        "address": "12 Pier Road",
        "starts_at": datetime(2026, 11, 5, 9, 30, tzinfo=timezone.utc),
        "ends_at": None,
        "organizer_name": "Noa",
        "organizer_email": "noa@example.com",
    }


@pytest.fixture
def event_user(user: dict, event: dict) -> dict:
    return {
        "id": "eu-1",
        "user_id": user["id"],
        "event_id": event["id"],
        "status": "invited",
        "special_needs": None,
        "activated_at": None,
        "user": dict(user),
        "event": dict(event),
    }
