"""
Backend client for the chat UI.

Calls that load or change the attendee update the `UserStore`:
loading is raised for the duration of the call, the user is replaced on
success, and the error message is recorded on failure.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from .store import UserStore, set_error, set_loading, set_user

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:8000"


class CopilotAPIError(RuntimeError):
    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


def _error_message(resp: httpx.Response) -> str:
    try:
        data = resp.json()
    except ValueError:
        return resp.text[:300] or f"HTTP {resp.status_code}"
    if isinstance(data, dict):
        detail = data.get("detail") or data.get("error") or data.get("content")
        if isinstance(detail, dict):
            detail = detail.get("error") or detail
        if detail:
            return str(detail)
    return f"HTTP {resp.status_code}"


class CopilotClient:
    def __init__(
        self,
        *,
        store: UserStore | None = None,
        base_url: str = DEFAULT_BASE_URL,
        timeout_s: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.store = store or UserStore()
        self._client = httpx.AsyncClient(base_url=base_url.rstrip("/"), timeout=timeout_s, transport=transport)

    async def __aenter__(self) -> "CopilotClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        try:
            resp = await self._client.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            raise CopilotAPIError(f"Request failed: {exc}") from exc
        if resp.status_code >= 400:
            raise CopilotAPIError(_error_message(resp), status_code=resp.status_code)
        return resp.json()

    async def _load_into_store(self, method: str, path: str, **kwargs: Any) -> dict:
        self.store.dispatch(set_loading(True))
        self.store.dispatch(set_error(None))
        try:
            event_user = await self._request(method, path, **kwargs)
        except CopilotAPIError as exc:
            logger.warning("load_event_user_failed path=%s status=%s", path, exc.status_code)
            self.store.dispatch(set_error(str(exc)))
            raise
        finally:
            self.store.dispatch(set_loading(False))
        self.store.dispatch(set_user({"user": event_user.get("user")}))
        return event_user

    async def load_event_user(self, event_user_id: str) -> dict:
        return await self._load_into_store("GET", f"/api/event-users/{event_user_id}")

    async def activate(self, event_user_id: str) -> dict:
        self.store.dispatch(set_loading(True))
        self.store.dispatch(set_error(None))
        try:
            result = await self._request("POST", f"/api/activate/{event_user_id}")
        except CopilotAPIError as exc:
            self.store.dispatch(set_error(str(exc)))
            raise
        finally:
            self.store.dispatch(set_loading(False))
        self.store.dispatch(set_user({"user": (result.get("event_user") or {}).get("user")}))
        return result

    async def register_plate(self, event_user_id: str, car_plate: str) -> dict:
        return await self._load_into_store(
            "POST",
            "/api/conversations/register-plate",
            json={"event_user_id": event_user_id, "car_plate": car_plate},
        )

    async def send_message(self, event_user_id: str, message: str, *, sender: str = "user") -> dict:
        return await self._request(
            "POST",
            "/api/conversations/",
            json={"event_user_id": event_user_id, "sender": sender, "message": message},
        )

    async def history(self, event_user_id: str) -> list[dict]:
        data = await self._request("GET", f"/api/conversations/{event_user_id}")
        return list(data.get("messages") or [])

    async def smart_response(self, event_user_id: str, message: str) -> str:
        data = await self._request(
            "POST",
            "/api/conversations/smart-response",
            json={"event_user_id": event_user_id, "message": message},
        )
        return str(data.get("message") or "")

    async def ask(self, event_user_id: str, message: str) -> str:
        """
        Store the attendee's message, then fetch and return the bot reply.
        """
        await self.send_message(event_user_id, message)
        return await self.smart_response(event_user_id, message)
