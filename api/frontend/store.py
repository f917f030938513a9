"""
Minimal user state for the chat UI.

State changes go through `dispatch(action)`; `reducer` is a pure function so
UI code and tests can replay actions deterministically.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Callable

SET_USER = "user/setUser"
SET_LOADING = "user/setLoading"
SET_ERROR = "user/setError"


@dataclass(frozen=True)
class User:
    id: str
    email: str
    first_name: str
    last_name: str
    car_plate: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "User":
        return cls(
            id=str(data.get("id") or ""),
            email=str(data.get("email") or ""),
            first_name=str(data.get("first_name") or ""),
            last_name=str(data.get("last_name") or ""),
            car_plate=data.get("car_plate") or None,
        )


@dataclass(frozen=True)
class UserState:
    user: User | None = None
    loading: bool = False
    error: str | None = None


@dataclass(frozen=True)
class Action:
    type: str
    payload: Any = None


def set_user(payload: dict[str, Any]) -> Action:
    """
    `payload` is `{"user": User | dict | None}`; other keys are ignored.
    """
    return Action(SET_USER, payload)


def set_loading(loading: bool) -> Action:
    return Action(SET_LOADING, bool(loading))


def set_error(error: str | None) -> Action:
    return Action(SET_ERROR, error)


def _coerce_user(value: Any) -> User | None:
    if value is None or isinstance(value, User):
        return value
    if isinstance(value, dict):
        return User.from_dict(value)
    raise TypeError(f"Unsupported user payload: {type(value).__name__}")


def reducer(state: UserState, action: Action) -> UserState:
    if action.type == SET_USER:
        payload = action.payload or {}
        return replace(state, user=_coerce_user(payload.get("user")))
    if action.type == SET_LOADING:
        return replace(state, loading=bool(action.payload))
    if action.type == SET_ERROR:
        return replace(state, error=action.payload)
    return state


class UserStore:
    def __init__(self, state: UserState | None = None) -> None:
        self._state = state or UserState()
        self._listeners: list[Callable[[UserState], None]] = []

    @property
    def state(self) -> UserState:
        return self._state

    def dispatch(self, action: Action) -> UserState:
        next_state = reducer(self._state, action)
        if next_state is not self._state:
            self._state = next_state
            for listener in list(self._listeners):
                listener(next_state)
        return self._state

    def subscribe(self, listener: Callable[[UserState], None]) -> Callable[[], None]:
        """
        Register a listener; returns a callable that unsubscribes it.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe
