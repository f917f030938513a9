"""
Canned chat messages for parking coordination.

Every builder takes the attendee (`user`) and `event` rows as plain dicts and
returns a chat message `{"role": ..., "content": ...}`. The system prompt
spells out the exact phrases the reply overrides look for (see
`overrides.py`), so keep both files in sync.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

ERROR_RESPONSE: dict[str, str] = {
    "role": "assistant",
    "content": (
        "Sorry, something went wrong on our side while preparing your parking details. "
        "Please try again in a moment."
    ),
}


def _field(record: dict[str, Any] | None, key: str) -> str:
    value = (record or {}).get(key)
    if value is None:
        return ""
    return str(value).strip()


def first_name(user: dict[str, Any] | None) -> str:
    return _field(user, "first_name") or "there"


def full_name(user: dict[str, Any] | None) -> str:
    name = " ".join(p for p in (_field(user, "first_name"), _field(user, "last_name")) if p)
    return name or "Guest"


def event_name(event: dict[str, Any] | None) -> str:
    return _field(event, "name") or "the event"


def event_location(event: dict[str, Any] | None) -> str:
    venue = _field(event, "venue")
    address = _field(event, "address")
    if venue and address:
        return f"{venue}, {address}"
    return venue or address or "the event venue"


def event_time(event: dict[str, Any] | None) -> str:
    starts_at = (event or {}).get("starts_at")
    if isinstance(starts_at, datetime):
        return starts_at.strftime("%A, %B %d at %H:%M").replace(" 0", " ")
    if isinstance(starts_at, str) and starts_at.strip():
        try:
            parsed = datetime.fromisoformat(starts_at.strip().replace("Z", "+00:00"))
        except ValueError:
            return starts_at.strip()
        return parsed.strftime("%A, %B %d at %H:%M").replace(" 0", " ")
    return "the scheduled time"


def organizer_contact(event: dict[str, Any] | None) -> str:
    name = _field(event, "organizer_name")
    email = _field(event, "organizer_email")
    if name and email:
        return f"{name} ({email})"
    return email or name or "the event organizer"


def initial_greeting(user: dict[str, Any] | None, event: dict[str, Any] | None) -> dict[str, str]:
    plate = _field(user, "car_plate")
    plate_line = (
        f"- Registered license plate: {plate}. We already have your plate, do not ask for it again."
        if plate
        else "- Registered license plate: none yet."
    )
    content = (
        "You are Parking Copilot, a friendly assistant that coordinates parking for event attendees.\n"
        "Never use any emoji. Keep every reply under 80 words.\n\n"
        "Attendee:\n"
        f"- Name: {full_name(user)}\n"
        f"{plate_line}\n\n"
        "Event:\n"
        f"- Name: {event_name(event)}\n"
        f"- Location: {event_location(event)}\n"
        f"- Starts: {event_time(event)}\n\n"
        "Conversation flow:\n"
        f"1. Greet {first_name(user)} by first name and confirm the event name, location and time above. "
        "Ask whether this meeting information is correct.\n"
        "2. If the attendee says the information is wrong, answer that they should contact the event "
        "organizer, using the exact words \"contact the event organizer\".\n"
        "3. If no license plate is registered, ask them to provide your license plate using the exact "
        "words \"provide your license plate\". If a plate is registered, say \"we already have your plate\".\n"
        "4. Ask whether they have any special parking needs such as pregnancy, an injury or accessibility "
        "requirements. If they do, acknowledge it in one sentence and recommend parking close to the "
        "entrance.\n"
        "5. When everything is confirmed, say \"Here is your final parking details\" and mention that "
        "customized cards for visualization will follow.\n"
        "Only talk about parking and arrival for this event."
    )
    return {"role": "system", "content": content}


def car_registration(user: dict[str, Any] | None, event: dict[str, Any] | None) -> dict[str, str]:
    content = (
        f"Thanks, {first_name(user)}! To reserve your parking spot for {event_name(event)}, "
        "please reply with your vehicle's license plate number exactly as it appears on the plate "
        "(for example: ABC 1234)."
    )
    return {"role": "assistant", "content": content}


def final_recommendation(user: dict[str, Any] | None, event: dict[str, Any] | None) -> dict[str, str]:
    plate = _field(user, "car_plate")
    vehicle_line = f"Vehicle: {plate}\n" if plate else ""
    content = (
        f"Here is your final parking details for {event_name(event)}, {first_name(user)}:\n"
        f"Location: {event_location(event)}\n"
        f"Arrival: {event_time(event)}\n"
        f"{vehicle_line}"
        "Your recommended parking area and walking route are shown on the cards below. "
        "Tap \"View interactive map\" for turn-by-turn directions to your spot."
    )
    return {"role": "assistant", "content": content}


def contact_admin(user: dict[str, Any] | None, event: dict[str, Any] | None) -> dict[str, str]:
    content = (
        f"Sorry about that, {first_name(user)}. Please contact {organizer_contact(event)} so they can "
        f"correct your registration for {event_name(event)}. Once it is updated, come back here and "
        "we will finish your parking setup."
    )
    return {"role": "assistant", "content": content}
