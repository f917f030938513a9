"""
Reply overrides: decide whether to keep the model's free-text reply or swap
in a canned template.

Rules run in order on the lower-cased reply; the first match wins.
"""

from __future__ import annotations

import re
from typing import Any

from . import templates

_FIRST_SENTENCE = re.compile(r"^[^.!?]+[.!?]")

PLATE_REQUEST_PHRASES = ("provide your license plate", "register your vehicle")
PLATE_KNOWN_PHRASE = "already have your"
CARDS_PHRASE = "customized cards for visualization"
FINAL_DETAILS_PHRASES = (
    "your final parking details",
    "here is your final parking details",
    "view interactive map",
)
CONTACT_PHRASES = ("contact the event organizer", "meeting information incorrect")
SPECIAL_NEEDS_WORDS = ("pregnant", "injury", "accessibility")

CAR_REGISTRATION = "car_registration"
FINAL_RECOMMENDATION = "final_recommendation"
CONTACT_ADMIN = "contact_admin"
SPECIAL_NEEDS = "special_needs"


def first_sentence(text: str) -> str:
    match = _FIRST_SENTENCE.match(text or "")
    return match.group(0) if match else (text or "")


def _has_any(text: str, phrases: tuple[str, ...]) -> bool:
    return any(phrase in text for phrase in phrases)


def select_reply(
    ai_message: str,
    user: dict[str, Any] | None,
    event: dict[str, Any] | None,
) -> tuple[str, str | None]:
    """
    Return (final_message, template_name). template_name is None when the
    model's reply is kept as-is.
    """
    ai_message = ai_message or ""
    lower = ai_message.lower()

    if _has_any(lower, PLATE_REQUEST_PHRASES) and PLATE_KNOWN_PHRASE not in lower:
        return templates.car_registration(user, event)["content"], CAR_REGISTRATION

    if CARDS_PHRASE in lower and _has_any(lower, FINAL_DETAILS_PHRASES):
        return templates.final_recommendation(user, event)["content"], FINAL_RECOMMENDATION

    if _has_any(lower, CONTACT_PHRASES):
        return templates.contact_admin(user, event)["content"], CONTACT_ADMIN

    if "parking" in lower and "recommend" in lower and _has_any(lower, SPECIAL_NEEDS_WORDS):
        # Keep the model's acknowledgement, then the standard details.
        acknowledgement = first_sentence(ai_message)
        details = templates.final_recommendation(user, event)["content"]
        return f"{acknowledgement}\n\n{details}", SPECIAL_NEEDS

    return ai_message, None
