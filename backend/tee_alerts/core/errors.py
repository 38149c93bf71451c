"""
Centralized error handling for capability (agent) and store failures.
Exception types, user-facing messages and a reusable helper so services and routes stay thin.
"""
from __future__ import annotations

from typing import Callable

from fastapi import HTTPException

# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class CapabilityError(Exception):
    """A search or notify capability call failed or timed out."""


class AlertNotFoundError(LookupError):
    """No alert with the given id exists in the store."""

    def __init__(self, alert_id: str):
        super().__init__(f"Alert not found: {alert_id}")
        self.alert_id = alert_id


# ---------------------------------------------------------------------------
# Constants: status codes and user-facing messages
# ---------------------------------------------------------------------------

# AI / OpenAI
OPENAI_BILLING_URL = "https://platform.openai.com/account/billing"
MSG_AI_QUOTA_EXCEEDED = (
    "AI service quota exceeded. Check your OpenAI plan and billing at {url}"
).format(url=OPENAI_BILLING_URL)
MSG_AGENT_FAILED = "Failed to check tee times. Please try again."

STATUS_NOT_FOUND = 404


# ---------------------------------------------------------------------------
# Error rules: (predicate, message). First match wins.
# Add new rules here instead of scattering checks in services.
# ---------------------------------------------------------------------------

def _is_quota_error(msg: str) -> bool:
    lower = msg.lower()
    return (
        "429" in msg
        or "insufficient_quota" in lower
        or "quota" in lower
        or "rate limit" in lower
    )


AGENT_ERROR_RULES: list[tuple[Callable[[str], bool], str]] = [
    (_is_quota_error, MSG_AI_QUOTA_EXCEEDED),
]


def agent_error_message(exc: BaseException | str | None) -> str:
    """
    Turn an exception (or raw error text) from a capability call into the message shown to the user.
    Uses AGENT_ERROR_RULES for known error types; otherwise returns the text as-is.
    """
    msg = str(exc) if exc is not None else ""
    if not msg.strip():
        return MSG_AGENT_FAILED
    for predicate, detail in AGENT_ERROR_RULES:
        if predicate(msg):
            return detail
    return msg


def not_found_to_http(exc: AlertNotFoundError) -> HTTPException:
    return HTTPException(status_code=STATUS_NOT_FOUND, detail=str(exc))
