"""
Check one alert: search for tee times, and when some are found email the user and record notifications.

One cycle runs searching -> extracting -> no_match | match_found -> [notifying] -> recording -> done,
each step at most once. A failed search ends the cycle (errored) with nothing written; a failed or
disabled email still records the notifications with email_sent=False. The alert's own status is
never changed here. Retrying is left to the next periodic check.

Two overlapping cycles for the same alert would both record the same tee times (the search agent
gives no idempotency key), so callers go through run_guarded_check, which refuses a second cycle
while one is in flight.
"""
import json
import logging
from collections.abc import Callable, Mapping
from typing import Any

from tee_alerts.core.constants import (
    DIAGNOSTIC_MESSAGE_CHARS,
    DIAGNOSTIC_PAYLOAD_CHARS,
    EMAIL_ALERT_AGENT,
    TEE_TIME_CHECKER_AGENT,
)
from tee_alerts.core.errors import agent_error_message
from tee_alerts.orchestrator.orchestrator import CapabilityResult, Invoke, invoke as capability_invoke
from tee_alerts.schemas import Alert, CheckState, StatusEvent, StatusKind
from tee_alerts.services.alert_store import AlertStore
from tee_alerts.services.check_status import CheckStatusBoard
from tee_alerts.services.extraction import Extraction, extract, payload_course_name
from tee_alerts.services.notification_builder import build_notifications
from tee_alerts.services.prompts import build_email_prompt, build_search_prompt, raw_dates

logger = logging.getLogger(__name__)

StatusCallback = Callable[[StatusEvent], None]

MSG_SEARCHING = "Searching GolfNow and other platforms for available tee times..."
MSG_ALREADY_RUNNING = "A check is already running for this alert."


def _plural(n: int) -> str:
    return f"{n} tee time{'s' if n != 1 else ''}"


async def _call(run: Invoke, prompt: str, agent_name: str) -> CapabilityResult:
    """Capability call that can't raise: anything unexpected becomes success=False."""
    try:
        result = await run(prompt, agent_name)
    except Exception as e:  # noqa: BLE001 - an injected capability may raise anything
        logger.exception("Capability %s raised", agent_name)
        return {"success": False, "error": str(e)}
    if not isinstance(result, Mapping):
        return {"success": False, "error": f"Unexpected response from {agent_name}."}
    return result  # type: ignore[return-value]


def _agent_message(result: Mapping[str, Any]) -> str:
    response = result.get("response")
    msg = response.get("message") if isinstance(response, Mapping) else None
    return str(msg or result.get("raw_response") or "").strip()


def no_match_message(alert: Alert, extraction: Extraction, result: Mapping[str, Any]) -> str:
    course = payload_course_name(extraction.payload) or alert.course_name
    if extraction.payload:
        hint = f" Response: {json.dumps(extraction.payload, default=str)[:DIAGNOSTIC_PAYLOAD_CHARS]}"
    else:
        hint = " Response: No data"
    agent_msg = _agent_message(result)
    if agent_msg:
        hint += f" Agent message: {agent_msg[:DIAGNOSTIC_MESSAGE_CHARS]}"
    return (
        f"No tee times found for {course} on {raw_dates(alert)}. The agent searched but found no "
        f"availability. Try a different date or broaden the time window.{hint}"
    )


async def check_one(
    alert: Alert,
    store: AlertStore,
    *,
    invoke: Invoke | None = None,
    on_status: StatusCallback | None = None,
) -> StatusEvent:
    """Run one check cycle for alert. Emits progress through on_status and returns the final event."""
    run = invoke or capability_invoke

    def emit(kind: StatusKind, state: CheckState, message: str, **extra: Any) -> StatusEvent:
        event = StatusEvent(request_id=alert.id, kind=kind, state=state, message=message, **extra)
        logger.debug("Check %s: %s (%s)", alert.id, state.value, message)
        if on_status is not None:
            on_status(event)
        return event

    # Searching
    emit("info", CheckState.SEARCHING, MSG_SEARCHING)
    result = await _call(run, build_search_prompt(alert), TEE_TIME_CHECKER_AGENT)
    if not result.get("success"):
        error = agent_error_message(result.get("error"))
        logger.warning("Check %s (%s): search failed: %s", alert.id, alert.course_name, error)
        return emit("error", CheckState.ERRORED, f"Agent error: {error}")

    # Extracting
    logger.debug("Check %s: %s", alert.id, CheckState.EXTRACTING.value)
    extraction = extract(result)
    matches = extraction.matches
    if not extraction.found or not matches:
        logger.info("Check %s (%s): no tee times found", alert.id, alert.course_name)
        return emit("info", CheckState.NO_MATCH, no_match_message(alert, extraction, result))

    # Match found: tell observers before the (slow) email call
    total = len(matches)
    email_enabled = store.get_preferences().email_notifications_enabled
    suffix = " Sending email alert..." if email_enabled else ""
    emit("success", CheckState.MATCH_FOUND, f"Found {total} available {_plural(total)}!{suffix}", match_count=total)

    # Notifying
    email_error: str | None = None
    if email_enabled:
        emit("success", CheckState.NOTIFYING, f"Sending email alert to {alert.notify_email}...", match_count=total)
        email_result = await _call(run, build_email_prompt(alert, matches), EMAIL_ALERT_AGENT)
        delivered = bool(email_result.get("success"))
        if not delivered:
            email_error = str(email_result.get("error") or "").strip() or None
            logger.warning("Check %s: email to %s failed: %s", alert.id, alert.notify_email, email_error)
    else:
        delivered = False

    # Recording
    logger.debug("Check %s: %s", alert.id, CheckState.RECORDING.value)
    notifications = build_notifications(alert, extraction.payload, matches, delivered)
    store.append_notifications(notifications)
    logger.info(
        "Check %s (%s): %s found, email %s",
        alert.id,
        alert.course_name,
        total,
        "sent" if delivered else ("failed" if email_enabled else "disabled"),
    )

    # Done
    if not email_enabled:
        message = f"{_plural(total)} found! Email notifications are disabled in Settings."
        return emit("success", CheckState.DONE, message, match_count=total, email_sent=False)
    if delivered:
        message = f"{_plural(total)} found and email alert sent to {alert.notify_email}!"
    else:
        message = f"{_plural(total)} found. Email delivery: {email_error or 'check inbox'}"
    return emit("success", CheckState.DONE, message, match_count=total, email_sent=delivered)


async def run_guarded_check(
    alert: Alert,
    store: AlertStore,
    board: CheckStatusBoard,
    *,
    invoke: Invoke | None = None,
) -> StatusEvent:
    """check_one with the per-alert in-flight guard; every event is published to board."""
    if not board.begin(alert.id):
        logger.info("Check %s skipped: already running", alert.id)
        return StatusEvent(
            request_id=alert.id,
            kind="error",
            state=CheckState.ERRORED,
            message=MSG_ALREADY_RUNNING,
        )
    try:
        return await check_one(alert, store, invoke=invoke, on_status=board.publish)
    finally:
        board.end(alert.id)
