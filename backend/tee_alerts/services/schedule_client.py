"""
Schedule service client: thin pass-through to the external service that runs the periodic check
(list / execution logs / pause / resume / trigger now). Every call returns {success, ..., error?}; nothing raises.
"""
import logging
from typing import Any, TypedDict

import httpx

from tee_alerts.config import settings
from tee_alerts.core.constants import SCHEDULE_LOGS_LIMIT

logger = logging.getLogger(__name__)

_WEEKDAYS = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")


class Schedule(TypedDict, total=False):
    id: str
    is_active: bool
    cron_expression: str
    timezone: str
    next_run_time: str | None


class ExecutionLog(TypedDict, total=False):
    id: str
    executed_at: str
    success: bool
    attempt: int
    max_attempts: int
    error_message: str | None


def _schedule(raw: dict[str, Any]) -> Schedule:
    return {
        "id": str(raw.get("id") or ""),
        "is_active": bool(raw.get("is_active")),
        "cron_expression": str(raw.get("cron_expression") or ""),
        "timezone": str(raw.get("timezone") or "UTC"),
        "next_run_time": raw.get("next_run_time"),
    }


def _count(value: Any, default: int = 1) -> int:
    """Attempt counters from the service; anything non-numeric or below 1 becomes default."""
    if isinstance(value, bool):
        return default
    try:
        n = int(float(value)) if isinstance(value, str) else int(value)
    except (TypeError, ValueError, OverflowError):
        return default
    return n if n >= 1 else default


def _execution(raw: dict[str, Any]) -> ExecutionLog:
    return {
        "id": str(raw.get("id") or ""),
        "executed_at": str(raw.get("executed_at") or ""),
        "success": bool(raw.get("success")),
        "attempt": _count(raw.get("attempt")),
        "max_attempts": _count(raw.get("max_attempts")),
        "error_message": raw.get("error_message"),
    }


class ScheduleClient:
    """External schedule service client."""

    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        *,
        transport: httpx.BaseTransport | None = None,
        timeout: float = 15.0,
    ) -> None:
        self._base_url = (base_url if base_url is not None else settings.scheduler_api_url).rstrip("/")
        self._api_key = api_key if api_key is not None else settings.scheduler_api_key
        self._transport = transport
        self._timeout = timeout

    def is_configured(self) -> bool:
        return bool(self._base_url)

    def _headers(self) -> dict[str, str]:
        h = {"Accept": "application/json"}
        if self._api_key:
            h["x-api-key"] = self._api_key
        return h

    def _request(self, method: str, path: str, *, params: dict[str, Any] | None = None) -> dict[str, Any]:
        if not self.is_configured():
            return {"success": False, "error": "Schedule service not configured. Add SCHEDULER_API_URL to .env."}
        url = f"{self._base_url}{path}"
        try:
            with httpx.Client(timeout=self._timeout, transport=self._transport) as c:
                r = c.request(method, url, params=params, headers=self._headers())
        except httpx.HTTPError as e:
            logger.warning("Schedule service %s %s failed: %s", method, path, e)
            return {"success": False, "error": str(e)}
        if not r.is_success:
            detail = ""
            try:
                body = r.json()
            except ValueError:
                detail = r.text[:200] if r.text else ""
            else:
                if isinstance(body, dict):
                    detail = str(body.get("error") or body.get("detail") or "")
            msg = f"Schedule service error: {r.status_code}"
            return {"success": False, "error": f"{msg} {detail}".strip()}
        try:
            body = r.json() if r.content else {}
        except ValueError:
            return {"success": False, "error": "Schedule service returned invalid JSON."}
        return body if isinstance(body, dict) else {"data": body}

    def list_schedules(self) -> dict[str, Any]:
        raw = self._request("GET", "/schedules")
        if raw.get("success") is False:
            return raw
        items = raw.get("schedules") if isinstance(raw.get("schedules"), list) else raw.get("data")
        schedules = [_schedule(s) for s in (items or []) if isinstance(s, dict)]
        return {"success": True, "schedules": schedules}

    def get_schedule_logs(self, schedule_id: str, *, limit: int = SCHEDULE_LOGS_LIMIT) -> dict[str, Any]:
        raw = self._request("GET", f"/schedules/{schedule_id}/executions", params={"limit": limit})
        if raw.get("success") is False:
            return raw
        items = raw.get("executions") if isinstance(raw.get("executions"), list) else raw.get("data")
        executions = [_execution(e) for e in (items or []) if isinstance(e, dict)][:limit]
        return {"success": True, "executions": executions}

    def _action(self, schedule_id: str, action: str) -> dict[str, Any]:
        raw = self._request("POST", f"/schedules/{schedule_id}/{action}")
        if raw.get("success") is False:
            return raw
        return {"success": True}

    def pause_schedule(self, schedule_id: str) -> dict[str, Any]:
        return self._action(schedule_id, "pause")

    def resume_schedule(self, schedule_id: str) -> dict[str, Any]:
        return self._action(schedule_id, "resume")

    def trigger_schedule_now(self, schedule_id: str) -> dict[str, Any]:
        return self._action(schedule_id, "trigger")


def _hour_display(hour: int, minute: int) -> str:
    h = hour % 12 or 12
    return f"{h}:{minute:02d} {'PM' if hour >= 12 else 'AM'}"


def cron_to_human(expr: str) -> str:
    """Readable form of common 5-field cron expressions; anything else is returned unchanged."""
    parts = (expr or "").split()
    if len(parts) != 5:
        return expr
    minute, hour, dom, month, dow = parts
    if (dom, month, dow) == ("*", "*", "*"):
        if hour == "*" and minute == "*":
            return "Every minute"
        if hour == "*" and minute.startswith("*/") and minute[2:].isdigit():
            return f"Every {int(minute[2:])} minutes"
        if hour == "*" and minute.isdigit():
            return "Every hour" if int(minute) == 0 else f"Every hour at :{int(minute):02d}"
        if hour.startswith("*/") and hour[2:].isdigit() and minute.isdigit():
            return f"Every {int(hour[2:])} hours"
        if hour.isdigit() and minute.isdigit():
            return f"Daily at {_hour_display(int(hour), int(minute))}"
    if dom == "*" and month == "*" and dow.isdigit() and hour.isdigit() and minute.isdigit():
        day = _WEEKDAYS[int(dow) % 7]
        return f"Every {day} at {_hour_display(int(hour), int(minute))}"
    return expr


default_client = ScheduleClient()
