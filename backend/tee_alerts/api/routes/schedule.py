"""
Schedule: view and control the external service that runs the periodic check.
"""
from typing import Any

from fastapi import APIRouter, Depends, Query

from tee_alerts.api.deps import get_schedule_client
from tee_alerts.config import settings
from tee_alerts.core.constants import SCHEDULE_LOGS_LIMIT
from tee_alerts.services.schedule_client import ScheduleClient, cron_to_human

router = APIRouter()


@router.get("/schedule")
def get_schedule(client: ScheduleClient = Depends(get_schedule_client)) -> dict[str, Any]:
    """The configured schedule (SCHEDULE_ID, else the first one listed) with its recent executions."""
    listed = client.list_schedules()
    if not listed.get("success"):
        return {"success": False, "error": listed.get("error") or "Failed to load schedules"}
    schedules = listed.get("schedules") or []
    schedule = next((s for s in schedules if s.get("id") == settings.schedule_id), None)
    if schedule is None and schedules:
        schedule = schedules[0]
    if schedule is None:
        return {"success": True, "schedule": None, "executions": []}
    logs = client.get_schedule_logs(schedule["id"], limit=SCHEDULE_LOGS_LIMIT)
    return {
        "success": True,
        "schedule": {**schedule, "description": cron_to_human(schedule.get("cron_expression", ""))},
        "executions": logs.get("executions") or [],
        "logs_error": None if logs.get("success") else logs.get("error"),
    }


@router.get("/schedule/{schedule_id}/logs")
def get_logs(
    schedule_id: str,
    limit: int = Query(SCHEDULE_LOGS_LIMIT, ge=1, le=100),
    client: ScheduleClient = Depends(get_schedule_client),
) -> dict[str, Any]:
    return client.get_schedule_logs(schedule_id, limit=limit)


@router.post("/schedule/{schedule_id}/pause")
def pause(schedule_id: str, client: ScheduleClient = Depends(get_schedule_client)) -> dict[str, Any]:
    return client.pause_schedule(schedule_id)


@router.post("/schedule/{schedule_id}/resume")
def resume(schedule_id: str, client: ScheduleClient = Depends(get_schedule_client)) -> dict[str, Any]:
    return client.resume_schedule(schedule_id)


@router.post("/schedule/{schedule_id}/trigger")
def trigger(schedule_id: str, client: ScheduleClient = Depends(get_schedule_client)) -> dict[str, Any]:
    return client.trigger_schedule_now(schedule_id)
