"""
Alerts: whole-store read, save / delete / pause-resume, and on-demand checks with their status.
"""
import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from tee_alerts.api.deps import get_invoke, get_status_board, get_store
from tee_alerts.core.errors import STATUS_NOT_FOUND, AlertNotFoundError, not_found_to_http
from tee_alerts.orchestrator.orchestrator import Invoke
from tee_alerts.schemas import Alert
from tee_alerts.services.alert_store import AlertStore
from tee_alerts.services.check_service import run_guarded_check
from tee_alerts.services.check_status import CheckStatusBoard

router = APIRouter()
logger = logging.getLogger(__name__)


class SaveAlertRequest(BaseModel):
    alert: Alert
    check_now: bool = False  # run a check right after saving


def _statuses(board: CheckStatusBoard) -> dict[str, Any]:
    return {alert_id: e.model_dump(mode="json") for alert_id, e in board.snapshot().items()}


@router.get("/alerts")
def get_all(
    store: AlertStore = Depends(get_store),
    board: CheckStatusBoard = Depends(get_status_board),
) -> dict[str, Any]:
    """Everything the dashboard needs: alerts, notifications (newest first), settings and latest check statuses."""
    data = store.load_all()
    return {"success": True, **data.model_dump(mode="json"), "statuses": _statuses(board)}


@router.get("/alerts/active")
def list_active(store: AlertStore = Depends(get_store)) -> dict[str, Any]:
    """Only active alerts (what the periodic check looks at)."""
    return {"success": True, "alerts": [a.model_dump(mode="json") for a in store.active_requests()]}


@router.post("/alerts")
async def save_alert(
    body: SaveAlertRequest,
    store: AlertStore = Depends(get_store),
    board: CheckStatusBoard = Depends(get_status_board),
    invoke: Invoke = Depends(get_invoke),
) -> dict[str, Any]:
    """Create or replace an alert (by id). With check_now, run a first check and return its outcome."""
    saved = store.upsert_request(body.alert)
    out: dict[str, Any] = {"success": True, "alert": saved.model_dump(mode="json")}
    if body.check_now:
        event = await run_guarded_check(saved, store, board, invoke=invoke)
        out["status"] = event.model_dump(mode="json")
    return out


@router.delete("/alerts/{alert_id}")
def delete_alert(
    alert_id: str,
    store: AlertStore = Depends(get_store),
    board: CheckStatusBoard = Depends(get_status_board),
) -> dict[str, Any]:
    """Delete an alert and its check status. Its notifications stay in history."""
    removed = store.delete_request(alert_id)
    board.clear(alert_id)
    return {"success": True, "removed": removed}


@router.post("/alerts/{alert_id}/toggle")
def toggle_alert(alert_id: str, store: AlertStore = Depends(get_store)) -> dict[str, Any]:
    """Pause an active alert or resume a paused one."""
    try:
        alert = store.toggle_request(alert_id)
    except AlertNotFoundError as e:
        raise not_found_to_http(e) from e
    return {"success": True, "alert": alert.model_dump(mode="json")}


@router.post("/alerts/{alert_id}/check")
async def check_alert(
    alert_id: str,
    store: AlertStore = Depends(get_store),
    board: CheckStatusBoard = Depends(get_status_board),
    invoke: Invoke = Depends(get_invoke),
) -> dict[str, Any]:
    """Check now. Returns the final status; refused with an error status while a check is already running."""
    alert = store.get_request(alert_id)
    if alert is None:
        raise HTTPException(status_code=STATUS_NOT_FOUND, detail=f"Alert not found: {alert_id}")
    event = await run_guarded_check(alert, store, board, invoke=invoke)
    return {"success": event.kind != "error", "status": event.model_dump(mode="json")}


@router.get("/alerts/{alert_id}/status")
def get_status(
    alert_id: str,
    board: CheckStatusBoard = Depends(get_status_board),
) -> dict[str, Any]:
    """Latest check status for one alert (None if never checked since startup)."""
    event = board.get(alert_id)
    return {
        "status": event.model_dump(mode="json") if event else None,
        "running": board.is_running(alert_id),
    }
