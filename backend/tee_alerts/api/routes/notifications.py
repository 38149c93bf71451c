"""
Notification history: list (newest first) and append.
"""
import logging
from typing import Any

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field

from tee_alerts.api.deps import get_store
from tee_alerts.core.constants import NOTIFICATIONS_CAP
from tee_alerts.schemas import Notification
from tee_alerts.services.alert_store import AlertStore

router = APIRouter()
logger = logging.getLogger(__name__)


class AddNotificationsRequest(BaseModel):
    notifications: list[Notification] = Field(..., max_length=NOTIFICATIONS_CAP)


@router.get("/notifications")
def list_notifications(
    store: AlertStore = Depends(get_store),
    limit: int = Query(NOTIFICATIONS_CAP, ge=1, le=NOTIFICATIONS_CAP),
) -> dict[str, Any]:
    """List notifications, newest first."""
    rows = store.list_notifications(limit)
    return {"notifications": [n.model_dump(mode="json") for n in rows], "count": len(rows)}


@router.post("/notifications")
def add_notifications(
    body: AddNotificationsRequest,
    store: AlertStore = Depends(get_store),
) -> dict[str, Any]:
    """Prepend notifications (in the given order); only the latest NOTIFICATIONS_CAP are kept."""
    total = store.append_notifications(body.notifications)
    return {"success": True, "total": total}
