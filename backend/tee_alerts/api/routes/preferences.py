"""
Settings: default email, default check frequency, email notifications on/off.
"""
from typing import Any

from fastapi import APIRouter, Depends

from tee_alerts.api.deps import get_store
from tee_alerts.schemas import PreferencesUpdate
from tee_alerts.services.alert_store import AlertStore

router = APIRouter()


@router.get("/settings")
def get_settings(store: AlertStore = Depends(get_store)) -> dict[str, Any]:
    return {"success": True, "settings": store.get_preferences().model_dump(mode="json")}


@router.patch("/settings")
def update_settings(
    body: PreferencesUpdate,
    store: AlertStore = Depends(get_store),
) -> dict[str, Any]:
    """Merge the given fields into the stored settings; omitted fields are unchanged."""
    prefs = store.update_preferences(body.model_dump(exclude_none=True))
    return {"success": True, "settings": prefs.model_dump(mode="json")}
