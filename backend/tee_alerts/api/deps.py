"""
FastAPI dependencies. Tests swap these via app.dependency_overrides.
"""
from tee_alerts.db.session import SessionLocal
from tee_alerts.orchestrator.orchestrator import Invoke, invoke
from tee_alerts.services.alert_store import AlertStore
from tee_alerts.services.check_status import CheckStatusBoard, status_board
from tee_alerts.services.schedule_client import ScheduleClient, default_client


def get_store() -> AlertStore:
    return AlertStore(SessionLocal)


def get_status_board() -> CheckStatusBoard:
    return status_board


def get_invoke() -> Invoke:
    return invoke


def get_schedule_client() -> ScheduleClient:
    return default_client
