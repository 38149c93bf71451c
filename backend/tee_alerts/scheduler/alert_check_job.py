"""
Runs every CHECK_TICK_SECONDS: check each active alert whose frequency has elapsed since its last check.

Checks for different alerts run concurrently, at most MAX_CONCURRENT_CHECKS at a time so the search
agent isn't hammered; each alert still goes through the in-flight guard.
"""
import asyncio
import logging
from datetime import datetime, timedelta, timezone

from tee_alerts.config import settings
from tee_alerts.db.session import SessionLocal
from tee_alerts.orchestrator.orchestrator import Invoke
from tee_alerts.schemas import Alert, StatusEvent
from tee_alerts.services.alert_store import AlertStore
from tee_alerts.services.check_service import run_guarded_check
from tee_alerts.services.check_status import CheckStatusBoard, status_board

logger = logging.getLogger(__name__)


def is_due(alert: Alert, last_checked_at: datetime | None, now: datetime) -> bool:
    if alert.status != "active":
        return False
    if last_checked_at is None:
        return True
    return now - last_checked_at >= timedelta(minutes=int(alert.check_frequency_minutes))


async def run_due_checks(
    store: AlertStore,
    board: CheckStatusBoard,
    *,
    invoke: Invoke | None = None,
    now: datetime | None = None,
    max_concurrent: int | None = None,
) -> list[StatusEvent]:
    """Check all due alerts; returns their final status events."""
    now = now or datetime.now(timezone.utc)
    due = [
        a for a in store.active_requests()
        if is_due(a, board.last_checked_at(a.id), now) and not board.is_running(a.id)
    ]
    if not due:
        return []
    limit = max(1, max_concurrent or settings.max_concurrent_checks)
    semaphore = asyncio.Semaphore(limit)

    async def check(alert: Alert) -> StatusEvent:
        async with semaphore:
            return await run_guarded_check(alert, store, board, invoke=invoke)

    results = await asyncio.gather(*(check(a) for a in due), return_exceptions=True)
    events: list[StatusEvent] = []
    for alert, result in zip(due, results):
        if isinstance(result, BaseException):
            logger.error("Check %s crashed: %s", alert.id, result, exc_info=result)
            continue
        events.append(result)
    return events


def run_alert_checks_job() -> None:
    store = AlertStore(SessionLocal)
    try:
        events = asyncio.run(run_due_checks(store, status_board))
    except Exception as e:
        logger.exception("Alert check job failed: %s", e)
        return
    if events:
        found = sum(1 for e in events if e.match_count)
        errors = sum(1 for e in events if e.kind == "error")
        logger.info("Alert check job: %s checked, %s with tee times, %s errors", len(events), found, errors)
