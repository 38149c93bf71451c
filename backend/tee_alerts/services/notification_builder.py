"""Turn the tee times found by one check into Notification records (one per match, same order)."""
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any

from tee_alerts.schemas import Alert, Match, Notification
from tee_alerts.services.extraction import payload_course_name


def build_notifications(
    alert: Alert,
    payload: Mapping[str, Any],
    matches: list[Match],
    email_delivered: bool,
    *,
    now: datetime | None = None,
) -> list[Notification]:
    """email_delivered applies to the whole batch: one email is sent per check, not per match."""
    sent_at = now or datetime.now(timezone.utc)
    course_name = payload_course_name(payload) or alert.course_name
    return [
        Notification(
            watch_request_id=alert.id,
            course_name=course_name,
            match_date=m.date,
            match_time_slot=m.time,
            available_spots=m.available_spots,
            booking_link=m.booking_link,
            sent_at=sent_at,
            email_sent=email_delivered,
        )
        for m in matches
    ]
