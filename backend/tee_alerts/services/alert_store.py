"""
Alert store: alerts, notifications and settings kept as one JSON document (alert_documents row).

Every mutation is load -> mutate -> save of the whole document under one lock, so two checks
finishing at the same time can't drop each other's notifications. Reads fail soft: a missing
document is created with defaults; an unreadable one yields in-memory defaults for that call.
"""
import json
import logging
import threading
from datetime import datetime, timezone
from typing import Any, Callable

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from tee_alerts.core.constants import DEFAULT_DOCUMENT_KEY, NOTIFICATIONS_CAP
from tee_alerts.core.errors import AlertNotFoundError
from tee_alerts.models.alert_document import AlertDocument
from tee_alerts.schemas import Alert, Notification, Preferences, StoreData

logger = logging.getLogger(__name__)

# One lock per process: all AlertStore instances write the same document
_write_lock = threading.RLock()


class StoreReadError(Exception):
    """The stored document exists but could not be read or parsed."""


class AlertStore:
    """CRUD over the single alert document. Pass a session factory (e.g. SessionLocal)."""

    def __init__(
        self,
        session_factory: Callable[[], Session],
        *,
        doc_key: str = DEFAULT_DOCUMENT_KEY,
        notifications_cap: int = NOTIFICATIONS_CAP,
    ) -> None:
        self._session_factory = session_factory
        self._doc_key = doc_key
        self._cap = notifications_cap

    # --- Read ---

    def load_all(self) -> StoreData:
        """Whole document. Never raises: on read/parse failure returns empty defaults (not persisted)."""
        with _write_lock:
            try:
                return self._load_or_init()
            except StoreReadError as e:
                logger.warning("Alert store unreadable; using defaults: %s", e)
                return StoreData()

    def get_request(self, alert_id: str) -> Alert | None:
        for alert in self.load_all().alerts:
            if alert.id == alert_id:
                return alert
        return None

    def active_requests(self) -> list[Alert]:
        return [a for a in self.load_all().alerts if a.status == "active"]

    def list_notifications(self, limit: int | None = None) -> list[Notification]:
        notifications = self.load_all().notifications
        return notifications[:limit] if limit is not None else notifications

    def get_preferences(self) -> Preferences:
        return self.load_all().settings

    # --- Mutations ---

    def upsert_request(self, alert: Alert) -> Alert:
        """Replace the alert with the same id (keeping its original created_at) or append it."""
        saved = alert

        def mutate(data: StoreData) -> None:
            nonlocal saved
            for i, existing in enumerate(data.alerts):
                if existing.id == alert.id:
                    saved = alert.model_copy(update={"created_at": existing.created_at})
                    data.alerts[i] = saved
                    return
            data.alerts.append(alert)

        self._mutate(mutate, "upsert alert %s" % alert.id)
        return saved

    def delete_request(self, alert_id: str) -> bool:
        """Remove by id. Returns False (and writes nothing) when absent. Notifications are kept as history."""
        removed = False

        def mutate(data: StoreData) -> bool:
            nonlocal removed
            before = len(data.alerts)
            data.alerts = [a for a in data.alerts if a.id != alert_id]
            removed = len(data.alerts) != before
            return removed

        self._mutate(mutate, "delete alert %s" % alert_id)
        return removed

    def toggle_request(self, alert_id: str) -> Alert:
        """Flip active <-> paused. Raises AlertNotFoundError (nothing written) when the id is unknown."""
        updated: Alert | None = None

        def mutate(data: StoreData) -> None:
            nonlocal updated
            for i, existing in enumerate(data.alerts):
                if existing.id == alert_id:
                    new_status = "paused" if existing.status == "active" else "active"
                    updated = existing.model_copy(update={"status": new_status})
                    data.alerts[i] = updated
                    return
            raise AlertNotFoundError(alert_id)

        self._mutate(mutate, "toggle alert %s" % alert_id)
        if updated is None:
            # Document was unreadable; nothing to toggle
            raise AlertNotFoundError(alert_id)
        return updated

    def append_notifications(self, batch: list[Notification]) -> int:
        """Prepend batch (keeping its order) to the newest-first list, keep the latest cap. Returns total kept."""
        total = 0

        def mutate(data: StoreData) -> bool:
            nonlocal total
            data.notifications = (list(batch) + data.notifications)[: self._cap]
            total = len(data.notifications)
            return bool(batch)

        self._mutate(mutate, "append %s notifications" % len(batch))
        return total

    def update_preferences(self, partial: dict[str, Any]) -> Preferences:
        """Shallow-merge known keys into settings. Unknown keys are ignored; None values are skipped."""
        known = set(Preferences.model_fields)
        changes = {k: v for k, v in partial.items() if k in known and v is not None}
        result: Preferences | None = None

        def mutate(data: StoreData) -> None:
            nonlocal result
            data.settings = Preferences.model_validate({**data.settings.model_dump(), **changes})
            result = data.settings

        self._mutate(mutate, "update settings")
        if result is None:
            return Preferences.model_validate({**Preferences().model_dump(), **changes})
        return result

    # --- Internals ---

    def _mutate(self, mutate: Callable[[StoreData], bool | None], what: str) -> None:
        """
        Load, apply mutate, save. mutate may return False to skip the write.
        If the stored document can't be read, the mutation is dropped (logged) rather than
        overwriting it with defaults. Write failures are logged, not raised.
        """
        with _write_lock:
            try:
                data = self._load_or_init()
            except StoreReadError as e:
                logger.error("Alert store unreadable; skipped %s: %s", what, e)
                return
            if mutate(data) is False:
                return
            self._save(data)

    def _load_or_init(self) -> StoreData:
        """Read and parse the document; create it with defaults when missing. Raises StoreReadError."""
        try:
            with self._session_factory() as db:
                row = db.query(AlertDocument).filter(AlertDocument.doc_key == self._doc_key).first()
                raw = row.payload_json if row else None
        except SQLAlchemyError as e:
            raise StoreReadError(str(e)) from e
        if raw is None:
            data = StoreData()
            self._save(data)
            return data
        try:
            return StoreData.model_validate(json.loads(raw))
        except (TypeError, json.JSONDecodeError, ValidationError) as e:
            raise StoreReadError(str(e)) from e

    def _save(self, data: StoreData) -> None:
        payload = json.dumps(data.model_dump(mode="json"), indent=2)
        now = datetime.now(timezone.utc)
        try:
            with self._session_factory() as db:
                row = db.query(AlertDocument).filter(AlertDocument.doc_key == self._doc_key).first()
                if row:
                    row.payload_json = payload
                    row.updated_at = now
                else:
                    db.add(AlertDocument(doc_key=self._doc_key, payload_json=payload, updated_at=now))
                db.commit()
        except SQLAlchemyError as e:
            logger.exception("Failed to write alert store: %s", e)
