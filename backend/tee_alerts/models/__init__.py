from tee_alerts.models.alert_document import AlertDocument

__all__ = [
    "AlertDocument",
]
