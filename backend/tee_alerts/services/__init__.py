from tee_alerts.services.alert_store import AlertStore
from tee_alerts.services.check_service import check_one, run_guarded_check

__all__ = ["AlertStore", "check_one", "run_guarded_check"]
