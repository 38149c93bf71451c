"""
Centralized constants for the alert store, checks and scheduler (Encapsulate What Changes).

Change job IDs, caps or agent names here instead of scattering literals across main, services and routes.
"""

# Scheduler job IDs (must match ids used in main.py add_job)
ALERT_CHECK_JOB_ID = "alert_checks"

# Agent names registered in tee_alerts.orchestrator.registry
TEE_TIME_CHECKER_AGENT = "tee_time_checker"
EMAIL_ALERT_AGENT = "email_alert"

# Store: one JSON document per key; the app uses a single key
DEFAULT_DOCUMENT_KEY = "default"

# Keep only the latest N notifications (newest first)
NOTIFICATIONS_CAP = 200

# Email digest: first match in full, then up to this many more as "time ($price)"
EMAIL_DIGEST_EXTRA_MATCHES = 4

# No-match diagnostics: how much of the raw payload / agent message to surface
DIAGNOSTIC_PAYLOAD_CHARS = 200
DIAGNOSTIC_MESSAGE_CHARS = 150


# Schedule execution logs fetched per request
SCHEDULE_LOGS_LIMIT = 10
