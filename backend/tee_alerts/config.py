"""
Application settings (Pydantic Settings).
"""
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings

# .env and data/ next to backend/ (parent of tee_alerts/)
_backend_dir = Path(__file__).resolve().parent.parent
_env_path = _backend_dir / ".env"
_default_db_path = _backend_dir / "data" / "tee_alerts.db"


class Settings(BaseSettings):
    database_url: str = f"sqlite:///{_default_db_path}"
    openai_api_key: str = ""  # OPENAI_API_KEY in .env
    ai_model: str = "openai-responses:gpt-4.1-mini"
    # Deadline for one capability call (search or email agent run)
    agent_timeout_seconds: float = 120.0
    # Periodic checks: tick interval and how many alerts are checked at once
    check_tick_seconds: int = 60
    max_concurrent_checks: int = 2
    # SMTP for the email agent's send tool (Gmail: use an App Password)
    smtp_host: str = "smtp.gmail.com"
    smtp_port: int = 587
    smtp_user: str = ""
    smtp_password: str = ""
    notify_from: str = ""
    # External schedule service (list / pause / resume / trigger / logs)
    scheduler_api_url: str = ""
    scheduler_api_key: str = ""
    schedule_id: str = ""
    # Extra CORS origins, comma-separated
    cors_origins: str = ""

    class Config:
        env_file = _env_path
        extra = "ignore"

    @field_validator("smtp_user", "smtp_password", "scheduler_api_key", mode="after")
    @classmethod
    def strip_secrets(cls, v: str) -> str:
        return (v or "").strip()

    @field_validator("scheduler_api_url", mode="after")
    @classmethod
    def strip_url(cls, v: str) -> str:
        return (v or "").strip().rstrip("/")


settings = Settings()
