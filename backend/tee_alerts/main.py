"""
FastAPI app entrypoint.

Hosts the alert store API, on-demand checks, the schedule proxy, and the periodic alert check job.
"""
import logging
import os
from contextlib import asynccontextmanager
from pathlib import Path

from apscheduler.schedulers.background import BackgroundScheduler
from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Load .env from backend/ before any app code
load_dotenv(Path(__file__).resolve().parent.parent / ".env")

from tee_alerts.api.routes import alerts, notifications, preferences, schedule
from tee_alerts.config import settings
from tee_alerts.core.constants import ALERT_CHECK_JOB_ID
from tee_alerts.db.session import init_db
from tee_alerts.scheduler.alert_check_job import run_alert_checks_job

if settings.openai_api_key:
    os.environ["OPENAI_API_KEY"] = settings.openai_api_key

logger = logging.getLogger(__name__)

# Scheduler: check due alerts every CHECK_TICK_SECONDS
_scheduler = BackgroundScheduler()


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    _scheduler.add_job(
        run_alert_checks_job,
        "interval",
        seconds=settings.check_tick_seconds,
        id=ALERT_CHECK_JOB_ID,
        max_instances=1,
        coalesce=True,
    )
    _scheduler.start()
    app.state.scheduler = _scheduler
    logger.info("Tee time alerts ready; checking due alerts every %ss", settings.check_tick_seconds)
    yield
    _scheduler.shutdown(wait=False)


app = FastAPI(title="Tee Time Alerts", version="0.1.0", lifespan=lifespan)

# CORS: dev origins + optional CORS_ORIGINS env (comma-separated) for production frontend
_cors_origins = [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]
if settings.cors_origins:
    _cors_origins.extend(o.strip() for o in settings.cors_origins.split(",") if o.strip())
app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(alerts.router, tags=["alerts"])
app.include_router(notifications.router, tags=["notifications"])
app.include_router(preferences.router, tags=["settings"])
app.include_router(schedule.router, tags=["schedule"])


@app.get("/", include_in_schema=False)
def root():
    """Root: point to API docs and health."""
    return {"message": "Tee Time Alerts API", "docs": "/docs", "health": "/health"}


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
