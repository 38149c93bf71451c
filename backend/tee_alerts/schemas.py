"""
Pydantic models for alerts, notifications, settings and check status.

The persisted document is StoreData dumped as JSON: {"alerts": [...], "notifications": [...], "settings": {...}}.
"""
import uuid
from datetime import date, datetime, time, timezone
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator

AlertStatus = Literal["active", "paused"]
CheckFrequency = Literal["15", "30", "60"]
StatusKind = Literal["info", "success", "error"]


def new_id() -> str:
    return uuid.uuid4().hex


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _frequency_to_str(v: Any) -> Any:
    if isinstance(v, int) and not isinstance(v, bool):
        return str(v)
    return v.strip() if isinstance(v, str) else v


class Alert(BaseModel):
    """A standing request to watch one course for open tee times on the given dates."""

    id: str = Field(default_factory=new_id, min_length=1)
    course_name: str = Field(..., min_length=1)
    course_url: str | None = None
    dates: list[date] = Field(..., min_length=1)
    time_window_start: time
    time_window_end: time
    players: int = Field(..., ge=1, le=4)
    notify_email: str = Field(..., min_length=1)
    check_frequency_minutes: CheckFrequency = "15"
    status: AlertStatus = "active"
    created_at: datetime = Field(default_factory=utc_now)

    @field_validator("course_name", "notify_email", mode="before")
    @classmethod
    def strip_text(cls, v: Any) -> Any:
        return v.strip() if isinstance(v, str) else v

    @field_validator("check_frequency_minutes", mode="before")
    @classmethod
    def frequency_as_str(cls, v: Any) -> Any:
        return _frequency_to_str(v)

    @field_validator("dates", mode="after")
    @classmethod
    def unique_dates(cls, v: list[date]) -> list[date]:
        # Ordered set: keep first occurrence
        return list(dict.fromkeys(v))


class Notification(BaseModel):
    """Record of one matching tee time found by a check (and optionally emailed). Never updated."""

    id: str = Field(default_factory=new_id)
    watch_request_id: str
    course_name: str
    match_date: str = ""
    match_time_slot: str = ""
    available_spots: int = Field(0, ge=0)
    booking_link: str = ""
    sent_at: datetime = Field(default_factory=utc_now)
    email_sent: bool = False


class Preferences(BaseModel):
    """Global settings singleton."""

    default_email: str = ""
    default_check_frequency_minutes: CheckFrequency = "15"
    email_notifications_enabled: bool = True

    @field_validator("default_check_frequency_minutes", mode="before")
    @classmethod
    def frequency_as_str(cls, v: Any) -> Any:
        return _frequency_to_str(v)


class PreferencesUpdate(BaseModel):
    """Partial settings update; unset fields keep their stored value."""

    default_email: str | None = None
    default_check_frequency_minutes: CheckFrequency | None = None
    email_notifications_enabled: bool | None = None

    @field_validator("default_check_frequency_minutes", mode="before")
    @classmethod
    def frequency_as_str(cls, v: Any) -> Any:
        return _frequency_to_str(v)


class StoreData(BaseModel):
    alerts: list[Alert] = Field(default_factory=list)
    notifications: list[Notification] = Field(default_factory=list)
    settings: Preferences = Field(default_factory=Preferences)


class Match(BaseModel):
    """One available tee time as reported by the search agent, with defaults filled in."""

    date: str = ""
    time: str = ""
    available_spots: int = 0
    price: str = "See booking site"
    booking_link: str = ""


class CheckState(str, Enum):
    IDLE = "idle"
    SEARCHING = "searching"
    EXTRACTING = "extracting"
    NO_MATCH = "no_match"
    MATCH_FOUND = "match_found"
    NOTIFYING = "notifying"
    RECORDING = "recording"
    DONE = "done"
    ERRORED = "errored"


class StatusEvent(BaseModel):
    """Progress or outcome of a check cycle for one alert."""

    request_id: str
    kind: StatusKind
    state: CheckState
    message: str
    match_count: int = 0
    email_sent: bool | None = None  # None: email not attempted
    created_at: datetime = Field(default_factory=utc_now)
