"""Pytest configuration and shared fixtures."""

from collections.abc import Callable
from datetime import date, time
from typing import Any

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from tee_alerts.db.session import init_db, make_engine
from tee_alerts.schemas import Alert
from tee_alerts.services.alert_store import AlertStore
from tee_alerts.services.check_status import CheckStatusBoard
from tests.helpers import FakeCapability


@pytest.fixture
def session_factory(tmp_path):
    """Sessions on a fresh SQLite file with all tables created."""
    engine = make_engine(f"sqlite:///{tmp_path / 'alerts.db'}")
    init_db(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


@pytest.fixture
def store(session_factory) -> AlertStore:
    return AlertStore(session_factory)


@pytest.fixture
def board() -> CheckStatusBoard:
    return CheckStatusBoard()


@pytest.fixture
def make_alert() -> Callable[..., Alert]:
    def _make(**overrides: Any) -> Alert:
        fields: dict[str, Any] = {
            "id": "alert-1",
            "course_name": "Pebble Beach Golf Links",
            "dates": [date(2025, 7, 15), date(2025, 7, 16)],
            "time_window_start": time(7, 0),
            "time_window_end": time(10, 0),
            "players": 4,
            "notify_email": "golfer@example.com",
            "check_frequency_minutes": "15",
        }
        fields.update(overrides)
        return Alert(**fields)

    return _make


@pytest.fixture
def capability() -> FakeCapability:
    return FakeCapability()


@pytest.fixture
def client(store, board, capability):
    """API client wired to the test store, a private status board and the fake capability."""
    from tee_alerts.api.deps import get_invoke, get_status_board, get_store
    from tee_alerts.main import app

    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_status_board] = lambda: board
    app.dependency_overrides[get_invoke] = lambda: capability
    yield TestClient(app)
    app.dependency_overrides.clear()
