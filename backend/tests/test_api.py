"""API tests: routes against a temp store, a private status board and a fake capability."""

import httpx
import pytest

from tee_alerts.core.constants import EMAIL_ALERT_AGENT, TEE_TIME_CHECKER_AGENT
from tee_alerts.services.schedule_client import ScheduleClient
from tests.helpers import EMAIL_OK, THREE_MATCHES, search_result

ALERT = {
    "id": "alert-1",
    "course_name": "Pebble Beach Golf Links",
    "dates": ["2025-07-15"],
    "time_window_start": "07:00",
    "time_window_end": "10:00",
    "players": 4,
    "notify_email": "golfer@example.com",
    "check_frequency_minutes": 30,
}


def test_health(client) -> None:
    assert client.get("/health").json() == {"status": "ok"}


def test_empty_store(client) -> None:
    body = client.get("/alerts").json()
    assert body["success"] is True
    assert body["alerts"] == []
    assert body["notifications"] == []
    assert body["settings"]["email_notifications_enabled"] is True
    assert body["statuses"] == {}


def test_save_list_delete(client, capability) -> None:
    r = client.post("/alerts", json={"alert": ALERT})
    assert r.status_code == 200
    saved = r.json()["alert"]
    assert saved["check_frequency_minutes"] == "30"
    assert saved["status"] == "active"
    assert "status" not in r.json()
    assert capability.calls == []

    assert [a["id"] for a in client.get("/alerts/active").json()["alerts"]] == ["alert-1"]
    assert client.delete("/alerts/alert-1").json() == {"success": True, "removed": True}
    assert client.delete("/alerts/alert-1").json() == {"success": True, "removed": False}
    assert client.get("/alerts").json()["alerts"] == []


@pytest.mark.parametrize(
    "patch",
    [{"players": 5}, {"dates": []}, {"course_name": "  "}, {"check_frequency_minutes": "45"}],
)
def test_invalid_alert_rejected(client, patch) -> None:
    r = client.post("/alerts", json={"alert": {**ALERT, **patch}})
    assert r.status_code == 422


def test_toggle(client) -> None:
    client.post("/alerts", json={"alert": ALERT})
    assert client.post("/alerts/alert-1/toggle").json()["alert"]["status"] == "paused"
    assert client.get("/alerts/active").json()["alerts"] == []
    assert client.post("/alerts/alert-1/toggle").json()["alert"]["status"] == "active"


def test_toggle_unknown_is_404(client) -> None:
    r = client.post("/alerts/nope/toggle")
    assert r.status_code == 404
    assert r.json()["detail"] == "Alert not found: nope"


def test_save_with_check_now(client, capability) -> None:
    capability.results[TEE_TIME_CHECKER_AGENT] = search_result(THREE_MATCHES)
    capability.results[EMAIL_ALERT_AGENT] = EMAIL_OK
    r = client.post("/alerts", json={"alert": ALERT, "check_now": True})
    status = r.json()["status"]
    assert status["kind"] == "success"
    assert status["state"] == "done"
    assert status["match_count"] == 3
    assert client.get("/notifications").json()["count"] == 3


def test_check_and_status(client, capability) -> None:
    client.post("/alerts", json={"alert": ALERT})
    assert client.get("/alerts/alert-1/status").json() == {"status": None, "running": False}

    capability.results[TEE_TIME_CHECKER_AGENT] = {"success": False, "error": "model unavailable"}
    body = client.post("/alerts/alert-1/check").json()
    assert body["success"] is False
    assert body["status"]["message"] == "Agent error: model unavailable"

    status = client.get("/alerts/alert-1/status").json()
    assert status["status"]["state"] == "errored"
    assert status["running"] is False
    assert client.get("/alerts").json()["statuses"]["alert-1"]["kind"] == "error"


def test_check_unknown_is_404(client) -> None:
    assert client.post("/alerts/nope/check").status_code == 404


def test_check_refused_while_running(client, board) -> None:
    client.post("/alerts", json={"alert": ALERT})
    board.begin("alert-1")
    body = client.post("/alerts/alert-1/check").json()
    assert body["success"] is False
    assert body["status"]["message"] == "A check is already running for this alert."


def test_notifications_append_and_list(client) -> None:
    batch = [{"watch_request_id": "alert-1", "course_name": "Pebble", "match_time_slot": f"{i}:00 AM"} for i in (7, 8)]
    assert client.post("/notifications", json={"notifications": batch}).json() == {"success": True, "total": 2}
    body = client.get("/notifications", params={"limit": 1}).json()
    assert body["count"] == 1
    assert body["notifications"][0]["match_time_slot"] == "7:00 AM"
    assert client.get("/notifications", params={"limit": 0}).status_code == 422


def test_settings_patch(client) -> None:
    r = client.patch("/settings", json={"default_email": "me@example.com", "default_check_frequency_minutes": 60})
    assert r.json()["settings"] == {
        "default_email": "me@example.com",
        "default_check_frequency_minutes": "60",
        "email_notifications_enabled": True,
    }
    r = client.patch("/settings", json={"email_notifications_enabled": False})
    assert r.json()["settings"]["default_email"] == "me@example.com"
    assert client.get("/settings").json()["settings"]["email_notifications_enabled"] is False


@pytest.fixture
def schedule_service(client):
    from tee_alerts.api.deps import get_schedule_client
    from tee_alerts.main import app

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/schedules":
            return httpx.Response(200, json={"schedules": [{"id": "s1", "is_active": True, "cron_expression": "*/15 * * * *"}]})
        if request.url.path == "/schedules/s1/executions":
            return httpx.Response(200, json={"executions": [{"id": "e1", "success": True}]})
        if request.method == "POST":
            return httpx.Response(200, json={})
        return httpx.Response(404, json={"error": "not found"})

    fake = ScheduleClient("https://sched.example.com", "k", transport=httpx.MockTransport(handler))
    app.dependency_overrides[get_schedule_client] = lambda: fake
    return fake


def test_schedule_overview(client, schedule_service) -> None:
    body = client.get("/schedule").json()
    assert body["success"] is True
    assert body["schedule"]["id"] == "s1"
    assert body["schedule"]["description"] == "Every 15 minutes"
    assert [e["id"] for e in body["executions"]] == ["e1"]
    assert body["logs_error"] is None


def test_schedule_actions(client, schedule_service) -> None:
    assert client.post("/schedule/s1/pause").json() == {"success": True}
    assert client.post("/schedule/s1/trigger").json() == {"success": True}
    assert client.get("/schedule/missing/logs").json()["success"] is False


def test_schedule_not_configured(client) -> None:
    from tee_alerts.api.deps import get_schedule_client
    from tee_alerts.main import app

    app.dependency_overrides[get_schedule_client] = lambda: ScheduleClient("", "")
    body = client.get("/schedule").json()
    assert body["success"] is False
    assert "not configured" in body["error"]
