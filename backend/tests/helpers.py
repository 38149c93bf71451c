"""Fakes and canned agent responses shared by tests."""
from typing import Any


class FakeCapability:
    """Stands in for orchestrator.invoke: returns queued results per agent name and records every call."""

    def __init__(self, results: dict[str, Any] | None = None):
        self.results = dict(results or {})
        self.calls: list[tuple[str, str]] = []

    async def __call__(self, prompt: str, agent_name: str) -> Any:
        self.calls.append((prompt, agent_name))
        result = self.results.get(agent_name, {"success": True, "response": {}})
        if isinstance(result, BaseException):
            raise result
        return result

    def agents_called(self) -> list[str]:
        return [agent for _, agent in self.calls]


def search_result(matches: list[dict[str, Any]], **extra: Any) -> dict[str, Any]:
    """Search response shaped like a successful agent run."""
    payload = {"course_name": "Pebble Beach Golf Links", "matching_tee_times": matches, **extra}
    return {"success": True, "response": {"status": "success", "result": payload, "message": "done"}}


EMAIL_OK = {"success": True, "response": {"status": "success", "result": {}, "message": "Email sent."}}

THREE_MATCHES = [
    {"date": "2025-07-15", "time": "7:30 AM", "available_spots": 4, "price": "$89", "booking_link": "https://golfnow.com/a"},
    {"date": "2025-07-15", "time": "8:10 AM", "available_spots": 2, "price": "$79", "booking_link": "https://golfnow.com/b"},
    {"date": "2025-07-16", "time": "9:00 AM", "available_spots": 3, "price": "$99", "booking_link": "https://golfnow.com/c"},
]
