"""
Extract tee times from a search agent response.

The agent's JSON is not contractually fixed: the tee times may sit under response.result,
response, result or at the top level, and keys come back snake_case or camelCase. Each place
is an extraction strategy; strategies are tried in order and the first that reports a match wins.
To support a new response shape, add a strategy to DEFAULT_STRATEGIES.
"""
from collections.abc import Mapping, Sequence
from typing import Any, NamedTuple, Protocol

from tee_alerts.schemas import Match

MATCH_LIST_KEYS = ("matching_tee_times", "matchingTeeTimes")
MATCHES_FOUND_KEYS = ("matches_found", "matchesFound")
TOTAL_MATCHES_KEYS = ("total_matches", "totalMatches")
COURSE_NAME_KEYS = ("course_name", "courseName")

_SPOTS_KEYS = ("available_spots", "availableSpots")
_BOOKING_LINK_KEYS = ("booking_link", "bookingLink")


class Extraction(NamedTuple):
    payload: dict[str, Any]
    matches: list[Match]
    found: bool


class ExtractionStrategy(Protocol):
    """One place in the response where tee times may live."""

    name: str

    def candidate(self, raw: Any) -> Mapping[str, Any] | None:
        """The sub-object this strategy inspects, or None when the response doesn't have it."""
        ...

    def try_extract(self, raw: Any) -> Extraction | None:
        """Extraction with found=True when this candidate reports a match; else None."""
        ...


def _first(obj: Mapping[str, Any], keys: Sequence[str]) -> Any:
    for key in keys:
        if key in obj:
            return obj[key]
    return None


def _as_int(value: Any) -> int:
    if isinstance(value, bool):
        return 0
    try:
        n = int(float(value)) if isinstance(value, str) else int(value)
    except (TypeError, ValueError, OverflowError):
        return 0
    return max(n, 0)


def _as_str(value: Any, default: str = "") -> str:
    if value is None:
        return default
    if isinstance(value, str):
        return value.strip() or default
    return str(value)


def normalize_match(item: Any) -> Match:
    """Match with defaults for anything missing or malformed. Non-mapping items become all-default."""
    if not isinstance(item, Mapping):
        return Match()
    return Match(
        date=_as_str(item.get("date")),
        time=_as_str(item.get("time")),
        available_spots=_as_int(_first(item, _SPOTS_KEYS)),
        price=_as_str(item.get("price"), Match.model_fields["price"].default),
        booking_link=_as_str(_first(item, _BOOKING_LINK_KEYS)),
    )


def match_list(candidate: Mapping[str, Any]) -> list[Any]:
    value = _first(candidate, MATCH_LIST_KEYS)
    return list(value) if isinstance(value, list) else []


def reports_match(candidate: Mapping[str, Any]) -> bool:
    """Non-empty tee time list, matches_found true, or total_matches > 0 (numeric strings count, bools don't)."""
    if match_list(candidate):
        return True
    if _first(candidate, MATCHES_FOUND_KEYS) is True:
        return True
    total = _first(candidate, TOTAL_MATCHES_KEYS)
    return _as_int(total) > 0


class PathStrategy:
    """Looks for tee times in the mapping reached by following path (() = the raw object itself)."""

    __slots__ = ("name", "path")

    def __init__(self, name: str, path: tuple[str, ...]):
        self.name = name
        self.path = path

    def candidate(self, raw: Any) -> Mapping[str, Any] | None:
        node = raw
        for key in self.path:
            if not isinstance(node, Mapping):
                return None
            node = node.get(key)
        return node if isinstance(node, Mapping) else None

    def try_extract(self, raw: Any) -> Extraction | None:
        data = self.candidate(raw)
        if data is None or not reports_match(data):
            return None
        matches = [normalize_match(item) for item in match_list(data)]
        return Extraction(payload=dict(data), matches=matches, found=True)


# Most specific first
DEFAULT_STRATEGIES: tuple[ExtractionStrategy, ...] = (
    PathStrategy("response.result", ("response", "result")),
    PathStrategy("response", ("response",)),
    PathStrategy("result", ("result",)),
    PathStrategy("raw", ()),
)


def extract(raw: Any, strategies: Sequence[ExtractionStrategy] = DEFAULT_STRATEGIES) -> Extraction:
    """
    Normalize a search response into (payload, matches, found). Pure; never raises.
    When nothing reports a match, payload is the first candidate that names a course
    (else the first candidate at all) so callers can still show what came back.
    """
    for strategy in strategies:
        result = strategy.try_extract(raw)
        if result is not None:
            return result
    candidates = [c for c in (s.candidate(raw) for s in strategies) if c is not None]
    best = next((c for c in candidates if any(k in c for k in COURSE_NAME_KEYS)), None)
    if best is None:
        best = candidates[0] if candidates else {}
    return Extraction(payload=dict(best), matches=[], found=False)


def payload_course_name(payload: Mapping[str, Any]) -> str | None:
    """Course name reported by the agent, if it is a non-empty string."""
    name = _first(payload, COURSE_NAME_KEYS)
    if isinstance(name, str) and name.strip():
        return name.strip()
    return None
