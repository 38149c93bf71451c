"""
Capability runner: invoke(prompt, agent_name) runs one registered agent once and returns
{success, response | error}. Every failure (unknown agent, model/API error, side-effect failure,
deadline) comes back as success=False with readable error text; nothing is raised and nothing retried.
"""
import asyncio
import json
import logging
import re
from collections.abc import Awaitable, Callable
from typing import Any, TypedDict

from tee_alerts.config import settings
from tee_alerts.core.errors import CapabilityError, agent_error_message
from tee_alerts.orchestrator.registry import get

logger = logging.getLogger(__name__)

_FENCE_RE = re.compile(r"```(?:json)?\s*(.*?)```", re.DOTALL)


class CapabilityResult(TypedDict, total=False):
    success: bool
    response: dict[str, Any]  # {status, result, message}
    error: str


# Signature of invoke; check_service takes any callable of this shape (tests pass fakes).
Invoke = Callable[[str, str], Awaitable[CapabilityResult]]


def parse_agent_json(text: str) -> dict[str, Any]:
    """
    Best-effort JSON object from agent output: whole text, a ```json fenced block, or the
    outermost {...} span. Returns {} when none parses to an object.
    """
    if not text:
        return {}
    candidates = [text.strip()]
    candidates.extend(m.strip() for m in _FENCE_RE.findall(text))
    start, end = text.find("{"), text.rfind("}")
    if 0 <= start < end:
        candidates.append(text[start : end + 1])
    for candidate in candidates:
        try:
            value = json.loads(candidate)
        except (TypeError, ValueError):
            continue
        if isinstance(value, dict):
            return value
    return {}


async def _run_agent(message: str, agent_name: str) -> str:
    entry = get(agent_name)
    if not entry:
        raise CapabilityError(f"No agent registered for: {agent_name}.")
    agent, deps_factory = entry
    deps = deps_factory(agent_name)
    result = await agent.run(message, deps=deps)
    run_error = deps.run_error() if hasattr(deps, "run_error") else None
    if run_error:
        raise CapabilityError(run_error)
    return result.output if isinstance(result.output, str) else str(result.output)


async def invoke(message: str, agent_name: str, *, timeout: float | None = None) -> CapabilityResult:
    """Run agent_name on message with a deadline (AGENT_TIMEOUT_SECONDS by default)."""
    limit = settings.agent_timeout_seconds if timeout is None else timeout
    try:
        text = await asyncio.wait_for(_run_agent(message, agent_name), timeout=limit)
    except asyncio.TimeoutError:
        logger.warning("Agent %s timed out after %ss", agent_name, limit)
        return {"success": False, "error": f"Agent {agent_name} timed out after {limit:g}s"}
    except CapabilityError as e:
        logger.warning("Agent %s failed: %s", agent_name, e)
        return {"success": False, "error": agent_error_message(e)}
    except Exception as e:  # noqa: BLE001 - model/API errors of any kind are a capability failure
        logger.exception("Agent %s run failed", agent_name)
        return {"success": False, "error": agent_error_message(e)}
    return {
        "success": True,
        "response": {"status": "success", "result": parse_agent_json(text), "message": text},
    }
