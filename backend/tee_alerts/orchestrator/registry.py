"""
Agent registry: maps agent names to (agent, deps_factory) for the capability runner.
Agents are registered on first lookup so importing the runner never builds a model client.
"""
from collections.abc import Callable
from typing import Any

from tee_alerts.agents.deps import AgentDeps
from tee_alerts.core.constants import EMAIL_ALERT_AGENT, TEE_TIME_CHECKER_AGENT

# Type: deps_factory(agent_name) -> deps instance for the agent
DepsFactory = Callable[[str], Any]

# Registry: agent_name -> (agent, deps_factory)
_agents: dict[str, tuple[Any, DepsFactory]] = {}


def register(name: str, agent: Any, deps_factory: DepsFactory) -> None:
    """Register an agent and its deps factory."""
    _agents[name] = (agent, deps_factory)


def get(name: str) -> tuple[Any, DepsFactory] | None:
    """Return (agent, deps_factory) for the given name, or None."""
    if not _agents:
        _init_registry()
    return _agents.get(name)


def agent_names() -> list[str]:
    """Return registered agent names."""
    if not _agents:
        _init_registry()
    return list(_agents.keys())


def _search_deps_factory(agent_name: str) -> AgentDeps:
    return AgentDeps(agent_name)


def _email_deps_factory(agent_name: str) -> AgentDeps:
    return AgentDeps(agent_name, expects_email=True)


def _init_registry() -> None:
    from tee_alerts.agents.email_alert_agent import agent as email_alert_agent
    from tee_alerts.agents.tee_time_agent import agent as tee_time_agent

    register(TEE_TIME_CHECKER_AGENT, tee_time_agent, _search_deps_factory)
    register(EMAIL_ALERT_AGENT, email_alert_agent, _email_deps_factory)
