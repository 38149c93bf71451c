"""Tee time checker agent: web search for open tee times. Instructions loaded from tee_time_agent_instructions.md."""
from datetime import date
from pathlib import Path

from pydantic_ai import Agent
from pydantic_ai.builtin_tools import WebSearchTool
from pydantic_ai.settings import ModelSettings

from tee_alerts.agents.deps import AgentDeps
from tee_alerts.config import settings

_INSTRUCTIONS_PATH = Path(__file__).resolve().parent / "tee_time_agent_instructions.md"
_INSTRUCTIONS_TEMPLATE = _INSTRUCTIONS_PATH.read_text().strip()


def instructions_for(today: date) -> str:
    return _INSTRUCTIONS_TEMPLATE.replace("{{current_date}}", today.isoformat())


agent = Agent(
    model=settings.ai_model,
    deps_type=AgentDeps,
    builtin_tools=[WebSearchTool()],
    retries=1,
    model_settings=ModelSettings(max_tokens=8192),
    defer_model_check=True,
)


@agent.instructions
def current_instructions() -> str:
    """Rendered per run so a long-running server always searches relative to today."""
    return instructions_for(date.today())
