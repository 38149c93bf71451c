"""Email alert agent: composes the alert email and sends it through the send_alert_email tool."""
from pathlib import Path

from pydantic_ai import Agent
from pydantic_ai.settings import ModelSettings

from tee_alerts.agents.deps import AgentDeps
from tee_alerts.config import settings
from tee_alerts.toolsets.email.tools import email_toolset

_INSTRUCTIONS_PATH = Path(__file__).resolve().parent / "email_alert_agent_instructions.md"
SYSTEM_PROMPT = _INSTRUCTIONS_PATH.read_text().strip()

agent = Agent(
    model=settings.ai_model,
    deps_type=AgentDeps,
    instructions=SYSTEM_PROMPT,
    toolsets=[email_toolset],
    retries=1,
    model_settings=ModelSettings(max_tokens=4096),
    defer_model_check=True,
)
