"""Email toolset: send the composed tee time alert."""
import logging
import smtplib
from typing import Any

from pydantic_ai import FunctionToolset, RunContext

from tee_alerts.agents.deps import AgentDeps
from tee_alerts.services.email_notify import EmailNotConfigured, send_alert_email as send_alert_email_service

logger = logging.getLogger(__name__)


async def send_alert_email(
    ctx: RunContext[AgentDeps],
    to_email: str,
    subject: str,
    body: str,
) -> dict[str, Any]:
    """Send the tee time alert email. to_email: recipient address; subject: the subject line given in the request; body: the full plain-text email."""
    try:
        send_alert_email_service(to_email, subject, body)
    except (EmailNotConfigured, ValueError, smtplib.SMTPException, OSError) as e:
        logger.warning("Alert email to %s failed: %s", to_email, e)
        ctx.deps.failures.append(f"Email not sent: {e}")
        return {"error": str(e)}
    ctx.deps.emails_sent.append(to_email)
    return {"ok": True, "to": to_email}


email_toolset = FunctionToolset(
    tools=[
        send_alert_email,
    ],
)
