"""
Send tee time alert emails via SMTP (Google Gmail or other).
Set SMTP_USER, SMTP_PASSWORD (and optionally NOTIFY_FROM) in .env. Use a Gmail App Password (not your normal password).
"""
import logging
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from html import escape

from tee_alerts.config import settings

logger = logging.getLogger(__name__)


class EmailNotConfigured(Exception):
    """SMTP_USER / SMTP_PASSWORD missing."""


def _from_address() -> str:
    if (settings.notify_from or "").strip():
        return settings.notify_from.strip()
    user = (settings.smtp_user or "").strip()
    if user:
        return f"Tee Time Alerts <{user}>"
    return "Tee Time Alerts <noreply@localhost>"


def send_alert_email(to_email: str, subject: str, body: str) -> None:
    """
    Send one plain-text + HTML email via SMTP.
    Raises EmailNotConfigured when SMTP credentials are missing, ValueError on empty recipient,
    and smtplib/OSError errors on delivery failure.
    """
    to_email = (to_email or "").strip()
    if not to_email:
        raise ValueError("Recipient email is required.")
    user = settings.smtp_user
    password = settings.smtp_password
    if not user or not password:
        raise EmailNotConfigured("SMTP_USER or SMTP_PASSWORD not set; cannot send email.")
    msg = MIMEMultipart("alternative")
    msg["Subject"] = (subject or "").strip() or "Tee Time Available"
    msg["From"] = _from_address()
    msg["To"] = to_email
    msg.attach(MIMEText(body, "plain"))
    msg.attach(MIMEText(f"<pre style='font-family:sans-serif'>{escape(body)}</pre>", "html"))
    with smtplib.SMTP(settings.smtp_host, settings.smtp_port, timeout=10) as server:
        server.starttls()
        server.login(user, password)
        server.sendmail(user, [to_email], msg.as_string())
    logger.info("Alert email sent to %s: %s", to_email, msg["Subject"])
