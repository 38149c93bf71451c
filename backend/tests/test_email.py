"""Tests for SMTP delivery and the email agent's send tool."""

import smtplib
from types import SimpleNamespace

import pytest

from tee_alerts.agents.deps import AgentDeps
from tee_alerts.services import email_notify
from tee_alerts.services.email_notify import EmailNotConfigured, send_alert_email
from tee_alerts.toolsets.email import tools


class FakeSMTP:
    sent: list[tuple[str, list[str], str]] = []

    def __init__(self, host, port, timeout=None):
        self.host = host
        self.port = port

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def starttls(self):
        pass

    def login(self, user, password):
        pass

    def sendmail(self, from_addr, to_addrs, msg):
        FakeSMTP.sent.append((from_addr, to_addrs, msg))


@pytest.fixture
def smtp(monkeypatch):
    FakeSMTP.sent = []
    monkeypatch.setattr(email_notify.settings, "smtp_user", "alerts@example.com")
    monkeypatch.setattr(email_notify.settings, "smtp_password", "app-password")
    monkeypatch.setattr(email_notify.settings, "notify_from", "")
    monkeypatch.setattr(email_notify.smtplib, "SMTP", FakeSMTP)
    return FakeSMTP


def test_send_alert_email(smtp) -> None:
    send_alert_email(" golfer@example.com ", "Tee Time Available - Pebble", "Book now")
    assert len(smtp.sent) == 1
    from_addr, to_addrs, msg = smtp.sent[0]
    assert from_addr == "alerts@example.com"
    assert to_addrs == ["golfer@example.com"]
    assert "Subject: Tee Time Available - Pebble" in msg
    assert "From: Tee Time Alerts <alerts@example.com>" in msg


def test_send_requires_recipient(smtp) -> None:
    with pytest.raises(ValueError):
        send_alert_email("  ", "s", "b")
    assert smtp.sent == []


def test_send_requires_smtp_credentials(monkeypatch) -> None:
    monkeypatch.setattr(email_notify.settings, "smtp_user", "")
    with pytest.raises(EmailNotConfigured):
        send_alert_email("golfer@example.com", "s", "b")


@pytest.mark.asyncio
async def test_tool_records_sent_email(monkeypatch) -> None:
    sent = []
    monkeypatch.setattr(tools, "send_alert_email_service", lambda to, subject, body: sent.append(to))
    ctx = SimpleNamespace(deps=AgentDeps("email_alert", expects_email=True))

    result = await tools.send_alert_email(ctx, "golfer@example.com", "subject", "body")

    assert result == {"ok": True, "to": "golfer@example.com"}
    assert ctx.deps.emails_sent == ["golfer@example.com"]
    assert ctx.deps.run_error() is None


@pytest.mark.asyncio
async def test_tool_records_failure(monkeypatch) -> None:
    def fail(to, subject, body):
        raise smtplib.SMTPAuthenticationError(535, b"bad credentials")

    monkeypatch.setattr(tools, "send_alert_email_service", fail)
    ctx = SimpleNamespace(deps=AgentDeps("email_alert", expects_email=True))

    result = await tools.send_alert_email(ctx, "golfer@example.com", "subject", "body")

    assert "error" in result
    assert ctx.deps.emails_sent == []
    assert ctx.deps.run_error().startswith("Email not sent:")
