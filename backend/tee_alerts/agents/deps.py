"""
Dependencies for capability agents (injected at run time).
"""


class AgentDeps:
    """Deps passed to every agent run; tools record side-effect outcomes here."""

    def __init__(self, agent_name: str, *, expects_email: bool = False):
        self.agent_name = agent_name
        # The run only counts as successful if an email actually went out.
        self.expects_email = expects_email
        # Set by tools when a side-effect fails (e.g. email not delivered); a run with failures is unsuccessful.
        self.failures: list[str] = []
        self.emails_sent: list[str] = []

    def run_error(self) -> str | None:
        """Why the run should be reported as failed, or None."""
        if self.failures:
            return "; ".join(self.failures)
        if self.expects_email and not self.emails_sent:
            return "The email agent finished without sending an email."
        return None
