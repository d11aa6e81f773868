"""
Effort notification emails.

Sends plain-text emails over SMTP when a stakeholder's effort is logged and
when a cohort's weekly summary is refreshed on a Friday. Sending is
fire-and-forget: failures are logged and reported as False, never raised.
"""

import os
import logging
import smtplib
from email.mime.text import MIMEText
from typing import Iterable, List, Optional

from app.models import Cohort, StakeholderEffort, User, WeeklySummary

logger = logging.getLogger(__name__)


class EmailNotifier:
    """SMTP sender configured from SMTP_* / NOTIFY_* environment variables."""

    def __init__(
        self,
        host: Optional[str] = None,
        port: Optional[int] = None,
        user: Optional[str] = None,
        password: Optional[str] = None,
        use_tls: Optional[bool] = None,
        sender: Optional[str] = None,
        summary_recipients: Optional[List[str]] = None,
    ):
        self.host = host if host is not None else os.getenv("SMTP_HOST", "")
        self.port = port if port is not None else int(os.getenv("SMTP_PORT", "587"))
        self.user = user if user is not None else os.getenv("SMTP_USER", "")
        self.password = password if password is not None else os.getenv("SMTP_PASSWORD", "")
        if use_tls is None:
            use_tls = os.getenv("SMTP_USE_TLS", "true").lower() == "true"
        self.use_tls = use_tls
        self.sender = sender or os.getenv("NOTIFY_FROM") or self.user
        if summary_recipients is None:
            summary_recipients = [
                addr.strip() for addr in os.getenv("NOTIFY_TO", "").split(",") if addr.strip()
            ]
        self.summary_recipients = summary_recipients

    @property
    def is_configured(self) -> bool:
        return bool(self.host and self.sender)

    def send_daily_effort_notification(
        self, effort: StakeholderEffort, stakeholder: User, cohort: Cohort
    ) -> bool:
        """Tell the stakeholder their effort entry was recorded."""
        subject = f"[{cohort.code}] Effort logged for {effort.effort_date.isoformat()}"
        body = (
            f"Hi {stakeholder.full_name},\n\n"
            f"Your effort for cohort {cohort.name} ({cohort.code}) has been recorded.\n\n"
            f"Date: {effort.effort_date.isoformat()}\n"
            f"Role: {effort.role}\n"
            f"Mode: {effort.mode}\n"
            f"Hours: {effort.effort_hours}\n"
            f"Notes: {effort.area_of_work or '-'}\n"
        )
        return self._send([stakeholder.email], subject, body)

    def send_weekly_summary_notification(
        self, summary: WeeklySummary, cohort: Cohort, stakeholders: Iterable[User]
    ) -> bool:
        """Send the week's total hours to the cohort's stakeholders."""
        recipients = [u.email for u in stakeholders if u.email] + self.summary_recipients
        subject = (
            f"[{cohort.code}] Weekly effort summary "
            f"{summary.week_start_date.isoformat()} - {summary.week_end_date.isoformat()}"
        )
        body = (
            f"Weekly effort summary for cohort {cohort.name} ({cohort.code})\n\n"
            f"Week: {summary.week_start_date.isoformat()} to {summary.week_end_date.isoformat()}\n"
            f"Total hours: {summary.total_hours}\n"
        )
        return self._send(recipients, subject, body)

    def _send(self, recipients: List[str], subject: str, body: str) -> bool:
        # De-duplicate while keeping order
        recipients = list(dict.fromkeys(r for r in recipients if r))
        if not recipients:
            logger.warning(f"No recipients for notification '{subject}'")
            return False
        if not self.is_configured:
            logger.warning(f"SMTP not configured, skipping notification '{subject}'")
            return False

        msg = MIMEText(body, "plain")
        msg["Subject"] = subject
        msg["From"] = self.sender
        msg["To"] = ", ".join(recipients)

        try:
            with smtplib.SMTP(self.host, self.port) as server:
                if self.use_tls:
                    server.starttls()
                if self.user and self.password:
                    server.login(self.user, self.password)
                server.send_message(msg)
        except smtplib.SMTPAuthenticationError as e:
            logger.error(f"SMTP authentication failed: {e}")
            return False
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"Failed to send notification '{subject}': {e}")
            return False

        logger.info(f"Sent notification '{subject}' to {len(recipients)} recipient(s)")
        return True
