from __future__ import annotations

import logging
import smtplib
from dataclasses import dataclass
from email.mime.text import MIMEText
from typing import Optional, Protocol

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MailConfig:
    host: str = "localhost"
    port: int = 587
    user: Optional[str] = None
    password: Optional[str] = None
    from_email: str = "no-reply@worktrack.local"
    starttls: bool = True
    dry_run: bool = True

    @classmethod
    def from_dict(cls, mail: Optional[dict]) -> "MailConfig":
        mail = mail or {}
        return cls(
            host=str(mail.get("host", "localhost")),
            port=int(mail.get("port", 587)),
            user=mail.get("user") or None,
            password=mail.get("password") or None,
            from_email=str(mail.get("from_email") or mail.get("user") or "no-reply@worktrack.local"),
            starttls=bool(mail.get("starttls", True)),
            dry_run=bool(mail.get("dry_run", True)),
        )


class Mailer(Protocol):
    def send(self, *, to: str, subject: str, body: str) -> None:
        raise NotImplementedError


class SMTPMailer(Mailer):
    """Plain-text mail over SMTP. In dry-run mode the message is only logged."""

    def __init__(self, config: MailConfig):
        self._config = config

    def send(self, *, to: str, subject: str, body: str) -> None:
        if self._config.dry_run:
            logger.info("[dry-run] mail to=%s subject=%s\n%s", to, subject, body)
            return

        msg = MIMEText(body or "", "plain", "utf-8")
        msg["From"] = self._config.from_email
        msg["To"] = to
        msg["Subject"] = subject

        with smtplib.SMTP(self._config.host, self._config.port, timeout=20) as s:
            s.ehlo()
            if self._config.starttls:
                s.starttls()
                s.ehlo()
            if self._config.user and self._config.password:
                s.login(self._config.user, self._config.password)
            s.sendmail(self._config.from_email, [to], msg.as_string())

        logger.info("Mail sent to=%s subject=%s", to, subject)
