"""E-mail moderators about newly submitted reports."""

from __future__ import annotations

import smtplib
from collections.abc import Callable
from dataclasses import dataclass, field
from email.message import EmailMessage
from logging import getLogger
from typing import TYPE_CHECKING

from guardianbee.config.notification import SmtpConfig, get_smtp_config
from guardianbee.domain.errors import NotifierError
from guardianbee.domain.model import UNKNOWN_LOCATION

if TYPE_CHECKING:
    from collections.abc import Mapping

    from guardianbee.domain.ports.notification import ReportNotifier

log = getLogger(__name__)

_TIMEOUT_SECONDS = 30.0


def build_message(payload: Mapping[str, str], *, sender: str, recipient: str) -> EmailMessage:
    suspect = payload.get("suspectName", "")
    message = EmailMessage()
    message["From"] = sender
    message["To"] = recipient
    message["Subject"] = f"[新通報] 兒少守護小蜂 - 被通報人：{suspect}"
    message.set_content(
        "\n".join(
            (
                "收到新的通報案件",
                "",
                f"被通報人：{suspect}",
                f"地點：{payload.get('location') or UNKNOWN_LOCATION}",
                f"通報時間：{payload.get('timestamp', '')}",
                f"通報來源 IP：{payload.get('submitterIp') or '-'}",
                "",
                "詳細描述：",
                payload.get("description", ""),
            )
        )
    )
    return message


@dataclass(slots=True)
class SmtpReportNotifier:
    """Sends one plain-text mail per report; SMTP and socket errors become NotifierError."""

    config: SmtpConfig = field(default_factory=get_smtp_config)
    smtp_factory: Callable[[str, int], smtplib.SMTP] = field(
        default=lambda host, port: smtplib.SMTP(host, port, timeout=_TIMEOUT_SECONDS)
    )

    def __call__(self, payload: Mapping[str, str]) -> None:
        message = build_message(
            payload, sender=self.config.sender, recipient=self.config.recipient
        )
        try:
            with self.smtp_factory(self.config.host, self.config.port) as smtp:
                if self.config.use_starttls:
                    smtp.starttls()
                smtp.login(self.config.user, self.config.password)
                smtp.send_message(message)
        except (smtplib.SMTPException, OSError) as exc:
            raise NotifierError(f"mail to {self.config.recipient} failed: {exc}") from exc
        log.info(
            "Notified %s about report on %s", self.config.recipient, payload.get("suspectName")
        )


if TYPE_CHECKING:
    _notifier_check: ReportNotifier = SmtpReportNotifier()
