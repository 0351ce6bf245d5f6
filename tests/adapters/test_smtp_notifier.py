from __future__ import annotations

import smtplib
from email.message import EmailMessage

import pytest

from guardianbee.adapters.notification import SmtpReportNotifier, build_message
from guardianbee.config.notification import SmtpConfig
from guardianbee.domain.errors import NotifierError

PAYLOAD = {
    "suspectName": "王小明",
    "location": "台北市",
    "description": "安親班老師體罰學童，家長多次目擊",
    "submitterIp": "203.0.113.7",
    "timestamp": "2025-03-01T08:30:00+00:00",
}


class FakeSMTP:
    def __init__(self, host: str, port: int, *, fail_login: bool = False) -> None:
        self.host = host
        self.port = port
        self.fail_login = fail_login
        self.calls: list[str] = []
        self.sent: list[EmailMessage] = []

    def __enter__(self) -> FakeSMTP:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.calls.append("quit")

    def starttls(self) -> None:
        self.calls.append("starttls")

    def login(self, user: str, password: str) -> None:
        self.calls.append(f"login:{user}:{password}")
        if self.fail_login:
            raise smtplib.SMTPAuthenticationError(535, b"bad credentials")

    def send_message(self, message: EmailMessage) -> None:
        self.calls.append("send")
        self.sent.append(message)


def _config(*, use_starttls: bool = True) -> SmtpConfig:
    return SmtpConfig(
        host="smtp.test",
        port=587,
        user="bot@guardianbee.test",
        password="secret",
        recipient="mods@guardianbee.test",
        sender="bot@guardianbee.test",
        use_starttls=use_starttls,
    )


def test_build_message_contains_report_details() -> None:
    message = build_message(PAYLOAD, sender="a@test", recipient="b@test")

    body = message.get_content()
    assert message["Subject"] == "[新通報] 兒少守護小蜂 - 被通報人：王小明"
    assert message["To"] == "b@test"
    assert "地點：台北市" in body
    assert "通報來源 IP：203.0.113.7" in body
    assert PAYLOAD["description"] in body


def test_build_message_fills_missing_fields() -> None:
    body = build_message({"suspectName": "王小明"}, sender="a@test", recipient="b@test").get_content()

    assert "地點：未知" in body
    assert "通報來源 IP：-" in body


def test_notifier_sends_over_starttls() -> None:
    sessions: list[FakeSMTP] = []

    def factory(host: str, port: int) -> FakeSMTP:
        sessions.append(FakeSMTP(host, port))
        return sessions[-1]

    notifier = SmtpReportNotifier(config=_config(), smtp_factory=factory)  # type: ignore[arg-type]

    notifier(PAYLOAD)

    session = sessions[0]
    assert (session.host, session.port) == ("smtp.test", 587)
    assert session.calls == ["starttls", "login:bot@guardianbee.test:secret", "send", "quit"]
    assert session.sent[0]["From"] == "bot@guardianbee.test"


def test_notifier_skips_starttls_when_disabled() -> None:
    session = FakeSMTP("smtp.test", 25)
    notifier = SmtpReportNotifier(
        config=_config(use_starttls=False),
        smtp_factory=lambda host, port: session,  # type: ignore[arg-type,return-value]
    )

    notifier(PAYLOAD)

    assert "starttls" not in session.calls


def test_notifier_translates_smtp_errors() -> None:
    session = FakeSMTP("smtp.test", 587, fail_login=True)
    notifier = SmtpReportNotifier(
        config=_config(),
        smtp_factory=lambda host, port: session,  # type: ignore[arg-type,return-value]
    )

    with pytest.raises(NotifierError, match="bad credentials") as exc_info:
        notifier(PAYLOAD)

    assert isinstance(exc_info.value.__cause__, smtplib.SMTPAuthenticationError)

    assert session.sent == []
    assert session.calls[-1] == "quit"


def test_notifier_translates_connection_errors() -> None:
    def refuse(host: str, port: int) -> smtplib.SMTP:
        raise ConnectionRefusedError(111, "Connection refused")

    notifier = SmtpReportNotifier(config=_config(), smtp_factory=refuse)

    with pytest.raises(NotifierError, match="Connection refused"):
        notifier(PAYLOAD)
