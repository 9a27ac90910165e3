import types

import pytest

from app.config import Settings
from app.delivery import (
    DeliveryError,
    LogEmailSender,
    SendGridEmailSender,
    build_email_sender,
)
from app.notifications import Notification

NOTE = Notification(
    subject="PVC Cabinets Haiti - general: Marie",
    body_html="<p>hi</p>",
    from_email="noreply@pvchaiti.com",
    to_email="info@pvchaiti.com",
    reply_to="marie@example.ht",
)


class DummySendGridClient:
    def __init__(self, status_code=202, error=None):
        self.status_code = status_code
        self.error = error
        self.messages = []

    def send(self, message):
        if self.error:
            raise self.error
        self.messages.append(message)
        return types.SimpleNamespace(
            status_code=self.status_code, headers={"X-Message-Id": "sg-123"}
        )


def test_log_sender_returns_ack(caplog):
    with caplog.at_level("INFO", logger="app.delivery"):
        ack = LogEmailSender().send(NOTE)
    assert ack.startswith("log-")
    assert "Email would be sent" in caplog.text


def test_sendgrid_sender_builds_message():
    client = DummySendGridClient()
    ack = SendGridEmailSender("key", client=client).send(NOTE)
    assert ack == "sg-123"
    body = client.messages[0].get()
    assert body["subject"] == NOTE.subject
    assert body["from"]["email"] == "noreply@pvchaiti.com"
    assert body["reply_to"]["email"] == "marie@example.ht"
    assert body["personalizations"][0]["to"][0]["email"] == "info@pvchaiti.com"


def test_sendgrid_failure_raises_delivery_error():
    client = DummySendGridClient(error=ConnectionError("timeout"))
    with pytest.raises(DeliveryError):
        SendGridEmailSender("key", client=client).send(NOTE)


def test_sendgrid_rejection_raises_delivery_error():
    client = DummySendGridClient(status_code=401)
    with pytest.raises(DeliveryError):
        SendGridEmailSender("key", client=client).send(NOTE)


def test_build_email_sender():
    assert isinstance(build_email_sender(Settings(EMAIL_BACKEND="log")), LogEmailSender)
    assert isinstance(
        build_email_sender(Settings(EMAIL_BACKEND="sendgrid", SENDGRID_API_KEY="key")),
        SendGridEmailSender,
    )
    with pytest.raises(ValueError):
        build_email_sender(Settings(EMAIL_BACKEND="sendgrid", SENDGRID_API_KEY=""))
    with pytest.raises(ValueError):
        build_email_sender(Settings(EMAIL_BACKEND="pigeon"))
