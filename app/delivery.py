"""
Outbound delivery of submission notifications.

The handlers only see the EmailSender protocol; which implementation runs is a
deployment choice (EMAIL_BACKEND). Each send is a single attempt.
"""

from __future__ import annotations

import logging
import uuid
from typing import Optional, Protocol

from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Mail, ReplyTo

from app.config import Settings
from app.notifications import Notification

logger = logging.getLogger(__name__)


class DeliveryError(RuntimeError):
    """The notification could not be handed to the mail provider."""


class EmailSender(Protocol):
    def send(self, notification: Notification) -> str:
        """Deliver the notification and return a provider acknowledgment id.

        Raises:
            DeliveryError: if delivery failed
        """
        ...


class LogEmailSender:
    """Records notifications in the log instead of sending them."""

    def send(self, notification: Notification) -> str:
        ack = f"log-{uuid.uuid4().hex[:12]}"
        logger.info(
            "Email would be sent: to=%s subject=%s (%d bytes html) ack=%s",
            notification.to_email,
            notification.subject,
            len(notification.body_html),
            ack,
        )
        return ack


class SendGridEmailSender:
    """Delivers notifications through the SendGrid API."""

    def __init__(self, api_key: str, client: Optional[SendGridAPIClient] = None) -> None:
        if not api_key and client is None:
            raise ValueError("SendGrid API key not configured")
        self._api_key = api_key
        self._client = client

    @property
    def client(self) -> SendGridAPIClient:
        """Lazy-loaded SendGrid client."""
        if self._client is None:
            self._client = SendGridAPIClient(api_key=self._api_key)
        return self._client

    def _build_message(self, notification: Notification) -> Mail:
        message = Mail(
            from_email=notification.from_email,
            to_emails=notification.to_email,
            subject=notification.subject,
            html_content=notification.body_html,
        )
        if notification.reply_to:
            message.reply_to = ReplyTo(notification.reply_to)
        return message

    def send(self, notification: Notification) -> str:
        try:
            response = self.client.send(self._build_message(notification))
        except Exception as e:
            logger.error("SendGrid delivery failed: to=%s error=%s", notification.to_email, e)
            raise DeliveryError(f"SendGrid delivery failed: {e}") from e

        if response.status_code >= 400:
            raise DeliveryError(f"SendGrid rejected the message (HTTP {response.status_code})")
        message_id = response.headers.get("X-Message-Id", "") if response.headers else ""
        logger.info(
            "Email sent: to=%s subject=%s status=%s message_id=%s",
            notification.to_email,
            notification.subject[:50],
            response.status_code,
            message_id,
        )
        return message_id


def build_email_sender(settings: Settings) -> EmailSender:
    backend = (settings.EMAIL_BACKEND or "log").strip().lower()
    if backend == "sendgrid":
        return SendGridEmailSender(settings.SENDGRID_API_KEY)
    if backend != "log":
        raise ValueError(f"Unknown EMAIL_BACKEND: {settings.EMAIL_BACKEND!r}")
    return LogEmailSender()
