"""
Notification emails for contact and quote submissions.
Jinja2-based HTML rendering; delivery is handled by app.delivery.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional

from jinja2 import Environment, FileSystemLoader
from pydantic import BaseModel

from app import config as cfg
from app.costs import CostEstimate
from app.formatting import (
    feature_label,
    format_currency,
    format_number,
    format_submission_time,
    whatsapp_link,
)
from app.schemas import ContactSubmission, QuoteSubmission


class Notification(BaseModel):
    """An outbound email ready to be handed to an EmailSender."""

    subject: str
    body_html: str
    from_email: str
    to_email: str
    reply_to: Optional[str] = None


_env: Optional[Environment] = None


def get_environment() -> Environment:
    """Lazy-loaded Jinja2 environment with the notification filters registered."""
    global _env
    if _env is None:
        env = Environment(
            loader=FileSystemLoader(cfg.TEMPLATES_DIR),
            autoescape=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        env.filters["feature_label"] = feature_label
        env.filters["currency"] = format_currency
        env.filters["number"] = format_number
        _env = env
    return _env


def _base_context(submitted_at: Optional[datetime]) -> Dict[str, Any]:
    return {
        "business_name": cfg.BUSINESS_NAME,
        "business_tagline": cfg.BUSINESS_TAGLINE,
        "business_phone": cfg.BUSINESS_PHONE,
        "business_email": cfg.BUSINESS_CONTACT_EMAIL,
        "submitted_at": format_submission_time(submitted_at),
    }


def _envelope(subject: str, body_html: str, reply_to: str) -> Notification:
    settings = cfg.get_settings()
    return Notification(
        subject=subject,
        body_html=body_html,
        from_email=settings.SENDER_EMAIL,
        to_email=settings.BUSINESS_EMAIL,
        reply_to=reply_to,
    )


def build_contact_notification(
    submission: ContactSubmission, submitted_at: Optional[datetime] = None
) -> Notification:
    context = _base_context(submitted_at)
    context["submission"] = submission
    html = get_environment().get_template("contact_email.html").render(**context)
    subject = f"{cfg.BUSINESS_NAME} - {submission.subject}: {submission.name}"
    return _envelope(subject, html, submission.email)


def build_quote_notification(
    submission: QuoteSubmission,
    estimate: CostEstimate,
    submitted_at: Optional[datetime] = None,
) -> Notification:
    whatsapp_url = None
    if submission.preferred_contact == "whatsapp":
        greeting = (
            f"Hello {submission.name}, thank you for your quote request with {cfg.BUSINESS_NAME}."
        )
        whatsapp_url = whatsapp_link(submission.phone, greeting)

    context = _base_context(submitted_at)
    context.update(
        submission=submission,
        estimate=estimate,
        urgent=submission.timeline == cfg.URGENT_TIMELINE,
        whatsapp_url=whatsapp_url,
    )
    html = get_environment().get_template("quote_email.html").render(**context)
    subject = (
        f"{cfg.BUSINESS_NAME} - Quote Request: {submission.name} ({submission.project_type})"
    )
    return _envelope(subject, html, submission.email)
