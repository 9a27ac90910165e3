"""
Contact and quote submission handling, independent of the HTTP layer.

Flow per request:
    validate -> (quote) estimate -> build notification -> send -> save (optional)

Validation failures raise SubmissionError before anything is formatted.
Delivery/storage failures surface as DeliveryError/StorageError; there is no retry.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Mapping, Optional

from app.config import URGENT_TIMELINE
from app.costs import CostEstimate, estimate_quote_cost
from app.delivery import EmailSender
from app.notifications import (
    Notification,
    build_contact_notification,
    build_quote_notification,
)
from app.schemas import ContactSubmission, QuoteSubmission
from app.storage import SubmissionStore
from app.validation import validate_contact, validate_quote

logger = logging.getLogger(__name__)


@dataclass
class ContactOutcome:
    submission: ContactSubmission
    notification: Notification
    delivery_id: str
    submission_id: Optional[str] = None


@dataclass
class QuoteOutcome:
    submission: QuoteSubmission
    estimate: CostEstimate
    notification: Notification
    delivery_id: str
    submission_id: Optional[str] = None

    @property
    def urgent(self) -> bool:
        return self.submission.timeline == URGENT_TIMELINE


def process_contact(
    payload: Mapping[str, Any],
    *,
    sender: EmailSender,
    store: Optional[SubmissionStore] = None,
    submitted_at: Optional[datetime] = None,
) -> ContactOutcome:
    submission = validate_contact(payload)
    notification = build_contact_notification(submission, submitted_at)

    delivery_id = sender.send(notification)
    submission_id = None
    if store is not None:
        submission_id = store.save("contact", submission.model_dump(mode="json", by_alias=True))

    logger.info(
        "Contact form submitted: subject=%s email=%s submission_id=%s",
        submission.subject,
        submission.email,
        submission_id,
    )
    return ContactOutcome(submission, notification, delivery_id, submission_id)


def process_quote(
    payload: Mapping[str, Any],
    *,
    sender: EmailSender,
    store: Optional[SubmissionStore] = None,
    submitted_at: Optional[datetime] = None,
) -> QuoteOutcome:
    submission = validate_quote(payload)
    estimate = estimate_quote_cost(submission.room_dimensions, submission.features)
    notification = build_quote_notification(submission, estimate, submitted_at)

    delivery_id = sender.send(notification)
    submission_id = None
    if store is not None:
        record = submission.model_dump(mode="json", by_alias=True)
        record["estimatedCost"] = estimate.estimated_cost
        record["estimatedArea"] = estimate.area
        submission_id = store.save("quote", record)

    outcome = QuoteOutcome(submission, estimate, notification, delivery_id, submission_id)
    logger.info(
        "Quote request received: customer=%s <%s> project=%s area=%s cost=%s "
        "timeline=%s urgent=%s submission_id=%s",
        submission.name,
        submission.email,
        submission.project_type,
        estimate.area,
        estimate.estimated_cost,
        submission.timeline,
        outcome.urgent,
        submission_id,
    )
    return outcome
