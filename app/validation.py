"""Presence/format checks for incoming form payloads.

Checks run in a fixed order (required fields, email, room dimensions, types) and
stop at the first failure, which is raised as SubmissionError.
"""

from __future__ import annotations

import re
from typing import Any, Dict, List, Mapping, Optional, Sequence, Type, TypeVar

from pydantic import BaseModel, ValidationError

from app.schemas import ContactSubmission, QuoteSubmission

EMAIL_RE = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")

CONTACT_REQUIRED_FIELDS = ("name", "email", "phone", "subject", "message")
QUOTE_REQUIRED_FIELDS = (
    "name",
    "email",
    "phone",
    "address",
    "projectType",
    "cabinetStyle",
    "finish",
    "budget",
    "timeline",
)
ROOM_DIMENSION_FIELDS = ("length", "width", "height")
# Falsy scalars the form may post when no dimensions were entered
NO_DIMENSIONS = (None, False, 0, "")

M = TypeVar("M", bound=BaseModel)


class SubmissionError(ValueError):
    """A submission was rejected; carries the client-facing message."""

    def __init__(
        self,
        message: str,
        *,
        missing_fields: Optional[List[str]] = None,
        invalid_fields: Optional[List[str]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.missing_fields = missing_fields
        self.invalid_fields = invalid_fields

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"error": self.message}
        if self.missing_fields:
            body["missingFields"] = self.missing_fields
        if self.invalid_fields:
            body["invalidFields"] = self.invalid_fields
        return body


def missing_fields(payload: Mapping[str, Any], required: Sequence[str]) -> List[str]:
    """Required fields that are absent or falsy, in declared order."""
    return [f for f in required if not payload.get(f)]


def is_valid_email(value: Any) -> bool:
    return isinstance(value, str) and EMAIL_RE.fullmatch(value) is not None


def _strip_blank_optionals(payload: Mapping[str, Any]) -> Dict[str, Any]:
    # Forms post "" / null for untouched optional inputs
    return {k: v for k, v in payload.items() if v is not None and v != ""}


def _build(model: Type[M], payload: Mapping[str, Any]) -> M:
    try:
        return model.model_validate(_strip_blank_optionals(payload))
    except ValidationError as e:
        fields = []
        for err in e.errors():
            name = ".".join(str(p) for p in err.get("loc", ()))
            if name and name not in fields:
                fields.append(name)
        raise SubmissionError("Invalid field values", invalid_fields=fields) from e


def validate_contact(payload: Mapping[str, Any]) -> ContactSubmission:
    if missing_fields(payload, CONTACT_REQUIRED_FIELDS):
        raise SubmissionError("Missing required fields")
    if not is_valid_email(payload.get("email")):
        raise SubmissionError("Invalid email format")
    return _build(ContactSubmission, payload)


def validate_quote(payload: Mapping[str, Any]) -> QuoteSubmission:
    missing = missing_fields(payload, QUOTE_REQUIRED_FIELDS)
    if missing:
        raise SubmissionError("Missing required fields", missing_fields=missing)
    if not is_valid_email(payload.get("email")):
        raise SubmissionError("Invalid email format")

    dims = payload.get("roomDimensions")
    if dims in NO_DIMENSIONS:
        payload = {k: v for k, v in payload.items() if k != "roomDimensions"}
    elif not isinstance(dims, Mapping) or missing_fields(dims, ROOM_DIMENSION_FIELDS):
        raise SubmissionError("Incomplete room dimensions")
    return _build(QuoteSubmission, payload)
