"""Display helpers shared by notifications, the calculator and the site."""

from __future__ import annotations

import math
import re
from datetime import datetime
from typing import Optional
from urllib.parse import quote
from zoneinfo import ZoneInfo

from app.config import CURRENCY, get_settings

_FR_DAYS = ("lundi", "mardi", "mercredi", "jeudi", "vendredi", "samedi", "dimanche")
_FR_MONTHS = (
    "janvier",
    "février",
    "mars",
    "avril",
    "mai",
    "juin",
    "juillet",
    "août",
    "septembre",
    "octobre",
    "novembre",
    "décembre",
)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves going up (as the site's JS does)."""
    return int(math.floor(value + 0.5))


def format_currency(amount: float, currency: str = CURRENCY) -> str:
    """Whole-unit amount with thousands separators, e.g. ``54,000 HTG``."""
    try:
        return f"{round_half_up(float(amount)):,} {currency}"
    except (TypeError, ValueError):
        return str(amount)


def format_phone_number(phone: str) -> str:
    """Format Haitian numbers as ``+509 XX XX XXXX``; other input passes through."""
    cleaned = re.sub(r"\D", "", phone or "")
    if cleaned.startswith("509"):
        return f"+{cleaned[:3]} {cleaned[3:5]} {cleaned[5:7]} {cleaned[7:]}"
    if len(cleaned) == 8:
        return f"+509 {cleaned[:2]} {cleaned[2:4]} {cleaned[4:]}"
    return phone


def whatsapp_link(phone: str, message: str) -> str:
    clean_phone = re.sub(r"\D", "", phone or "")
    full_phone = clean_phone if clean_phone.startswith("509") else f"509{clean_phone}"
    # Same unreserved set as JS encodeURIComponent
    text = quote(message or "", safe="!~*'()")
    return f"https://wa.me/{full_phone}?text={text}"


def feature_label(feature: str) -> str:
    """``soft-close-hinges`` -> ``Soft Close Hinges``."""
    words = (feature or "").replace("-", " ").split(" ")
    return " ".join(w[:1].upper() + w[1:] for w in words)


def format_submission_time(moment: Optional[datetime] = None, tz_name: Optional[str] = None) -> str:
    """Render a timestamp in French full-date/medium-time style in the business time zone.

    Naive datetimes are taken as UTC. Example: ``lundi 19 octobre 2026 à 14:05:09``.
    """
    tz = ZoneInfo(tz_name or get_settings().TIMEZONE)
    if moment is None:
        local = datetime.now(tz)
    else:
        if moment.tzinfo is None:
            moment = moment.replace(tzinfo=ZoneInfo("UTC"))
        local = moment.astimezone(tz)
    return (
        f"{_FR_DAYS[local.weekday()]} {local.day} {_FR_MONTHS[local.month - 1]} {local.year}"
        f" à {local:%H:%M:%S}"
    )


def format_number(value: float) -> str:
    """Drop a trailing ``.0`` so whole numbers read as entered (``12`` not ``12.0``)."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
