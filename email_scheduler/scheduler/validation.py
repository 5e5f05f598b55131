"""
Schedule request validation.

Rules are checked in order and the first failure wins:
1. recipientEmail, subject, body, scheduledTime all present and non-empty
2. recipientEmail looks like local@domain.tld
3. scheduledTime parses to a timestamp
4. scheduledTime is strictly in the future
"""

import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Mapping, Optional

from dateutil import parser as date_parser

from .entities import utc_now
from .errors import ValidationError


EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

REQUIRED_FIELDS = ("recipientEmail", "subject", "body", "scheduledTime")

MSG_MISSING_FIELDS = "Missing required fields"
MSG_INVALID_EMAIL = "Invalid email format"
MSG_INVALID_DATE = "Invalid date format"
MSG_NOT_FUTURE = "Scheduled time must be in the future"

# Fills in whatever a non-ISO value leaves out
_PARSE_DEFAULT = datetime(1970, 1, 1)


@dataclass
class ScheduleRequest:
    """A schedule request that passed validation."""

    recipient_email: str
    subject: str
    body: str
    scheduled_time: datetime


def is_valid_email(value: str) -> bool:
    """Check for a basic local@domain.tld shape."""
    return bool(EMAIL_PATTERN.match(value))


def parse_scheduled_time(value: str) -> datetime:
    """
    Parse a client-supplied timestamp.

    ISO-8601 (``2030-01-01``, ``2030-01-01T09:00:00Z``,
    ``2030-01-01T18:00:00+09:00``) is tried first. Other common formats
    (``Jan 1 2030 9:00``, ``2030/01/01 09:00``) fall back to dateutil's
    general parser; parts missing there default to 1970-01-01 00:00, never
    to today, so ``"2030"`` means 2030-01-01. A value without an offset is
    taken to be UTC. Result is an aware UTC datetime.

    Raises:
        ValidationError: If the value is not a recognizable, representable timestamp
    """
    try:
        try:
            parsed = date_parser.isoparse(value)
        except ValueError:
            parsed = date_parser.parse(value, default=_PARSE_DEFAULT)

        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed.astimezone(timezone.utc)
    except (ValueError, OverflowError) as e:
        raise ValidationError(MSG_INVALID_DATE) from e


def validate_schedule_request(
    payload: Mapping[str, Any],
    now: Optional[datetime] = None,
) -> ScheduleRequest:
    """
    Validate a raw schedule request.

    Args:
        payload: Request fields keyed by their wire names
        now: Reference instant for the future check (default: current UTC time)

    Returns:
        ScheduleRequest with a parsed, UTC scheduled_time

    Raises:
        ValidationError: On the first rule that fails
    """
    values = [payload.get(name) for name in REQUIRED_FIELDS]
    if not all(isinstance(v, str) and v for v in values):
        raise ValidationError(MSG_MISSING_FIELDS)

    recipient_email, subject, body, scheduled_time = values

    if not is_valid_email(recipient_email):
        raise ValidationError(MSG_INVALID_EMAIL)

    scheduled_at = parse_scheduled_time(scheduled_time)

    if scheduled_at <= (now or utc_now()):
        raise ValidationError(MSG_NOT_FUTURE)

    return ScheduleRequest(
        recipient_email=recipient_email,
        subject=subject,
        body=body,
        scheduled_time=scheduled_at,
    )
