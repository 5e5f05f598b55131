"""
Scheduler Domain Entities.

- EmailJob: a single email queued for delivery at a future time
- EmailStatus: pending -> sent, once, irreversible

Field names are snake_case in Python and camelCase on the wire / on disk.
"""

from dataclasses import dataclass, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Optional
import uuid

# Keys every stored record must carry as strings
_STRING_FIELDS = ("id", "recipientEmail", "subject", "body", "scheduledTime", "status")
_OPTIONAL_STRING_FIELDS = ("createdAt", "sentAt")


class EmailStatus(str, Enum):
    """
    EmailJob status values.

    - PENDING: Waiting for its scheduled time
    - SENT: Delivered (terminal)
    """

    PENDING = "pending"
    SENT = "sent"


def generate_uuid() -> str:
    """Generate a new UUID string."""
    return str(uuid.uuid4())


def utc_now() -> datetime:
    """Get current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def format_timestamp(value: datetime) -> str:
    """
    Format a datetime as the canonical timestamp string.

    Naive datetimes are taken to be UTC. Output is always UTC with
    millisecond precision, e.g. ``2026-01-01T09:30:00.000Z``.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


def parse_timestamp(value: str) -> datetime:
    """Parse a canonical timestamp string back to an aware UTC datetime."""
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


@dataclass
class EmailJob:
    """
    Single email scheduled for delivery.

    Mutability rules:
    - id, recipient_email, subject, body, scheduled_time, created_at: Immutable
    - status: pending -> sent only, set by the dispatcher
    - sent_at: Write-once, set together with status
    """

    id: str
    recipient_email: str
    subject: str
    body: str
    scheduled_time: str
    status: EmailStatus = EmailStatus.PENDING
    created_at: Optional[str] = None
    sent_at: Optional[str] = None

    @classmethod
    def create(
        cls,
        recipient_email: str,
        subject: str,
        body: str,
        scheduled_time: datetime,
    ) -> "EmailJob":
        """Create a new EmailJob with generated ID and PENDING status."""
        return cls(
            id=generate_uuid(),
            recipient_email=recipient_email,
            subject=subject,
            body=body,
            scheduled_time=format_timestamp(scheduled_time),
            status=EmailStatus.PENDING,
            created_at=format_timestamp(utc_now()),
        )

    @property
    def scheduled_at(self) -> datetime:
        """Scheduled time as an aware datetime."""
        return parse_timestamp(self.scheduled_time)

    def is_due(self, now: datetime) -> bool:
        """Check if the job is pending and its time has come."""
        return self.status == EmailStatus.PENDING and self.scheduled_at <= now

    def mark_sent(self, sent_at: Optional[datetime] = None) -> "EmailJob":
        """Return a copy of this job advanced to SENT."""
        return replace(
            self,
            status=EmailStatus.SENT,
            sent_at=format_timestamp(sent_at or utc_now()),
        )

    def to_dict(self) -> dict:
        """Convert job to its JSON representation (camelCase keys)."""
        data = {
            "id": self.id,
            "recipientEmail": self.recipient_email,
            "subject": self.subject,
            "body": self.body,
            "scheduledTime": self.scheduled_time,
            "status": self.status.value,
        }
        if self.created_at is not None:
            data["createdAt"] = self.created_at
        if self.sent_at is not None:
            data["sentAt"] = self.sent_at
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "EmailJob":
        """
        Create job from its JSON representation.

        Raises:
            KeyError: If a required key is missing
            TypeError: If a content field is not a string
            ValueError: If scheduledTime is not a timestamp or status is unknown
        """
        for key in _STRING_FIELDS:
            if not isinstance(data[key], str):
                raise TypeError(f"{key} must be a string, got {type(data[key]).__name__}")
        for key in _OPTIONAL_STRING_FIELDS:
            if data.get(key) is not None and not isinstance(data[key], str):
                raise TypeError(f"{key} must be a string, got {type(data[key]).__name__}")
        parse_timestamp(data["scheduledTime"])

        return cls(
            id=data["id"],
            recipient_email=data["recipientEmail"],
            subject=data["subject"],
            body=data["body"],
            scheduled_time=data["scheduledTime"],
            status=EmailStatus(data["status"]),
            created_at=data.get("createdAt"),
            sent_at=data.get("sentAt"),
        )
