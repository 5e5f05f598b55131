"""
Email scheduling schemas.

Field names follow the JSON wire format (camelCase).
"""

from typing import List, Optional
from pydantic import BaseModel, Field

from email_scheduler.scheduler.entities import EmailJob


class ScheduleEmailRequest(BaseModel):
    """
    Request to schedule an email.

    All fields are optional at the schema level so that missing or empty
    values reach the validation rules and produce a 400, not a 422.
    """

    recipientEmail: Optional[str] = Field(default=None, description="Recipient address", json_schema_extra={"examples": ["a@b.com"]})
    subject: Optional[str] = Field(default=None, description="Email subject")
    body: Optional[str] = Field(default=None, description="Email body")
    scheduledTime: Optional[str] = Field(
        default=None,
        description="When to send. ISO-8601 recommended; values without an offset are UTC",
        json_schema_extra={"examples": ["2026-01-01T09:30:00Z"]}
    )


class EmailJobResponse(BaseModel):
    """A stored email."""

    id: str
    recipientEmail: str
    subject: str
    body: str
    scheduledTime: str = Field(..., description="Canonical UTC timestamp")
    status: str = Field(..., description="pending or sent")
    createdAt: Optional[str] = None
    sentAt: Optional[str] = None

    @classmethod
    def from_entity(cls, email: EmailJob) -> "EmailJobResponse":
        """Convert scheduler EmailJob entity to API response."""
        return cls(**email.to_dict())


class ScheduleEmailResponse(BaseModel):
    """Response from schedule endpoint."""

    message: str = Field(default="Email scheduled successfully")
    email: EmailJobResponse


class MessageResponse(BaseModel):
    """Error response body."""

    message: str


class SchedulerStatsResponse(BaseModel):
    """Scheduler counters for the health endpoint."""

    total: int
    pending: int
    sent: int
    scheduler_running: bool
    poll_interval_seconds: float
