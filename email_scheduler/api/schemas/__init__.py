"""
API Schemas package.

Pydantic models for request/response validation.
"""

from .emails import (
    ScheduleEmailRequest,
    EmailJobResponse,
    ScheduleEmailResponse,
    MessageResponse,
    SchedulerStatsResponse,
)

__all__ = [
    "ScheduleEmailRequest",
    "EmailJobResponse",
    "ScheduleEmailResponse",
    "MessageResponse",
    "SchedulerStatsResponse",
]
