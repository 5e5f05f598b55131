"""
Emails router.

- POST /schedule - Validate and store an email for later delivery
- GET /scheduled - List every stored email (pending and sent)

Errors are returned as ``{"message": ...}``; storage failures are logged
with detail and answered with a generic 500.
"""

import logging
from typing import List

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from ..schemas.emails import (
    ScheduleEmailRequest,
    ScheduleEmailResponse,
    EmailJobResponse,
    MessageResponse,
)
from .._scheduler_state import get_scheduler_service
from email_scheduler.scheduler.errors import ValidationError, StorageError


logger = logging.getLogger(__name__)

router = APIRouter()

INTERNAL_ERROR_MESSAGE = "Internal server error"


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message})


@router.post(
    "/schedule",
    response_model=ScheduleEmailResponse,
    response_model_exclude_none=True,
    status_code=201,
    responses={400: {"model": MessageResponse}, 500: {"model": MessageResponse}},
)
async def schedule_email(request: ScheduleEmailRequest):
    """
    Schedule an email for delivery at scheduledTime.

    Validation order (first failure wins, 400):
    missing fields, email format, date format, time not in the future.
    """
    service = get_scheduler_service()

    try:
        email = await service.schedule_email(request.model_dump())
    except ValidationError as e:
        return _error(400, e.message)
    except StorageError as e:
        logger.error(f"Error scheduling email: {e}")
        return _error(500, INTERNAL_ERROR_MESSAGE)

    return ScheduleEmailResponse(
        message="Email scheduled successfully",
        email=EmailJobResponse.from_entity(email),
    )


@router.get(
    "/scheduled",
    response_model=List[EmailJobResponse],
    response_model_exclude_none=True,
    responses={500: {"model": MessageResponse}},
)
async def list_scheduled_emails():
    """List all scheduled emails in stored order, unfiltered."""
    service = get_scheduler_service()

    try:
        emails = await service.list_emails()
    except StorageError as e:
        logger.error(f"Error fetching scheduled emails: {e}")
        return _error(500, INTERNAL_ERROR_MESSAGE)

    return [EmailJobResponse.from_entity(email) for email in emails]
