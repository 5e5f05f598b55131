"""
Email delivery transports.

The dispatcher only depends on ``DeliveryProtocol``. ``LoggingDelivery`` is
the built-in transport: it records the send in the log and always succeeds.
A real transport raises ``DeliveryError`` on failure and applies its own
timeout.
"""

import logging
from datetime import datetime
from typing import Callable, Optional, Protocol

from .entities import EmailJob, utc_now, format_timestamp


logger = logging.getLogger(__name__)


class DeliveryProtocol(Protocol):
    """Protocol for email delivery."""

    async def deliver(self, job: EmailJob) -> EmailJob:
        """
        Deliver an email and return the job advanced to SENT.

        Raises:
            DeliveryError: If the email could not be sent
        """
        ...


class LoggingDelivery:
    """Delivery stub that logs the email instead of sending it."""

    def __init__(self, clock: Optional[Callable[[], datetime]] = None):
        self._clock = clock or utc_now
        self.sent_count = 0

    async def deliver(self, job: EmailJob) -> EmailJob:
        sent_at = self._clock()

        logger.info("[Delivery] SENDING EMAIL:")
        logger.info(f"[Delivery] To: {job.recipient_email}")
        logger.info(f"[Delivery] Subject: {job.subject}")
        logger.info(f"[Delivery] Body: {job.body}")
        logger.info(f"[Delivery] Sent at: {format_timestamp(sent_at)}")

        self.sent_count += 1
        return job.mark_sent(sent_at)
