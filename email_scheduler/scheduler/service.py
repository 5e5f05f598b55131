"""
Scheduler Service - Main entry point for the email scheduler.

This service wires the scheduler components together:
- EmailStore (storage)
- EmailDispatcher (tick loop)
- Delivery transport

Usage:
    service = SchedulerService.create(data_file, poll_interval=60)
    service.start()
    # ... dispatcher ticks in the background ...
    await service.stop()
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Mapping, Optional

from .delivery import DeliveryProtocol, LoggingDelivery
from .dispatcher import EmailDispatcher, DEFAULT_POLL_INTERVAL
from .entities import EmailJob, EmailStatus, utc_now
from .persistence import EmailStore
from .validation import validate_schedule_request


logger = logging.getLogger(__name__)


class SchedulerService:
    """
    Coordinates the store and dispatcher.

    Provides:
    - Component initialization and wiring
    - Startup / graceful shutdown of the tick loop
    - API-friendly schedule and list operations
    """

    def __init__(
        self,
        store: EmailStore,
        dispatcher: EmailDispatcher,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """
        Initialize SchedulerService with its components.

        Use SchedulerService.create() for convenient construction.
        """
        self.store = store
        self.dispatcher = dispatcher
        self._clock = clock or utc_now

    @classmethod
    def create(
        cls,
        data_file: str | Path,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        delivery: Optional[DeliveryProtocol] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> "SchedulerService":
        """
        Create a SchedulerService with all components wired together.

        Args:
            data_file: Path to the JSON collection
            poll_interval: Seconds between dispatcher ticks
            delivery: Transport (default: LoggingDelivery)
            clock: Current-time source shared by all components

        Returns:
            Configured SchedulerService
        """
        store = EmailStore(data_file)
        dispatcher = EmailDispatcher(
            store=store,
            delivery=delivery or LoggingDelivery(clock=clock),
            poll_interval=poll_interval,
            clock=clock,
        )
        return cls(store=store, dispatcher=dispatcher, clock=clock)

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def start(self) -> None:
        """Start the dispatcher tick loop. Must be called from a running event loop."""
        logger.info("Starting scheduler service...")
        self.dispatcher.start()

    async def stop(self) -> None:
        """Stop the dispatcher tick loop."""
        if not self.dispatcher.is_running():
            return

        logger.info("Stopping scheduler service...")
        await self.dispatcher.stop()

    @property
    def is_running(self) -> bool:
        """Check if scheduler is running."""
        return self.dispatcher.is_running()

    # =========================================================================
    # Email Operations (API-friendly)
    # =========================================================================

    async def schedule_email(self, payload: Mapping[str, Any]) -> EmailJob:
        """
        Validate a schedule request and persist a new pending email.

        Args:
            payload: Request fields keyed by wire name
                (recipientEmail, subject, body, scheduledTime)

        Returns:
            The created EmailJob

        Raises:
            ValidationError: If the request fails validation (nothing is written)
            StorageError: If the collection cannot be loaded or saved
        """
        request = validate_schedule_request(payload, now=self._clock())

        email = EmailJob.create(
            recipient_email=request.recipient_email,
            subject=request.subject,
            body=request.body,
            scheduled_time=request.scheduled_time,
        )

        async with self.store.lock:
            emails = await self.store.load_all()
            emails.append(email)
            await self.store.save_all(emails)

        logger.info(f"Scheduled email {email.id} for {email.scheduled_time}")
        return email

    async def list_emails(self) -> list[EmailJob]:
        """
        List every stored email in stored order.

        Raises:
            StorageError: If the collection cannot be loaded
        """
        async with self.store.lock:
            return await self.store.load_all()

    async def get_stats(self) -> dict:
        """
        Get scheduler statistics.

        Returns:
            Dict with total, pending and sent counts plus loop state
        """
        emails = await self.list_emails()
        pending = sum(1 for e in emails if e.status == EmailStatus.PENDING)
        return {
            "total": len(emails),
            "pending": pending,
            "sent": len(emails) - pending,
            "scheduler_running": self.is_running,
            "poll_interval_seconds": self.dispatcher.poll_interval,
        }
