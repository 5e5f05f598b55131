"""
Dispatcher for scheduled emails.

Runs one tick per fixed interval:
1. Load the full snapshot
2. Capture "now" once for the whole tick
3. Deliver every pending email whose scheduled time has come, mark it sent
4. Save the snapshot only if something changed

A failing tick is logged and abandoned; the next tick starts from whatever
is on disk, so the loop never dies on a bad cycle.
"""

import asyncio
import logging
from datetime import datetime
from enum import Enum
from typing import Callable, Optional

from .delivery import DeliveryProtocol
from .entities import utc_now
from .errors import DeliveryError, StorageError
from .persistence import EmailStore


logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL = 60.0


class DispatcherState(str, Enum):
    """Dispatcher lifecycle states."""

    STOPPED = "STOPPED"
    RUNNING = "RUNNING"
    STOPPING = "STOPPING"


class EmailDispatcher:
    """
    Finds due emails and hands them to the delivery transport.

    What Dispatcher MUST NOT do:
    - Touch emails that are already sent
    - Modify anything but status / sent_at
    - Write when no email changed
    """

    def __init__(
        self,
        store: EmailStore,
        delivery: DeliveryProtocol,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """
        Initialize Dispatcher.

        Args:
            store: EmailStore holding the collection
            delivery: Transport used to send due emails
            poll_interval: Seconds between ticks
            clock: Returns the current aware UTC time (injectable for tests)
        """
        self.store = store
        self.delivery = delivery
        self.poll_interval = poll_interval
        self._clock = clock or utc_now

        self._state = DispatcherState.STOPPED
        self._task: Optional[asyncio.Task] = None
        self._stop_event: Optional[asyncio.Event] = None
        self._tick_count = 0
        self._last_tick_at: Optional[datetime] = None

    @property
    def state(self) -> DispatcherState:
        """Get current dispatcher state."""
        return self._state

    @property
    def tick_count(self) -> int:
        """Number of ticks that ran to completion."""
        return self._tick_count

    @property
    def last_tick_at(self) -> Optional[datetime]:
        """Clock reading of the most recent completed tick (None before the first)."""
        return self._last_tick_at

    # =========================================================================
    # Single Tick
    # =========================================================================

    async def run_tick(self) -> int:
        """
        Run one due-check-and-deliver pass.

        Returns:
            Number of emails marked sent in this tick

        Raises:
            StorageError: If the snapshot cannot be loaded or saved

        Exceptions other than DeliveryError abort the tick, but emails sent
        before the failure are saved first.
        """
        async with self.store.lock:
            emails = await self.store.load_all()
            now = self._clock()
            sent = 0

            try:
                for index, email in enumerate(emails):
                    if not email.is_due(now):
                        continue

                    try:
                        emails[index] = await self.delivery.deliver(email)
                    except DeliveryError as e:
                        logger.error(f"[Dispatcher] {e}; leaving email pending")
                        continue

                    sent += 1
            finally:
                # Sent emails are saved even when a later delivery raised
                if sent:
                    await self.store.save_all(emails)
                    logger.info(f"[Dispatcher] Sent {sent} email(s)")

            if not sent:
                logger.debug("[Dispatcher] No emails due")

        self._tick_count += 1
        self._last_tick_at = now
        return sent

    # =========================================================================
    # Tick Loop
    # =========================================================================

    def start(self) -> None:
        """
        Start the tick loop as a background task on the running event loop.

        The first tick runs immediately, then once per poll_interval.
        """
        if self._state != DispatcherState.STOPPED:
            raise RuntimeError(f"Cannot start dispatcher in {self._state.value} state")

        self._stop_event = asyncio.Event()
        self._state = DispatcherState.RUNNING
        self._task = asyncio.create_task(self._tick_loop())
        logger.info(f"[Dispatcher] Email scheduler initialized (interval: {self.poll_interval}s)")

    async def stop(self) -> None:
        """Stop the tick loop, letting an in-flight tick finish."""
        if self._state == DispatcherState.STOPPED:
            return

        logger.info("[Dispatcher] Stopping dispatcher...")
        self._state = DispatcherState.STOPPING
        self._stop_event.set()

        if self._task is not None:
            await self._task
            self._task = None

        self._state = DispatcherState.STOPPED
        logger.info("[Dispatcher] Dispatcher stopped")

    def is_running(self) -> bool:
        """Check if dispatcher is running."""
        return self._state == DispatcherState.RUNNING

    async def _tick_loop(self) -> None:
        """Main tick loop."""
        logger.info("[Dispatcher] Tick loop started")

        while not self._stop_event.is_set():
            try:
                await self.run_tick()
            except StorageError as e:
                logger.error(f"[Dispatcher] Error checking scheduled emails: {e}")
            except Exception as e:
                logger.error(f"[Dispatcher] Error checking scheduled emails: {e}", exc_info=True)

            try:
                await asyncio.wait_for(self._stop_event.wait(), timeout=self.poll_interval)
            except asyncio.TimeoutError:
                pass

        logger.info("[Dispatcher] Tick loop ended")
