"""
Scheduler Test Fixtures.

Base fixtures:
  - Empty data file in a temp directory
  - Mocked clock at fixed time
  - Recording delivery transport

Per-test fixtures:
  - Helper to pre-populate the store with emails
"""

import pytest
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Callable

from email_scheduler.scheduler import (
    EmailStore,
    EmailDispatcher,
    EmailJob,
    EmailStatus,
    DeliveryError,
    SchedulerService,
)


# Fixed time for deterministic tests
FIXED_DATETIME = datetime(2026, 1, 1, 0, 0, 0, tzinfo=timezone.utc)


class MockClock:
    """
    Mock clock for deterministic time control.

    - Starts at fixed epoch
    - Advances only when explicitly ticked
    """

    def __init__(self, start_time: datetime = FIXED_DATETIME):
        self._current = start_time

    def now(self) -> datetime:
        return self._current

    def tick(self, seconds: int = 1) -> None:
        """Advance time by specified seconds."""
        self._current += timedelta(seconds=seconds)

    def set(self, time: datetime) -> None:
        """Set time to specific value."""
        self._current = time


class RecordingDelivery:
    """
    Delivery double that records every email it is asked to send.

    Fails with DeliveryError for recipients listed in ``fail_for``.
    """

    def __init__(self, clock: MockClock):
        self.clock = clock
        self.delivered: list[EmailJob] = []
        self.fail_for: set[str] = set()

    async def deliver(self, job: EmailJob) -> EmailJob:
        if job.recipient_email in self.fail_for:
            raise DeliveryError(job.id, "recipient rejected")
        self.delivered.append(job)
        return job.mark_sent(self.clock.now())


# =============================================================================
# Store Fixtures
# =============================================================================


@pytest.fixture
def data_file(tmp_path: Path) -> Path:
    """Path to a not-yet-existing email collection."""
    return tmp_path / "data" / "emails.json"


@pytest.fixture
def store(data_file: Path) -> EmailStore:
    """Create a fresh EmailStore over an empty directory."""
    return EmailStore(data_file)


# =============================================================================
# Component Fixtures
# =============================================================================


@pytest.fixture
def mock_clock() -> MockClock:
    """Create a mock clock at fixed time."""
    return MockClock()


@pytest.fixture
def delivery(mock_clock: MockClock) -> RecordingDelivery:
    """Create a recording delivery transport."""
    return RecordingDelivery(mock_clock)


@pytest.fixture
def dispatcher(
    store: EmailStore,
    delivery: RecordingDelivery,
    mock_clock: MockClock,
) -> EmailDispatcher:
    """Create a Dispatcher with all dependencies."""
    return EmailDispatcher(
        store=store,
        delivery=delivery,
        poll_interval=0.05,  # Fast polling for tests
        clock=mock_clock.now,
    )


@pytest.fixture
def service(
    store: EmailStore,
    dispatcher: EmailDispatcher,
    mock_clock: MockClock,
) -> SchedulerService:
    """Create a SchedulerService sharing the test store and clock."""
    return SchedulerService(store=store, dispatcher=dispatcher, clock=mock_clock.now)


# =============================================================================
# Helper Fixtures
# =============================================================================


@pytest.fixture
def make_email() -> Callable[..., EmailJob]:
    """Factory for EmailJob entities relative to FIXED_DATETIME."""

    def _make(
        offset_seconds: int = 60,
        status: EmailStatus = EmailStatus.PENDING,
        recipient_email: str = "a@b.com",
        subject: str = "Hi",
        body: str = "Test",
    ) -> EmailJob:
        email = EmailJob.create(
            recipient_email=recipient_email,
            subject=subject,
            body=body,
            scheduled_time=FIXED_DATETIME + timedelta(seconds=offset_seconds),
        )
        email.status = status
        return email

    return _make


@pytest.fixture
def populate(store: EmailStore) -> Callable:
    """Write the given emails to the store, replacing its contents."""

    async def _populate(*emails: EmailJob) -> list[EmailJob]:
        await store.save_all(list(emails))
        return list(emails)

    return _populate

