"""
Process-wide SchedulerService for the API.

The lifespan creates it from env config; routers fetch it per request.
Tests may assign ``_scheduler_service`` directly to swap in their own.
"""

from pathlib import Path
from typing import Optional

from email_scheduler.scheduler.dispatcher import DEFAULT_POLL_INTERVAL
from email_scheduler.scheduler.service import SchedulerService


_scheduler_service: Optional[SchedulerService] = None


def init_scheduler_service(
    data_file: str | Path,
    poll_interval: float = DEFAULT_POLL_INTERVAL,
) -> SchedulerService:
    """
    Create the service over ``data_file`` unless one already exists.

    The dispatcher is not started here; the lifespan does that when
    SCHEDULER_ENABLED allows it.
    """
    global _scheduler_service

    if _scheduler_service is None:
        _scheduler_service = SchedulerService.create(data_file, poll_interval=poll_interval)
    return _scheduler_service


def get_scheduler_service() -> SchedulerService:
    """
    Return the active service.

    Raises:
        RuntimeError: before init_scheduler_service() has run
    """
    if _scheduler_service is None:
        raise RuntimeError("Email scheduler not initialized; the app lifespan has not run")
    return _scheduler_service


async def shutdown_scheduler_service() -> None:
    """Stop the dispatcher (if running) and forget the service."""
    global _scheduler_service

    service, _scheduler_service = _scheduler_service, None
    if service is not None:
        await service.stop()
