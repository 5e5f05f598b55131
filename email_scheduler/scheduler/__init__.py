"""
Email Scheduler Core Module.
"""

from .entities import (
    EmailStatus,
    EmailJob,
)
from .errors import (
    SchedulerError,
    ValidationError,
    StorageError,
    DeliveryError,
)
from .persistence import EmailStore
from .delivery import DeliveryProtocol, LoggingDelivery
from .dispatcher import EmailDispatcher, DispatcherState
from .validation import ScheduleRequest, validate_schedule_request
from .service import SchedulerService

__all__ = [
    # Entities
    "EmailStatus",
    "EmailJob",
    # Errors
    "SchedulerError",
    "ValidationError",
    "StorageError",
    "DeliveryError",
    # Persistence
    "EmailStore",
    # Delivery
    "DeliveryProtocol",
    "LoggingDelivery",
    # Dispatcher
    "EmailDispatcher",
    "DispatcherState",
    # Validation
    "ScheduleRequest",
    "validate_schedule_request",
    # Service
    "SchedulerService",
]
