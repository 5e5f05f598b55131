"""
Scheduler-specific exceptions.
"""


class SchedulerError(Exception):
    """Base exception for all scheduler errors."""
    pass


class ValidationError(SchedulerError):
    """
    Raised when a schedule request is malformed or out of range.

    The message names the rule that failed and is safe to return to clients.
    """

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class StorageError(SchedulerError):
    """
    Raised when the persisted email collection cannot be read or written.

    Examples:
    - File exists but is not valid JSON
    - JSON is not a list of email records
    - Filesystem errors while reading or replacing the file
    """

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Storage error for {path}: {reason}")


class DeliveryError(SchedulerError):
    """
    Raised by a delivery transport when an email could not be sent.

    The dispatcher leaves the job pending, so it is due again on the next tick.
    """

    def __init__(self, job_id: str, reason: str):
        self.job_id = job_id
        self.reason = reason
        super().__init__(f"Delivery failed for email {job_id}: {reason}")
