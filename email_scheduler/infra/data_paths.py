"""
Data path and runtime configuration helpers for email-scheduler.

Directory structure:
data/
 └── emails.json               # Scheduled email collection
logs/                          # Daily log files

Environment Variables:
- PORT: HTTP port (default: 3001)
- HOST: Bind address (default: 0.0.0.0)
- EMAIL_DATA_FILE: Override the email collection path (default: data/emails.json)
- SCHEDULER_INTERVAL_SECONDS: Seconds between dispatcher ticks (default: 60)
- SCHEDULER_ENABLED: Start the dispatcher with the app (default: true)
- LOG_DIR: Directory for log files (default: logs)
"""

import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_PORT = 3001
DEFAULT_HOST = "0.0.0.0"
DEFAULT_SCHEDULER_INTERVAL_SECONDS = 60

# =============================================================================
# Environment Variable Configuration
# =============================================================================

def _get_env_bool(key: str, default: bool = False) -> bool:
    """Get boolean value from environment variable."""
    val = os.getenv(key, "").lower()
    if val in ("true", "1", "yes", "on"):
        return True
    elif val in ("false", "0", "no", "off"):
        return False
    return default


def _get_env_int(key: str, default: int) -> int:
    """Get integer value from environment variable."""
    val = os.getenv(key)
    if val is not None:
        try:
            return int(val)
        except ValueError:
            logger.warning(f"[DataPaths] Invalid integer for {key}: {val}, using default: {default}")
    return default

# =============================================================================
# Base Paths (relative to project root)
# =============================================================================

def get_project_root() -> Path:
    """
    Get the project root directory.

    File is at email_scheduler/infra/data_paths.py, so project root is 3 levels up.

    Returns:
        Path: Project root directory
    """
    return Path(__file__).parent.parent.parent.resolve()


def get_data_root() -> Path:
    """
    Get the data root directory.

    Returns:
        Path: data/ directory path
    """
    return get_project_root() / "data"


def get_emails_file_path() -> Path:
    """
    Get the scheduled email collection file path.

    Can be overridden via EMAIL_DATA_FILE environment variable.

    Returns:
        Path: emails.json path
    """
    env_path = os.getenv("EMAIL_DATA_FILE")
    if env_path:
        return Path(env_path)
    return get_data_root() / "emails.json"


def get_logs_dir() -> Path:
    """Get log directory (LOG_DIR, default: logs/ under the project root)."""
    env_dir = os.getenv("LOG_DIR")
    if env_dir:
        return Path(env_dir)
    return get_project_root() / "logs"

# =============================================================================
# Server / Scheduler Settings
# =============================================================================

def get_port() -> int:
    """Get HTTP port from PORT, falling back to 3001."""
    return _get_env_int("PORT", DEFAULT_PORT)


def get_host() -> str:
    """Get bind address from HOST."""
    return os.getenv("HOST", DEFAULT_HOST)


def get_scheduler_interval() -> int:
    """
    Get dispatcher tick interval in seconds.

    Non-positive values are rejected in favor of the default.
    """
    interval = _get_env_int("SCHEDULER_INTERVAL_SECONDS", DEFAULT_SCHEDULER_INTERVAL_SECONDS)
    if interval <= 0:
        logger.warning(
            f"[DataPaths] SCHEDULER_INTERVAL_SECONDS must be positive, "
            f"using default: {DEFAULT_SCHEDULER_INTERVAL_SECONDS}"
        )
        return DEFAULT_SCHEDULER_INTERVAL_SECONDS
    return interval


def is_scheduler_enabled() -> bool:
    """Whether the dispatcher loop starts with the app."""
    return _get_env_bool("SCHEDULER_ENABLED", True)


def ensure_data_directories() -> None:
    """Create the data directory holding the email collection."""
    path = get_emails_file_path().parent
    path.mkdir(parents=True, exist_ok=True)
    logger.debug(f"[DataPaths] Ensured directory: {path}")
