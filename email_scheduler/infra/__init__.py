"""
Infrastructure module - configuration, paths, and logging.
"""

from .data_paths import (
    get_project_root,
    get_data_root,
    get_emails_file_path,
    get_logs_dir,
    get_port,
    get_host,
    get_scheduler_interval,
    is_scheduler_enabled,
    ensure_data_directories,
)

from .logging_config import setup_logging

__all__ = [
    # data_paths
    "get_project_root",
    "get_data_root",
    "get_emails_file_path",
    "get_logs_dir",
    "get_port",
    "get_host",
    "get_scheduler_interval",
    "is_scheduler_enabled",
    "ensure_data_directories",
    # logging
    "setup_logging",
]
