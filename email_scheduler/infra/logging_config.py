"""
Logging setup for email-scheduler.

One ``email_scheduler`` logger owns the handlers; module loggers
(``email_scheduler.scheduler.dispatcher`` etc.) only propagate into it.
Output goes to the console and to a per-day file under LOG_DIR.
"""

import logging
from datetime import date, datetime
from pathlib import Path
from typing import Optional

from .data_paths import get_logs_dir

LOGGER_NAME = "email_scheduler"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# HHMMSS of the first handler created in this process
_started_at: Optional[str] = None


def _process_start_stamp() -> str:
    global _started_at
    if _started_at is None:
        _started_at = datetime.now().strftime("%H%M%S")
    return _started_at


class DailyRotatingFileHandler(logging.FileHandler):
    """
    File handler that starts a new file when the calendar day changes.

    Files are named ``email_scheduler_<YYYYMMDD>_<HHMMSS>.log``, where
    HHMMSS is the process start time, so restarts on the same day do not
    append to each other's file.
    """

    def __init__(self, log_dir: str = "logs", encoding: str = "utf-8"):
        self.log_dir = Path(log_dir)
        self.log_dir.mkdir(parents=True, exist_ok=True)
        self._stamp = _process_start_stamp()
        self._day = date.today()
        super().__init__(self._path_for(self._day), mode="a", encoding=encoding)

    def _path_for(self, day: date) -> str:
        return str(self.log_dir / f"{LOGGER_NAME}_{day:%Y%m%d}_{self._stamp}.log")

    def emit(self, record: logging.LogRecord) -> None:
        today = date.today()
        if today != self._day:
            self.close()
            self._day = today
            self.baseFilename = self._path_for(today)
            self.stream = self._open()
        super().emit(record)


def setup_logging(log_level: str = "INFO", log_dir: Optional[str] = None) -> logging.Logger:
    """
    Configure the package logger and return it.

    Calling it again replaces the previous handlers instead of stacking them.

    Args:
        log_level (str): DEBUG, INFO, WARNING, ERROR or CRITICAL (unknown values mean INFO)
        log_dir (str): Directory for daily log files (default: LOG_DIR or logs/)

    Returns:
        logging.Logger: the ``email_scheduler`` logger
    """
    level = getattr(logging, log_level.upper(), logging.INFO)
    formatter = logging.Formatter(LOG_FORMAT)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    # uvicorn configures the root logger too; keep records from printing twice
    logger.propagate = False

    for old in list(logger.handlers):
        logger.removeHandler(old)
        old.close()

    file_handler = DailyRotatingFileHandler(log_dir=log_dir or str(get_logs_dir()))
    for handler in (logging.StreamHandler(), file_handler):
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.info(f"Logging started - level: {logging.getLevelName(level)}, file: {file_handler.baseFilename}")
    return logger
