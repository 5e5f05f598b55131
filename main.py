"""
Email scheduler - server entry point.

Loads .env, configures logging, and serves the API with uvicorn. The
dispatcher tick loop is started by the application lifespan.

Usage:
    python main.py
    python main.py --port 8080 --log-level DEBUG
"""

import argparse
import os

import uvicorn
from dotenv import load_dotenv

from email_scheduler.infra.data_paths import (
    get_host,
    get_port,
    get_emails_file_path,
    get_scheduler_interval,
    ensure_data_directories,
)
from email_scheduler.infra.logging_config import setup_logging


def parse_args(argv=None) -> argparse.Namespace:
    """Parse command line arguments (defaults come from the environment)."""
    parser = argparse.ArgumentParser(description="Email scheduler API server")
    parser.add_argument("--host", default=None, help="Bind address (default: HOST or 0.0.0.0)")
    parser.add_argument("--port", type=int, default=None, help="HTTP port (default: PORT or 3001)")
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default: LOG_LEVEL or INFO)",
    )
    return parser.parse_args(argv)


def main(argv=None) -> None:
    load_dotenv()
    args = parse_args(argv)

    log_level = (args.log_level or os.getenv("LOG_LEVEL", "INFO")).upper()
    logger = setup_logging(log_level)

    host = args.host or get_host()
    port = args.port or get_port()

    ensure_data_directories()
    logger.info(f"Data file: {get_emails_file_path()}")
    logger.info(f"Scheduler interval: {get_scheduler_interval()}s")
    logger.info(f"Server running on port {port}")

    uvicorn.run(
        "email_scheduler.api.main:app",
        host=host,
        port=port,
        log_level=log_level.lower(),
    )


if __name__ == "__main__":
    main()
