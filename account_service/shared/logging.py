"""
Logging configuration for the account service.

One line per record, tagged with the service name so account logs can be
picked out of a shared StockTrader log stream. Account owners and ids may
be logged; credentials and feedback text may not.
"""

import logging
import sys

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | {service} | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Client libraries that log every request or statement at INFO.
QUIET_LOGGERS = ("uvicorn.access", "httpx", "httpcore", "sqlalchemy.engine")


def configure_logging(level: str = "INFO", service: str = "account") -> None:
    """Install the root handler.

    Args:
        level: Log level name. Unknown names fall back to INFO.
        service: Tag written on every line.
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT.format(service=service),
        datefmt=LOG_DATE_FORMAT,
        stream=sys.stdout,
        force=True,
    )

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
