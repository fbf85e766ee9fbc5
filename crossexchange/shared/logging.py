"""
Logging setup for the CrossExchange service.

One stdout handler with a pipe-separated line format. Trade and quote
events carry symbols, portfolio ids and amounts; request bodies and the
database URL are never logged.
"""

import logging
import sys

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S%z"

# Only their warnings reach the log.
QUIET_LOGGERS = ("uvicorn.access", "slowapi")
SQL_LOGGER = "sqlalchemy.engine"


def configure_logging(level: str = "INFO", sql_echo: bool = False) -> None:
    """Configure the root logger for the service.

    SQL statements go through the same handler as everything else
    instead of SQLAlchemy's own echo stream.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR). Unknown
            names fall back to INFO.
        sql_echo: Log every SQL statement at INFO.
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        stream=sys.stdout,
        force=True,
    )

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    logging.getLogger(SQL_LOGGER).setLevel(logging.INFO if sql_echo else logging.WARNING)
