"""Logging setup shared by the repositories, the API layer and the scripts."""

import logging
import sys

LOG_FORMAT = "%(asctime)s [{service}] %(levelname)s %(name)s: %(message)s"
# Per-statement and per-connection chatter, only wanted when debugging SQL
QUIET_LOGGERS = ("sqlalchemy.engine", "sqlalchemy.pool", "aiomysql")


def setup_logging(log_level: str = "INFO", service_name: str = "budget-planner") -> None:
    """Log to stdout, tagging every record with the service name."""
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT.format(service=service_name),
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
    )
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
