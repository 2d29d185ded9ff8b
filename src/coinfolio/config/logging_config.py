"""Logging configuration."""

import logging
import sys

from coinfolio.config.settings import get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging() -> None:
    """
    Configure application logging.

    ``log_level`` applies to the ``coinfolio`` loggers only; everything
    else logs at WARNING so per-request HTTP and SQL chatter stays out of
    the ledger and pricing messages.
    """
    settings = get_settings()
    level = logging.getLevelName(settings.log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    logging.basicConfig(
        level=logging.WARNING,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    logging.getLogger("coinfolio").setLevel(level)

    for name in ("sqlalchemy.engine", "urllib3", "requests"):
        logging.getLogger(name).setLevel(logging.WARNING)
    logging.getLogger("uvicorn").setLevel(logging.INFO)
