"""
Logging setup for the Guildhall backend.

setup_logging() is called once from main.py, before the app is created.
Modules then take named loggers ("CRUD", "CharacterService", "Auth", ...).
"""

import logging
from typing import Iterable, Optional

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Third-party loggers that are noisy below WARNING
QUIET_LOGGERS = ("sqlalchemy.engine", "aiosqlite", "slowapi")


class QuietPathsFilter(logging.Filter):
    """Drop uvicorn access-log lines for the given request paths."""

    def __init__(self, paths: Iterable[str]):
        super().__init__()
        self.paths = tuple(paths)

    def filter(self, record):
        message = record.getMessage()
        return not any(f" {path} " in message for path in self.paths)


def setup_logging(debug_mode: bool = True, log_level: Optional[int] = None) -> None:
    """
    Configure the root logger.

    Args:
        debug_mode: DEBUG when true, INFO otherwise
        log_level: Explicit level; takes precedence over debug_mode
    """
    if log_level is None:
        log_level = logging.DEBUG if debug_mode else logging.INFO

    logging.basicConfig(level=log_level, format=LOG_FORMAT, datefmt=DATE_FORMAT, force=True)

    # Load balancers poll the health route every few seconds
    logging.getLogger("uvicorn.access").addFilter(QuietPathsFilter(["/auth/health"]))

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger("Logging").info(f"Logging configured with level: {logging.getLevelName(log_level)}")


def get_logger(name: str) -> logging.Logger:
    """Named logger; a thin wrapper kept so call sites read the same everywhere."""
    return logging.getLogger(name)
