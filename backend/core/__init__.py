"""
Core application modules: settings, logging, the app factory and request
dependencies.
"""

from .logging import get_logger, setup_logging
from .settings import AC_CAP, Settings, get_settings, reset_settings

__all__ = [
    "AC_CAP",
    "Settings",
    "get_logger",
    "get_settings",
    "reset_settings",
    "setup_logging",
]
