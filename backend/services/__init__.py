"""
Services layer for business logic.

This package contains the aggregate services that coordinate CRUD steps
inside transactions and apply the game rules.
"""

from . import character_service, user_service, wizard_service

__all__ = [
    "character_service",
    "user_service",
    "wizard_service",
]
