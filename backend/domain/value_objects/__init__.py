"""
Domain value objects - immutable types and enums.
"""

from .enums import (
    BARBARIAN_CLASS_PATTERNS,
    GEAR_AC_INCREMENTS,
    ROGUE_CLASS_PATTERNS,
    WIZARD_CLASS_PATTERNS,
    ClassRole,
    GearCategory,
    UserRole,
)

__all__ = [
    "ClassRole",
    "GearCategory",
    "UserRole",
    "GEAR_AC_INCREMENTS",
    "WIZARD_CLASS_PATTERNS",
    "BARBARIAN_CLASS_PATTERNS",
    "ROGUE_CLASS_PATTERNS",
]
