"""
Domain enums for type-safe constants.
"""

from enum import Enum
from typing import Optional


class ClassRole(str, Enum):
    """Game role of a character class, derived from the class name.

    Services branch on the role instead of comparing class names, so the
    name matching rules live in one place.
    """

    WIZARD = "wizard"
    BARBARIAN = "barbarian"
    ROGUE = "rogue"
    OTHER = "other"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def from_class_name(cls, name: Optional[str]) -> "ClassRole":
        """Resolve a class name (case-insensitive) to its role; unknown names are OTHER."""
        if not name:
            return cls.OTHER
        normalized = name.strip().lower()
        for role, patterns in _ROLE_NAME_PATTERNS.items():
            if normalized in patterns:
                return role
        return cls.OTHER


# Class name patterns per role (case-insensitive matching).
# "rouge" is a misspelling found in existing class data; it still resolves to ROGUE.
WIZARD_CLASS_PATTERNS = frozenset(["wizard"])
BARBARIAN_CLASS_PATTERNS = frozenset(["barbarian"])
ROGUE_CLASS_PATTERNS = frozenset(["rogue", "rouge"])

_ROLE_NAME_PATTERNS = {
    ClassRole.WIZARD: WIZARD_CLASS_PATTERNS,
    ClassRole.BARBARIAN: BARBARIAN_CLASS_PATTERNS,
    ClassRole.ROGUE: ROGUE_CLASS_PATTERNS,
}


class GearCategory(str, Enum):
    """Gear categories that raise armor class when equipped."""

    CHESTPLATE = "chestplate"
    LEGGINGS = "leggings"
    SKULLCAP = "skullcap"
    CLEATS = "cleats"

    def __str__(self) -> str:
        return self.value


# Armor class gained when a piece of gear of each category is added
GEAR_AC_INCREMENTS = {
    GearCategory.CHESTPLATE: 400,
    GearCategory.LEGGINGS: 200,
    GearCategory.SKULLCAP: 300,
    GearCategory.CLEATS: 100,
}


class UserRole(str, Enum):
    """User authentication roles."""

    USER = "user"  # Regular player account
    ADMIN = "admin"

    def __str__(self) -> str:
        return self.value
