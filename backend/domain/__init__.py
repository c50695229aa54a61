"""
Domain layer for the game-rule engine.

This package contains dataclasses and pure functions used by the service
layer. Nothing in here touches the database.

Structure:
- entities/: Catalog items and the Character/Wizard aggregates
- value_objects/: Enums (class roles, gear categories, user roles)
- services/: Pure rules (armor class, damage, healing, mana)
- exceptions.py: Error taxonomy raised by the services
"""

from .entities import (
    Character,
    CharacterClass,
    Gear,
    Potion,
    Spell,
    Weapon,
    Wizard,
    normalize_attributes,
)
from .exceptions import (
    ConfigurationError,
    ConflictError,
    GameError,
    NotFoundError,
    PersistenceError,
    RuleViolationError,
)
from .value_objects.enums import GEAR_AC_INCREMENTS, ClassRole, GearCategory, UserRole

__all__ = [
    # Entities
    "Character",
    "CharacterClass",
    "Gear",
    "Potion",
    "Spell",
    "Weapon",
    "Wizard",
    "normalize_attributes",
    # Exceptions
    "GameError",
    "NotFoundError",
    "ConflictError",
    "RuleViolationError",
    "PersistenceError",
    "ConfigurationError",
    # Value objects - enums
    "ClassRole",
    "GearCategory",
    "GEAR_AC_INCREMENTS",
    "UserRole",
]
