"""
Pydantic schemas for API request/response models.

This package organizes schemas by resource type:
- catalog.py: Class, Weapon, Gear, Potion and Spell schemas
- characters.py: Character and Wizard schemas, combat requests/results
- auth.py: User registration/login schemas
- common.py: Shared base classes and helpers
"""

from schemas.auth import TokenResponse, User, UserCredentials
from schemas.catalog import (
    CharacterClass,
    ClassBase,
    ClassCreate,
    ClassUpdate,
    Gear,
    GearBase,
    GearCreate,
    GearUpdate,
    Potion,
    PotionBase,
    PotionCreate,
    PotionEffects,
    PotionUpdate,
    Spell,
    SpellBase,
    SpellCreate,
    SpellUpdate,
    Weapon,
    WeaponBase,
    WeaponCreate,
    WeaponUpdate,
)
from schemas.characters import (
    AttackRequest,
    CastSpellRequest,
    Character,
    CharacterCreate,
    CharacterStats,
    CharacterUpdate,
    CombatResult,
    HealResult,
    Wizard,
    WizardCreate,
    WizardUpdate,
)
from schemas.common import CamelModel, MessageResponse, coerce_item_ids

__all__ = [
    # Common
    "CamelModel",
    "MessageResponse",
    "coerce_item_ids",
    # Auth
    "User",
    "UserCredentials",
    "TokenResponse",
    # Catalog
    "ClassBase",
    "ClassCreate",
    "ClassUpdate",
    "CharacterClass",
    "WeaponBase",
    "WeaponCreate",
    "WeaponUpdate",
    "Weapon",
    "GearBase",
    "GearCreate",
    "GearUpdate",
    "Gear",
    "PotionEffects",
    "PotionBase",
    "PotionCreate",
    "PotionUpdate",
    "Potion",
    "SpellBase",
    "SpellCreate",
    "SpellUpdate",
    "Spell",
    # Characters
    "CharacterStats",
    "CharacterCreate",
    "CharacterUpdate",
    "Character",
    "WizardCreate",
    "WizardUpdate",
    "Wizard",
    "AttackRequest",
    "CastSpellRequest",
    "CombatResult",
    "HealResult",
]
