"""
Database infrastructure package.

Re-exports commonly used database components for convenient imports.
"""

from .connection import (
    Base,
    async_session_maker,
    get_database_type,
    get_db,
    init_db,
    retry_on_db_lock,
    serialized_commit,
    serialized_write,
    transaction,
)
from .models import (
    Character,
    CharacterClass,
    Gear,
    Potion,
    Spell,
    User,
    Weapon,
    WizardStats,
    character_gear,
    character_potions,
    character_weapons,
    wizard_spells,
)

__all__ = [
    # Connection
    "Base",
    "async_session_maker",
    "get_database_type",
    "get_db",
    "init_db",
    "retry_on_db_lock",
    "serialized_commit",
    "serialized_write",
    "transaction",
    # Models
    "Character",
    "CharacterClass",
    "Gear",
    "Potion",
    "Spell",
    "User",
    "Weapon",
    "WizardStats",
    "character_gear",
    "character_potions",
    "character_weapons",
    "wizard_spells",
]
