"""
Domain entities - core data models for business logic.
"""

from .catalog import BASE_CLASS_ATTRIBUTES, CharacterClass, Gear, Potion, Spell, Weapon, normalize_attributes
from .character import Character, Wizard

__all__ = [
    # catalog.py
    "BASE_CLASS_ATTRIBUTES",
    "CharacterClass",
    "Gear",
    "Potion",
    "Spell",
    "Weapon",
    "normalize_attributes",
    # character.py
    "Character",
    "Wizard",
]
