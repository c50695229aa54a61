"""
Catalog entities.

Reusable item definitions (classes, weapons, gear, potions, spells) that are
not owned by any single character. Built from ORM rows by the CRUD layer and
serialized with camelCase keys for the API.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

# Attributes every class exposes, even when the stored row omits them
BASE_CLASS_ATTRIBUTES = ("strength", "dexterity", "intelligence", "charisma")


def normalize_attributes(attributes: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Fill the base attributes with 0 when missing and keep any extra keys."""
    attributes = dict(attributes or {})
    normalized = {name: attributes.pop(name, 0) or 0 for name in BASE_CLASS_ATTRIBUTES}
    normalized.update(attributes)
    return normalized


@dataclass
class CharacterClass:
    """A playable class such as Barbarian, Rogue or Wizard."""

    id: str
    name: str
    description: Optional[str] = None
    attributes: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        self.attributes = normalize_attributes(self.attributes)

    @classmethod
    def from_model(cls, row) -> "CharacterClass":
        return cls(id=row.id, name=row.name, description=row.description, attributes=row.attributes)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "attributes": dict(self.attributes),
        }


@dataclass
class Weapon:
    id: str
    name: str
    category: Optional[str] = None
    damage: int = 0

    @classmethod
    def from_model(cls, row) -> "Weapon":
        return cls(id=row.id, name=row.name, category=row.category, damage=row.damage)

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name, "category": self.category, "damage": self.damage}


@dataclass
class Gear:
    id: str
    name: str
    category: Optional[str] = None
    armour: int = 0

    @classmethod
    def from_model(cls, row) -> "Gear":
        return cls(id=row.id, name=row.name, category=row.category, armour=row.armour)

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name, "category": self.category, "armour": self.armour}


@dataclass
class Potion:
    """A consumable. `effects` may hold hpRestore, manaRestore and increaseDamage."""

    id: str
    name: str
    effects: Dict[str, int] = field(default_factory=dict)
    utility: Optional[str] = None

    @property
    def hp_restore(self) -> int:
        return self.effects.get("hpRestore") or 0

    @property
    def mana_restore(self) -> int:
        return self.effects.get("manaRestore") or 0

    @classmethod
    def from_model(cls, row) -> "Potion":
        return cls(id=row.id, name=row.name, effects=dict(row.effects or {}), utility=row.utility)

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name, "effects": dict(self.effects), "utility": self.utility}


@dataclass
class Spell:
    id: str
    name: str
    description: Optional[str] = None
    mana_cost: int = 0
    damage: int = 0
    duration: int = 0

    @classmethod
    def from_model(cls, row) -> "Spell":
        return cls(
            id=row.id,
            name=row.name,
            description=row.description,
            mana_cost=row.mana_cost,
            damage=row.damage,
            duration=row.duration,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "manaCost": self.mana_cost,
            "damage": self.damage,
            "duration": self.duration,
        }
