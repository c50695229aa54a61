"""
Character aggregate entities.

A Character is the root row plus the inventory derived from its join tables.
A Wizard is not a subclass: it composes a Character with the wizard extension
row (mana, maxMana) and the spells from the wizard_spells join table.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .catalog import Gear, Potion, Spell, Weapon


@dataclass
class Character:
    id: str
    name: str
    race: Optional[str]
    class_id: Optional[str]
    hp: int
    max_hp: int
    ac: int
    gear: List[Gear] = field(default_factory=list)
    potions: List[Potion] = field(default_factory=list)
    weapons: List[Weapon] = field(default_factory=list)

    @property
    def is_defeated(self) -> bool:
        """Defeat is derived from hp; there is no separate flag."""
        return self.hp <= 0

    def find_weapon(self, weapon_id: str) -> Optional[Weapon]:
        return next((w for w in self.weapons if w.id == weapon_id), None)

    def has_gear(self, gear_id: str) -> bool:
        return any(g.id == gear_id for g in self.gear)

    def has_potion(self, potion_id: str) -> bool:
        return any(p.id == potion_id for p in self.potions)

    def first_healing_potion(self) -> Optional[Potion]:
        return next((p for p in self.potions if p.hp_restore > 0), None)

    def first_mana_potion(self) -> Optional[Potion]:
        return next((p for p in self.potions if p.mana_restore > 0), None)

    def remove_potion(self, potion_id: str) -> None:
        """Drop the first potion with this id from the in-memory inventory."""
        for index, potion in enumerate(self.potions):
            if potion.id == potion_id:
                del self.potions[index]
                return

    @classmethod
    def from_model(cls, row, gear=None, potions=None, weapons=None) -> "Character":
        return cls(
            id=row.id,
            name=row.name,
            race=row.race,
            class_id=row.class_id,
            hp=row.hp,
            max_hp=row.max_hp,
            ac=row.ac,
            gear=list(gear or []),
            potions=list(potions or []),
            weapons=list(weapons or []),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "race": self.race,
            "classId": self.class_id,
            "hp": self.hp,
            "maxHp": self.max_hp,
            "ac": self.ac,
            "gear": [g.to_dict() for g in self.gear],
            "potions": [p.to_dict() for p in self.potions],
            "weapons": [w.to_dict() for w in self.weapons],
        }


@dataclass
class Wizard:
    character: Character
    mana: int
    max_mana: int
    spells: List[Spell] = field(default_factory=list)

    @property
    def id(self) -> str:
        return self.character.id

    @property
    def name(self) -> str:
        return self.character.name

    @property
    def class_id(self) -> Optional[str]:
        return self.character.class_id

    @property
    def potions(self) -> List[Potion]:
        return self.character.potions

    def find_spell(self, spell_id: str) -> Optional[Spell]:
        return next((s for s in self.spells if s.id == spell_id), None)

    def to_dict(self) -> Dict[str, Any]:
        data = self.character.to_dict()
        data.update(
            {
                "mana": self.mana,
                "maxMana": self.max_mana,
                "spells": [s.to_dict() for s in self.spells],
            }
        )
        return data
