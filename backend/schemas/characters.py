"""Character and wizard schemas, plus combat request/response bodies."""

from typing import Any, List, Optional

from core.settings import AC_CAP, DEFAULT_AC, DEFAULT_HP, DEFAULT_MANA, DEFAULT_MAX_MANA
from pydantic import Field, field_validator, model_validator

from schemas.catalog import Gear, Potion, Spell, Weapon
from schemas.common import CamelModel, coerce_item_ids

# =============================================================================
# Character Schemas
# =============================================================================


class CharacterStats(CamelModel):
    """Scalar fields shared by create and update requests."""

    name: str
    race: Optional[str] = None
    class_id: Optional[str] = None
    hp: int = Field(default=DEFAULT_HP, ge=0)
    max_hp: int = Field(default=DEFAULT_HP, ge=0)
    ac: int = Field(default=DEFAULT_AC, ge=0, le=AC_CAP)

    @model_validator(mode="after")
    def check_hp_within_max(self):
        if self.hp > self.max_hp:
            raise ValueError("hp cannot exceed maxHp")
        return self


class CharacterCreate(CharacterStats):
    """Schema for creating a character. Inventory starts empty."""

    id: Optional[str] = None


class CharacterUpdate(CharacterStats):
    """
    Full replacement of a character.

    gear, potions and weapons are the complete desired inventories; anything
    not listed is removed. Entries may be ids or objects with an "id".
    """

    gear: List[str] = Field(default_factory=list)
    potions: List[str] = Field(default_factory=list)
    weapons: List[str] = Field(default_factory=list)

    @field_validator("gear", "potions", "weapons", mode="before")
    @classmethod
    def coerce_inventory(cls, value: Any) -> List[str]:
        return coerce_item_ids(value)


class Character(CamelModel):
    id: str
    name: str
    race: Optional[str] = None
    class_id: Optional[str] = None
    hp: int
    max_hp: int
    ac: int
    gear: List[Gear] = Field(default_factory=list)
    potions: List[Potion] = Field(default_factory=list)
    weapons: List[Weapon] = Field(default_factory=list)


# =============================================================================
# Wizard Schemas
# =============================================================================


class WizardCreate(CharacterCreate):
    mana: int = Field(default=DEFAULT_MANA, ge=0)
    max_mana: int = Field(default=DEFAULT_MAX_MANA, ge=0)

    @model_validator(mode="after")
    def check_mana_within_max(self):
        if self.mana > self.max_mana:
            raise ValueError("mana cannot exceed maxMana")
        return self


class WizardUpdate(CharacterUpdate):
    spells: List[str] = Field(default_factory=list)
    mana: int = Field(default=DEFAULT_MANA, ge=0)
    max_mana: int = Field(default=DEFAULT_MAX_MANA, ge=0)

    @field_validator("spells", mode="before")
    @classmethod
    def coerce_spells(cls, value: Any) -> List[str]:
        return coerce_item_ids(value)

    @model_validator(mode="after")
    def check_mana_within_max(self):
        if self.mana > self.max_mana:
            raise ValueError("mana cannot exceed maxMana")
        return self


class Wizard(Character):
    mana: int
    max_mana: int
    spells: List[Spell] = Field(default_factory=list)


# =============================================================================
# Combat Schemas
# =============================================================================


class AttackRequest(CamelModel):
    attacker_id: str
    target_id: str
    weapon_id: str


class CastSpellRequest(CamelModel):
    wizard_id: str
    target_id: str
    spell_id: str


class CombatResult(CamelModel):
    message: str


class HealResult(CamelModel):
    message: str
    character: Character
