"""Catalog schemas: classes, weapons, gear, potions and spells."""

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, model_serializer

from schemas.common import CamelModel

# =============================================================================
# Class Schemas
# =============================================================================


class ClassBase(CamelModel):
    name: str
    description: Optional[str] = None
    attributes: Dict[str, int] = Field(default_factory=dict)


class ClassCreate(ClassBase):
    """Schema for creating a class. The id is generated when omitted."""

    id: Optional[str] = None


class ClassUpdate(ClassBase):
    """Full replacement of a class's fields."""

    pass


class CharacterClass(ClassBase):
    id: str


# =============================================================================
# Weapon Schemas
# =============================================================================


class WeaponBase(CamelModel):
    name: str
    category: Optional[str] = None
    damage: int = Field(default=0, ge=0)


class WeaponCreate(WeaponBase):
    id: Optional[str] = None


class WeaponUpdate(WeaponBase):
    pass


class Weapon(WeaponBase):
    id: str


# =============================================================================
# Gear Schemas
# =============================================================================


class GearBase(CamelModel):
    name: str
    category: Optional[str] = None
    armour: int = Field(default=0, ge=0)


class GearCreate(GearBase):
    id: Optional[str] = None


class GearUpdate(GearBase):
    pass


class Gear(GearBase):
    id: str


# =============================================================================
# Potion Schemas
# =============================================================================


class PotionEffects(BaseModel):
    """Potion effects; keys are kept in camelCase as stored."""

    hpRestore: Optional[int] = Field(default=None, ge=0)
    manaRestore: Optional[int] = Field(default=None, ge=0)
    increaseDamage: Optional[int] = Field(default=None, ge=0)

    class Config:
        extra = "allow"

    @model_serializer(mode="wrap")
    def _drop_unset(self, handler) -> Dict[str, Any]:
        # Absent effects are left out of stored rows and responses alike
        return {key: value for key, value in handler(self).items() if value is not None}

    def to_storage(self) -> Dict[str, int]:
        return self.model_dump()


class PotionBase(CamelModel):
    name: str
    effects: PotionEffects = Field(default_factory=PotionEffects)
    utility: Optional[str] = None


class PotionCreate(PotionBase):
    id: Optional[str] = None


class PotionUpdate(PotionBase):
    pass


class Potion(PotionBase):
    id: str


# =============================================================================
# Spell Schemas
# =============================================================================


class SpellBase(CamelModel):
    name: str
    description: Optional[str] = None
    mana_cost: int = Field(default=0, ge=0)
    damage: int = Field(default=0, ge=0)
    duration: int = Field(default=0, ge=0)


class SpellCreate(SpellBase):
    id: Optional[str] = None


class SpellUpdate(SpellBase):
    pass


class Spell(SpellBase):
    id: str
