"""
Domain rules for combat, healing, mana and equipment.

Pure functions with no I/O. The services compute amounts and messages here;
the stored hp, ac and mana are changed relative to their current values by
the crud layer.
"""

import math
from dataclasses import dataclass
from typing import Optional, Union

from domain.entities.catalog import CharacterClass, Spell, Weapon
from domain.value_objects.enums import GEAR_AC_INCREMENTS, ClassRole, GearCategory

Number = Union[int, float]


def format_amount(value: Number) -> str:
    """Render 150.0 as "150" and 150.5 as "150.5"."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


# =============================================================================
# Equipment
# =============================================================================


def gear_ac_increment(category: Optional[str]) -> int:
    """Armor class gained from a gear category; unknown categories give 0."""
    if not category:
        return 0
    try:
        return GEAR_AC_INCREMENTS[GearCategory(category.strip().lower())]
    except ValueError:
        return 0


# =============================================================================
# Damage
# =============================================================================


def class_bonus(character_class: Optional[CharacterClass]) -> int:
    """Barbarians add strength, rogues add dexterity, everyone else adds nothing."""
    if character_class is None:
        return 0
    role = ClassRole.from_class_name(character_class.name)
    if role == ClassRole.BARBARIAN:
        return character_class.attributes.get("strength", 0) or 0
    if role == ClassRole.ROGUE:
        return character_class.attributes.get("dexterity", 0) or 0
    return 0


def weapon_base_damage(weapon_damage: int, target_ac: int) -> Number:
    """Weapon damage, halved when the target's armor class is at least the weapon's damage."""
    if target_ac >= weapon_damage:
        return weapon_damage / 2
    return weapon_damage


def hit_point_loss(damage: Number) -> int:
    """Whole hit points removed by `damage`.

    Stored hp is an integer column, so the remaining hp is rounded half away
    from zero: 1000 - 150.5 leaves 850, i.e. a loss of 150.
    """
    return max(math.ceil(damage - 0.5), 0)


def spell_damage(spell: Spell) -> int:
    """Spell damage is multiplied by its duration when the duration is positive."""
    if spell.duration and spell.duration > 0:
        return spell.damage * spell.duration
    return spell.damage


def defeat_suffix(target_name: str, remaining_hp: int) -> str:
    return f". {target_name} has been defeated." if remaining_hp <= 0 else ""


@dataclass
class AttackOutcome:
    target_name: str
    base_damage: Number
    bonus: int
    total_damage: Number
    message: str

    @property
    def hp_loss(self) -> int:
        return hit_point_loss(self.total_damage)

    def describe(self, remaining_hp: int) -> str:
        """The attack message, closed with the defeat notice when the target is down."""
        return self.message + defeat_suffix(self.target_name, remaining_hp)


def resolve_attack(
    attacker_name: str,
    target_name: str,
    target_ac: int,
    weapon: Weapon,
    attacker_class: Optional[CharacterClass],
) -> AttackOutcome:
    """Compute the damage of a weapon attack and the message describing it."""
    base = weapon_base_damage(weapon.damage, target_ac)
    bonus = class_bonus(attacker_class)
    total = base + bonus

    message = f"{attacker_name} attacked {target_name} with {weapon.name}, dealing {format_amount(base)} damage"
    if bonus:
        message += f" and {bonus} bonus for a total of {format_amount(total)}"
    else:
        message += f" for a total of {format_amount(total)}"

    return AttackOutcome(target_name=target_name, base_damage=base, bonus=bonus, total_damage=total, message=message)


@dataclass
class SpellOutcome:
    target_name: str
    damage: int
    mana_cost: int
    message: str

    @property
    def hp_loss(self) -> int:
        return hit_point_loss(self.damage)

    def describe(self, remaining_hp: int) -> str:
        return self.message + defeat_suffix(self.target_name, remaining_hp)


def resolve_spell(caster_name: str, target_name: str, spell: Spell) -> SpellOutcome:
    """Compute the effect of a spell. Mana is spent by the caller."""
    damage = spell_damage(spell)
    message = f"{caster_name} cast {spell.name} on {target_name}, dealing {damage} damage"
    return SpellOutcome(target_name=target_name, damage=damage, mana_cost=spell.mana_cost, message=message)


def can_afford(mana: int, spell: Spell) -> bool:
    return mana >= spell.mana_cost


# =============================================================================
# Restoration
# =============================================================================


def heal_message(name: str, healed: int, hp: int, max_hp: int) -> str:
    return f"{name} has been healed by {healed} HP. Current HP: {hp}/{max_hp}"
