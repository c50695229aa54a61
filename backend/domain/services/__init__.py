"""
Domain services - pure domain logic (stateless, no I/O).
"""

from .combat_rules import (
    AttackOutcome,
    SpellOutcome,
    can_afford,
    class_bonus,
    defeat_suffix,
    format_amount,
    gear_ac_increment,
    heal_message,
    hit_point_loss,
    resolve_attack,
    resolve_spell,
    spell_damage,
    weapon_base_damage,
)

__all__ = [
    "AttackOutcome",
    "SpellOutcome",
    "can_afford",
    "class_bonus",
    "defeat_suffix",
    "format_amount",
    "gear_ac_increment",
    "heal_message",
    "hit_point_loss",
    "resolve_attack",
    "resolve_spell",
    "spell_damage",
    "weapon_base_damage",
]
