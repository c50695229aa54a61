"""
CRUD operations module.

This module provides database operations organized by table group.
All CRUD functions are exported at the package level.

Catalog operations (classes, weapons, gear, potions, spells, users) commit
their own single-statement transactions. Character and wizard operations are
row-level steps that never commit; the services compose them into
transactions.
"""

# Character operations
from .characters import (
    add_character_gear,
    add_character_potion,
    add_character_weapon,
    clear_character_inventory,
    damage_character,
    delete_character_row,
    get_all_character_gear,
    get_all_character_potions,
    get_all_character_weapons,
    get_character_gear,
    get_character_hp,
    get_character_potions,
    get_character_row,
    get_character_rows,
    get_character_weapons,
    heal_character,
    insert_character,
    load_all_characters,
    load_character,
    raise_character_ac,
    remove_character_potion,
    replace_character_gear,
    replace_character_potions,
    replace_character_weapons,
    update_character_row,
)

# Class operations
from .classes import create_class, delete_class, get_all_classes, search_class_by_id, update_class

# Gear operations
from .gear import create_gear, delete_gear, get_all_gears, search_gear_by_id, update_gear

# Potion operations
from .potions import create_potion, delete_potion, get_all_potions, search_potion_by_id, update_potion

# Spell operations
from .spells import create_spell, delete_spell, get_all_spells, search_spell_by_id, update_spell

# User operations
from .users import create_user, get_user_by_id, get_user_by_username

# Weapon operations
from .weapons import create_weapon, delete_weapon, get_all_weapons, search_weapon_by_id, update_weapon

# Wizard operations
from .wizards import (
    add_wizard_spell,
    clear_wizard_spells,
    delete_wizard_stats,
    get_all_wizard_spells,
    get_all_wizard_stats,
    get_wizard_spells,
    get_wizard_stats,
    insert_wizard_stats,
    replace_wizard_spells,
    restore_wizard_mana,
    spend_wizard_mana,
    update_wizard_stats,
)

__all__ = [
    # Classes
    "create_class",
    "search_class_by_id",
    "update_class",
    "delete_class",
    "get_all_classes",
    # Weapons
    "create_weapon",
    "search_weapon_by_id",
    "update_weapon",
    "delete_weapon",
    "get_all_weapons",
    # Gear
    "create_gear",
    "search_gear_by_id",
    "update_gear",
    "delete_gear",
    "get_all_gears",
    # Potions
    "create_potion",
    "search_potion_by_id",
    "update_potion",
    "delete_potion",
    "get_all_potions",
    # Spells
    "create_spell",
    "search_spell_by_id",
    "update_spell",
    "delete_spell",
    "get_all_spells",
    # Characters
    "insert_character",
    "get_character_row",
    "get_character_rows",
    "update_character_row",
    "get_character_hp",
    "raise_character_ac",
    "damage_character",
    "heal_character",
    "delete_character_row",
    "get_character_gear",
    "get_character_potions",
    "get_character_weapons",
    "get_all_character_gear",
    "get_all_character_potions",
    "get_all_character_weapons",
    "load_character",
    "load_all_characters",
    "add_character_weapon",
    "add_character_gear",
    "add_character_potion",
    "remove_character_potion",
    "replace_character_gear",
    "replace_character_potions",
    "replace_character_weapons",
    "clear_character_inventory",
    # Wizards
    "insert_wizard_stats",
    "get_wizard_stats",
    "get_all_wizard_stats",
    "update_wizard_stats",
    "spend_wizard_mana",
    "restore_wizard_mana",
    "delete_wizard_stats",
    "get_wizard_spells",
    "get_all_wizard_spells",
    "add_wizard_spell",
    "replace_wizard_spells",
    "clear_wizard_spells",
    # Users
    "create_user",
    "get_user_by_id",
    "get_user_by_username",
]
