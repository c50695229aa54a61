"""
Character aggregate service.

Owns the Character entity and its gear, potion and weapon associations.
Every operation that writes more than one statement runs inside
`transaction(db)`, so it either commits as a whole or leaves the store as it
found it. Game rules (damage, AC, healing) live in domain/services/combat_rules.py.
"""

import logging
from typing import Any, Dict, List, Optional

import crud
import schemas
from core.settings import AC_CAP
from domain.entities import Character
from domain.exceptions import ConflictError, NotFoundError, PersistenceError, RuleViolationError
from domain.services.combat_rules import gear_ac_increment, heal_message, resolve_attack
from infrastructure.database import retry_on_db_lock, transaction
from infrastructure.database.models import generate_id
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger("CharacterService")


# =============================================================================
# Transaction steps (no commit)
# =============================================================================
# Shared with services/wizard_service.py so wizard updates and deletes can run
# the character steps inside their own transaction.


async def apply_character_update(db: AsyncSession, character_id: str, data: schemas.CharacterUpdate) -> None:
    """Replace the character row, then its gear, potions and weapons, in that order."""
    updated = await crud.update_character_row(
        db,
        character_id,
        name=data.name,
        race=data.race,
        class_id=data.class_id,
        hp=data.hp,
        max_hp=data.max_hp,
        ac=data.ac,
    )
    if updated == 0:
        logger.warning(f"Update of character {character_id} matched no row")
        raise PersistenceError("Something went wrong")

    await crud.replace_character_gear(db, character_id, data.gear)
    await crud.replace_character_potions(db, character_id, data.potions)
    await crud.replace_character_weapons(db, character_id, data.weapons)


async def cascade_delete_character(db: AsyncSession, character_id: str) -> None:
    """Delete the character's join rows, then the character row."""
    await crud.clear_character_inventory(db, character_id)
    if await crud.delete_character_row(db, character_id) == 0:
        raise NotFoundError("Character not found")


# =============================================================================
# Lifecycle
# =============================================================================


@retry_on_db_lock(max_retries=5, initial_delay=0.1, backoff_factor=2)
async def create_character(db: AsyncSession, character: schemas.CharacterCreate) -> Character:
    """Insert a character with an empty inventory."""
    character_id = character.id or generate_id()
    async with transaction(db):
        await crud.insert_character(
            db,
            character_id,
            name=character.name,
            race=character.race,
            class_id=character.class_id,
            hp=character.hp,
            max_hp=character.max_hp,
            ac=character.ac,
        )

    logger.info(f"Created character {character_id} ({character.name})")
    return Character(
        id=character_id,
        name=character.name,
        race=character.race,
        class_id=character.class_id,
        hp=character.hp,
        max_hp=character.max_hp,
        ac=character.ac,
    )


async def search_character_by_id(db: AsyncSession, character_id: str) -> Optional[Character]:
    """The character with its potions, weapons and gear, or None."""
    return await crud.load_character(db, character_id)


async def get_all_characters(db: AsyncSession) -> List[Character]:
    return await crud.load_all_characters(db)


@retry_on_db_lock(max_retries=5, initial_delay=0.1, backoff_factor=2)
async def update_character(db: AsyncSession, character_id: str, data: schemas.CharacterUpdate) -> bool:
    """
    Replace a character's fields and its three inventories in one transaction.

    The inventory lists are the complete desired sets. If the character row
    does not exist the transaction is rolled back and a generic
    PersistenceError is raised; any other failure is rolled back and
    re-raised unchanged.
    """
    try:
        async with transaction(db):
            await apply_character_update(db, character_id, data)
    except SQLAlchemyError as e:
        logger.error(f"Update of character {character_id} rolled back: {e}")
        raise

    logger.info(f"Updated character {character_id}")
    return True


@retry_on_db_lock(max_retries=5, initial_delay=0.1, backoff_factor=2)
async def delete_character(db: AsyncSession, character_id: str) -> bool:
    """Delete a character and its inventory rows in one transaction."""
    try:
        async with transaction(db):
            await cascade_delete_character(db, character_id)
    except SQLAlchemyError as e:
        logger.error(f"Delete of character {character_id} rolled back: {e}")
        raise

    logger.info(f"Deleted character {character_id}")
    return True


# =============================================================================
# Inventory
# =============================================================================


async def _load_or_404(db: AsyncSession, character_id: str) -> Character:
    character = await crud.load_character(db, character_id)
    if character is None:
        raise NotFoundError("Character not found")
    return character


async def add_weapon(db: AsyncSession, character_id: str, weapon_id: str) -> Character:
    character = await _load_or_404(db, character_id)
    weapon = await crud.search_weapon_by_id(db, weapon_id)
    if weapon is None:
        raise NotFoundError("Weapon not found")
    if character.find_weapon(weapon_id) is not None:
        raise ConflictError("Weapon already added to this character")

    try:
        async with transaction(db):
            await crud.add_character_weapon(db, character_id, weapon_id)
    except IntegrityError as exc:
        raise ConflictError("Weapon already added to this character") from exc

    character.weapons.append(weapon)
    logger.info(f"Character {character_id} picked up weapon {weapon_id}")
    return character


async def add_gear(db: AsyncSession, character_id: str, gear_id: str) -> Character:
    """Equip gear and raise AC according to its category (capped, never lowered)."""
    character = await _load_or_404(db, character_id)
    gear = await crud.search_gear_by_id(db, gear_id)
    if gear is None:
        raise NotFoundError("Gear not found")
    if character.has_gear(gear_id):
        raise ConflictError("Weapon already exists in character's inventory")

    try:
        async with transaction(db):
            await crud.add_character_gear(db, character_id, gear_id)
            new_ac = await crud.raise_character_ac(db, character_id, gear_ac_increment(gear.category), AC_CAP)
            if new_ac is None:
                raise NotFoundError("Character not found")
    except IntegrityError as exc:
        raise ConflictError("Weapon already exists in character's inventory") from exc

    character.gear.append(gear)
    character.ac = new_ac
    logger.info(f"Character {character_id} equipped gear {gear_id} (ac={new_ac})")
    return character


async def add_potion(db: AsyncSession, character_id: str, potion_id: str) -> Character:
    character = await _load_or_404(db, character_id)
    potion = await crud.search_potion_by_id(db, potion_id)
    if potion is None:
        raise NotFoundError("Potion not found")
    if character.has_potion(potion_id):
        raise ConflictError("Potion already exists in character's inventory")

    try:
        async with transaction(db):
            await crud.add_character_potion(db, character_id, potion_id)
    except IntegrityError as exc:
        raise ConflictError("Potion already exists in character's inventory") from exc

    character.potions.append(potion)
    logger.info(f"Character {character_id} picked up potion {potion_id}")
    return character


# =============================================================================
# Combat
# =============================================================================


async def attack(db: AsyncSession, attacker_id: str, target_id: str, weapon_id: str) -> Dict[str, Any]:
    """
    Attack a character with one of the attacker's weapons.

    The damage is subtracted from the target's stored hp in one statement, so
    simultaneous attacks on the same target all land.

    Returns:
        {"message": <description of the attack>}
    """
    attacker = await crud.load_character(db, attacker_id)
    target = await crud.load_character(db, target_id)
    if attacker is None or target is None:
        raise NotFoundError("Character not Found")

    weapon = attacker.find_weapon(weapon_id)
    if weapon is None:
        raise NotFoundError("Weapon not found or does not belong to the attacker")

    attacker_class = await crud.search_class_by_id(db, attacker.class_id) if attacker.class_id else None
    outcome = resolve_attack(
        attacker_name=attacker.name,
        target_name=target.name,
        target_ac=target.ac,
        weapon=weapon,
        attacker_class=attacker_class,
    )

    async with transaction(db):
        remaining = await crud.damage_character(db, target.id, outcome.hp_loss)
        if remaining is None:
            raise NotFoundError("Character not Found")

    logger.info(f"{attacker.name} hit {target.name} for {outcome.total_damage} (hp now {remaining})")
    return {"message": outcome.describe(remaining)}


async def heal(db: AsyncSession, character_id: str) -> Dict[str, Any]:
    """
    Drink the first healing potion in the character's inventory.

    Returns:
        {"message": <healing summary>, "character": <updated Character>}
    """
    character = await _load_or_404(db, character_id)

    potion = character.first_healing_potion()
    if potion is None:
        raise NotFoundError("Potion does not exist in character's inventory")
    if character.hp >= character.max_hp:
        raise RuleViolationError("Your HP is full! Keep fighting, warrior!")

    async with transaction(db):
        # The potion row is the one being consumed; another request may have drunk it first
        if not await crud.remove_character_potion(db, character_id, potion.id):
            raise NotFoundError("Potion does not exist in character's inventory")
        hp_before = await crud.get_character_hp(db, character_id)
        new_hp = await crud.heal_character(db, character_id, potion.hp_restore)
        if new_hp is None:
            raise RuleViolationError("Your HP is full! Keep fighting, warrior!")

    healed = new_hp - hp_before
    character.hp = new_hp
    character.remove_potion(potion.id)
    logger.info(f"Character {character_id} healed by {healed} using potion {potion.id}")
    return {
        "message": heal_message(character.name, healed, character.hp, character.max_hp),
        "character": character,
    }
