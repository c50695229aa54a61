"""
CRUD operations for characters and their inventory join tables.

Row-level building blocks for services/character_service.py. Nothing here
commits: the service wraps each operation in a transaction so multi-step
updates and deletes land together or not at all.
"""

import logging
from typing import Dict, Iterable, List, Optional

from domain.entities import Character, Gear, Potion, Weapon
from infrastructure.database import models
from sqlalchemy import case, delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from .helpers import (
    clear_links,
    delete_link,
    fetch_all_joined_items,
    fetch_joined_items,
    group_by_character,
    insert_link,
    replace_links,
)

logger = logging.getLogger("CRUD")


# =============================================================================
# Character rows
# =============================================================================


async def insert_character(
    db: AsyncSession,
    character_id: str,
    name: str,
    race: Optional[str],
    class_id: Optional[str],
    hp: int,
    max_hp: int,
    ac: int,
) -> None:
    db.add(models.Character(id=character_id, name=name, race=race, class_id=class_id, hp=hp, max_hp=max_hp, ac=ac))
    await db.flush()


async def get_character_row(db: AsyncSession, character_id: str) -> Optional[models.Character]:
    result = await db.execute(
        select(models.Character)
        .where(models.Character.id == character_id)
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


async def get_character_rows(db: AsyncSession) -> List[models.Character]:
    result = await db.execute(select(models.Character).execution_options(populate_existing=True))
    return list(result.scalars().all())


async def update_character_row(
    db: AsyncSession,
    character_id: str,
    name: str,
    race: Optional[str],
    class_id: Optional[str],
    hp: int,
    max_hp: int,
    ac: int,
) -> int:
    """Replace a character's scalar fields. Returns the affected row count."""
    result = await db.execute(
        update(models.Character)
        .where(models.Character.id == character_id)
        .values(name=name, race=race, class_id=class_id, hp=hp, max_hp=max_hp, ac=ac)
    )
    return result.rowcount


async def get_character_hp(db: AsyncSession, character_id: str) -> Optional[int]:
    """Current hp, read with a row lock where the backend supports one."""
    result = await db.execute(
        select(models.Character.hp).where(models.Character.id == character_id).with_for_update()
    )
    return result.scalar_one_or_none()


# hp and ac change relative to the stored value in a single UPDATE, so two
# requests touching the same character cannot overwrite each other's result.


async def _update_returning(db: AsyncSession, statement, column) -> Optional[int]:
    result = await db.execute(statement.returning(column).execution_options(synchronize_session="fetch"))
    return result.scalar_one_or_none()


async def raise_character_ac(db: AsyncSession, character_id: str, increment: int, cap: int) -> Optional[int]:
    """
    Add `increment` to the stored armor class, capped at `cap` and never lowered.

    Returns:
        The new armor class, or None if the character does not exist
    """
    ac = models.Character.ac
    return await _update_returning(
        db,
        update(models.Character)
        .where(models.Character.id == character_id)
        .values(ac=case((ac >= cap, ac), (ac + increment > cap, cap), else_=ac + increment)),
        ac,
    )


async def damage_character(db: AsyncSession, character_id: str, hp_loss: int) -> Optional[int]:
    """
    Subtract `hp_loss` from the stored hp, stopping at 0.

    Returns:
        The remaining hp, or None if the character does not exist
    """
    hp = models.Character.hp
    return await _update_returning(
        db,
        update(models.Character)
        .where(models.Character.id == character_id)
        .values(hp=case((hp - hp_loss < 0, 0), else_=hp - hp_loss)),
        hp,
    )


async def heal_character(db: AsyncSession, character_id: str, amount: int) -> Optional[int]:
    """
    Add `amount` to the stored hp, capped at maxHp.

    Returns:
        The new hp, or None if the character does not exist or is already at full hp
    """
    hp, max_hp = models.Character.hp, models.Character.max_hp
    return await _update_returning(
        db,
        update(models.Character)
        .where(models.Character.id == character_id, hp < max_hp)
        .values(hp=case((hp + amount > max_hp, max_hp), else_=hp + amount)),
        hp,
    )


async def delete_character_row(db: AsyncSession, character_id: str) -> int:
    result = await db.execute(delete(models.Character).where(models.Character.id == character_id))
    return result.rowcount


# =============================================================================
# Inventory reads
# =============================================================================


async def get_character_gear(db: AsyncSession, character_id: str) -> List[Gear]:
    rows = await fetch_joined_items(db, models.character_gear, "gear_id", models.Gear, character_id)
    return [Gear.from_model(row) for row in rows]


async def get_character_potions(db: AsyncSession, character_id: str) -> List[Potion]:
    rows = await fetch_joined_items(db, models.character_potions, "potion_id", models.Potion, character_id)
    return [Potion.from_model(row) for row in rows]


async def get_character_weapons(db: AsyncSession, character_id: str) -> List[Weapon]:
    rows = await fetch_joined_items(db, models.character_weapons, "weapon_id", models.Weapon, character_id)
    return [Weapon.from_model(row) for row in rows]


async def get_all_character_gear(db: AsyncSession) -> Dict[str, List[Gear]]:
    rows = await fetch_all_joined_items(db, models.character_gear, "gear_id", models.Gear)
    return group_by_character(rows, Gear.from_model)


async def get_all_character_potions(db: AsyncSession) -> Dict[str, List[Potion]]:
    rows = await fetch_all_joined_items(db, models.character_potions, "potion_id", models.Potion)
    return group_by_character(rows, Potion.from_model)


async def get_all_character_weapons(db: AsyncSession) -> Dict[str, List[Weapon]]:
    rows = await fetch_all_joined_items(db, models.character_weapons, "weapon_id", models.Weapon)
    return group_by_character(rows, Weapon.from_model)


async def load_character(db: AsyncSession, character_id: str) -> Optional[Character]:
    """The character row plus its potions, weapons and gear, or None if the row is absent."""
    row = await get_character_row(db, character_id)
    if row is None:
        return None

    potions = await get_character_potions(db, character_id)
    weapons = await get_character_weapons(db, character_id)
    gear = await get_character_gear(db, character_id)
    return Character.from_model(row, gear=gear, potions=potions, weapons=weapons)


async def load_all_characters(db: AsyncSession) -> List[Character]:
    """Every character with its inventory, using one bulk query per join table."""
    rows = await get_character_rows(db)
    gear = await get_all_character_gear(db)
    potions = await get_all_character_potions(db)
    weapons = await get_all_character_weapons(db)
    return [
        Character.from_model(
            row,
            gear=gear.get(row.id, []),
            potions=potions.get(row.id, []),
            weapons=weapons.get(row.id, []),
        )
        for row in rows
    ]


# =============================================================================
# Inventory writes
# =============================================================================


async def add_character_weapon(db: AsyncSession, character_id: str, weapon_id: str) -> None:
    await insert_link(db, models.character_weapons, "weapon_id", character_id, weapon_id)


async def add_character_gear(db: AsyncSession, character_id: str, gear_id: str) -> None:
    await insert_link(db, models.character_gear, "gear_id", character_id, gear_id)


async def add_character_potion(db: AsyncSession, character_id: str, potion_id: str) -> None:
    await insert_link(db, models.character_potions, "potion_id", character_id, potion_id)


async def remove_character_potion(db: AsyncSession, character_id: str, potion_id: str) -> int:
    """Remove one consumed potion from a character's inventory."""
    return await delete_link(db, models.character_potions, "potion_id", character_id, potion_id)


async def replace_character_gear(db: AsyncSession, character_id: str, gear_ids: Iterable[str]) -> None:
    await replace_links(db, models.character_gear, "gear_id", character_id, gear_ids)


async def replace_character_potions(db: AsyncSession, character_id: str, potion_ids: Iterable[str]) -> None:
    await replace_links(db, models.character_potions, "potion_id", character_id, potion_ids)


async def replace_character_weapons(db: AsyncSession, character_id: str, weapon_ids: Iterable[str]) -> None:
    await replace_links(db, models.character_weapons, "weapon_id", character_id, weapon_ids)


async def clear_character_inventory(db: AsyncSession, character_id: str) -> None:
    """Delete the gear, potion and weapon join rows of a character, in that order."""
    await clear_links(db, models.character_gear, character_id)
    await clear_links(db, models.character_potions, character_id)
    await clear_links(db, models.character_weapons, character_id)
