"""
CRUD operations for the wizard extension row and the wizard_spells join table.

Like crud/characters.py, these never commit; services/wizard_service.py owns
the transaction boundaries.
"""

import logging
from typing import Dict, Iterable, List, Optional

from domain.entities import Spell
from infrastructure.database import models
from sqlalchemy import case, delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from .helpers import (
    clear_links,
    fetch_all_joined_items,
    fetch_joined_items,
    group_by_character,
    insert_link,
    replace_links,
)

logger = logging.getLogger("CRUD")


async def insert_wizard_stats(db: AsyncSession, character_id: str, mana: int, max_mana: int) -> None:
    db.add(models.WizardStats(character_id=character_id, mana=mana, max_mana=max_mana))
    await db.flush()


async def get_wizard_stats(db: AsyncSession, character_id: str) -> Optional[models.WizardStats]:
    result = await db.execute(
        select(models.WizardStats)
        .where(models.WizardStats.character_id == character_id)
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


async def get_all_wizard_stats(db: AsyncSession) -> Dict[str, models.WizardStats]:
    result = await db.execute(select(models.WizardStats).execution_options(populate_existing=True))
    return {row.character_id: row for row in result.scalars().all()}


async def update_wizard_stats(db: AsyncSession, character_id: str, mana: int, max_mana: int) -> int:
    result = await db.execute(
        update(models.WizardStats)
        .where(models.WizardStats.character_id == character_id)
        .values(mana=mana, max_mana=max_mana)
    )
    return result.rowcount


async def spend_wizard_mana(db: AsyncSession, character_id: str, cost: int) -> Optional[int]:
    """
    Subtract `cost` from the stored mana if the wizard can still afford it.

    Returns:
        The mana left, or None if there is no such wizard or too little mana
    """
    mana = models.WizardStats.mana
    result = await db.execute(
        update(models.WizardStats)
        .where(models.WizardStats.character_id == character_id, mana >= cost)
        .values(mana=mana - cost)
        .returning(mana)
        .execution_options(synchronize_session="fetch")
    )
    return result.scalar_one_or_none()


async def restore_wizard_mana(db: AsyncSession, character_id: str, amount: int) -> Optional[int]:
    """
    Add `amount` to the stored mana, capped at maxMana.

    Returns:
        The new mana, or None if there is no such wizard or its mana is already full
    """
    mana, max_mana = models.WizardStats.mana, models.WizardStats.max_mana
    result = await db.execute(
        update(models.WizardStats)
        .where(models.WizardStats.character_id == character_id, mana < max_mana)
        .values(mana=case((mana + amount > max_mana, max_mana), else_=mana + amount))
        .returning(mana)
        .execution_options(synchronize_session="fetch")
    )
    return result.scalar_one_or_none()


async def delete_wizard_stats(db: AsyncSession, character_id: str) -> int:
    result = await db.execute(delete(models.WizardStats).where(models.WizardStats.character_id == character_id))
    return result.rowcount


# =============================================================================
# Spellbook
# =============================================================================


async def get_wizard_spells(db: AsyncSession, character_id: str) -> List[Spell]:
    rows = await fetch_joined_items(db, models.wizard_spells, "spell_id", models.Spell, character_id)
    return [Spell.from_model(row) for row in rows]


async def get_all_wizard_spells(db: AsyncSession) -> Dict[str, List[Spell]]:
    rows = await fetch_all_joined_items(db, models.wizard_spells, "spell_id", models.Spell)
    return group_by_character(rows, Spell.from_model)


async def add_wizard_spell(db: AsyncSession, character_id: str, spell_id: str) -> None:
    await insert_link(db, models.wizard_spells, "spell_id", character_id, spell_id)


async def replace_wizard_spells(db: AsyncSession, character_id: str, spell_ids: Iterable[str]) -> None:
    await replace_links(db, models.wizard_spells, "spell_id", character_id, spell_ids)


async def clear_wizard_spells(db: AsyncSession, character_id: str) -> int:
    return await clear_links(db, models.wizard_spells, character_id)
