"""
CRUD operations for spells.
"""

import logging
from typing import List, Optional

import schemas
from domain.entities import Spell
from infrastructure.database import models, retry_on_db_lock, transaction
from infrastructure.database.models import generate_id
from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger("CRUD")


@retry_on_db_lock(max_retries=5, initial_delay=0.1, backoff_factor=2)
async def create_spell(db: AsyncSession, spell: schemas.SpellCreate) -> Spell:
    db_spell = models.Spell(
        id=spell.id or generate_id(),
        name=spell.name,
        description=spell.description,
        mana_cost=spell.mana_cost,
        damage=spell.damage,
        duration=spell.duration,
    )
    async with transaction(db):
        db.add(db_spell)
    logger.info(f"Created spell {db_spell.id} ({db_spell.name})")
    return Spell.from_model(db_spell)


async def search_spell_by_id(db: AsyncSession, spell_id: str) -> Optional[Spell]:
    result = await db.execute(select(models.Spell).where(models.Spell.id == spell_id))
    row = result.scalar_one_or_none()
    return Spell.from_model(row) if row else None


@retry_on_db_lock(max_retries=5, initial_delay=0.1, backoff_factor=2)
async def update_spell(db: AsyncSession, spell_id: str, spell: schemas.SpellUpdate) -> bool:
    async with transaction(db):
        result = await db.execute(
            update(models.Spell)
            .where(models.Spell.id == spell_id)
            .values(
                name=spell.name,
                description=spell.description,
                mana_cost=spell.mana_cost,
                damage=spell.damage,
                duration=spell.duration,
            )
        )
    return result.rowcount == 1


@retry_on_db_lock(max_retries=5, initial_delay=0.1, backoff_factor=2)
async def delete_spell(db: AsyncSession, spell_id: str) -> bool:
    async with transaction(db):
        result = await db.execute(delete(models.Spell).where(models.Spell.id == spell_id))
    return result.rowcount == 1


async def get_all_spells(db: AsyncSession) -> List[Spell]:
    result = await db.execute(select(models.Spell))
    return [Spell.from_model(row) for row in result.scalars().all()]
