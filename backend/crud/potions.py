"""
CRUD operations for potions.

Effects are stored as a JSON object with camelCase keys (hpRestore,
manaRestore, increaseDamage); unset effects are not stored.
"""

import logging
from typing import List, Optional

import schemas
from domain.entities import Potion
from infrastructure.database import models, retry_on_db_lock, transaction
from infrastructure.database.models import generate_id
from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger("CRUD")


@retry_on_db_lock(max_retries=5, initial_delay=0.1, backoff_factor=2)
async def create_potion(db: AsyncSession, potion: schemas.PotionCreate) -> Potion:
    db_potion = models.Potion(
        id=potion.id or generate_id(),
        name=potion.name,
        effects=potion.effects.to_storage(),
        utility=potion.utility,
    )
    async with transaction(db):
        db.add(db_potion)
    logger.info(f"Created potion {db_potion.id} ({db_potion.name})")
    return Potion.from_model(db_potion)


async def search_potion_by_id(db: AsyncSession, potion_id: str) -> Optional[Potion]:
    result = await db.execute(select(models.Potion).where(models.Potion.id == potion_id))
    row = result.scalar_one_or_none()
    return Potion.from_model(row) if row else None


@retry_on_db_lock(max_retries=5, initial_delay=0.1, backoff_factor=2)
async def update_potion(db: AsyncSession, potion_id: str, potion: schemas.PotionUpdate) -> bool:
    async with transaction(db):
        result = await db.execute(
            update(models.Potion)
            .where(models.Potion.id == potion_id)
            .values(name=potion.name, effects=potion.effects.to_storage(), utility=potion.utility)
        )
    return result.rowcount == 1


@retry_on_db_lock(max_retries=5, initial_delay=0.1, backoff_factor=2)
async def delete_potion(db: AsyncSession, potion_id: str) -> bool:
    async with transaction(db):
        result = await db.execute(delete(models.Potion).where(models.Potion.id == potion_id))
    return result.rowcount == 1


async def get_all_potions(db: AsyncSession) -> List[Potion]:
    result = await db.execute(select(models.Potion))
    return [Potion.from_model(row) for row in result.scalars().all()]
