"""
CRUD operations for gear (armour pieces).

The armour value is informational; the AC a piece grants is decided by its
category when it is equipped (see domain/services/combat_rules.py).
"""

import logging
from typing import List, Optional

import schemas
from domain.entities import Gear
from infrastructure.database import models, retry_on_db_lock, transaction
from infrastructure.database.models import generate_id
from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger("CRUD")


@retry_on_db_lock(max_retries=5, initial_delay=0.1, backoff_factor=2)
async def create_gear(db: AsyncSession, gear: schemas.GearCreate) -> Gear:
    db_gear = models.Gear(
        id=gear.id or generate_id(),
        name=gear.name,
        category=gear.category,
        armour=gear.armour,
    )
    async with transaction(db):
        db.add(db_gear)
    logger.info(f"Created gear {db_gear.id} ({db_gear.name})")
    return Gear.from_model(db_gear)


async def search_gear_by_id(db: AsyncSession, gear_id: str) -> Optional[Gear]:
    result = await db.execute(select(models.Gear).where(models.Gear.id == gear_id))
    row = result.scalar_one_or_none()
    return Gear.from_model(row) if row else None


@retry_on_db_lock(max_retries=5, initial_delay=0.1, backoff_factor=2)
async def update_gear(db: AsyncSession, gear_id: str, gear: schemas.GearUpdate) -> bool:
    async with transaction(db):
        result = await db.execute(
            update(models.Gear)
            .where(models.Gear.id == gear_id)
            .values(name=gear.name, category=gear.category, armour=gear.armour)
        )
    return result.rowcount == 1


@retry_on_db_lock(max_retries=5, initial_delay=0.1, backoff_factor=2)
async def delete_gear(db: AsyncSession, gear_id: str) -> bool:
    async with transaction(db):
        result = await db.execute(delete(models.Gear).where(models.Gear.id == gear_id))
    return result.rowcount == 1


async def get_all_gears(db: AsyncSession) -> List[Gear]:
    result = await db.execute(select(models.Gear))
    return [Gear.from_model(row) for row in result.scalars().all()]
