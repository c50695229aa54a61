"""
CRUD operations for weapons.
"""

import logging
from typing import List, Optional

import schemas
from domain.entities import Weapon
from infrastructure.database import models, retry_on_db_lock, transaction
from infrastructure.database.models import generate_id
from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger("CRUD")


@retry_on_db_lock(max_retries=5, initial_delay=0.1, backoff_factor=2)
async def create_weapon(db: AsyncSession, weapon: schemas.WeaponCreate) -> Weapon:
    db_weapon = models.Weapon(
        id=weapon.id or generate_id(),
        name=weapon.name,
        category=weapon.category,
        damage=weapon.damage,
    )
    async with transaction(db):
        db.add(db_weapon)
    logger.info(f"Created weapon {db_weapon.id} ({db_weapon.name})")
    return Weapon.from_model(db_weapon)


async def search_weapon_by_id(db: AsyncSession, weapon_id: str) -> Optional[Weapon]:
    result = await db.execute(select(models.Weapon).where(models.Weapon.id == weapon_id))
    row = result.scalar_one_or_none()
    return Weapon.from_model(row) if row else None


@retry_on_db_lock(max_retries=5, initial_delay=0.1, backoff_factor=2)
async def update_weapon(db: AsyncSession, weapon_id: str, weapon: schemas.WeaponUpdate) -> bool:
    async with transaction(db):
        result = await db.execute(
            update(models.Weapon)
            .where(models.Weapon.id == weapon_id)
            .values(name=weapon.name, category=weapon.category, damage=weapon.damage)
        )
    return result.rowcount == 1


@retry_on_db_lock(max_retries=5, initial_delay=0.1, backoff_factor=2)
async def delete_weapon(db: AsyncSession, weapon_id: str) -> bool:
    async with transaction(db):
        result = await db.execute(delete(models.Weapon).where(models.Weapon.id == weapon_id))
    return result.rowcount == 1


async def get_all_weapons(db: AsyncSession) -> List[Weapon]:
    result = await db.execute(select(models.Weapon))
    return [Weapon.from_model(row) for row in result.scalars().all()]
