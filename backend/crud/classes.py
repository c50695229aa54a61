"""
CRUD operations for character classes.

Class names are unique. create_class checks for an existing name first; the
unique index on classes.name catches concurrent inserts that pass the check.
"""

import logging
from typing import List, Optional

import schemas
from domain.entities import CharacterClass, normalize_attributes
from domain.exceptions import ConflictError
from infrastructure.database import models, retry_on_db_lock, transaction
from infrastructure.database.models import generate_id
from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger("CRUD")


async def class_name_taken(db: AsyncSession, name: str) -> bool:
    existing = await db.execute(select(models.CharacterClass.id).where(models.CharacterClass.name == name))
    return existing.first() is not None


@retry_on_db_lock(max_retries=5, initial_delay=0.1, backoff_factor=2)
async def create_class(db: AsyncSession, character_class: schemas.ClassCreate) -> CharacterClass:
    """Create a class. Missing base attributes default to 0."""
    if await class_name_taken(db, character_class.name):
        raise ConflictError("Class name already exists")

    db_class = models.CharacterClass(
        id=character_class.id or generate_id(),
        name=character_class.name,
        description=character_class.description,
        attributes=normalize_attributes(character_class.attributes),
    )
    try:
        async with transaction(db):
            db.add(db_class)
    except IntegrityError as exc:
        logger.warning(f"Class name '{character_class.name}' taken by a concurrent insert")
        raise ConflictError("Class name already exists") from exc

    logger.info(f"Created class {db_class.id} ({db_class.name})")
    return CharacterClass.from_model(db_class)


async def search_class_by_id(db: AsyncSession, class_id: str) -> Optional[CharacterClass]:
    result = await db.execute(select(models.CharacterClass).where(models.CharacterClass.id == class_id))
    row = result.scalar_one_or_none()
    return CharacterClass.from_model(row) if row else None


@retry_on_db_lock(max_retries=5, initial_delay=0.1, backoff_factor=2)
async def update_class(db: AsyncSession, class_id: str, character_class: schemas.ClassUpdate) -> bool:
    """Replace a class's fields. Returns True only if exactly one row changed."""
    async with transaction(db):
        result = await db.execute(
            update(models.CharacterClass)
            .where(models.CharacterClass.id == class_id)
            .values(
                name=character_class.name,
                description=character_class.description,
                attributes=normalize_attributes(character_class.attributes),
            )
        )
    return result.rowcount == 1


@retry_on_db_lock(max_retries=5, initial_delay=0.1, backoff_factor=2)
async def delete_class(db: AsyncSession, class_id: str) -> bool:
    async with transaction(db):
        result = await db.execute(delete(models.CharacterClass).where(models.CharacterClass.id == class_id))
    return result.rowcount == 1


async def get_all_classes(db: AsyncSession) -> List[CharacterClass]:
    result = await db.execute(select(models.CharacterClass))
    return [CharacterClass.from_model(row) for row in result.scalars().all()]
