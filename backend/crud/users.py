"""
CRUD operations for users.

Passwords are hashed with bcrypt before they reach the database; the hash is
never returned by the API.
"""

import logging
from typing import Optional

from domain.exceptions import ConflictError
from domain.value_objects.enums import UserRole
from infrastructure.auth import hash_password
from infrastructure.database import models, retry_on_db_lock, transaction
from infrastructure.database.models import generate_id
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger("CRUD")


@retry_on_db_lock(max_retries=5, initial_delay=0.1, backoff_factor=2)
async def create_user(
    db: AsyncSession, username: str, password: str, role: UserRole | str = UserRole.USER
) -> models.User:
    """Create a user with a bcrypt-hashed password."""
    if await get_user_by_username(db, username) is not None:
        raise ConflictError("Username already exists")

    db_user = models.User(
        id=generate_id(),
        username=username,
        password=hash_password(password),
        role=UserRole(role).value,
    )
    try:
        async with transaction(db):
            db.add(db_user)
    except IntegrityError as exc:
        raise ConflictError("Username already exists") from exc

    logger.info(f"Registered user {db_user.username} ({db_user.id})")
    return db_user


async def get_user_by_id(db: AsyncSession, user_id: str) -> Optional[models.User]:
    result = await db.execute(select(models.User).where(models.User.id == user_id))
    return result.scalar_one_or_none()


async def get_user_by_username(db: AsyncSession, username: str) -> Optional[models.User]:
    result = await db.execute(select(models.User).where(models.User.username == username))
    return result.scalar_one_or_none()
