"""
User service.

Credential checks for the login route. Registration goes straight through
crud.create_user.
"""

import logging
from typing import Optional

import crud
from infrastructure.auth import verify_password
from infrastructure.database import models
from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger("UserService")


async def authenticate_user(db: AsyncSession, username: str, password: str) -> Optional[models.User]:
    """Return the user if the password matches its stored hash, else None."""
    user = await crud.get_user_by_username(db, username)
    if user is None or not verify_password(password, user.password):
        logger.warning(f"Failed login for '{username}'")
        return None
    return user
