"""Authentication routes for registration, login and token verification."""

import crud
import schemas
from core.dependencies import RequestIdentity, get_request_identity
from fastapi import APIRouter, Depends, HTTPException, Request, status
from infrastructure.auth import generate_jwt_token
from infrastructure.database import get_db
from services.user_service import authenticate_user
from slowapi import Limiter
from slowapi.util import get_remote_address
from sqlalchemy.ext.asyncio import AsyncSession

router = APIRouter()

limiter = Limiter(key_func=get_remote_address)


@router.post("/register", response_model=schemas.User, status_code=status.HTTP_201_CREATED)
async def register(credentials: schemas.UserCredentials, db: AsyncSession = Depends(get_db)):
    """Create a user. Returns 409 if the username is taken."""
    return await crud.create_user(db, credentials.username, credentials.password)


@router.post("/login", response_model=schemas.TokenResponse)
@limiter.limit("20/minute")  # Rate limit: 20 attempts per minute per IP
async def login(request: Request, credentials: schemas.UserCredentials, db: AsyncSession = Depends(get_db)):
    """
    Check credentials and return a JWT token.

    The client sends the token back as "Authorization: Bearer <token>".

    Returns:
        - 401: Invalid credentials
        - 429: Too many requests (rate limited)
    """
    user = await authenticate_user(db, credentials.username, credentials.password)
    if user is None:
        raise HTTPException(status_code=401, detail="Invalid credentials")
    return {"token": generate_jwt_token(user_id=user.id, username=user.username)}


@router.get("/protected")
async def protected(identity: RequestIdentity = Depends(get_request_identity)):
    """
    Echo the authenticated user.
    This endpoint is protected by the auth middleware, so if we reach here, auth is valid.
    """
    return {
        "message": "This is a protected route",
        "user": {"id": identity.user_id, "username": identity.username},
    }


@router.get("/health")
async def health_check():
    """Health check endpoint (no auth required)."""
    return {"status": "healthy"}
