"""
Application factory for creating FastAPI app instances.

This module provides functions for creating and configuring the FastAPI application
with all necessary middleware, routers, and exception handlers.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from infrastructure.database import init_db
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from core import get_logger, get_settings

logger = get_logger("AppFactory")


async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    """A constraint rejected the write (duplicate id/name or a dangling reference)."""
    logger.warning(f"Integrity error on {request.method} {request.url.path}: {exc.orig}")
    return JSONResponse(status_code=409, content={"detail": "Conflict with existing data"})


async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error(f"Database error on {request.method} {request.url.path}", exc_info=exc)
    return JSONResponse(status_code=500, content={"detail": "Something went wrong"})


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance
    """
    from fastapi.middleware.cors import CORSMiddleware
    from infrastructure.auth import AuthMiddleware
    from routers import auth, characters, classes, gears, potions, spells, weapons, wizards
    from slowapi import _rate_limit_exceeded_handler
    from slowapi.errors import RateLimitExceeded

    settings = get_settings()

    # Create lifespan context manager
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Lifespan context manager for application startup and shutdown."""
        logger.info("🚀 Application startup...")

        # Create tables that don't exist yet
        await init_db()

        logger.info("✅ Application startup complete")

        yield

        logger.info("🛑 Application shutdown complete")

    # Create app with lifespan
    app = FastAPI(title="Guildhall API", lifespan=lifespan)

    # The login route's limiter doubles as the app-wide limiter
    app.state.limiter = auth.limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    app.add_exception_handler(IntegrityError, integrity_error_handler)
    app.add_exception_handler(SQLAlchemyError, database_error_handler)

    # CORS middleware
    allowed_origins = settings.get_cors_origins()
    logger.info("🔒 CORS Configuration:")
    logger.info(f"   Allowed origins: {allowed_origins}")
    logger.info("   💡 To add more origins, set FRONTEND_URL in .env")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Add authentication middleware
    if settings.auth_enabled:
        app.add_middleware(AuthMiddleware)
    else:
        logger.warning("⚠️  AUTH_ENABLED=false: every route is public")

    # Register routers
    app.include_router(auth.router, prefix="/auth", tags=["Authentication"])
    app.include_router(classes.router, prefix="/classes", tags=["Classes"])
    app.include_router(weapons.router, prefix="/weapons", tags=["Weapons"])
    app.include_router(gears.router, prefix="/gears", tags=["Gear"])
    app.include_router(potions.router, prefix="/potions", tags=["Potions"])
    app.include_router(spells.router, prefix="/spells", tags=["Spells"])
    app.include_router(characters.router, prefix="/characters", tags=["Characters"])
    app.include_router(wizards.router, prefix="/wizards", tags=["Wizards"])

    @app.get("/", include_in_schema=False)
    async def root():
        return {"name": "Guildhall API", "docs": "/docs"}

    return app
