"""
Pytest configuration and shared fixtures for backend tests.

This module provides test fixtures for database sessions, test clients,
authentication, and commonly used test data.

NOTE: Heavy imports (main, models) are done lazily inside fixtures
to avoid loading the entire app for tests that don't need it.
"""

import gc
import os
import sys
from pathlib import Path
from typing import TYPE_CHECKING

import pytest

# Add backend directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

# Settings are read once at import time by the database module and the app
# factory, so test configuration must be in the environment before either loads.
TEST_JWT_SECRET = "test_secret_key_for_testing_only"
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("JWT_SECRET", TEST_JWT_SECRET)
os.environ.setdefault("AUTH_ENABLED", "true")

# Type hints only - not imported at runtime
if TYPE_CHECKING:
    from typing import AsyncGenerator

    from domain.entities import Character, CharacterClass, Gear, Potion, Spell, Weapon, Wizard
    from httpx import AsyncClient
    from sqlalchemy.ext.asyncio import AsyncSession


# Files that use database fixtures
DB_FIXTURE_FILES = {
    "test_catalog_crud.py",
    "test_character_service.py",
    "test_wizard_service.py",
    "test_database.py",
    "test_users.py",
}


def pytest_collection_modifyitems(items):
    """Auto-apply markers based on test directory and fixtures used."""
    for item in items:
        filepath = str(item.fspath)
        filename = Path(filepath).name

        # Apply 'unit' marker to tests in unit directory
        if "/tests/unit/" in filepath:
            item.add_marker(pytest.mark.unit)
            # Mark database-using tests
            if filename in DB_FIXTURE_FILES:
                item.add_marker(pytest.mark.db)
        # Apply 'integration' marker to tests in integration directory
        elif "/tests/integration/" in filepath:
            item.add_marker(pytest.mark.integration)
            item.add_marker(pytest.mark.db)  # All integration tests use db


@pytest.fixture(autouse=True)
def cleanup_after_test():
    """Run garbage collection after each test to free memory."""
    yield
    gc.collect()


@pytest.fixture(autouse=True)
def fresh_write_lock():
    """The SQLite write lock is bound to an event loop; each test gets its own."""
    from infrastructure.database.connection import reset_write_lock

    reset_write_lock()
    yield
    reset_write_lock()


# ============================================================================
# Database fixtures
# ============================================================================


@pytest.fixture(scope="function")
async def test_engine():
    """
    Create a fresh in-memory database for each test function.

    StaticPool keeps the single in-memory connection alive, so every session
    created from this engine sees the same tables.
    """
    from infrastructure.database.connection import Base
    from sqlalchemy.ext.asyncio import create_async_engine
    from sqlalchemy.pool import StaticPool

    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture(scope="function")
async def test_db(test_engine) -> "AsyncGenerator[AsyncSession, None]":
    """Provide a session on the per-test database, configured like the app's."""
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

    session_factory = async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)
    async with session_factory() as session:
        yield session


@pytest.fixture(scope="function")
async def file_db_sessions(tmp_path) -> "AsyncGenerator[tuple[AsyncSession, AsyncSession], None]":
    """
    Two independent sessions on a temporary file database.

    Unlike the in-memory fixture, each session gets its own connection, the
    way two concurrent requests do in the app.
    """
    from infrastructure.database.connection import Base
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'guildhall.db'}",
        echo=False,
        connect_args={"check_same_thread": False},
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)
    async with session_factory() as first, session_factory() as second:
        yield first, second

    await engine.dispose()


# ============================================================================
# App/Client fixtures
# ============================================================================


def _get_app():
    """Lazy import of the FastAPI app."""
    from main import app

    return app


@pytest.fixture(scope="function")
async def client(test_db: "AsyncSession") -> "AsyncGenerator[AsyncClient, None]":
    """Create a test client without credentials (public routes, auth failures)."""
    from httpx import ASGITransport, AsyncClient
    from infrastructure.database.connection import get_db

    app = _get_app()

    async def override_get_db():
        yield test_db

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
async def authenticated_client(test_db: "AsyncSession") -> "AsyncGenerator[tuple[AsyncClient, str], None]":
    """Create a test client with a valid JWT token in the Authorization header."""
    from httpx import ASGITransport, AsyncClient
    from infrastructure.auth import generate_jwt_token
    from infrastructure.database.connection import get_db

    app = _get_app()

    async def override_get_db():
        yield test_db

    app.dependency_overrides[get_db] = override_get_db

    token = generate_jwt_token(user_id="user-test", username="tester")

    transport = ASGITransport(app=app)
    async with AsyncClient(
        transport=transport, base_url="http://test", headers={"Authorization": f"Bearer {token}"}
    ) as ac:
        yield ac, token

    app.dependency_overrides.clear()


# ============================================================================
# Sample data fixtures
# ============================================================================


@pytest.fixture
async def barbarian_class(test_db: "AsyncSession") -> "CharacterClass":
    import crud
    import schemas

    return await crud.create_class(
        test_db,
        schemas.ClassCreate(name="Barbarian", description="Hits hard", attributes={"strength": 50}),
    )


@pytest.fixture
async def rogue_class(test_db: "AsyncSession") -> "CharacterClass":
    import crud
    import schemas

    return await crud.create_class(
        test_db,
        schemas.ClassCreate(name="Rogue", description="Strikes first", attributes={"dexterity": 30}),
    )


@pytest.fixture
async def wizard_class(test_db: "AsyncSession") -> "CharacterClass":
    import crud
    import schemas

    return await crud.create_class(
        test_db,
        schemas.ClassCreate(name="Wizard", description="Bends mana", attributes={"intelligence": 80}),
    )


@pytest.fixture
async def warrior_class(test_db: "AsyncSession") -> "CharacterClass":
    import crud
    import schemas

    return await crud.create_class(test_db, schemas.ClassCreate(name="Warrior", attributes={"strength": 20}))


@pytest.fixture
async def sample_weapon(test_db: "AsyncSession") -> "Weapon":
    import crud
    import schemas

    return await crud.create_weapon(test_db, schemas.WeaponCreate(name="Greataxe", category="axe", damage=300))


@pytest.fixture
async def sample_gear(test_db: "AsyncSession") -> "Gear":
    import crud
    import schemas

    return await crud.create_gear(
        test_db, schemas.GearCreate(name="Iron Chestplate", category="chestplate", armour=40)
    )


@pytest.fixture
async def healing_potion(test_db: "AsyncSession") -> "Potion":
    import crud
    import schemas

    return await crud.create_potion(
        test_db,
        schemas.PotionCreate(name="Healing Draught", effects=schemas.PotionEffects(hpRestore=500), utility="heal"),
    )


@pytest.fixture
async def mana_potion(test_db: "AsyncSession") -> "Potion":
    import crud
    import schemas

    return await crud.create_potion(
        test_db,
        schemas.PotionCreate(name="Mana Flask", effects=schemas.PotionEffects(manaRestore=300), utility="mana"),
    )


@pytest.fixture
async def sample_spell(test_db: "AsyncSession") -> "Spell":
    import crud
    import schemas

    return await crud.create_spell(
        test_db,
        schemas.SpellCreate(name="Fireball", description="Burns", mana_cost=200, damage=100, duration=3),
    )


@pytest.fixture
async def sample_character(test_db: "AsyncSession", barbarian_class) -> "Character":
    """A barbarian with default stats and an empty inventory."""
    import schemas
    from services import character_service

    return await character_service.create_character(
        test_db, schemas.CharacterCreate(name="Conan", race="Human", class_id=barbarian_class.id)
    )


@pytest.fixture
async def target_character(test_db: "AsyncSession", warrior_class) -> "Character":
    import schemas
    from services import character_service

    return await character_service.create_character(
        test_db,
        schemas.CharacterCreate(name="Boromir", race="Human", class_id=warrior_class.id, hp=1000, max_hp=1000, ac=200),
    )


@pytest.fixture
async def sample_wizard(test_db: "AsyncSession", wizard_class) -> "Wizard":
    import schemas
    from services import wizard_service

    return await wizard_service.create_wizard(
        test_db, schemas.WizardCreate(name="Merlin", race="Human", class_id=wizard_class.id, mana=1000, max_mana=1000)
    )


@pytest.fixture
def mock_env_vars(monkeypatch):
    """Set up mock environment variables for testing."""
    from core import reset_settings

    monkeypatch.setenv("JWT_SECRET", TEST_JWT_SECRET)
    monkeypatch.setenv("JWT_EXPIRATION_HOURS", "1")

    # Reset settings cache so new env vars are picked up
    reset_settings()
    yield {"jwt_secret": TEST_JWT_SECRET}
    reset_settings()
