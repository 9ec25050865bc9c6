"""
Shared fixtures: an in-memory SQLite database, seeded users and watches,
and an HTTP client bound to a fresh application.
"""
import os

os.environ.setdefault("SECRET_KEY", "test-secret-key-with-at-least-32-characters")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("ENVIRONMENT", "development")

from decimal import Decimal
from types import SimpleNamespace
from typing import AsyncGenerator, Callable

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from watchstore.core.database import Database
from watchstore.core.security import create_access_token
from watchstore.models import User, UserRole, Watch
from watchstore.services.access import Caller


@pytest.fixture
async def database() -> AsyncGenerator[Database, None]:
    """A connected in-memory database with every table created."""
    db = Database("sqlite+aiosqlite://")
    await db.connect()
    yield db
    await db.disconnect()


@pytest.fixture
async def seed(database: Database) -> SimpleNamespace:
    """Committed users and watches shared by the service and API tests."""
    alice = User(name="Alice", email="alice@example.com", password_hash="x", phone="+7 700 000 0001")
    bob = User(name="Bob", email="bob@example.com", password_hash="x")
    admin = User(
        name="Admin",
        email="admin@example.com",
        password_hash="x",
        role=UserRole.ADMIN.value,
    )
    seamaster = Watch(brand="Omega", model="Seamaster", price=Decimal("100000"), stock=10)
    khaki = Watch(brand="Hamilton", model="Khaki Field", price=Decimal("50000"), stock=5)
    daytona = Watch(brand="Rolex", model="Daytona", price=Decimal("600000"), stock=1)

    async with database.session() as session:
        session.add_all([alice, bob, admin, seamaster, khaki, daytona])

    return SimpleNamespace(
        alice=alice,
        bob=bob,
        admin=admin,
        seamaster=seamaster,
        khaki=khaki,
        daytona=daytona,
    )


@pytest.fixture
async def db_session(database: Database, seed: SimpleNamespace) -> AsyncGenerator[AsyncSession, None]:
    """A session whose work is rolled back when the test ends."""
    async with database.session_factory() as session:
        yield session


@pytest.fixture
def callers(seed: SimpleNamespace) -> SimpleNamespace:
    """Caller identities for the seeded users."""
    return SimpleNamespace(
        alice=Caller(id=seed.alice.id, role=seed.alice.role),
        bob=Caller(id=seed.bob.id, role=seed.bob.role),
        admin=Caller(id=seed.admin.id, role=seed.admin.role),
    )


@pytest.fixture
async def async_client(database: Database, seed: SimpleNamespace) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client for a fresh app wired to the test database."""
    from watchstore.main import create_app

    app = create_app()
    app.state.database = database

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def auth_headers() -> Callable[[User], dict]:
    """Build an Authorization header for a user."""

    def _headers(user: User) -> dict:
        token = create_access_token({"sub": str(user.id)})
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture
def sample_address() -> dict:
    return {
        "street": "Abay Ave 10",
        "city": "Almaty",
        "state": "Almaty Region",
        "zipCode": "050000",
        "country": "Kazakhstan",
    }
