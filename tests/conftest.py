"""Pytest configuration and shared fixtures."""

from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.core.database import Base, DataContext, enable_sqlite_savepoints, get_db
from app.main import create_app

# Import all models to ensure they're registered with Base.metadata
from app.modules.logs.models import ChangeLogEntry  # noqa: F401
from app.modules.logs.services import ChangeLogService
from app.modules.users.models import User
from app.modules.users.services import UserService
from tests.factories.user import UserFactory


# In-memory database shared by every connection of the test engine
TEST_DATABASE_URL = "sqlite+aiosqlite://"


@pytest.fixture(scope="function")
async def engine():
    """Create test database engine."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
        echo=False,
    )
    enable_sqlite_savepoints(engine)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
async def db(engine) -> AsyncGenerator[AsyncSession, None]:
    """Provide a transactional database session for tests.

    Each test runs in its own transaction that is rolled back
    after the test completes, ensuring test isolation.
    """
    async with engine.connect() as conn:
        await conn.begin()

        session_factory = async_sessionmaker(
            bind=conn,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
            join_transaction_mode="create_savepoint",
        )
        async with session_factory() as session:
            yield session

        await conn.rollback()


@pytest.fixture
def context(db: AsyncSession) -> DataContext:
    """Data context bound to the test session."""
    return DataContext(db)


@pytest.fixture
def change_log(context: DataContext) -> ChangeLogService:
    """Change log service bound to the test session."""
    return ChangeLogService(context)


@pytest.fixture
def user_service(context: DataContext, change_log: ChangeLogService) -> UserService:
    """User service bound to the test session."""
    return UserService(context, change_log)


@pytest.fixture
async def app(db: AsyncSession):
    """Create test application instance."""
    application = create_app()

    # Override database dependency
    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db

    application.dependency_overrides[get_db] = override_get_db

    yield application

    application.dependency_overrides.clear()


@pytest.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """Provide async HTTP client for API testing."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client


@pytest.fixture
def anyio_backend() -> str:
    """Specify the async backend for anyio."""
    return "asyncio"


# ============================================================
# User Fixtures
# ============================================================


@pytest.fixture
async def user(db: AsyncSession) -> User:
    """Create a test user directly, without a change log entry.

    Returns:
        A persisted User instance
    """
    user = UserFactory.build()
    db.add(user)
    await db.flush()
    return user
