"""Shared test fixtures for the Product Catalog API tests."""
import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.db.base import get_db, init_db
from app.domain.product import Product

SAMPLE_PRODUCTS = [
    ("Apple", 1.5, "Fresh red fruit"),
    ("banana", 0.25, "Yellow FOOd for monkeys"),
    ("Cherry", 3.0, "Small stone fruit"),
    ("Foosball table", 120.0, "Game room classic"),
    ("Date", 2.75, "Sweet dried fruit"),
]


@pytest.fixture
async def engine():
    """In-memory SQLite engine shared by every connection in a test."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await init_db(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
async def seeded(session_factory):
    """Insert SAMPLE_PRODUCTS and return their names."""
    async with session_factory() as session:
        session.add_all(
            [Product(name=n, price=p, description=d) for n, p, d in SAMPLE_PRODUCTS]
        )
        await session.commit()
    return [n for n, _, _ in SAMPLE_PRODUCTS]


@pytest.fixture
async def client(session_factory):
    """HTTP client against the app with get_db bound to the test engine."""
    from app.main import app

    async def _get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = _get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
