"""
Shared fixtures: a fresh in-memory database per test, seeded with the
standard accounts, and an HTTP client bound to the app with get_db overridden.
"""
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from energy_billing.database import Base, build_engine, build_session_factory, get_db
from energy_billing.main import app
from energy_billing.seed import run_seed

TEST_DATABASE_URL = "sqlite+aiosqlite://"


@pytest_asyncio.fixture(scope="function")
async def test_engine():
    """Create tables on a private in-memory database"""
    engine = build_engine(TEST_DATABASE_URL)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def session_factory(test_engine):
    factory = build_session_factory(test_engine)
    async with factory() as session:
        await run_seed(session)
        await session.commit()
    return factory


@pytest_asyncio.fixture(scope="function")
async def db_session(session_factory):
    """Database session over the seeded accounts"""
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture(scope="function")
async def client(session_factory):
    """API client with the database dependency pointed at the test database"""
    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def valid_payment_body():
    """Well-formed payment payload as the client sends it"""
    return {
        "accountId": "A-0001",
        "cardNumber": "4111 1111 1111 1111",
        "cardholderName": "Test User",
        "expiryDate": "12/25",
        "cvv": "123",
        "amount": 100,
    }
