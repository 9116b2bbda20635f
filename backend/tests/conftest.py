import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from houseguide.config import settings
from houseguide.database import get_db
from houseguide.main import create_app
from houseguide.models.base import Base
from houseguide.providers.registry import get_classification_provider, get_generation_provider
from houseguide.residents.models import House, Resident

engine = create_async_engine(settings.TEST_DATABASE_URL, echo=False)
test_session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture(autouse=True)
async def setup_database():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


async def override_get_db():
    async with test_session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def db_session():
    async with test_session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def app():
    app = create_app()
    app.dependency_overrides[get_db] = override_get_db
    # Model providers are opt-in per test; default to the keyword/template paths
    app.dependency_overrides[get_classification_provider] = lambda: None
    app.dependency_overrides[get_generation_provider] = lambda: None
    return app


@pytest_asyncio.fixture
async def client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c


@pytest_asyncio.fixture
async def resident(db_session: AsyncSession) -> Resident:
    house = House(name="Oak House")
    db_session.add(house)
    await db_session.flush()
    resident = Resident(house_id=house.id, first_name="John", last_initial="D")
    db_session.add(resident)
    await db_session.commit()
    await db_session.refresh(resident)
    return resident
