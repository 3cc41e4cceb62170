from datetime import date, datetime, timedelta, timezone

import pytest_asyncio
import sqlalchemy.event
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from app.config import settings
from app.database import get_db, set_sqlite_pragmas
from app.main import create_app
from app.models.base import Base

engine = create_async_engine(settings.TEST_DATABASE_URL, echo=False)
if engine.dialect.name == "sqlite":
    sqlalchemy.event.listen(engine.sync_engine, "connect", set_sqlite_pragmas)

test_session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture(autouse=True)
async def setup_database():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


async def override_get_db():
    async with test_session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client():
    app = create_app()
    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c


def utc_today() -> date:
    return datetime.now(timezone.utc).date()


@pytest_asyncio.fixture
async def ubuntu_catalog(client: AsyncClient) -> dict:
    """Ubuntu 18.04 past end of life, 20.04 ending in ~3 months, 22.04 supported for two more years."""
    today = utc_today()
    end_dates = {
        "18.04": today - timedelta(days=365),
        "20.04": today + timedelta(days=90),
        "22.04": today + timedelta(days=730),
    }
    catalog = {}
    for version, end_of_support in end_dates.items():
        response = await client.post(
            "/api/v1/os",
            json={"name": "Ubuntu", "version": version, "end_of_support": end_of_support.isoformat()},
        )
        catalog[version] = response.json()
    return catalog


@pytest_asyncio.fixture
async def one_server_per_os(client: AsyncClient, ubuntu_catalog: dict) -> dict:
    servers = {}
    for version, os_record in ubuntu_catalog.items():
        name = f"web-{version.replace('.', '')}"
        response = await client.post("/api/v1/servers", json={"name": name, "os_id": os_record["id"]})
        servers[version] = response.json()
    return servers
