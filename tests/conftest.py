import os
from pathlib import Path

import pytest

# Must be set before anything imports core.config
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"
os.environ["DATABASE_URL"] = TEST_DATABASE_URL
os.environ.setdefault("API_PREFIX", "/api/v1")

from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.ext.asyncio import async_sessionmaker  # noqa: E402

from db.beer import BeerType  # noqa: E402
from db.database import create_db_and_tables, get_async_session, make_engine  # noqa: E402
from db.repository import BeerRepository  # noqa: E402
from main import app  # noqa: E402
from schemas.beer import BeerCreate  # noqa: E402
from services.beer_service import BeerService  # noqa: E402

BEERS_URL = "/api/v1/beers"


def pytest_collection_modifyitems(config, items):
    """Mark tests by module: HTTP tests are integration, the rest are domain."""
    for item in items:
        if Path(item.fspath).name.endswith("_api.py"):
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.domain)


def beer_payload(**overrides) -> dict:
    data = {
        "name": "Brahma",
        "brand": "Ambev",
        "max": 50,
        "quantity": 10,
        "type": "LAGER",
    }
    data.update(overrides)
    return data


def beer_create(**overrides) -> BeerCreate:
    data = beer_payload(**overrides)
    data["type"] = BeerType(data["type"])
    return BeerCreate(**data)


@pytest.fixture()
async def engine():
    engine = make_engine(TEST_DATABASE_URL)
    await create_db_and_tables(engine)
    yield engine
    await engine.dispose()


@pytest.fixture()
def session_maker(engine):
    return async_sessionmaker(engine, expire_on_commit=False)


@pytest.fixture()
async def session(session_maker):
    async with session_maker() as session:
        yield session


@pytest.fixture()
def repository(session):
    return BeerRepository(session)


@pytest.fixture()
def service(repository):
    return BeerService(repository)


@pytest.fixture()
def client():
    """TestClient backed by a fresh in-memory database per test."""
    test_engine = make_engine(TEST_DATABASE_URL)
    maker = async_sessionmaker(test_engine, expire_on_commit=False)

    async def override_get_async_session():
        async with maker() as session:
            yield session

    app.dependency_overrides[get_async_session] = override_get_async_session
    try:
        with TestClient(app) as c:
            c.portal.call(create_db_and_tables, test_engine)
            yield c
            c.portal.call(test_engine.dispose)
    finally:
        app.dependency_overrides.clear()
