import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

import src.domain.entities  # noqa: F401 (registers tables)
from config import ApplicationConfig
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.services.access_policy import AccessPolicy
from src.depends import (
    get_access_policy,
    get_object_locator,
    get_tier_authority,
    get_unit_of_work,
)
from tests.fixtures.fakes import (
    TEST_REFRESH_SECRET,
    FakeObjectLocator,
    FakeTierAuthority,
)
from tests.fixtures.tokens import generate_viewer_jwt


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine("sqlite+aiosqlite:///./test.db")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with Session() as session:
        yield session


@pytest.fixture
def tier_authority():
    return FakeTierAuthority()


@pytest.fixture
def object_locator():
    return FakeObjectLocator(assets={"movie-1", "movie-2"})


@pytest.fixture
def access_policy():
    return AccessPolicy(
        refresh_token_secret=TEST_REFRESH_SECRET,
        backend_timeout_seconds=0.5,
    )


@pytest_asyncio.fixture
async def client(db_session, tier_authority, object_locator, access_policy):
    from src.api.app import create_app

    app = create_app(ApplicationConfig)

    async def override_get_unit_of_work():
        yield SqlAlchemyUnitOfWork(db_session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work
    app.dependency_overrides[get_tier_authority] = lambda: tier_authority
    app.dependency_overrides[get_object_locator] = lambda: object_locator
    app.dependency_overrides[get_access_policy] = lambda: access_policy

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def auth_headers():
    def build(user_id: str = "viewer-1"):
        return {"Authorization": f"Bearer {generate_viewer_jwt(user_id)}"}

    return build


@pytest.fixture
def admin_headers():
    return {"X-Admin-API-Key": ApplicationConfig.ADMIN_API_KEY}
