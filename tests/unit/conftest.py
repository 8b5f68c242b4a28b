import pytest
from unittest.mock import AsyncMock, MagicMock

from src.app.services.access_control import AccessControlService
from src.app.services.access_policy import AccessPolicy
from tests.fixtures.fakes import (
    TEST_REFRESH_SECRET,
    FakeObjectLocator,
    FakeTierAuthority,
)


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()
    # Repositories echo what they store by default
    uow.sessions.create = AsyncMock(side_effect=lambda session: session)
    uow.access_logs.create = AsyncMock(side_effect=lambda entry: entry)
    return uow


@pytest.fixture
def policy():
    return AccessPolicy(
        refresh_token_secret=TEST_REFRESH_SECRET,
        backend_timeout_seconds=0.2,
    )


@pytest.fixture
def tier_authority():
    return FakeTierAuthority()


@pytest.fixture
def object_locator():
    return FakeObjectLocator(assets={"asset-1"})


@pytest.fixture
def service(mock_uow, tier_authority, object_locator, policy):
    return AccessControlService(mock_uow, tier_authority, object_locator, policy)
