"""
Unit tests for Revoke Access Use Case
"""

from unittest.mock import AsyncMock

import pytest

from src.app.services.unit_of_work import StoreUnavailableError


@pytest.mark.asyncio
async def test_revoke_all_sessions_of_user(service, mock_uow):
    mock_uow.sessions.expire_by_user = AsyncMock(return_value=4)

    result = await service.revoke_access("user-1", reason="chargeback")

    assert result.is_ok()
    assert result.value.revoked_count == 4
    mock_uow.sessions.expire_by_user.assert_awaited_once_with("user-1", None)
    mock_uow.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_revoke_single_asset(service, mock_uow):
    mock_uow.sessions.expire_by_user = AsyncMock(return_value=1)

    result = await service.revoke_access("user-1", asset_id="asset-1")

    assert result.value.revoked_count == 1
    mock_uow.sessions.expire_by_user.assert_awaited_once_with("user-1", "asset-1")


@pytest.mark.asyncio
async def test_revoke_twice_is_idempotent(service, mock_uow):
    mock_uow.sessions.expire_by_user = AsyncMock(side_effect=[2, 0])

    first = await service.revoke_access("user-1")
    second = await service.revoke_access("user-1")

    assert first.value.revoked_count == 2
    assert second.value.revoked_count == 0


@pytest.mark.asyncio
async def test_revoke_store_down(service, mock_uow):
    mock_uow.sessions.expire_by_user = AsyncMock(side_effect=StoreUnavailableError("db down"))

    result = await service.revoke_access("user-1")

    assert result.is_err()
    assert result.error.code == "STORE_UNAVAILABLE"
