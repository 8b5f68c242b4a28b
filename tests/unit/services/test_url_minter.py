"""
Unit tests for URL Minter
"""

from datetime import timedelta

import pytest

from src.app.services.object_locator import ObjectLocatorError
from src.app.services.url_minter import UrlMinter
from src.domain.base import utc_now
from tests.fixtures.fakes import FakeObjectLocator

GRANT_TTL = timedelta(minutes=15)


@pytest.mark.asyncio
async def test_mint_existing_asset(object_locator):
    minter = UrlMinter(object_locator, GRANT_TTL, timeout_seconds=1)

    result = await minter.mint("asset-1")

    assert result.is_ok()
    assert "asset-1" in result.value.url
    assert object_locator.signed == [("asset-1", GRANT_TTL)]
    remaining = result.value.expires_at - utc_now()
    assert timedelta(minutes=14) < remaining <= GRANT_TTL


@pytest.mark.asyncio
async def test_mint_missing_asset_is_never_signed(object_locator):
    minter = UrlMinter(object_locator, GRANT_TTL, timeout_seconds=1)

    result = await minter.mint("missing")

    assert result.is_err()
    assert result.error.code == "ASSET_NOT_FOUND"
    assert object_locator.signed == []


@pytest.mark.asyncio
async def test_mint_timeout_is_transient():
    locator = FakeObjectLocator(assets={"asset-1"}, delay=1.0)
    minter = UrlMinter(locator, GRANT_TTL, timeout_seconds=0.01)

    result = await minter.mint("asset-1")

    assert result.is_err()
    assert result.error.code == "OBJECT_STORE_UNAVAILABLE"


@pytest.mark.asyncio
async def test_mint_storage_failure_is_transient():
    locator = FakeObjectLocator(error=ObjectLocatorError("access denied"))
    minter = UrlMinter(locator, GRANT_TTL, timeout_seconds=1)

    result = await minter.mint("asset-1")

    assert result.is_err()
    assert result.error.code == "OBJECT_STORE_UNAVAILABLE"
