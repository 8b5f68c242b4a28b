"""
Tests for HttpTierAuthority using httpx.MockTransport
"""

import httpx
import pytest

from src.adapter.services.http_tier_authority import HttpTierAuthority
from src.app.services.tier_authority import TierAuthorityError
from src.domain.entities import SubscriptionStatus, SubscriptionTier


def authority_for(handler, api_key=None):
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return HttpTierAuthority(client, "http://billing.test/", api_key=api_key)


@pytest.mark.asyncio
async def test_reads_tier_and_status():
    seen = {}

    def handler(request):
        seen["url"] = str(request.url)
        seen["api_key"] = request.headers.get("X-Api-Key")
        return httpx.Response(200, json={"tier": "premium", "status": "trialing"})

    subscription = await authority_for(handler, api_key="k-1").get_user_tier("viewer-1")

    assert subscription.tier == SubscriptionTier.premium
    assert subscription.status == SubscriptionStatus.trialing
    assert seen["url"] == "http://billing.test/users/viewer-1/subscription"
    assert seen["api_key"] == "k-1"


@pytest.mark.asyncio
async def test_unknown_user_has_no_subscription():
    subscription = await authority_for(lambda request: httpx.Response(404)).get_user_tier("ghost")

    assert subscription.tier == SubscriptionTier.none
    assert subscription.status == SubscriptionStatus.none


@pytest.mark.asyncio
async def test_missing_fields_default_to_none():
    handler = lambda request: httpx.Response(200, json={"tier": None})

    subscription = await authority_for(handler).get_user_tier("viewer-1")

    assert subscription.tier == SubscriptionTier.none
    assert subscription.status == SubscriptionStatus.none


@pytest.mark.asyncio
async def test_server_error_raises():
    with pytest.raises(TierAuthorityError):
        await authority_for(lambda request: httpx.Response(503)).get_user_tier("viewer-1")


@pytest.mark.asyncio
async def test_unknown_tier_value_raises():
    handler = lambda request: httpx.Response(200, json={"tier": "platinum", "status": "active"})

    with pytest.raises(TierAuthorityError):
        await authority_for(handler).get_user_tier("viewer-1")


@pytest.mark.asyncio
async def test_transport_error_raises():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(TierAuthorityError):
        await authority_for(handler).get_user_tier("viewer-1")
