"""
Unit tests for Access Recorder
"""

from datetime import timedelta
from unittest.mock import AsyncMock

import pytest

from src.app.services.access_recorder import AccessRecorder
from src.domain.base import utc_now
from src.domain.entities import AccessAction, AccessLogEntry, SubscriptionTier


def entry(user_id, success=True, tier=SubscriptionTier.premium, **kwargs):
    return AccessLogEntry(
        asset_id="asset-1",
        user_id=user_id,
        user_tier=tier,
        success=success,
        **kwargs,
    )


@pytest.mark.asyncio
async def test_record_commits(mock_uow):
    recorder = AccessRecorder(mock_uow, timedelta(days=30), 1000)

    recorded = await recorder.record(entry("user-1"))

    assert recorded is True
    mock_uow.access_logs.create.assert_awaited_once()
    mock_uow.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_record_failure_is_swallowed(mock_uow):
    mock_uow.access_logs.create = AsyncMock(side_effect=RuntimeError("disk full"))
    recorder = AccessRecorder(mock_uow, timedelta(days=30), 1000)

    recorded = await recorder.record(entry("user-1"))

    assert recorded is False
    mock_uow.rollback.assert_awaited_once()
    mock_uow.commit.assert_not_awaited()


@pytest.mark.asyncio
async def test_analytics_aggregates_window(mock_uow):
    now = utc_now()
    entries = [
        entry("user-1", created_at=now - timedelta(hours=3)),
        entry("user-1", action=AccessAction.refresh, created_at=now - timedelta(hours=2)),
        entry("user-2", tier=SubscriptionTier.pro, created_at=now - timedelta(hours=1)),
        entry("user-3", tier=None, created_at=now - timedelta(hours=4)),
        entry(
            "user-4",
            success=False,
            tier=SubscriptionTier.basic,
            failure_reason="INSUFFICIENT_TIER",
        ),
    ]
    mock_uow.access_logs.get_by_asset_in_window = AsyncMock(return_value=entries)
    recorder = AccessRecorder(mock_uow, timedelta(days=30), 1000)

    snapshot = await recorder.analytics("asset-1")

    assert snapshot.total_accesses == 4
    assert snapshot.unique_users == 3
    assert snapshot.accesses_by_tier == {"premium": 2, "pro": 1, "unknown": 1}
    assert snapshot.refreshes == 1
    assert snapshot.total_attempts == 5
    assert snapshot.failed_accesses == 1
    assert snapshot.failures_by_reason == {"INSUFFICIENT_TIER": 1}
    assert snapshot.error_rate == 0.2
    assert snapshot.last_accessed_at == now - timedelta(hours=1)
    assert snapshot.truncated is False


@pytest.mark.asyncio
async def test_analytics_reads_bounded_window(mock_uow):
    mock_uow.access_logs.get_by_asset_in_window = AsyncMock(return_value=[])
    recorder = AccessRecorder(mock_uow, timedelta(days=30), 50)

    snapshot = await recorder.analytics("asset-1", window=timedelta(hours=6))

    asset_id, since, until, limit = mock_uow.access_logs.get_by_asset_in_window.await_args.args
    assert asset_id == "asset-1"
    assert until - since == timedelta(hours=6)
    assert limit == 51
    assert snapshot.window_end - snapshot.window_start == timedelta(hours=6)


@pytest.mark.asyncio
async def test_analytics_empty_asset(mock_uow):
    mock_uow.access_logs.get_by_asset_in_window = AsyncMock(return_value=[])
    recorder = AccessRecorder(mock_uow, timedelta(days=30), 1000)

    snapshot = await recorder.analytics("asset-1")

    assert snapshot.total_accesses == 0
    assert snapshot.unique_users == 0
    assert snapshot.error_rate == 0.0
    assert snapshot.last_accessed_at is None


@pytest.mark.asyncio
async def test_analytics_flags_truncated_read(mock_uow):
    mock_uow.access_logs.get_by_asset_in_window = AsyncMock(
        return_value=[entry(f"user-{i}") for i in range(4)]
    )
    recorder = AccessRecorder(mock_uow, timedelta(days=30), 3)

    snapshot = await recorder.analytics("asset-1")

    assert snapshot.truncated is True
    assert snapshot.total_accesses == 3


@pytest.mark.asyncio
async def test_analytics_full_window_is_not_truncated(mock_uow):
    mock_uow.access_logs.get_by_asset_in_window = AsyncMock(
        return_value=[entry(f"user-{i}") for i in range(3)]
    )
    recorder = AccessRecorder(mock_uow, timedelta(days=30), 3)

    snapshot = await recorder.analytics("asset-1")

    assert snapshot.truncated is False
    assert snapshot.total_accesses == 3
