"""
Audit & Analytics Recorder

Appends access log entries and projects them into per-asset analytics.
"""

import logging
from collections import Counter
from datetime import datetime, timedelta
from typing import Dict, Optional

from pydantic import BaseModel

from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utc_now
from src.domain.entities import AccessAction, AccessLogEntry

logger = logging.getLogger(__name__)


class AccessAnalyticsSnapshot(BaseModel):
    """Per-asset usage projection, recomputed from the access log on demand"""

    asset_id: str
    window_start: datetime
    window_end: datetime
    total_accesses: int
    unique_users: int
    accesses_by_tier: Dict[str, int]
    refreshes: int
    total_attempts: int
    failed_accesses: int
    failures_by_reason: Dict[str, int]
    last_accessed_at: Optional[datetime]
    error_rate: float
    truncated: bool


class AccessRecorder:
    """
    Best-effort audit writer and analytics reader.

    Business Rules:
    - record() never raises: a failed write is logged locally and rolled back
      so it cannot turn a grant into a failure
    - analytics() reads a bounded window (time range + row limit)
    """

    def __init__(self, uow: UnitOfWork, window: timedelta, max_entries: int):
        self.uow = uow
        self.window = window
        self.max_entries = max_entries

    async def record(self, entry: AccessLogEntry) -> bool:
        try:
            await self.uow.access_logs.create(entry)
            await self.uow.commit()
        except Exception:
            logger.exception(
                f"Failed to record access log for asset {entry.asset_id} "
                f"user {entry.user_id} (success={entry.success})"
            )
            try:
                await self.uow.rollback()
            except Exception:
                logger.exception("Rollback after failed access log write also failed")
            return False
        return True

    async def analytics(
        self, asset_id: str, window: Optional[timedelta] = None
    ) -> AccessAnalyticsSnapshot:
        """
        Compute the analytics snapshot of one asset.

        Raises:
            StoreUnavailableError: the access log could not be read
        """
        window_end = utc_now()
        window_start = window_end - (window or self.window)
        # One extra row tells a full window apart from a cut-off one
        entries = await self.uow.access_logs.get_by_asset_in_window(
            asset_id, window_start, window_end, self.max_entries + 1
        )
        truncated = len(entries) > self.max_entries
        entries = entries[: self.max_entries]

        successes = [e for e in entries if e.success]
        failures = [e for e in entries if not e.success]

        by_tier = Counter(
            e.user_tier.value if e.user_tier else "unknown" for e in successes
        )
        by_reason = Counter(e.failure_reason or "UNKNOWN" for e in failures)

        return AccessAnalyticsSnapshot(
            asset_id=asset_id,
            window_start=window_start,
            window_end=window_end,
            total_accesses=len(successes),
            unique_users=len({e.user_id for e in successes}),
            accesses_by_tier=dict(by_tier),
            refreshes=sum(1 for e in successes if e.action == AccessAction.refresh),
            total_attempts=len(entries),
            failed_accesses=len(failures),
            failures_by_reason=dict(by_reason),
            last_accessed_at=max((e.created_at for e in successes), default=None),
            error_rate=round(len(failures) / len(entries), 4) if entries else 0.0,
            truncated=truncated,
        )
