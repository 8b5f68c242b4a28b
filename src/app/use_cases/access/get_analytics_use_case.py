"""
Get Analytics Use Case

Projects the access log of one asset into a usage snapshot.
"""

import logging
from datetime import timedelta
from typing import Optional

from src.app.services.access_recorder import AccessAnalyticsSnapshot, AccessRecorder
from src.app.services.unit_of_work import StoreUnavailableError, UnitOfWork
from src.shared.result import Error, Result, Return

logger = logging.getLogger(__name__)


class GetAnalyticsUseCase:
    def __init__(self, uow: UnitOfWork, recorder: AccessRecorder):
        self.uow = uow
        self.recorder = recorder

    async def execute(
        self, asset_id: str, window: Optional[timedelta] = None
    ) -> Result[AccessAnalyticsSnapshot]:
        async with self.uow:
            try:
                snapshot = await self.recorder.analytics(asset_id, window)
            except StoreUnavailableError as exc:
                logger.error(f"Access log unavailable for analytics: {exc}")
                return Return.err(Error("STORE_UNAVAILABLE", "Session store unavailable"))
            return Return.ok(snapshot)
