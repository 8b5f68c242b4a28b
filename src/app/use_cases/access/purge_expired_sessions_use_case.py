"""
Purge Expired Sessions Use Case

Maintenance sweep flagging sessions whose ceiling has passed.
"""

import logging

from src.app.services.session_manager import SessionManager
from src.app.services.unit_of_work import StoreUnavailableError, UnitOfWork
from src.shared.result import Error, Result, Return

from .dtos import PurgeExpiredSessionsResponse

logger = logging.getLogger(__name__)


class PurgeExpiredSessionsUseCase:
    """
    Use case for the expired-session sweep.

    Business Rules:
    - Only sessions with expires_at in the past are touched
    - Sessions are flagged expired, never deleted (audit retention)
    - Idempotent and safe to run alongside live traffic
    """

    def __init__(self, uow: UnitOfWork, session_manager: SessionManager):
        self.uow = uow
        self.session_manager = session_manager

    async def execute(self) -> Result[PurgeExpiredSessionsResponse]:
        async with self.uow:
            try:
                count = await self.session_manager.purge_expired()
                await self.uow.commit()
            except StoreUnavailableError as exc:
                logger.error(f"Session store unavailable during purge: {exc}")
                return Return.err(Error("STORE_UNAVAILABLE", "Session store unavailable"))

            logger.info(f"Flagged {count} expired playback session(s)")
            return Return.ok(PurgeExpiredSessionsResponse(purged_count=count))
