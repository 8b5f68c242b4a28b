"""
Revoke Access Use Case

Expires a user's playback sessions, for one asset or all of them.
"""

import logging
from typing import Optional

from src.app.services.session_manager import SessionManager
from src.app.services.unit_of_work import StoreUnavailableError, UnitOfWork
from src.shared.result import Error, Result, Return

from .dtos import RevokeAccessResponse

logger = logging.getLogger(__name__)


class RevokeAccessUseCase:
    """
    Use case for revoking playback access.

    Business Rules:
    - Flags matching sessions expired; no URL is minted, nothing is deleted
    - Idempotent: a repeated revoke returns revoked_count=0
    - Already-issued URLs stay valid until their short grant TTL lapses
    """

    def __init__(self, uow: UnitOfWork, session_manager: SessionManager):
        self.uow = uow
        self.session_manager = session_manager

    async def execute(
        self,
        user_id: str,
        asset_id: Optional[str] = None,
        reason: Optional[str] = None,
    ) -> Result[RevokeAccessResponse]:
        async with self.uow:
            try:
                count = await self.session_manager.revoke(user_id, asset_id)
                await self.uow.commit()
            except StoreUnavailableError as exc:
                logger.error(f"Session store unavailable during revoke: {exc}")
                return Return.err(Error("STORE_UNAVAILABLE", "Session store unavailable"))

            logger.info(
                f"Access revoked for user {user_id}"
                f"{f' on asset {asset_id}' if asset_id else ''}. "
                f"Reason: {reason or 'No reason provided'}"
            )
            return Return.ok(RevokeAccessResponse(revoked_count=count))
