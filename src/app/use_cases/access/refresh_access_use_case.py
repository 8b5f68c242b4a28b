"""
Refresh Access Use Case

Issues a new short-lived URL for an existing playback session.
"""

import logging

from src.app.services.access_policy import AccessPolicy
from src.app.services.access_recorder import AccessRecorder
from src.app.services.refresh_token import issue_refresh_token
from src.app.services.session_manager import SessionManager
from src.app.services.unit_of_work import StoreUnavailableError, UnitOfWork
from src.app.services.url_minter import UrlMinter
from src.domain.base import as_utc
from src.domain.entities import AccessAction
from src.shared.result import Error, Result, Return

from .audit_entries import failure_entry, success_entry
from .dtos import AccessGrantResponse, RefreshAccessCommand

logger = logging.getLogger(__name__)


class RefreshAccessUseCase:
    """
    Use case for refreshing the signed URL of a playback session.

    Business Rules:
    - Refresh token must be bound to this session and user, and not too old
    - Session must be live, under the refresh limit, and the user's current
      tier must still satisfy the session's required tier
    - The new URL has the fixed grant TTL; the session ceiling is unchanged
    - A new refresh token is issued with every successful refresh
    - If minting fails the refresh_count increment is rolled back
    """

    def __init__(
        self,
        uow: UnitOfWork,
        session_manager: SessionManager,
        minter: UrlMinter,
        recorder: AccessRecorder,
        policy: AccessPolicy,
    ):
        self.uow = uow
        self.session_manager = session_manager
        self.minter = minter
        self.recorder = recorder
        self.policy = policy

    async def execute(self, command: RefreshAccessCommand) -> Result[AccessGrantResponse]:
        """
        Execute refresh access use case.

        Args:
            command: Session, user and refresh token to renew

        Returns:
            Result with AccessGrantResponse containing a new URL and refresh
            token, or Error
        """
        async with self.uow:
            try:
                refreshed = await self.session_manager.refresh(
                    command.session_id,
                    command.user_id,
                    command.refresh_token,
                    asset_id=command.asset_id,
                )
                if refreshed.is_err():
                    # Persist a session flagged expired while being checked
                    await self.uow.commit()
                    return await self._fail(command, refreshed.error)

                session = refreshed.value.session
                user_tier = refreshed.value.subscription.tier

                minted = await self.minter.mint(session.asset_id)
                if minted.is_err():
                    await self.uow.rollback()
                    return await self._fail(command, minted.error, user_tier)

                await self.uow.commit()
            except StoreUnavailableError as exc:
                logger.error(f"Session store unavailable during refresh: {exc}")
                try:
                    await self.uow.rollback()
                except StoreUnavailableError:
                    logger.warning("Rollback failed after session store error")
                return await self._fail(
                    command, Error("STORE_UNAVAILABLE", "Session store unavailable")
                )

            reference = minted.value
            await self.recorder.record(
                success_entry(
                    command,
                    AccessAction.refresh,
                    user_tier,
                    session.id,
                    reference.expires_at,
                )
            )

            return Return.ok(
                AccessGrantResponse(
                    url=reference.url,
                    expires_at=as_utc(reference.expires_at),
                    session_id=str(session.id),
                    refresh_token=issue_refresh_token(
                        session.id, command.user_id, self.policy.refresh_token_secret
                    ),
                )
            )

    async def _fail(
        self, command: RefreshAccessCommand, error: Error, user_tier=None
    ) -> Result[AccessGrantResponse]:
        logger.warning(
            f"Refresh denied: session={command.session_id} user={command.user_id} "
            f"code={error.code}"
        )
        await self.recorder.record(
            failure_entry(
                command,
                AccessAction.refresh,
                error,
                user_tier,
                session_id=command.session_id,
            )
        )
        return Return.err(error)
