"""
Request Access Use Case

Authorizes a user, opens a playback session and issues a signed URL.
"""

import logging
from typing import Optional

from src.app.services.access_authorizer import AccessAuthorizer
from src.app.services.access_policy import AccessPolicy
from src.app.services.access_recorder import AccessRecorder
from src.app.services.refresh_token import issue_refresh_token
from src.app.services.session_manager import SessionManager
from src.app.services.unit_of_work import StoreUnavailableError, UnitOfWork
from src.app.services.url_minter import UrlMinter
from src.domain.base import as_utc
from src.domain.entities import AccessAction, SubscriptionTier
from src.shared.result import Error, Result, Return

from .audit_entries import failure_entry, success_entry
from .dtos import AccessGrantResponse, RequestAccessCommand

logger = logging.getLogger(__name__)


class RequestAccessUseCase:
    """
    Use case for requesting a signed URL to a protected asset.

    Business Rules:
    - Authorize -> create session -> mint -> record, aborting on first failure
    - Every outcome, allow or deny, is recorded exactly once
    - Denied requests never create a session
    - A session whose URL could not be minted is rolled back
    - Store and backend failures are transient errors, not denials
    """

    def __init__(
        self,
        uow: UnitOfWork,
        authorizer: AccessAuthorizer,
        session_manager: SessionManager,
        minter: UrlMinter,
        recorder: AccessRecorder,
        policy: AccessPolicy,
    ):
        self.uow = uow
        self.authorizer = authorizer
        self.session_manager = session_manager
        self.minter = minter
        self.recorder = recorder
        self.policy = policy

    async def execute(self, command: RequestAccessCommand) -> Result[AccessGrantResponse]:
        """
        Execute request access use case.

        Args:
            command: Asset, user and required tier of the request

        Returns:
            Result with AccessGrantResponse, or Error
        """
        async with self.uow:
            user_tier: Optional[SubscriptionTier] = None
            required_tier = SubscriptionTier(command.required_tier.value)
            try:
                fetched = await self.authorizer.fetch_subscription(command.user_id)
                if fetched.is_err():
                    return await self._fail(command, fetched.error)

                user_tier = fetched.value.tier
                decision = self.authorizer.evaluate(fetched.value, required_tier)
                if decision.is_err():
                    return await self._fail(command, decision.error, user_tier)

                session = await self.session_manager.create_session(
                    command.user_id,
                    command.asset_id,
                    required_tier,
                    client_ip_address=command.client_ip_address,
                    user_agent=command.user_agent,
                )

                minted = await self.minter.mint(command.asset_id)
                if minted.is_err():
                    await self.uow.rollback()
                    return await self._fail(command, minted.error, user_tier)

                await self.uow.commit()
            except StoreUnavailableError as exc:
                logger.error(f"Session store unavailable during access request: {exc}")
                return await self._fail(
                    command,
                    Error("STORE_UNAVAILABLE", "Session store unavailable"),
                    user_tier,
                    rollback=True,
                )

            reference = minted.value
            await self.recorder.record(
                success_entry(
                    command,
                    AccessAction.request,
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
        self,
        command: RequestAccessCommand,
        error: Error,
        user_tier: Optional[SubscriptionTier] = None,
        rollback: bool = False,
    ) -> Result[AccessGrantResponse]:
        if rollback:
            try:
                await self.uow.rollback()
            except StoreUnavailableError:
                logger.warning("Rollback failed after session store error")
        logger.warning(
            f"Access denied: asset={command.asset_id} user={command.user_id} "
            f"code={error.code}"
        )
        await self.recorder.record(
            failure_entry(command, AccessAction.request, error, user_tier)
        )
        return Return.err(error)
