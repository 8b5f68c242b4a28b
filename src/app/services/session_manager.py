"""
Session Manager

Creates, refreshes, revokes and expires playback sessions.
"""

import logging
from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from src.app.services.access_authorizer import AccessAuthorizer
from src.app.services.access_policy import AccessPolicy
from src.app.services.refresh_token import verify_refresh_token
from src.app.services.tier_authority import UserSubscription
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utc_now
from src.domain.entities import PlaybackSession, SubscriptionTier
from src.shared.result import Error, Result, Return

logger = logging.getLogger(__name__)


@dataclass
class RefreshedSession:
    session: PlaybackSession
    subscription: UserSubscription


class SessionManager:
    """
    Owns every mutation of PlaybackSession.

    Business Rules:
    - A new session is created per request (no coalescing per user+asset)
    - Ceiling is fixed at creation, refresh never extends it
    - Refresh requires a valid token, a live session, headroom under the
      refresh limit and a still-sufficient tier
    - refresh_count is incremented with compare-and-swap so concurrent
      refreshes of one session cannot undercount
    - Revoke and purge only flag sessions expired, never delete them

    Store failures propagate as StoreUnavailableError; the caller owns the
    transaction (commit/rollback).
    """

    def __init__(self, uow: UnitOfWork, authorizer: AccessAuthorizer, policy: AccessPolicy):
        self.uow = uow
        self.authorizer = authorizer
        self.policy = policy

    async def create_session(
        self,
        user_id: str,
        asset_id: str,
        required_tier: SubscriptionTier,
        client_ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> PlaybackSession:
        now = utc_now()
        session = PlaybackSession(
            user_id=user_id,
            asset_id=asset_id,
            required_tier=required_tier,
            started_at=now,
            expires_at=now + self.policy.session_ceiling,
            last_refreshed_at=now,
            refresh_count=1,
            expired=False,
            client_ip_address=client_ip_address,
            user_agent=user_agent,
        )
        return await self.uow.sessions.create(session)

    async def refresh(
        self,
        session_id: UUID,
        user_id: str,
        refresh_token: str,
        asset_id: Optional[str] = None,
    ) -> Result[RefreshedSession]:
        """
        Refresh a playback session.

        Args:
            session_id: Session the caller wants to renew
            user_id: Acting user
            refresh_token: Token issued with the previous grant
            asset_id: Asset the caller expects the session to cover (optional)

        Returns:
            Result with RefreshedSession, or Error (INVALID_REFRESH_TOKEN,
            REFRESH_TOKEN_EXPIRED, SESSION_INVALID, REFRESH_LIMIT_EXCEEDED,
            authorization errors, SESSION_CONFLICT)
        """
        claims = verify_refresh_token(
            refresh_token,
            session_id,
            user_id,
            self.policy.refresh_token_secret,
            self.policy.effective_refresh_token_ttl,
        )
        if claims.is_err():
            return Return.err(claims.error)

        session = await self.uow.sessions.get_by_id(session_id)
        invalid = await self._check_refreshable(session, user_id, asset_id)
        if invalid:
            return Return.err(invalid)

        # Tier may have changed since the session was created
        authorization = await self.authorizer.authorize(user_id, session.required_tier)
        if authorization.is_err():
            return Return.err(authorization.error)

        for _ in range(self.policy.refresh_retry_attempts):
            refreshed_at = max(utc_now(), session.last_refreshed_at)
            swapped = await self.uow.sessions.compare_and_set_refresh(
                session.id, session.refresh_count, refreshed_at
            )
            session = await self.uow.sessions.get_by_id(session_id)
            if swapped:
                return Return.ok(RefreshedSession(session, authorization.value))

            logger.info(f"Concurrent refresh on session {session_id}, retrying")
            invalid = await self._check_refreshable(session, user_id, asset_id)
            if invalid:
                return Return.err(invalid)

        return Return.err(
            Error("SESSION_CONFLICT", "Session is being refreshed concurrently")
        )

    async def revoke(self, user_id: str, asset_id: Optional[str] = None) -> int:
        count = await self.uow.sessions.expire_by_user(user_id, asset_id)
        logger.info(
            f"Revoked {count} session(s) for user {user_id}"
            + (f" on asset {asset_id}" if asset_id else "")
        )
        return count

    async def purge_expired(self) -> int:
        return await self.uow.sessions.expire_past_ceiling(utc_now())

    async def _check_refreshable(
        self,
        session: Optional[PlaybackSession],
        user_id: str,
        asset_id: Optional[str] = None,
    ) -> Optional[Error]:
        if session is None or session.user_id != user_id or session.expired:
            return Error("SESSION_INVALID", "Invalid or expired playback session")

        if asset_id is not None and session.asset_id != asset_id:
            return Error("SESSION_INVALID", "Invalid or expired playback session")

        if session.expires_at <= utc_now():
            await self.uow.sessions.mark_expired(session.id)
            return Error("SESSION_INVALID", "Invalid or expired playback session")

        if session.refresh_count >= self.policy.max_refresh_count:
            return Error("REFRESH_LIMIT_EXCEEDED", "Maximum refresh limit exceeded")

        return None
