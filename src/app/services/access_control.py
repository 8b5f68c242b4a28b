"""
Access Control Service

Single entry point for playback access, composed from injected collaborators.
"""

from datetime import timedelta
from typing import Optional

from src.app.services.access_authorizer import AccessAuthorizer
from src.app.services.access_policy import AccessPolicy
from src.app.services.access_recorder import AccessAnalyticsSnapshot, AccessRecorder
from src.app.services.object_locator import IObjectLocator
from src.app.services.session_manager import SessionManager
from src.app.services.tier_authority import ITierAuthority
from src.app.services.unit_of_work import UnitOfWork
from src.app.services.url_minter import UrlMinter
from src.app.use_cases.access import (
    AccessGrantResponse,
    GetAnalyticsUseCase,
    PurgeExpiredSessionsResponse,
    PurgeExpiredSessionsUseCase,
    RefreshAccessCommand,
    RefreshAccessUseCase,
    RequestAccessCommand,
    RequestAccessUseCase,
    RevokeAccessResponse,
    RevokeAccessUseCase,
)
from src.shared.result import Result


class AccessControlService:
    """
    Facade over authorizer, session manager, URL minter and recorder.

    Built per request with its collaborators injected; holds no mutable state
    of its own.
    """

    def __init__(
        self,
        uow: UnitOfWork,
        tier_authority: ITierAuthority,
        object_locator: IObjectLocator,
        policy: AccessPolicy,
    ):
        self.uow = uow
        self.policy = policy
        self.authorizer = AccessAuthorizer(tier_authority, policy.backend_timeout_seconds)
        self.session_manager = SessionManager(uow, self.authorizer, policy)
        self.minter = UrlMinter(
            object_locator, policy.grant_ttl, policy.backend_timeout_seconds
        )
        self.recorder = AccessRecorder(
            uow, policy.analytics_window, policy.analytics_max_entries
        )

    async def request_access(
        self, command: RequestAccessCommand
    ) -> Result[AccessGrantResponse]:
        use_case = RequestAccessUseCase(
            self.uow,
            self.authorizer,
            self.session_manager,
            self.minter,
            self.recorder,
            self.policy,
        )
        return await use_case.execute(command)

    async def refresh_access(
        self, command: RefreshAccessCommand
    ) -> Result[AccessGrantResponse]:
        use_case = RefreshAccessUseCase(
            self.uow, self.session_manager, self.minter, self.recorder, self.policy
        )
        return await use_case.execute(command)

    async def revoke_access(
        self,
        user_id: str,
        asset_id: Optional[str] = None,
        reason: Optional[str] = None,
    ) -> Result[RevokeAccessResponse]:
        use_case = RevokeAccessUseCase(self.uow, self.session_manager)
        return await use_case.execute(user_id, asset_id, reason)

    async def get_analytics(
        self, asset_id: str, window: Optional[timedelta] = None
    ) -> Result[AccessAnalyticsSnapshot]:
        use_case = GetAnalyticsUseCase(self.uow, self.recorder)
        return await use_case.execute(asset_id, window)

    async def purge_expired_sessions(self) -> Result[PurgeExpiredSessionsResponse]:
        use_case = PurgeExpiredSessionsUseCase(self.uow, self.session_manager)
        return await use_case.execute()
