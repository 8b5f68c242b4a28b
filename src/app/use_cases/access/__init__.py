"""
Media Access Use Cases

All playback access business logic.
"""

from .request_access_use_case import RequestAccessUseCase
from .refresh_access_use_case import RefreshAccessUseCase
from .revoke_access_use_case import RevokeAccessUseCase
from .get_analytics_use_case import GetAnalyticsUseCase
from .purge_expired_sessions_use_case import PurgeExpiredSessionsUseCase
from .dtos import (
    AccessGrantResponse,
    PurgeExpiredSessionsResponse,
    RefreshAccessCommand,
    RequestAccessCommand,
    RevokeAccessResponse,
)

__all__ = [
    # Use Cases
    "RequestAccessUseCase",
    "RefreshAccessUseCase",
    "RevokeAccessUseCase",
    "GetAnalyticsUseCase",
    "PurgeExpiredSessionsUseCase",
    # DTOs - Commands
    "RequestAccessCommand",
    "RefreshAccessCommand",
    # DTOs - Responses
    "AccessGrantResponse",
    "RevokeAccessResponse",
    "PurgeExpiredSessionsResponse",
]
