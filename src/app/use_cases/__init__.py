"""
Use Cases

Organized into domain folders:
- access/: Signed URL grants, refresh, revocation, purge and analytics

Import from subdirectories for better organization.
"""

from .access import (
    GetAnalyticsUseCase,
    PurgeExpiredSessionsUseCase,
    RefreshAccessUseCase,
    RequestAccessUseCase,
    RevokeAccessUseCase,
)

__all__ = [
    "RequestAccessUseCase",
    "RefreshAccessUseCase",
    "RevokeAccessUseCase",
    "GetAnalyticsUseCase",
    "PurgeExpiredSessionsUseCase",
]
