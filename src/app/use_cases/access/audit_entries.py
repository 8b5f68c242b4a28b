"""
Access log entry builders shared by the request and refresh use cases.
"""

from datetime import datetime
from typing import Optional, Union
from uuid import UUID

from src.domain.entities import AccessAction, AccessLogEntry, SubscriptionTier
from src.shared.result import Error

from .dtos import RefreshAccessCommand, RequestAccessCommand

AccessCommand = Union[RequestAccessCommand, RefreshAccessCommand]


def success_entry(
    command: AccessCommand,
    action: AccessAction,
    user_tier: Optional[SubscriptionTier],
    session_id: UUID,
    grant_expires_at: datetime,
) -> AccessLogEntry:
    return AccessLogEntry(
        asset_id=command.asset_id,
        user_id=command.user_id,
        user_tier=user_tier,
        action=action,
        success=True,
        grant_expires_at=grant_expires_at,
        session_id=session_id,
        client_ip_address=command.client_ip_address,
        user_agent=command.user_agent,
    )


def failure_entry(
    command: AccessCommand,
    action: AccessAction,
    error: Error,
    user_tier: Optional[SubscriptionTier] = None,
    session_id: Optional[UUID] = None,
) -> AccessLogEntry:
    return AccessLogEntry(
        asset_id=command.asset_id,
        user_id=command.user_id,
        user_tier=user_tier or error.details.get("user_tier"),
        action=action,
        success=False,
        failure_reason=error.code,
        failure_message=error.message[:500],
        session_id=session_id,
        client_ip_address=command.client_ip_address,
        user_agent=command.user_agent,
    )
