"""
Media Access Use Case DTOs (Data Transfer Objects)

All Command and Response classes for the access domain.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field

from src.domain.entities import RequiredTier


# ============================================================================
# Command DTOs
# ============================================================================


class RequestAccessCommand(BaseModel):
    """Ask for a signed URL to one asset"""

    asset_id: str = Field(..., min_length=1)
    user_id: str = Field(..., min_length=1)
    required_tier: RequiredTier = RequiredTier.basic
    client_ip_address: Optional[str] = None
    user_agent: Optional[str] = None


class RefreshAccessCommand(BaseModel):
    """Renew the signed URL of an existing playback session"""

    asset_id: str = Field(..., min_length=1)
    session_id: UUID
    user_id: str = Field(..., min_length=1)
    refresh_token: str = Field(..., min_length=1)
    client_ip_address: Optional[str] = None
    user_agent: Optional[str] = None


# ============================================================================
# Response DTOs
# ============================================================================


class AccessGrantResponse(BaseModel):
    """Signed, short-lived access grant"""

    url: str
    expires_at: datetime  # timezone-aware UTC
    session_id: str
    refresh_token: str


class RevokeAccessResponse(BaseModel):
    """Response for revoke access use case"""

    revoked_count: int


class PurgeExpiredSessionsResponse(BaseModel):
    """Response for purge expired sessions use case"""

    purged_count: int
