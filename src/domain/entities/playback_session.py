"""
PlaybackSession Entity

One authorized viewing window for one (user, asset) pair.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utc_now
from .enums import SubscriptionTier


class PlaybackSession(SQLModel, table=True):
    """
    PlaybackSession entity - bounded authorization window for one asset.

    Business Rules:
    - expires_at is an absolute ceiling, refresh never extends it
    - refresh_count starts at 1 and never exceeds the configured maximum
    - expired is sticky: once set, the session grants no further URLs
    - Never deleted, expired sessions are kept for audit
    - client_ip_address/user_agent are diagnostic only
    """

    __tablename__ = "playback_sessions"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    user_id: str = Field(max_length=255, nullable=False, index=True)
    asset_id: str = Field(max_length=255, nullable=False, index=True)
    required_tier: SubscriptionTier = Field(default=SubscriptionTier.basic)

    started_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
    expires_at: datetime = Field(sa_column=Column(DateTime))
    last_refreshed_at: datetime = Field(
        default_factory=utc_now, sa_column=Column(DateTime)
    )

    refresh_count: int = Field(default=1)
    expired: bool = Field(default=False)

    client_ip_address: Optional[str] = Field(default=None, max_length=64)
    user_agent: Optional[str] = Field(default=None, max_length=512)

    __table_args__ = (
        Index("idx_playback_session_expires_at", "expires_at"),
        Index("idx_playback_session_user_asset", "user_id", "asset_id"),
        Index("idx_playback_session_expired", "expired"),
    )
