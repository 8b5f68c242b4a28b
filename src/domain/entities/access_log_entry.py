"""
AccessLogEntry Entity

Immutable audit record of every grant and denial.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utc_now
from .enums import AccessAction, SubscriptionTier


class AccessLogEntry(SQLModel, table=True):
    """
    AccessLogEntry entity - append-only record of an access attempt.

    Business Rules:
    - Immutable (never updated or deleted)
    - Failures use the same shape as successes
    - user_tier is the tier seen at request time, null when unknown
    - failure_reason holds the error code of a denied attempt
    """

    __tablename__ = "access_logs"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    asset_id: str = Field(max_length=255, nullable=False)
    user_id: str = Field(max_length=255, nullable=False, index=True)
    user_tier: Optional[SubscriptionTier] = Field(default=None)
    action: AccessAction = Field(default=AccessAction.request)

    success: bool = Field(default=False)
    failure_reason: Optional[str] = Field(default=None, max_length=100)
    failure_message: Optional[str] = Field(default=None, max_length=500)

    grant_expires_at: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime)
    )
    session_id: Optional[UUID] = Field(default=None)

    client_ip_address: Optional[str] = Field(default=None, max_length=64)
    user_agent: Optional[str] = Field(default=None, max_length=512)

    # Timestamps
    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_access_log_asset_created_at", "asset_id", "created_at"),
        Index("idx_access_log_session_id", "session_id"),
    )
