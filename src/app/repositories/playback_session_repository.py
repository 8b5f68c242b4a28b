from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional
from uuid import UUID

from src.domain.entities import PlaybackSession


class IPlaybackSessionRepository(ABC):
    """Playback session repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, session_id: UUID) -> Optional[PlaybackSession]:
        """Get session by ID"""
        pass

    @abstractmethod
    async def create(self, session: PlaybackSession) -> PlaybackSession:
        """Create a new session"""
        pass

    @abstractmethod
    async def compare_and_set_refresh(
        self,
        session_id: UUID,
        expected_refresh_count: int,
        refreshed_at: datetime,
    ) -> bool:
        """
        Increment refresh_count only if it still equals expected_refresh_count
        and the session is not expired. Returns True if the row was updated.
        """
        pass

    @abstractmethod
    async def mark_expired(self, session_id: UUID) -> bool:
        """Flag one session expired. Returns True if it was not expired before."""
        pass

    @abstractmethod
    async def expire_by_user(self, user_id: str, asset_id: Optional[str] = None) -> int:
        """Flag all non-expired sessions of a user (and asset) expired. Returns count."""
        pass

    @abstractmethod
    async def expire_past_ceiling(self, now: datetime) -> int:
        """Flag sessions whose expires_at is before now. Returns count."""
        pass
