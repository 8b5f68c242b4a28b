from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlmodel import select, update
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.services.store_errors import translate_store_errors
from src.app.repositories.playback_session_repository import (
    IPlaybackSessionRepository,
)
from src.domain.entities import PlaybackSession


class PlaybackSessionRepository(IPlaybackSessionRepository):
    """Playback session repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    @translate_store_errors
    async def get_by_id(self, session_id: UUID) -> Optional[PlaybackSession]:
        """Get session by ID, always re-reading the row"""
        stmt = (
            select(PlaybackSession)
            .where(PlaybackSession.id == session_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    @translate_store_errors
    async def create(self, session_obj: PlaybackSession) -> PlaybackSession:
        """Create a new session"""
        self.session.add(session_obj)
        await self.session.flush()
        await self.session.refresh(session_obj)
        return session_obj

    @translate_store_errors
    async def compare_and_set_refresh(
        self,
        session_id: UUID,
        expected_refresh_count: int,
        refreshed_at: datetime,
    ) -> bool:
        """
        Conditional UPDATE on refresh_count.

        Two concurrent refreshes read the same refresh_count; only the first
        UPDATE matches the WHERE clause, the second sees rowcount 0.
        """
        stmt = (
            update(PlaybackSession)
            .where(
                PlaybackSession.id == session_id,
                PlaybackSession.refresh_count == expected_refresh_count,
                PlaybackSession.expired == False,
            )
            .values(
                refresh_count=expected_refresh_count + 1,
                last_refreshed_at=refreshed_at,
            )
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount == 1

    @translate_store_errors
    async def mark_expired(self, session_id: UUID) -> bool:
        """Flag one session expired"""
        stmt = (
            update(PlaybackSession)
            .where(PlaybackSession.id == session_id, PlaybackSession.expired == False)
            .values(expired=True)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0

    @translate_store_errors
    async def expire_by_user(self, user_id: str, asset_id: Optional[str] = None) -> int:
        """Flag all live sessions of a user (optionally one asset) expired"""
        stmt = update(PlaybackSession).where(
            PlaybackSession.user_id == user_id, PlaybackSession.expired == False
        )
        if asset_id is not None:
            stmt = stmt.where(PlaybackSession.asset_id == asset_id)
        result = await self.session.execute(stmt.values(expired=True))
        await self.session.flush()
        return result.rowcount

    @translate_store_errors
    async def expire_past_ceiling(self, now: datetime) -> int:
        """Flag sessions whose ceiling has passed"""
        stmt = (
            update(PlaybackSession)
            .where(PlaybackSession.expires_at < now, PlaybackSession.expired == False)
            .values(expired=True)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
