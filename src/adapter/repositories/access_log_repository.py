from datetime import datetime
from typing import List

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.services.store_errors import translate_store_errors
from src.app.repositories.access_log_repository import IAccessLogRepository
from src.domain.entities import AccessLogEntry


class AccessLogRepository(IAccessLogRepository):
    """AccessLogEntry repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    @translate_store_errors
    async def create(self, entry: AccessLogEntry) -> AccessLogEntry:
        """Append a new access log entry (immutable)"""
        self.session.add(entry)
        await self.session.flush()
        await self.session.refresh(entry)
        return entry

    @translate_store_errors
    async def get_by_asset_in_window(
        self, asset_id: str, since: datetime, until: datetime, limit: int
    ) -> List[AccessLogEntry]:
        """Bounded read: time window on created_at, newest first, row limit"""
        stmt = (
            select(AccessLogEntry)
            .where(
                AccessLogEntry.asset_id == asset_id,
                AccessLogEntry.created_at >= since,
                AccessLogEntry.created_at <= until,
            )
            .order_by(AccessLogEntry.created_at.desc())
            .limit(limit)
        )
        result = await self.session.exec(stmt)
        return list(result.all())
