from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.access_log_repository import AccessLogRepository
from src.adapter.repositories.playback_session_repository import (
    PlaybackSessionRepository,
)
from src.adapter.services.store_errors import translate_store_errors
from src.app.services.unit_of_work import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    """SQLAlchemy implementation of UnitOfWork pattern"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def __aenter__(self):
        # Initialize all repositories with the session
        self.sessions = PlaybackSessionRepository(self.session)
        self.access_logs = AccessLogRepository(self.session)
        return self

    async def __aexit__(self, *args):
        await self.rollback()

    @translate_store_errors
    async def commit(self):
        await self.session.commit()

    @translate_store_errors
    async def rollback(self):
        await self.session.rollback()
