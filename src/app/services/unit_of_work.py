from abc import ABC, abstractmethod

from src.app.repositories.access_log_repository import IAccessLogRepository
from src.app.repositories.playback_session_repository import (
    IPlaybackSessionRepository,
)


class StoreUnavailableError(Exception):
    """Raised by store adapters when the session store cannot be reached"""


class UnitOfWork(ABC):
    """Abstract UnitOfWork - defines repository access and transaction management"""

    # Repository properties (initialized in __aenter__)
    sessions: IPlaybackSessionRepository
    access_logs: IAccessLogRepository

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
