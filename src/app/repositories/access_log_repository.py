from abc import ABC, abstractmethod
from datetime import datetime
from typing import List

from src.domain.entities import AccessLogEntry


class IAccessLogRepository(ABC):
    """AccessLogEntry repository interface - application layer"""

    @abstractmethod
    async def create(self, entry: AccessLogEntry) -> AccessLogEntry:
        """Append a new access log entry (immutable)"""
        pass

    @abstractmethod
    async def get_by_asset_in_window(
        self, asset_id: str, since: datetime, until: datetime, limit: int
    ) -> List[AccessLogEntry]:
        """
        Get access log entries for an asset created within [since, until].

        Returns:
            At most `limit` entries ordered by created_at DESC
        """
        pass
