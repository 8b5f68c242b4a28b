"""
Object Locator Interface

Object storage, consulted only to check that an asset exists and to mint a
time-boxed readable reference to it.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timedelta

from pydantic import BaseModel


class SignedReference(BaseModel):
    """A signed, time-boxed URL to one stored object"""

    url: str
    expires_at: datetime


class ObjectLocatorError(Exception):
    """Raised by adapters when object storage cannot answer"""


class IObjectLocator(ABC):
    @abstractmethod
    async def exists(self, asset_id: str) -> bool:
        pass

    @abstractmethod
    async def sign_reference(self, asset_id: str, ttl: timedelta) -> SignedReference:
        """Sign a read-only reference expiring `ttl` from now"""
        pass
