"""
URL Minter

Produces the signed, time-boxed reference once authorization succeeded.
"""

import asyncio
import logging
from datetime import timedelta

from src.app.services.object_locator import (
    IObjectLocator,
    ObjectLocatorError,
    SignedReference,
)
from src.shared.result import Error, Result, Return

logger = logging.getLogger(__name__)


class UrlMinter:
    """
    Stateless signer over the object locator.

    Business Rules:
    - Existence is confirmed before signing (ASSET_NOT_FOUND otherwise)
    - Every reference uses the fixed grant TTL, never the session ceiling
    """

    def __init__(
        self, object_locator: IObjectLocator, grant_ttl: timedelta, timeout_seconds: float
    ):
        self.object_locator = object_locator
        self.grant_ttl = grant_ttl
        self.timeout_seconds = timeout_seconds

    async def mint(self, asset_id: str) -> Result[SignedReference]:
        try:
            exists = await asyncio.wait_for(
                self.object_locator.exists(asset_id), self.timeout_seconds
            )
            if not exists:
                return Return.err(Error("ASSET_NOT_FOUND", "Asset not found"))

            reference = await asyncio.wait_for(
                self.object_locator.sign_reference(asset_id, self.grant_ttl),
                self.timeout_seconds,
            )
        except asyncio.TimeoutError:
            logger.warning(f"Object storage timed out for asset {asset_id}")
            return Return.err(
                Error("OBJECT_STORE_UNAVAILABLE", "Object storage timed out")
            )
        except ObjectLocatorError as exc:
            logger.warning(f"Object storage failed for asset {asset_id}: {exc}")
            return Return.err(
                Error("OBJECT_STORE_UNAVAILABLE", "Object storage unavailable")
            )

        return Return.ok(reference)
