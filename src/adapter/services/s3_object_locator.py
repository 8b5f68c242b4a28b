"""
S3 Object Locator

Existence checks and presigned GET URLs on a private bucket.
"""

import asyncio
import logging
from datetime import timedelta

import botocore.exceptions

from src.app.services.object_locator import (
    IObjectLocator,
    ObjectLocatorError,
    SignedReference,
)
from src.domain.base import utc_now

logger = logging.getLogger(__name__)

NOT_FOUND_CODES = {"404", "NoSuchKey", "NotFound"}


class S3ObjectLocator(IObjectLocator):
    """
    Object locator over a boto3 S3 client.

    boto3 is blocking, so every call runs in a worker thread.
    """

    def __init__(self, client, bucket: str, key_template: str = "videos/{asset_id}.mp4"):
        self.client = client
        self.bucket = bucket
        self.key_template = key_template

    def object_key(self, asset_id: str) -> str:
        key = self.key_template.format(asset_id=asset_id)
        # No leading slash, no path traversal
        return "/".join(seg for seg in key.split("/") if seg and seg not in {"..", "."})

    async def exists(self, asset_id: str) -> bool:
        return await asyncio.to_thread(self._exists_sync, self.object_key(asset_id))

    async def sign_reference(self, asset_id: str, ttl: timedelta) -> SignedReference:
        expires_at = utc_now() + ttl
        url = await asyncio.to_thread(
            self._presign_sync, self.object_key(asset_id), int(ttl.total_seconds())
        )
        return SignedReference(url=url, expires_at=expires_at)

    def _exists_sync(self, key: str) -> bool:
        try:
            self.client.head_object(Bucket=self.bucket, Key=key)
        except botocore.exceptions.ClientError as exc:
            code = exc.response.get("Error", {}).get("Code")
            if code in NOT_FOUND_CODES:
                return False
            raise ObjectLocatorError(f"head_object failed: {code}") from exc
        except botocore.exceptions.BotoCoreError as exc:
            raise ObjectLocatorError(f"head_object failed: {exc}") from exc
        return True

    def _presign_sync(self, key: str, expires_in: int) -> str:
        try:
            return self.client.generate_presigned_url(
                "get_object",
                Params={
                    "Bucket": self.bucket,
                    "Key": key,
                    "ResponseContentDisposition": "inline",
                    "ResponseContentType": "video/mp4",
                    "ResponseCacheControl": f"private, max-age={expires_in}",
                },
                ExpiresIn=expires_in,
            )
        except (botocore.exceptions.ClientError, botocore.exceptions.BotoCoreError) as exc:
            logger.warning(f"Presigning failed for key {key}: {exc}")
            raise ObjectLocatorError("Could not sign object reference") from exc
