"""
HTTP Tier Authority

Reads tier and status from the billing service over HTTP.
"""

import logging
from typing import Optional

import httpx
from pydantic import ValidationError

from src.app.services.tier_authority import (
    ITierAuthority,
    TierAuthorityError,
    UserSubscription,
)

logger = logging.getLogger(__name__)


class HttpTierAuthority(ITierAuthority):
    """
    GET {base_url}/users/{user_id}/subscription -> {"tier": ..., "status": ...}

    A 404 means the user has no subscription (none/none). Transport errors,
    other non-2xx responses and malformed bodies raise TierAuthorityError.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        base_url: str,
        api_key: Optional[str] = None,
    ):
        self.client = client
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key

    async def get_user_tier(self, user_id: str) -> UserSubscription:
        headers = {"X-Api-Key": self.api_key} if self.api_key else {}
        url = f"{self.base_url}/users/{user_id}/subscription"
        try:
            response = await self.client.get(url, headers=headers)
        except httpx.HTTPError as exc:
            raise TierAuthorityError(f"Tier authority request failed: {exc}") from exc

        if response.status_code == httpx.codes.NOT_FOUND:
            return UserSubscription()
        if response.is_error:
            raise TierAuthorityError(
                f"Tier authority returned HTTP {response.status_code}"
            )

        try:
            data = response.json()
            return UserSubscription(
                tier=data.get("tier") or "none",
                status=data.get("status") or "none",
            )
        except (ValueError, AttributeError, ValidationError) as exc:
            logger.warning(f"Malformed tier authority payload for user {user_id}")
            raise TierAuthorityError("Malformed tier authority response") from exc
