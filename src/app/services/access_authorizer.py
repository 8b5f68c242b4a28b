"""
Access Authorizer

Decides whether a user may currently access content requiring a given tier.
"""

import asyncio
import logging

from src.app.services.tier_authority import (
    ITierAuthority,
    TierAuthorityError,
    UserSubscription,
)
from src.domain.entities import ENTITLED_STATUSES, TIER_RANK, SubscriptionTier
from src.shared.result import Error, Result, Return

logger = logging.getLogger(__name__)


def has_tier_access(user_tier: SubscriptionTier, required_tier: SubscriptionTier) -> bool:
    """A tierless user only passes when the lowest paid tier is required."""
    if user_tier == SubscriptionTier.none:
        return required_tier == SubscriptionTier.basic
    return TIER_RANK[user_tier] >= TIER_RANK[required_tier]


class AccessAuthorizer:
    """
    Pure allow/deny decision over the tier authority.

    Business Rules:
    - Status must be active or trialing (SUBSCRIPTION_INACTIVE)
    - Tier rank must reach the required rank (INSUFFICIENT_TIER)
    - Tier authority timeout/failure is transient, never a denial
    - No logging of outcomes here, callers record each decision once
    """

    def __init__(self, tier_authority: ITierAuthority, timeout_seconds: float):
        self.tier_authority = tier_authority
        self.timeout_seconds = timeout_seconds

    async def fetch_subscription(self, user_id: str) -> Result[UserSubscription]:
        try:
            subscription = await asyncio.wait_for(
                self.tier_authority.get_user_tier(user_id), self.timeout_seconds
            )
        except asyncio.TimeoutError:
            logger.warning(f"Tier authority timed out for user {user_id}")
            return Return.err(
                Error("TIER_AUTHORITY_UNAVAILABLE", "Subscription lookup timed out")
            )
        except TierAuthorityError as exc:
            logger.warning(f"Tier authority failed for user {user_id}: {exc}")
            return Return.err(
                Error("TIER_AUTHORITY_UNAVAILABLE", "Subscription lookup failed")
            )
        return Return.ok(subscription)

    def evaluate(
        self, subscription: UserSubscription, required_tier: SubscriptionTier
    ) -> Result[UserSubscription]:
        details = {"user_tier": subscription.tier}
        if subscription.status not in ENTITLED_STATUSES:
            return Return.err(
                Error(
                    "SUBSCRIPTION_INACTIVE",
                    "Active subscription required",
                    details=details,
                )
            )
        if not has_tier_access(subscription.tier, required_tier):
            return Return.err(
                Error(
                    "INSUFFICIENT_TIER",
                    f"{required_tier.value} subscription or higher required",
                    details=details,
                )
            )
        return Return.ok(subscription)

    async def authorize(
        self, user_id: str, required_tier: SubscriptionTier
    ) -> Result[UserSubscription]:
        """
        Authorize a user against a required tier.

        Returns:
            Result with the user's UserSubscription on allow, or Error
            (denials carry details["user_tier"])
        """
        result = await self.fetch_subscription(user_id)
        if result.is_err():
            return result
        return self.evaluate(result.value, required_tier)
