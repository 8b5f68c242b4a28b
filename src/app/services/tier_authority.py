"""
Tier Authority Interface

Subscription source of truth, consulted only for "current tier and status
for user U".
"""

from abc import ABC, abstractmethod

from pydantic import BaseModel

from src.domain.entities import SubscriptionStatus, SubscriptionTier


class UserSubscription(BaseModel):
    """Tier and billing status of one user"""

    tier: SubscriptionTier = SubscriptionTier.none
    status: SubscriptionStatus = SubscriptionStatus.none


class TierAuthorityError(Exception):
    """Raised by adapters when the tier authority cannot answer"""


class ITierAuthority(ABC):
    @abstractmethod
    async def get_user_tier(self, user_id: str) -> UserSubscription:
        """Return current tier and status. Unknown users map to none/none."""
        pass
