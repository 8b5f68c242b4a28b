"""
Media Access Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class SubscriptionTier(str, Enum):
    """Subscription tier a user holds or an asset requires"""

    none = "none"
    basic = "basic"
    premium = "premium"
    pro = "pro"


class RequiredTier(str, Enum):
    """Tier an asset may require; there is no free tier for protected assets"""

    basic = "basic"
    premium = "premium"
    pro = "pro"


class SubscriptionStatus(str, Enum):
    """Billing status reported by the tier authority"""

    active = "active"
    trialing = "trialing"
    past_due = "past_due"
    canceled = "canceled"
    none = "none"


class AccessAction(str, Enum):
    """Kind of access attempt recorded in the access log"""

    request = "request"
    refresh = "refresh"


# Total order over tiers; "none" ranks below everything.
TIER_RANK = {
    SubscriptionTier.none: 0,
    SubscriptionTier.basic: 1,
    SubscriptionTier.premium: 2,
    SubscriptionTier.pro: 3,
}

ENTITLED_STATUSES = frozenset({SubscriptionStatus.active, SubscriptionStatus.trialing})
