"""
Media Access Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

# Export all enums
from .enums import (
    ENTITLED_STATUSES,
    TIER_RANK,
    AccessAction,
    RequiredTier,
    SubscriptionStatus,
    SubscriptionTier,
)

# Export all entities
from .playback_session import PlaybackSession
from .access_log_entry import AccessLogEntry

__all__ = [
    # Enums
    "SubscriptionTier",
    "RequiredTier",
    "SubscriptionStatus",
    "AccessAction",
    "TIER_RANK",
    "ENTITLED_STATUSES",
    # Entities
    "PlaybackSession",
    "AccessLogEntry",
]
