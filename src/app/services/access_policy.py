"""
Access Policy

Tunable limits of the access control service, built from ApplicationConfig.
"""

from datetime import timedelta

from pydantic import BaseModel, Field


class AccessPolicy(BaseModel):
    """
    Limits applied to grants, sessions and refresh tokens.

    - grant_ttl: lifetime of one signed URL (minutes, far below the ceiling)
    - session_ceiling: absolute lifetime of a playback session
    - max_refresh_count: refresh_count at which further refreshes are refused
    - refresh_token_ttl: maximum refresh token age, capped by session_ceiling
    """

    refresh_token_secret: str = Field(..., min_length=1)
    grant_ttl: timedelta = timedelta(minutes=15)
    session_ceiling: timedelta = timedelta(hours=24)
    max_refresh_count: int = Field(default=100, ge=1)
    refresh_token_ttl: timedelta = timedelta(hours=24)
    backend_timeout_seconds: float = Field(default=5.0, gt=0)
    analytics_window: timedelta = timedelta(days=30)
    analytics_max_entries: int = Field(default=1000, ge=1)
    refresh_retry_attempts: int = Field(default=3, ge=1)

    @property
    def effective_refresh_token_ttl(self) -> timedelta:
        return min(self.refresh_token_ttl, self.session_ceiling)

    @classmethod
    def from_config(cls, config) -> "AccessPolicy":
        return cls(
            refresh_token_secret=config.REFRESH_TOKEN_SECRET,
            grant_ttl=timedelta(minutes=config.GRANT_TTL_MINUTES),
            session_ceiling=timedelta(hours=config.SESSION_CEILING_HOURS),
            max_refresh_count=config.MAX_REFRESH_COUNT,
            refresh_token_ttl=timedelta(hours=config.REFRESH_TOKEN_TTL_HOURS),
            backend_timeout_seconds=config.BACKEND_TIMEOUT_SECONDS,
            analytics_window=timedelta(hours=config.ANALYTICS_WINDOW_HOURS),
            analytics_max_entries=config.ANALYTICS_MAX_ENTRIES,
        )
