"""
Refresh Token

HMAC-signed (HS256) refresh credential bound to (session_id, user_id, issued_at).
"""

import calendar
import secrets
from datetime import datetime, timedelta
from typing import Optional
from uuid import UUID

from jose import JWTError, jwt
from pydantic import BaseModel

from src.domain.base import utc_now
from src.shared.result import Error, Result, Return

ALGORITHM = "HS256"
TOKEN_TYPE = "playback_refresh"


class RefreshClaims(BaseModel):
    """Decoded refresh token payload"""

    session_id: str
    user_id: str
    issued_at: datetime


def issue_refresh_token(
    session_id: UUID,
    user_id: str,
    secret: str,
    issued_at: Optional[datetime] = None,
) -> str:
    """
    Generate a refresh token for a playback session

    Args:
        session_id: Session the token renews
        user_id: User the session belongs to
        secret: HMAC signing key
        issued_at: Naive UTC issue time (defaults to now)

    Returns:
        JWT string (HS256)
    """
    issued_at = issued_at or utc_now()
    payload = {
        "sid": str(session_id),
        "sub": user_id,
        "typ": TOKEN_TYPE,
        "iat": calendar.timegm(issued_at.utctimetuple()),
        "jti": secrets.token_urlsafe(8),
    }
    return jwt.encode(payload, secret, algorithm=ALGORITHM)


def verify_refresh_token(
    token: str,
    session_id: UUID,
    user_id: str,
    secret: str,
    max_age: timedelta,
    now: Optional[datetime] = None,
) -> Result[RefreshClaims]:
    """
    Verify a refresh token against the session and user the caller claims

    Returns:
        Result with RefreshClaims, or Error INVALID_REFRESH_TOKEN (malformed,
        bad signature, binding mismatch) / REFRESH_TOKEN_EXPIRED (too old)
    """
    try:
        payload = jwt.decode(
            token, secret, algorithms=[ALGORITHM], options={"verify_exp": False}
        )
    except JWTError:
        return Return.err(Error("INVALID_REFRESH_TOKEN", "Invalid refresh token"))

    iat = payload.get("iat")
    if (
        payload.get("typ") != TOKEN_TYPE
        or payload.get("sid") != str(session_id)
        or payload.get("sub") != user_id
        or not isinstance(iat, int)
    ):
        return Return.err(Error("INVALID_REFRESH_TOKEN", "Invalid refresh token"))

    issued_at = _from_epoch(iat)
    now = now or utc_now()
    if now - issued_at > max_age:
        return Return.err(Error("REFRESH_TOKEN_EXPIRED", "Refresh token expired"))

    return Return.ok(
        RefreshClaims(session_id=payload["sid"], user_id=payload["sub"], issued_at=issued_at)
    )


def _from_epoch(seconds: int) -> datetime:
    return datetime(1970, 1, 1) + timedelta(seconds=seconds)
