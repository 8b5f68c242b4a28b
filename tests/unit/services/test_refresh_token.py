"""
Unit tests for refresh token issue/verify
"""

import base64
import json
from datetime import timedelta
from uuid import uuid4

from jose import jwt

from src.app.services.refresh_token import issue_refresh_token, verify_refresh_token
from src.domain.base import utc_now

SECRET = "refresh-secret"
MAX_AGE = timedelta(hours=24)


def test_token_accepted_for_same_session_and_user():
    session_id = uuid4()
    token = issue_refresh_token(session_id, "user-1", SECRET)

    result = verify_refresh_token(token, session_id, "user-1", SECRET, MAX_AGE)

    assert result.is_ok()
    assert result.value.session_id == str(session_id)
    assert result.value.user_id == "user-1"


def test_token_rejected_for_other_session():
    token = issue_refresh_token(uuid4(), "user-1", SECRET)

    result = verify_refresh_token(token, uuid4(), "user-1", SECRET, MAX_AGE)

    assert result.is_err()
    assert result.error.code == "INVALID_REFRESH_TOKEN"


def test_token_rejected_for_other_user():
    session_id = uuid4()
    token = issue_refresh_token(session_id, "user-1", SECRET)

    result = verify_refresh_token(token, session_id, "user-2", SECRET, MAX_AGE)

    assert result.is_err()
    assert result.error.code == "INVALID_REFRESH_TOKEN"


def test_forged_token_rejected():
    """A token re-signed with another key cannot claim a session"""
    session_id = uuid4()
    forged = jwt.encode(
        {"sid": str(session_id), "sub": "user-1", "typ": "playback_refresh", "iat": 0},
        "attacker-secret",
        algorithm="HS256",
    )

    result = verify_refresh_token(forged, session_id, "user-1", SECRET, MAX_AGE)

    assert result.is_err()
    assert result.error.code == "INVALID_REFRESH_TOKEN"


def test_unsigned_base64_json_rejected():
    session_id = uuid4()
    unsigned = base64.b64encode(
        json.dumps({"sessionId": str(session_id), "userId": "user-1"}).encode()
    ).decode()

    result = verify_refresh_token(unsigned, session_id, "user-1", SECRET, MAX_AGE)

    assert result.is_err()
    assert result.error.code == "INVALID_REFRESH_TOKEN"


def test_old_token_expired():
    session_id = uuid4()
    token = issue_refresh_token(
        session_id, "user-1", SECRET, issued_at=utc_now() - timedelta(hours=25)
    )

    result = verify_refresh_token(token, session_id, "user-1", SECRET, MAX_AGE)

    assert result.is_err()
    assert result.error.code == "REFRESH_TOKEN_EXPIRED"


def test_token_within_lifetime_accepted():
    session_id = uuid4()
    token = issue_refresh_token(
        session_id, "user-1", SECRET, issued_at=utc_now() - timedelta(hours=23)
    )

    result = verify_refresh_token(token, session_id, "user-1", SECRET, MAX_AGE)

    assert result.is_ok()


def test_tokens_for_same_session_are_distinct():
    session_id = uuid4()

    first = issue_refresh_token(session_id, "user-1", SECRET)
    second = issue_refresh_token(session_id, "user-1", SECRET)

    assert first != second
