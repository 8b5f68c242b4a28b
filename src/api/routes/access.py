"""
Access API Routes

Signed URL issuance, refresh and revocation.
"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Request, status
from pydantic import BaseModel, Field

from src.api.error import raise_for_error
from src.api.utils.admin_auth import verify_admin_api_key
from src.app.services.access_control import AccessControlService
from src.app.use_cases.access import (
    AccessGrantResponse,
    RefreshAccessCommand,
    RequestAccessCommand,
    RevokeAccessResponse,
)
from src.depends import get_access_control, get_current_user
from src.domain.entities import RequiredTier

router = APIRouter(tags=["Access"])


class RequestAccessRequest(BaseModel):
    """Request a signed URL for an asset"""

    required_tier: RequiredTier = Field(
        RequiredTier.basic, description="Tier the asset requires (basic, premium or pro)"
    )


class RefreshAccessRequest(BaseModel):
    """Refresh the signed URL of an existing session"""

    session_id: UUID = Field(..., description="Session ID from the previous grant")
    refresh_token: str = Field(..., min_length=1, description="Refresh token from the previous grant")


class RevokeAccessRequest(BaseModel):
    """Revoke a user's playback sessions"""

    user_id: str = Field(..., min_length=1, description="User whose sessions are revoked")
    asset_id: Optional[str] = Field(None, description="Limit revocation to one asset")
    reason: Optional[str] = Field(None, max_length=500)


def _client_info(request: Request):
    ip_address = request.client.host if request.client else None
    return ip_address, request.headers.get("user-agent")


@router.post(
    "/assets/{asset_id}/access",
    status_code=status.HTTP_200_OK,
    response_model=AccessGrantResponse,
)
async def request_access(
    asset_id: str,
    body: RequestAccessRequest,
    request: Request,
    current_user: dict = Depends(get_current_user),
    service: AccessControlService = Depends(get_access_control),
):
    """
    Request Access

    Authorizes the caller against the asset's required tier and returns a
    short-lived signed URL plus a session ID and refresh token.

    Raises:
        - 401 Unauthorized: Missing or invalid bearer token
        - 402 Payment Required: SUBSCRIPTION_INACTIVE
        - 403 Forbidden: INSUFFICIENT_TIER
        - 404 Not Found: ASSET_NOT_FOUND
        - 500 Internal Server Error: store or backend unavailable
    """
    ip_address, user_agent = _client_info(request)
    command = RequestAccessCommand(
        asset_id=asset_id,
        user_id=current_user["user_id"],
        required_tier=body.required_tier,
        client_ip_address=ip_address,
        user_agent=user_agent,
    )

    result = await service.request_access(command)
    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.post(
    "/assets/{asset_id}/access/refresh",
    status_code=status.HTTP_200_OK,
    response_model=AccessGrantResponse,
)
async def refresh_access(
    asset_id: str,
    body: RefreshAccessRequest,
    request: Request,
    current_user: dict = Depends(get_current_user),
    service: AccessControlService = Depends(get_access_control),
):
    """
    Refresh Access

    Issues a new short-lived URL for an existing session. The session ceiling
    does not move; each refresh counts against the session's refresh limit.

    Raises:
        - 401 Unauthorized: SESSION_INVALID, INVALID_REFRESH_TOKEN, REFRESH_TOKEN_EXPIRED
        - 402/403: subscription lapsed or downgraded since the session started
        - 409 Conflict: SESSION_CONFLICT
        - 429 Too Many Requests: REFRESH_LIMIT_EXCEEDED
        - 500 Internal Server Error: store or backend unavailable
    """
    ip_address, user_agent = _client_info(request)
    command = RefreshAccessCommand(
        asset_id=asset_id,
        session_id=body.session_id,
        user_id=current_user["user_id"],
        refresh_token=body.refresh_token,
        client_ip_address=ip_address,
        user_agent=user_agent,
    )

    result = await service.refresh_access(command)
    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.post(
    "/access/revoke",
    status_code=status.HTTP_200_OK,
    response_model=RevokeAccessResponse,
    dependencies=[Depends(verify_admin_api_key)],
)
async def revoke_access(
    body: RevokeAccessRequest,
    service: AccessControlService = Depends(get_access_control),
):
    """
    Revoke Access

    Expires every live session of a user, or only those on one asset.
    Idempotent: repeating the call returns revoked_count 0.

    Requires: X-Admin-API-Key header
    """
    result = await service.revoke_access(body.user_id, body.asset_id, body.reason)
    if result.is_err():
        raise_for_error(result.error)

    return result.value
