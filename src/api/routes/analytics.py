"""
Analytics API Routes

Per-asset access analytics computed from the access log.
"""

from datetime import timedelta
from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from src.api.error import raise_for_error
from src.api.utils.admin_auth import verify_admin_api_key
from src.app.services.access_control import AccessControlService
from src.app.services.access_recorder import AccessAnalyticsSnapshot
from src.depends import get_access_control

router = APIRouter(tags=["Analytics"])


@router.get(
    "/assets/{asset_id}/analytics",
    status_code=status.HTTP_200_OK,
    response_model=AccessAnalyticsSnapshot,
    dependencies=[Depends(verify_admin_api_key)],
)
async def get_analytics(
    asset_id: str,
    service: AccessControlService = Depends(get_access_control),
    window_hours: Optional[int] = Query(
        None, ge=1, le=24 * 365, description="Look-back window (default from config)"
    ),
):
    """
    Get Asset Access Analytics

    Returns:
        - total_accesses / unique_users / accesses_by_tier over successful grants
        - failed_accesses / failures_by_reason / error_rate over all attempts
        - last_accessed_at: most recent successful grant (null if none)

    Requires: X-Admin-API-Key header
    """
    window = timedelta(hours=window_hours) if window_hours else None
    result = await service.get_analytics(asset_id, window)
    if result.is_err():
        raise_for_error(result.error)

    return result.value
