from fastapi import APIRouter, Depends, status

from src.api.error import raise_for_error
from src.api.utils.admin_auth import verify_admin_api_key
from src.app.services.access_control import AccessControlService
from src.app.use_cases.access import PurgeExpiredSessionsResponse
from src.depends import get_access_control

router = APIRouter(prefix="/sessions", tags=["Sessions"])


@router.post(
    "/purge-expired",
    status_code=status.HTTP_200_OK,
    response_model=PurgeExpiredSessionsResponse,
    dependencies=[Depends(verify_admin_api_key)],
)
async def purge_expired_sessions(
    service: AccessControlService = Depends(get_access_control),
):
    """
    Purge Expired Sessions

    Flags every session past its ceiling as expired. Sessions are kept for
    audit; nothing is deleted.

    Requires: X-Admin-API-Key header
    """
    result = await service.purge_expired_sessions()
    if result.is_err():
        raise_for_error(result.error)

    return result.value
