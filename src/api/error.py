from fastapi import status
from src.shared.result import Error


class ClientError(Exception):
    def __init__(self, base_error: Error, status_code: int = status.HTTP_400_BAD_REQUEST):
        self.base_error = base_error
        self.status_code = status_code
        super().__init__(base_error.message)


class ServerError(Exception):
    def __init__(self, base_error: Error):
        self.base_error = base_error
        super().__init__(base_error.message)


# Caller-facing access errors and their HTTP statuses
CLIENT_ERROR_STATUS = {
    "SUBSCRIPTION_INACTIVE": status.HTTP_402_PAYMENT_REQUIRED,
    "INSUFFICIENT_TIER": status.HTTP_403_FORBIDDEN,
    "ASSET_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "SESSION_INVALID": status.HTTP_401_UNAUTHORIZED,
    "REFRESH_LIMIT_EXCEEDED": status.HTTP_429_TOO_MANY_REQUESTS,
    "INVALID_REFRESH_TOKEN": status.HTTP_401_UNAUTHORIZED,
    "REFRESH_TOKEN_EXPIRED": status.HTTP_401_UNAUTHORIZED,
    "SESSION_CONFLICT": status.HTTP_409_CONFLICT,
}


def raise_for_error(error: Error):
    """Raise ClientError for known access errors, ServerError otherwise"""
    status_code = CLIENT_ERROR_STATUS.get(error.code)
    if status_code is not None:
        raise ClientError(error, status_code=status_code)
    raise ServerError(error)
