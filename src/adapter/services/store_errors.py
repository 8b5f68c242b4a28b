import functools

from sqlalchemy.exc import SQLAlchemyError

from src.app.services.unit_of_work import StoreUnavailableError


def translate_store_errors(func):
    """Re-raise SQLAlchemy failures as StoreUnavailableError"""

    @functools.wraps(func)
    async def wrapper(*args, **kwargs):
        try:
            return await func(*args, **kwargs)
        except SQLAlchemyError as exc:
            raise StoreUnavailableError(str(exc)) from exc

    return wrapper
