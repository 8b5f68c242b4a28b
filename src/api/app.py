import asyncio
import logging
from contextlib import asynccontextmanager, suppress
from typing import Awaitable, Callable

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from .error import ClientError, ServerError

logger = logging.getLogger(__name__)


async def handle_client_error(request: Request, exc: ClientError):
    error_dict = {"code": exc.base_error.code, "message": exc.base_error.message}
    logger.warning(f"Client error: {error_dict}")
    return JSONResponse(status_code=exc.status_code, content={"error": error_dict})


async def handle_server_error(request: Request, exc: ServerError):
    error_dict = {"code": exc.base_error.code, "message": "Internal server error"}
    logger.error(f"Server error: {exc.base_error.code}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": error_dict}
    )


async def purge_expired_sessions_once():
    """Run one expired-session sweep in its own database session."""
    from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
    from src.app.services.access_control import AccessControlService
    from src.depends import (
        AsyncSessionLocal,
        get_access_policy,
        get_object_locator,
        get_tier_authority,
    )

    async with AsyncSessionLocal() as session:
        service = AccessControlService(
            SqlAlchemyUnitOfWork(session),
            get_tier_authority(),
            get_object_locator(),
            get_access_policy(),
        )
        result = await service.purge_expired_sessions()
    if result.is_err():
        logger.error(f"Scheduled session purge failed: {result.error.code}")


async def purge_expired_sessions_periodically(
    interval_seconds: float,
    sweep: Callable[[], Awaitable[None]] = purge_expired_sessions_once,
):
    """Run the sweep forever, once per interval. A crashed sweep is logged, not fatal."""
    while True:
        await asyncio.sleep(interval_seconds)
        try:
            await sweep()
        except Exception:
            logger.exception("Scheduled session purge crashed")


async def create_tables():
    from sqlmodel import SQLModel
    from src.depends import engine
    import src.domain.entities  # noqa: F401 (registers tables)

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)


def create_app(ApplicationConfig) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if ApplicationConfig.DB_AUTO_CREATE:
            await create_tables()

        purge_task = None
        if ApplicationConfig.PURGE_INTERVAL_SECONDS:
            purge_task = asyncio.create_task(
                purge_expired_sessions_periodically(
                    ApplicationConfig.PURGE_INTERVAL_SECONDS
                )
            )
            logger.info(
                f"Session purge scheduled every {ApplicationConfig.PURGE_INTERVAL_SECONDS}s"
            )
        try:
            yield
        finally:
            if purge_task is not None:
                purge_task.cancel()
                with suppress(asyncio.CancelledError):
                    await purge_task
            from src.depends import close_http_client

            await close_http_client()

    app = FastAPI(title="Media Access Control API", version="0.1.0", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ApplicationConfig.CORS_ORIGINS,
        allow_credentials=ApplicationConfig.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from src.api.routes import access, analytics, health_check, sessions

    app.include_router(health_check.router, tags=["Health"])
    app.include_router(access.router, tags=["Access"])
    app.include_router(sessions.router, tags=["Sessions"])
    app.include_router(analytics.router, tags=["Analytics"])

    app.add_exception_handler(ClientError, handle_client_error)
    app.add_exception_handler(ServerError, handle_server_error)

    return app
