from functools import lru_cache

import boto3
import httpx
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from src.adapter.services.http_tier_authority import HttpTierAuthority
from src.adapter.services.s3_object_locator import S3ObjectLocator
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.utils.jwt import verify_jwt
from src.app.services.access_control import AccessControlService
from src.app.services.access_policy import AccessPolicy
from src.app.services.object_locator import IObjectLocator
from src.app.services.tier_authority import ITierAuthority
from src.app.services.unit_of_work import UnitOfWork

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

security = HTTPBearer()


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


@lru_cache
def get_http_client() -> httpx.AsyncClient:
    return httpx.AsyncClient(timeout=ApplicationConfig.BACKEND_TIMEOUT_SECONDS)


async def close_http_client():
    if get_http_client.cache_info().currsize:
        await get_http_client().aclose()
        get_http_client.cache_clear()


def get_tier_authority() -> ITierAuthority:
    return HttpTierAuthority(
        get_http_client(),
        ApplicationConfig.TIER_AUTHORITY_URL,
        api_key=ApplicationConfig.TIER_AUTHORITY_API_KEY or None,
    )


@lru_cache
def get_object_locator() -> IObjectLocator:
    client = boto3.client("s3", region_name=ApplicationConfig.S3_REGION)
    return S3ObjectLocator(
        client, ApplicationConfig.S3_BUCKET, ApplicationConfig.ASSET_KEY_TEMPLATE
    )


@lru_cache
def get_access_policy() -> AccessPolicy:
    return AccessPolicy.from_config(ApplicationConfig)


async def get_access_control(
    uow: UnitOfWork = Depends(get_unit_of_work),
    tier_authority: ITierAuthority = Depends(get_tier_authority),
    object_locator: IObjectLocator = Depends(get_object_locator),
    policy: AccessPolicy = Depends(get_access_policy),
) -> AccessControlService:
    return AccessControlService(uow, tier_authority, object_locator, policy)


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
) -> dict:
    """
    Dependency to extract and verify JWT token from Authorization header.

    Args:
        credentials: Bearer token from Authorization header

    Returns:
        Decoded JWT payload containing user_id

    Raises:
        HTTPException: 401 if token is invalid or expired
    """
    token = credentials.credentials
    payload = verify_jwt(token)

    if payload is None or not payload.get("user_id"):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        )

    return payload
