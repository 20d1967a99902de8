"""Application dependencies."""

from dataclasses import dataclass
from secrets import compare_digest
from typing import Annotated

from fastapi import Depends, Header, Query, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession as SQLModelAsyncSession

from blogku.configs import settings
from blogku.configs.settings import DEFAULT_PAGE, DEFAULT_PAGE_LIMIT, MAX_PAGE_LIMIT
from blogku.db import async_session_maker, get_session
from blogku.errors import ForbiddenError, InvalidTokenError
from blogku.managers.cache_manager import CacheManager
from blogku.managers.token_manager import decode_access_token
from blogku.monitoring.side_effects import LoggingSideEffectSink, SideEffectSink
from blogku.repositories import AdminRepository, ContentRepository, PostStore
from blogku.schemas.admin import TokenData
from blogku.services.auth import ADMIN_ROLE, AuthService
from blogku.services.storage import ImageStorage

bearer_scheme = HTTPBearer(auto_error=False)


def get_session_maker() -> async_sessionmaker[SQLModelAsyncSession]:
    """Session factory used by the post store."""
    return async_session_maker


def get_cache_manager(request: Request) -> CacheManager:
    """Dependency to get the global cache manager instance."""
    return request.app.state.cache_manager


def get_image_storage(request: Request) -> ImageStorage:
    return request.app.state.image_storage


def get_side_effect_sink(request: Request) -> SideEffectSink:
    return getattr(request.app.state, "side_effect_sink", None) or LoggingSideEffectSink()


CacheDep = Annotated[CacheManager, Depends(get_cache_manager)]
StorageDep = Annotated[ImageStorage, Depends(get_image_storage)]


def get_post_store(
    session_maker: Annotated[async_sessionmaker[SQLModelAsyncSession], Depends(get_session_maker)],
) -> PostStore:
    return PostStore(session_maker)


def get_content_repository(
    store: Annotated[PostStore, Depends(get_post_store)],
    cache: CacheDep,
    storage: StorageDep,
    sink: Annotated[SideEffectSink, Depends(get_side_effect_sink)],
) -> ContentRepository:
    """
    Resolve the `ContentRepository` dependency.

    Parameters
    ----------
    store : PostStore
        Post persistence.
    cache : CacheManager
        Application cache manager.
    storage : ImageStorage
        Image backend.
    sink : SideEffectSink
        Receiver of best-effort side-effect outcomes.

    Returns
    -------
    ContentRepository
        Repository wired to the application collaborators.
    """
    return ContentRepository(store, cache, storage, sink=sink)


ContentRepoDep = Annotated[ContentRepository, Depends(get_content_repository)]


def get_auth_service(session: Annotated[AsyncSession, Depends(get_session)]) -> AuthService:
    return AuthService(AdminRepository(session))


AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]


async def get_current_admin(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> TokenData:
    """
    Authenticate the caller from the auth cookie or a Bearer header.

    Parameters
    ----------
    request : Request
        Current request, read for the auth cookie.
    credentials : HTTPAuthorizationCredentials | None
        Bearer credentials when an Authorization header is present.

    Returns
    -------
    TokenData
        Claims of a valid admin token.

    Raises
    ------
    InvalidTokenError
        If no token is supplied or it fails verification.
    ForbiddenError
        If the token does not carry the admin role.
    """
    token = request.cookies.get(settings.AUTH_COOKIE_NAME)
    if not token and credentials is not None:
        token = credentials.credentials
    if not token:
        raise InvalidTokenError

    token_data = decode_access_token(token)
    if token_data is None:
        raise InvalidTokenError
    if token_data.role != ADMIN_ROLE:
        mssg = "Admin role required"
        raise ForbiddenError(mssg)
    return token_data


AdminDep = Annotated[TokenData, Depends(get_current_admin)]


def require_admin_api_key(
    x_api_key: Annotated[str | None, Header(alias="X-API-Key")] = None,
) -> None:
    """Gate admin creation behind the configured API key."""
    expected = settings.ADMIN_API_KEY
    if expected is None or not x_api_key:
        mssg = "Invalid API key"
        raise ForbiddenError(mssg)
    if not compare_digest(x_api_key.encode(), expected.get_secret_value().encode()):
        mssg = "Invalid API key"
        raise ForbiddenError(mssg)


@dataclass(frozen=True)
class PostListQuery:
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_PAGE_LIMIT


def get_post_list_query(
    page: Annotated[int, Query(ge=1, description="Page number, starting at 1")] = DEFAULT_PAGE,
    limit: Annotated[
        int,
        Query(ge=1, le=MAX_PAGE_LIMIT, description="Posts per page"),
    ] = DEFAULT_PAGE_LIMIT,
) -> PostListQuery:
    return PostListQuery(page=page, limit=limit)


PostListQueryDep = Annotated[PostListQuery, Depends(get_post_list_query)]
