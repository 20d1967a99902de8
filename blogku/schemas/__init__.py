from blogku.schemas.admin import (
    AdminCreate,
    AdminLogin,
    AdminResponse,
    LoginResponse,
    TokenData,
)
from blogku.schemas.cache import CacheHealthResponse, HealthCheckResponse
from blogku.schemas.post import (
    CreatedPost,
    PaginationMeta,
    PostCreatedResponse,
    PostListResponse,
    PostMutationResponse,
    PostResponse,
    PostUpdate,
)

__all__ = [
    "AdminCreate",
    "AdminLogin",
    "AdminResponse",
    "CacheHealthResponse",
    "CreatedPost",
    "HealthCheckResponse",
    "LoginResponse",
    "PaginationMeta",
    "PostCreatedResponse",
    "PostListResponse",
    "PostMutationResponse",
    "PostResponse",
    "PostUpdate",
    "TokenData",
]
