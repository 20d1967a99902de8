from blogku.dependencies.dependencies import (
    AdminDep,
    AuthServiceDep,
    CacheDep,
    ContentRepoDep,
    PostListQuery,
    PostListQueryDep,
    StorageDep,
    get_auth_service,
    get_cache_manager,
    get_content_repository,
    get_current_admin,
    get_image_storage,
    get_post_store,
    get_session_maker,
    get_side_effect_sink,
    require_admin_api_key,
)

__all__ = [
    "AdminDep",
    "AuthServiceDep",
    "CacheDep",
    "ContentRepoDep",
    "PostListQuery",
    "PostListQueryDep",
    "StorageDep",
    "get_auth_service",
    "get_cache_manager",
    "get_content_repository",
    "get_current_admin",
    "get_image_storage",
    "get_post_store",
    "get_session_maker",
    "get_side_effect_sink",
    "require_admin_api_key",
]
