from blogku.configs.settings import (
    ALLOWED_IMAGE_EXTENSIONS,
    CONFIG_MAP,
    CacheConfig,
    ContentConfig,
    RedisCacheConfig,
    pool_kwargs,
    settings,
)

__all__ = [
    "ALLOWED_IMAGE_EXTENSIONS",
    "CONFIG_MAP",
    "CacheConfig",
    "ContentConfig",
    "RedisCacheConfig",
    "pool_kwargs",
    "settings",
]
