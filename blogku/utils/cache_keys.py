"""
Cache key builders for blog content.

Routes and the content repository use these so reads and invalidation
agree on the exact key shapes.
"""

POSTS_NAMESPACE = "blog"

# Glob matching every cached page of the post listing
LIST_KEY_PATTERN = "list:*"


def post_list_key(page: int, limit: int) -> str:
    """Generate cache key for one page of the post listing."""
    return f"list:page:{page}:limit:{limit}"


def post_slug_key(slug: str) -> str:
    """Generate cache key for a single post looked up by slug."""
    return f"slug:{slug}"
