from blogku.repositories.admin import AdminRepository
from blogku.repositories.content import ContentRepository
from blogku.repositories.post_store import PostField, PostStore

__all__ = ["AdminRepository", "ContentRepository", "PostField", "PostStore"]
