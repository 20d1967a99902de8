from blogku.models.admin import AdminDB
from blogku.models.post import PostDB

__all__ = ["AdminDB", "PostDB"]
