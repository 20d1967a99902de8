from fastapi import APIRouter

from blogku.routes.auth import router as auth_router
from blogku.routes.blog import admin_router as admin_blog_router
from blogku.routes.blog import router as blog_router

api_router = APIRouter(prefix="/api/v1")

_ = [api_router.include_router(router) for router in (auth_router, blog_router, admin_blog_router)]

__all__ = ["admin_blog_router", "api_router", "auth_router", "blog_router"]
