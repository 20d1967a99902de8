"""Blog post routes: public reads and admin writes."""

from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, UploadFile
from fastapi.responses import ORJSONResponse
from starlette.status import HTTP_201_CREATED

from blogku.configs.settings import MAX_CONTENT_LENGTH, MAX_TITLE_LENGTH
from blogku.dependencies import (
    ContentRepoDep,
    PostListQueryDep,
    StorageDep,
    get_current_admin,
)
from blogku.monitoring import get_logger
from blogku.schemas.post import (
    CreatedPost,
    PostCreatedResponse,
    PostListResponse,
    PostMutationResponse,
    PostResponse,
    PostUpdate,
)

logger = get_logger(__name__)

router = APIRouter(prefix="/blogs", tags=["📝 Blogs"])
admin_router = APIRouter(
    prefix="/admin/blogs",
    tags=["🛡️ Admin Blogs"],
    dependencies=[Depends(get_current_admin)],
)


@router.get(
    "",
    response_class=ORJSONResponse,
    response_model=PostListResponse,
    summary="List blog posts",
    description="Paginated posts, most recently published first. Served from cache when possible.",
    operation_id="blogs_list",
)
async def list_posts(query: PostListQueryDep, repo: ContentRepoDep) -> PostListResponse:
    """
    Return one page of posts.

    Parameters
    ----------
    query : PostListQuery
        Page number and size.
    repo : ContentRepository
        Content repository dependency.

    Returns
    -------
    PostListResponse
        Posts of the page with pagination metadata.
    """
    return await repo.get_all(query.page, query.limit)


@router.get(
    "/{slug}",
    response_class=ORJSONResponse,
    response_model=PostResponse,
    summary="Get a blog post by slug",
    responses={404: {"content": {"application/json": {"example": {"detail": "Post not found"}}}}},
    operation_id="blogs_get_by_slug",
)
async def get_post(slug: str, repo: ContentRepoDep) -> PostResponse:
    return await repo.get_by_slug(slug)


@admin_router.post(
    "",
    response_class=ORJSONResponse,
    response_model=PostCreatedResponse,
    status_code=HTTP_201_CREATED,
    summary="Create a blog post",
    description="Multipart form with title, content and an image (.jpg, .jpeg, .png, .webp).",
    operation_id="admin_blogs_create",
)
async def create_post(
    title: Annotated[str, Form(min_length=1, max_length=MAX_TITLE_LENGTH)],
    content: Annotated[str, Form(min_length=1, max_length=MAX_CONTENT_LENGTH)],
    image: Annotated[UploadFile, File(description="Post image")],
    repo: ContentRepoDep,
    storage: StorageDep,
) -> PostCreatedResponse:
    """
    Create a post, then store its image under the assigned slug.

    Parameters
    ----------
    title : str
        Post title, source of the slug.
    content : str
        Post body.
    image : UploadFile
        Uploaded image file.
    repo : ContentRepository
        Content repository dependency.
    storage : ImageStorage
        Image storage dependency.

    Returns
    -------
    PostCreatedResponse
        The created post and the stored image name.

    Raises
    ------
    InvalidInputError
        If the image extension is not allowed or a field is blank.
    StorageError
        If the image cannot be written.
    """
    filename = image.filename or ""
    post_id, slug = await repo.create(title, content, filename)
    image_name = await storage.save(slug, filename, await image.read())
    logger.info("Blog post created", post_id=post_id, slug=slug, image=image_name)

    return PostCreatedResponse(
        message="Blog post created successfully",
        blog=CreatedPost(id=post_id, title=title, content=content, slug=slug, image_url=image_name),
    )


@admin_router.patch(
    "/{post_id}",
    response_class=ORJSONResponse,
    response_model=PostMutationResponse,
    summary="Update a blog post",
    description="Change title and/or content. A new title re-derives the slug.",
    operation_id="admin_blogs_update",
)
async def update_post(post_id: int, payload: PostUpdate, repo: ContentRepoDep) -> PostMutationResponse:
    payload.require_changes()
    slug = await repo.update(post_id, title=payload.title, content=payload.content)
    return PostMutationResponse(message="Blog post updated successfully", slug=slug)


@admin_router.delete(
    "/{post_id}",
    response_class=ORJSONResponse,
    response_model=PostMutationResponse,
    summary="Delete a blog post",
    operation_id="admin_blogs_delete",
)
async def delete_post(post_id: int, repo: ContentRepoDep) -> PostMutationResponse:
    slug = await repo.delete(post_id)
    return PostMutationResponse(message="Blog post deleted successfully", slug=slug)
