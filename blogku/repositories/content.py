"""
Cache-aside content repository.

Reads try the cache first and fall back to the store, repopulating the cache
on a miss. Writes go to the store first and then delete every cache key that
could still serve the pre-write view. Cache entries are never patched in
place.
"""

from collections.abc import Awaitable, Callable
from math import ceil

from pydantic import BaseModel, ValidationError

from blogku.configs import ContentConfig
from blogku.errors import (
    CacheExceptionError,
    DuplicateEntryError,
    InvalidInputError,
    SlugConflictError,
    StorageError,
)
from blogku.managers.cache_manager import CacheManager
from blogku.monitoring import get_logger
from blogku.monitoring.side_effects import (
    LoggingSideEffectSink,
    SideEffectResult,
    SideEffectSink,
)
from blogku.repositories.post_store import PostField, PostStore
from blogku.schemas.post import PaginationMeta, PostListResponse, PostResponse
from blogku.services.storage import ImageStorage
from blogku.utils.cache_keys import (
    LIST_KEY_PATTERN,
    POSTS_NAMESPACE,
    post_list_key,
    post_slug_key,
)
from blogku.utils.helpers import utc_now
from blogku.utils.slug import SlugResolver, normalize_slug

logger = get_logger(__name__)


class ContentRepository:
    """
    Create, read, update and delete blog posts with cache-aside semantics.

    Cache problems never fail an operation: they are reported to the sink and
    the operation continues as a miss or a no-op. Store errors propagate.
    """

    def __init__(
        self,
        store: PostStore,
        cache: CacheManager,
        storage: ImageStorage,
        sink: SideEffectSink | None = None,
        config: ContentConfig | None = None,
    ) -> None:
        """
        Initialize the repository with its collaborators.

        Args:
            store: Durable post storage.
            cache: Cache manager used for reads and invalidation.
            storage: Image backend, used for extension checks and removal.
            sink: Receiver of best-effort side-effect outcomes.
            config: Slug probing and retry limits.
        """
        self.store = store
        self.cache = cache
        self.storage = storage
        self.sink = sink or LoggingSideEffectSink()
        self.config = config or ContentConfig()
        self.slugs = SlugResolver(store.exists_slug, max_probes=self.config.max_slug_probes)

    async def create(self, title: str, content: str, filename: str) -> tuple[int, str]:
        """
        Create a post and return its id and slug.

        The image itself is written by the caller under the returned slug.

        Args:
            title: Post title, source of the slug.
            content: Post body.
            filename: Uploaded image file name, checked for its extension.

        Returns:
            tuple[int, str]: New post id and its unique slug.

        Raises:
            InvalidInputError: Empty title/content or disallowed extension.
            SlugConflictError: If no unique slug could be assigned.
        """
        if not title.strip() or not content.strip():
            mssg = "Title and content are required"
            raise InvalidInputError(mssg)
        extension = self.storage.validate_extension(filename)

        async def insert(slug: str) -> int:
            return await self.store.insert_post(
                title=title,
                content=content,
                slug=slug,
                image_path=self.storage.image_name(slug, extension),
                now=utc_now(),
            )

        post_id, slug = await self._write_with_slug(title, 0, insert)
        logger.info("Post created", post_id=post_id, slug=slug)

        await self._invalidate_lists()
        return post_id, slug

    async def get_all(self, page: int, limit: int) -> PostListResponse:
        """
        Return one page of posts, newest first.

        Args:
            page: 1-based page number.
            limit: Page size.

        Raises:
            InvalidInputError: If page or limit is not positive.
        """
        if page < 1 or limit < 1:
            mssg = "page and limit must be positive integers"
            raise InvalidInputError(mssg)

        key = post_list_key(page, limit)
        cached = await self._cache_get(key, PostListResponse)
        if cached is not None:
            return cached

        total = await self.store.count_posts()
        posts = await self.store.query_posts_page(limit=limit, offset=(page - 1) * limit)
        result = PostListResponse(
            total=total,
            blogs=[PostResponse.model_validate(post) for post in posts],
            meta=PaginationMeta(
                page=page,
                limit=limit,
                total_page=ceil(total / limit),
                total_items=total,
            ),
        )

        await self._cache_set(key, result, self.cache.cache_config.list_ttl)
        return result

    async def get_by_slug(self, slug: str) -> PostResponse:
        """
        Return a single post.

        Raises:
            RecordNotFoundError: If no post has this slug.
        """
        key = post_slug_key(slug)
        cached = await self._cache_get(key, PostResponse)
        if cached is not None:
            return cached

        post = PostResponse.model_validate(await self.store.get_post_by_slug(slug))
        await self._cache_set(key, post, self.cache.cache_config.slug_ttl)
        return post

    async def update(
        self,
        post_id: int,
        title: str | None = None,
        content: str | None = None,
    ) -> str:
        """
        Update title and/or content of a post.

        A new title re-derives the slug, excluding the post itself from the
        collision check. Blank values are treated as absent.

        Returns:
            str: The post's slug after the update.

        Raises:
            InvalidInputError: If neither title nor content is given.
            RecordNotFoundError: If the post does not exist.
            SlugConflictError: If no unique slug could be assigned.
        """
        title = title if title and title.strip() else None
        content = content if content and content.strip() else None
        if title is None and content is None:
            mssg = "At least one of title or content must be provided"
            raise InvalidInputError(mssg)

        old_slug, _ = await self.store.get_post_slug_and_image(post_id)

        async def apply(slug: str) -> str:
            changes: dict[PostField, object] = {PostField.UPDATED_AT: utc_now()}
            if title is not None:
                changes[PostField.TITLE] = title
                changes[PostField.SLUG] = slug
            if content is not None:
                changes[PostField.CONTENT] = content
            await self.store.update_post_fields(post_id, changes)
            return slug

        if title is not None:
            _, new_slug = await self._write_with_slug(title, post_id, apply)
        else:
            new_slug = await apply(old_slug)
        logger.info("Post updated", post_id=post_id, old_slug=old_slug, slug=new_slug)

        await self._invalidate_lists()
        await self._invalidate_slug(old_slug)
        return new_slug

    async def delete(self, post_id: int) -> str:
        """
        Delete a post and its image.

        Image removal is best effort: a missing file counts as removed and
        other storage failures are reported without aborting the delete.

        Returns:
            str: Slug of the deleted post.

        Raises:
            RecordNotFoundError: If the post does not exist.
        """
        slug, image_path = await self.store.get_post_slug_and_image(post_id)

        try:
            await self.storage.delete(image_path)
            self.sink.record(SideEffectResult.success("image_delete", image_path))
        except StorageError as e:
            self.sink.record(SideEffectResult.failure("image_delete", image_path, e))

        await self.store.delete_post(post_id)
        logger.info("Post deleted", post_id=post_id, slug=slug)

        await self._invalidate_lists()
        await self._invalidate_slug(slug)
        return slug

    async def _write_with_slug[T](
        self,
        title: str,
        exclude_id: int,
        write: Callable[[str], Awaitable[T]],
    ) -> tuple[T, str]:
        """
        Resolve a slug for ``title`` and run ``write`` with it.

        A unique violation on the slug means another writer claimed it between
        the lookup and the write; the slug is re-resolved and the write retried.
        Every lost race consumes one suffix, so attempts share the ``max_slug_probes`` bound.
        """
        max_attempts = self.config.max_slug_probes
        last_error: DuplicateEntryError | None = None
        for attempt in range(max_attempts):
            slug = await self.slugs.resolve(title, exclude_id=exclude_id)
            try:
                return await write(slug), slug
            except DuplicateEntryError as e:
                if e.field != "slug":
                    raise
                last_error = e
                logger.warning("Slug taken concurrently, retrying", slug=slug, attempt=attempt + 1)

        raise SlugConflictError(normalize_slug(title), max_attempts) from last_error

    async def _cache_get[ModelT: BaseModel](self, key: str, model: type[ModelT]) -> ModelT | None:
        try:
            cached = await self.cache.get(key, namespace=POSTS_NAMESPACE)
        except CacheExceptionError as e:
            self.sink.record(SideEffectResult.failure("cache_get", key, e))
            return None
        if cached is None:
            return None
        try:
            return model.model_validate(cached)
        except ValidationError as e:
            self.sink.record(SideEffectResult.failure("cache_get", key, e))
            return None

    async def _cache_set(self, key: str, value: BaseModel, ttl: int) -> None:
        try:
            await self.cache.set(
                key,
                value.model_dump(mode="json", by_alias=True),
                ttl=ttl,
                namespace=POSTS_NAMESPACE,
            )
        except CacheExceptionError as e:
            self.sink.record(SideEffectResult.failure("cache_set", key, e))
            return
        self.sink.record(SideEffectResult.success("cache_set", key))

    async def _invalidate_lists(self) -> None:
        try:
            await self.cache.delete_pattern(LIST_KEY_PATTERN, namespace=POSTS_NAMESPACE)
        except CacheExceptionError as e:
            self.sink.record(SideEffectResult.failure("cache_sweep", LIST_KEY_PATTERN, e))
            return
        self.sink.record(SideEffectResult.success("cache_sweep", LIST_KEY_PATTERN))

    async def _invalidate_slug(self, slug: str) -> None:
        key = post_slug_key(slug)
        try:
            await self.cache.delete(key, namespace=POSTS_NAMESPACE)
        except CacheExceptionError as e:
            self.sink.record(SideEffectResult.failure("cache_delete", key, e))
            return
        self.sink.record(SideEffectResult.success("cache_delete", key))
