"""Tests for slug normalization and resolution."""

from re import fullmatch

import pytest

from blogku.errors import InvalidInputError, SlugConflictError
from blogku.utils.slug import SlugResolver, normalize_slug

SLUG_SHAPE = r"[a-z0-9]+(-[a-z0-9]+)*"


class FakeSlugIndex:
    """Slug lookup backed by a dict of slug -> post id."""

    def __init__(self, taken: dict[str, int] | None = None) -> None:
        self.taken = taken or {}
        self.lookups: list[tuple[str, int]] = []

    async def exists(self, slug: str, exclude_id: int) -> bool:
        self.lookups.append((slug, exclude_id))
        owner = self.taken.get(slug)
        return owner is not None and owner != exclude_id


@pytest.mark.parametrize(
    ("title", "expected"),
    [
        ("Hello World", "hello-world"),
        ("  Hello,   World!!  ", "hello-world"),
        ("Tabs\tand\nnewlines", "tabs-and-newlines"),
        ("a - b", "a-b"),
        ("--Leading and trailing--", "leading-and-trailing"),
        ("Café au lait", "caf-au-lait"),
        ("Top 10 Tips for 2025", "top-10-tips-for-2025"),
        ("already-a-slug", "already-a-slug"),
        ("!!!", ""),
        ("", ""),
    ],
)
def test_normalize_slug(title: str, expected: str) -> None:
    assert normalize_slug(title) == expected


@pytest.mark.parametrize(
    "title",
    ["Hello World", "  x  ", "A--B__C", "日本語 title", "-_-", "UPPER lower 123", "a b"],
)
def test_normalize_slug_shape(title: str) -> None:
    slug = normalize_slug(title)
    assert slug == "" or fullmatch(SLUG_SHAPE, slug)


@pytest.mark.asyncio
async def test_resolve_returns_base_when_free() -> None:
    index = FakeSlugIndex()
    resolver = SlugResolver(index.exists)

    assert await resolver.resolve("Hello World") == "hello-world"
    assert index.lookups == [("hello-world", 0)]


@pytest.mark.asyncio
async def test_resolve_appends_sequential_suffix() -> None:
    index = FakeSlugIndex({"hello-world": 1, "hello-world-1": 2})
    resolver = SlugResolver(index.exists)

    assert await resolver.resolve("Hello World") == "hello-world-2"
    assert [slug for slug, _ in index.lookups] == ["hello-world", "hello-world-1", "hello-world-2"]


@pytest.mark.asyncio
async def test_resolve_ignores_excluded_post() -> None:
    index = FakeSlugIndex({"hello-world": 7})
    resolver = SlugResolver(index.exists)

    assert await resolver.resolve("Hello World", exclude_id=7) == "hello-world"


@pytest.mark.asyncio
async def test_resolve_rejects_empty_candidate() -> None:
    resolver = SlugResolver(FakeSlugIndex().exists)

    with pytest.raises(InvalidInputError):
        await resolver.resolve("?!")


@pytest.mark.asyncio
async def test_resolve_gives_up_after_max_probes() -> None:
    index = FakeSlugIndex({"a": 1, "a-1": 2, "a-2": 3})
    resolver = SlugResolver(index.exists, max_probes=3)

    with pytest.raises(SlugConflictError) as exc_info:
        await resolver.resolve("a")

    assert exc_info.value.attempts == 3
    assert exc_info.value.status_code == 409
    assert len(index.lookups) == 3


def test_resolver_requires_positive_bound() -> None:
    with pytest.raises(ValueError, match="max_probes"):
        SlugResolver(FakeSlugIndex().exists, max_probes=0)
