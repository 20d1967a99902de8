"""URL slug normalization and collision-free slug resolution."""

from collections.abc import Awaitable, Callable
from re import compile as re_compile

from blogku.errors import InvalidInputError, SlugConflictError
from blogku.monitoring import get_logger

logger = get_logger(__name__)

_WHITESPACE = re_compile(r"\s+")
_DISALLOWED = re_compile(r"[^a-z0-9-]")
_HYPHEN_RUNS = re_compile(r"-{2,}")

DEFAULT_MAX_PROBES = 100

SlugExists = Callable[[str, int], Awaitable[bool]]


def normalize_slug(text: str) -> str:
    """
    Turn free text into a URL-safe slug.

    Lowercases, turns whitespace runs into a single hyphen, drops every
    character outside ``[a-z0-9-]``, collapses repeated hyphens and trims
    hyphens from both ends.

    Args:
        text: Source text, usually a post title.

    Returns:
        The normalized slug. May be empty when nothing usable remains.
    """
    slug = _WHITESPACE.sub("-", text.strip().lower())
    slug = _DISALLOWED.sub("", slug)
    slug = _HYPHEN_RUNS.sub("-", slug)
    return slug.strip("-")


class SlugResolver:
    """
    Find the first free slug derived from a candidate.

    The ``exists`` callable answers whether a slug is taken by a post other
    than ``exclude_id``. Candidates are tried as ``base``, ``base-1``,
    ``base-2`` and so on.
    """

    def __init__(self, exists: SlugExists, max_probes: int = DEFAULT_MAX_PROBES) -> None:
        if max_probes < 1:
            mssg = "max_probes must be positive"
            raise ValueError(mssg)
        self._exists = exists
        self.max_probes = max_probes

    async def resolve(self, candidate: str, exclude_id: int = 0) -> str:
        """
        Resolve a unique slug for ``candidate``.

        Args:
            candidate: Raw text to slugify.
            exclude_id: Post id to ignore during collision checks, 0 for none.

        Returns:
            A slug not used by any other post at the time of the lookup.

        Raises:
            InvalidInputError: If the candidate normalizes to an empty slug.
            SlugConflictError: If every probe up to ``max_probes`` collides.
        """
        base = normalize_slug(candidate)
        if not base:
            mssg = "Title must contain at least one letter or digit"
            raise InvalidInputError(mssg)

        slug = base
        for attempt in range(1, self.max_probes + 1):
            if not await self._exists(slug, exclude_id):
                return slug
            slug = f"{base}-{attempt}"

        logger.warning("Slug probes exhausted", base=base, attempts=self.max_probes)
        raise SlugConflictError(base, self.max_probes)
