"""
Base storage protocol for post images.

Backends persist one image per post under a name derived from its slug.
"""

from abc import abstractmethod
from typing import Protocol, runtime_checkable


@runtime_checkable
class ImageStorage(Protocol):
    """Interface every image storage backend implements."""

    @abstractmethod
    def validate_extension(self, filename: str) -> str:
        """
        Return the lowercased extension of ``filename``.

        Raises:
            UnsupportedImageTypeError: If the extension is not allowed.
        """
        ...

    @abstractmethod
    def image_name(self, slug: str, extension: str) -> str:
        """Deterministic stored name for a post image."""
        ...

    @abstractmethod
    async def save(self, slug: str, filename: str, data: bytes) -> str:
        """
        Persist an uploaded image.

        Args:
            slug: Slug of the owning post.
            filename: Client-supplied file name, used only for its extension.
            data: Raw file bytes.

        Returns:
            str: The stored image name.
        """
        ...

    @abstractmethod
    async def delete(self, name: str) -> bool:
        """
        Remove a stored image.

        Returns:
            bool: True if a file was removed, False if it did not exist.

        Raises:
            StorageError: On any other filesystem failure.
        """
        ...
