"""
Local filesystem storage for post images.

Files live flat in the uploads directory and are served by the static
files mount at ``/uploads``.
"""

from collections.abc import Iterable
from pathlib import Path, PurePath

import aiofiles
import aiofiles.os

from blogku.configs import ALLOWED_IMAGE_EXTENSIONS, settings
from blogku.errors import StorageError, UnsupportedImageTypeError
from blogku.monitoring import get_logger

logger = get_logger(__name__)


class LocalImageStorage:
    """Store post images on the local filesystem."""

    def __init__(
        self,
        base_dir: Path | None = None,
        allowed_extensions: Iterable[str] = ALLOWED_IMAGE_EXTENSIONS,
    ) -> None:
        """
        Initialize local storage.

        Args:
            base_dir: Target directory, ``UPLOADS_DIR`` by default.
            allowed_extensions: Accepted extensions including the dot.
        """
        self.base_dir = base_dir or settings.UPLOADS_DIR
        self.allowed_extensions = frozenset(ext.lower() for ext in allowed_extensions)

    def _ensure_directory(self) -> None:
        self.base_dir.mkdir(parents=True, exist_ok=True)

    def _path(self, name: str) -> Path:
        # Stored names are flat, never nested paths
        return self.base_dir / PurePath(name).name

    def validate_extension(self, filename: str) -> str:
        extension = PurePath(filename).suffix.lower()
        if extension not in self.allowed_extensions:
            raise UnsupportedImageTypeError(extension or filename, sorted(self.allowed_extensions))
        return extension

    def image_name(self, slug: str, extension: str) -> str:
        return f"{slug}_image{extension}"

    async def save(self, slug: str, filename: str, data: bytes) -> str:
        """
        Write an uploaded image as ``{slug}_image{ext}``.

        Raises:
            UnsupportedImageTypeError: If the extension is not allowed.
            StorageError: If the file cannot be written.
        """
        name = self.image_name(slug, self.validate_extension(filename))
        try:
            self._ensure_directory()
            async with aiofiles.open(self._path(name), "wb") as f:
                await f.write(data)
        except OSError as e:
            logger.exception("Failed to store image", name=name)
            mssg = f"Failed to store image {name}"
            raise StorageError(mssg) from e
        logger.info("Image stored", name=name, size=len(data))
        return name

    async def delete(self, name: str) -> bool:
        """Remove a stored image. A missing file returns False."""
        try:
            await aiofiles.os.remove(self._path(name))
        except FileNotFoundError:
            return False
        except OSError as e:
            mssg = f"Failed to delete image {name}: {e.strerror or e}"
            raise StorageError(mssg) from e
        return True
