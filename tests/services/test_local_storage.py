"""Tests for LocalImageStorage."""

from pathlib import Path

import pytest

from blogku.errors import StorageError, UnsupportedImageTypeError
from blogku.services.storage import ImageStorage, LocalImageStorage


def test_conforms_to_image_storage(storage: LocalImageStorage) -> None:
    assert isinstance(storage, ImageStorage)


class TestValidateExtension:
    """Tests for extension checks."""

    @pytest.mark.parametrize("filename", ["a.jpg", "b.jpeg", "c.png", "d.webp", "E.PNG"])
    def test_allowed(self, storage: LocalImageStorage, filename: str) -> None:
        assert storage.validate_extension(filename) == Path(filename).suffix.lower()

    @pytest.mark.parametrize("filename", ["anim.gif", "doc.pdf", "no_extension", "png"])
    def test_rejected(self, storage: LocalImageStorage, filename: str) -> None:
        with pytest.raises(UnsupportedImageTypeError):
            storage.validate_extension(filename)

    def test_custom_allow_list(self, tmp_path: Path) -> None:
        storage = LocalImageStorage(tmp_path, allowed_extensions=[".GIF"])

        assert storage.validate_extension("x.gif") == ".gif"
        with pytest.raises(UnsupportedImageTypeError):
            storage.validate_extension("x.png")


class TestSaveAndDelete:
    """Tests for writing and removing files."""

    @pytest.mark.asyncio
    async def test_save_uses_slug_name(self, storage: LocalImageStorage) -> None:
        name = await storage.save("hello-world", "Original Name.PNG", b"\x89PNG")

        assert name == "hello-world_image.png"
        assert (storage.base_dir / name).read_bytes() == b"\x89PNG"

    @pytest.mark.asyncio
    async def test_delete_reports_whether_file_existed(self, storage: LocalImageStorage) -> None:
        name = await storage.save("temp", "t.jpg", b"data")

        assert await storage.delete(name) is True
        assert await storage.delete(name) is False

    @pytest.mark.asyncio
    async def test_names_cannot_escape_base_dir(self, storage: LocalImageStorage, tmp_path: Path) -> None:
        outside = tmp_path / "secret.png"
        outside.write_bytes(b"keep")

        assert await storage.delete("../secret.png") is False
        assert outside.exists()

    @pytest.mark.asyncio
    async def test_save_failure_raises_storage_error(self, tmp_path: Path) -> None:
        blocker = tmp_path / "not-a-dir"
        blocker.write_text("file in the way")
        storage = LocalImageStorage(blocker)

        with pytest.raises(StorageError):
            await storage.save("post", "p.png", b"data")

    @pytest.mark.asyncio
    async def test_delete_failure_raises_storage_error(self, storage: LocalImageStorage) -> None:
        (storage.base_dir / "dir_image.png").mkdir(parents=True)

        with pytest.raises(StorageError):
            await storage.delete("dir_image.png")
