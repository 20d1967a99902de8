# tests/routes/test_blog_routes.py
"""Tests for the public and admin blog endpoints."""

import pytest
from httpx import AsyncClient

from blogku.managers.token_manager import create_access_token
from blogku.services.storage import LocalImageStorage

BLOGS = "/api/v1/blogs"
ADMIN_BLOGS = "/api/v1/admin/blogs"


async def _create(
    client: AsyncClient,
    headers: dict[str, str],
    title: str = "First Post",
    filename: str = "cover.png",
) -> dict:
    response = await client.post(
        ADMIN_BLOGS,
        data={"title": title, "content": "Hello from the test suite"},
        files={"image": (filename, b"\x89PNG-bytes", "image/png")},
        headers=headers,
    )
    assert response.status_code == 201, response.text
    return response.json()["blog"]


class TestListPosts:
    """Tests for GET /blogs."""

    @pytest.mark.asyncio
    async def test_empty_listing_shape(self, client: AsyncClient) -> None:
        response = await client.get(BLOGS)

        assert response.status_code == 200
        assert response.json() == {
            "total": 0,
            "blogs": [],
            "meta": {"page": 1, "limit": 10, "totalPage": 0, "totalItems": 0},
        }

    @pytest.mark.asyncio
    @pytest.mark.parametrize("query", ["page=0", "limit=0", "limit=101", "page=abc"])
    async def test_invalid_pagination(self, client: AsyncClient, query: str) -> None:
        response = await client.get(f"{BLOGS}?{query}")

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_lists_created_posts(self, client: AsyncClient, admin_headers: dict[str, str]) -> None:
        await _create(client, admin_headers, "One")
        await _create(client, admin_headers, "Two")

        body = (await client.get(f"{BLOGS}?page=1&limit=1")).json()

        assert body["total"] == 2
        assert body["meta"] == {"page": 1, "limit": 1, "totalPage": 2, "totalItems": 2}
        assert body["blogs"][0]["slug"] == "two"


class TestGetPost:
    """Tests for GET /blogs/{slug}."""

    @pytest.mark.asyncio
    async def test_found(self, client: AsyncClient, admin_headers: dict[str, str]) -> None:
        created = await _create(client, admin_headers)

        response = await client.get(f"{BLOGS}/{created['slug']}")

        assert response.status_code == 200
        assert response.json()["title"] == "First Post"
        assert response.json()["image_path"] == "first-post_image.png"

    @pytest.mark.asyncio
    async def test_not_found(self, client: AsyncClient) -> None:
        response = await client.get(f"{BLOGS}/does-not-exist")

        assert response.status_code == 404


class TestAdminAuth:
    """Admin endpoints require an admin token."""

    @pytest.mark.asyncio
    async def test_missing_token(self, client: AsyncClient) -> None:
        response = await client.delete(f"{ADMIN_BLOGS}/1")

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_invalid_token(self, client: AsyncClient) -> None:
        response = await client.delete(f"{ADMIN_BLOGS}/1", headers={"Authorization": "Bearer nope"})

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_non_admin_role(self, client: AsyncClient) -> None:
        token = create_access_token(1, role="editor")

        response = await client.delete(f"{ADMIN_BLOGS}/1", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_cookie_is_accepted(self, client: AsyncClient, admin_token: str) -> None:
        response = await client.delete(f"{ADMIN_BLOGS}/999", headers={"Cookie": f"authToken={admin_token}"})

        assert response.status_code == 404


class TestCreatePost:
    """Tests for POST /admin/blogs."""

    @pytest.mark.asyncio
    async def test_creates_post_and_image(
        self,
        client: AsyncClient,
        admin_headers: dict[str, str],
        storage: LocalImageStorage,
    ) -> None:
        response = await client.post(
            ADMIN_BLOGS,
            data={"title": "Hello World", "content": "Body"},
            files={"image": ("Photo.PNG", b"\x89PNG-bytes", "image/png")},
            headers=admin_headers,
        )

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Blog post created successfully"
        assert body["blog"]["slug"] == "hello-world"
        assert body["blog"]["imageUrl"] == "hello-world_image.png"
        assert (storage.base_dir / "hello-world_image.png").read_bytes() == b"\x89PNG-bytes"

    @pytest.mark.asyncio
    async def test_duplicate_titles(self, client: AsyncClient, admin_headers: dict[str, str]) -> None:
        first = await _create(client, admin_headers, "Same")
        second = await _create(client, admin_headers, "Same")

        assert (first["slug"], second["slug"]) == ("same", "same-1")

    @pytest.mark.asyncio
    async def test_disallowed_extension(self, client: AsyncClient, admin_headers: dict[str, str]) -> None:
        response = await client.post(
            ADMIN_BLOGS,
            data={"title": "Animated", "content": "Body"},
            files={"image": ("anim.gif", b"GIF89a", "image/gif")},
            headers=admin_headers,
        )

        assert response.status_code == 400
        assert (await client.get(BLOGS)).json()["total"] == 0

    @pytest.mark.asyncio
    async def test_missing_image(self, client: AsyncClient, admin_headers: dict[str, str]) -> None:
        response = await client.post(
            ADMIN_BLOGS,
            data={"title": "No Image", "content": "Body"},
            headers=admin_headers,
        )

        assert response.status_code == 422


class TestUpdatePost:
    """Tests for PATCH /admin/blogs/{id}."""

    @pytest.mark.asyncio
    async def test_empty_body_rejected(self, client: AsyncClient, admin_headers: dict[str, str]) -> None:
        created = await _create(client, admin_headers)

        response = await client.patch(f"{ADMIN_BLOGS}/{created['id']}", json={}, headers=admin_headers)

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_whitespace_body_rejected(self, client: AsyncClient, admin_headers: dict[str, str]) -> None:
        created = await _create(client, admin_headers)

        response = await client.patch(
            f"{ADMIN_BLOGS}/{created['id']}",
            json={"content": "   "},
            headers=admin_headers,
        )

        assert response.status_code == 400
        assert (await client.get(f"{BLOGS}/{created['slug']}")).json()["content"] == "Hello from the test suite"

    @pytest.mark.asyncio
    async def test_title_update_moves_slug(self, client: AsyncClient, admin_headers: dict[str, str]) -> None:
        created = await _create(client, admin_headers, "Before")
        assert (await client.get(f"{BLOGS}/before")).status_code == 200

        response = await client.patch(
            f"{ADMIN_BLOGS}/{created['id']}",
            json={"title": "After"},
            headers=admin_headers,
        )

        assert response.status_code == 200
        assert response.json() == {"message": "Blog post updated successfully", "slug": "after"}
        assert (await client.get(f"{BLOGS}/before")).status_code == 404
        assert (await client.get(f"{BLOGS}/after")).status_code == 200

    @pytest.mark.asyncio
    async def test_unknown_post(self, client: AsyncClient, admin_headers: dict[str, str]) -> None:
        response = await client.patch(f"{ADMIN_BLOGS}/999", json={"content": "x"}, headers=admin_headers)

        assert response.status_code == 404


class TestDeletePost:
    """Tests for DELETE /admin/blogs/{id}."""

    @pytest.mark.asyncio
    async def test_delete_then_gone(
        self,
        client: AsyncClient,
        admin_headers: dict[str, str],
        storage: LocalImageStorage,
    ) -> None:
        created = await _create(client, admin_headers, "Short Lived")
        image = storage.base_dir / "short-lived_image.png"
        assert image.exists()

        first = await client.delete(f"{ADMIN_BLOGS}/{created['id']}", headers=admin_headers)
        second = await client.delete(f"{ADMIN_BLOGS}/{created['id']}", headers=admin_headers)

        assert first.status_code == 200
        assert first.json() == {"message": "Blog post deleted successfully", "slug": "short-lived"}
        assert second.status_code == 404
        assert not image.exists()
        assert (await client.get(f"{BLOGS}/short-lived")).status_code == 404
