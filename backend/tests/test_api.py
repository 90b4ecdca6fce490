"""
HTTP tests for the category endpoints.
"""

import pytest
from httpx import AsyncClient


class TestListEndpoint:

    @pytest.mark.asyncio
    async def test_list_categories(self, client: AsyncClient):
        response = await client.get("/api/v1/categories")
        assert response.status_code == 200
        data = response.json()
        assert [c["name"] for c in data] == ["Action", "SciFi", "History"]
        assert data[0]["display_order"] == 1

    @pytest.mark.asyncio
    async def test_deprecated_prefix_still_served(self, client: AsyncClient):
        response = await client.get("/api/categories")
        assert response.status_code == 200
        assert len(response.json()) == 3


class TestCreateEndpoint:

    @pytest.mark.asyncio
    async def test_create_category(self, client: AsyncClient):
        response = await client.post(
            "/api/v1/categories", json={"name": "Horror", "display_order": 4}
        )
        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Category created successfully"
        assert body["category"]["id"] == 4

        listed = await client.get("/api/v1/categories")
        assert [c["name"] for c in listed.json()] == [
            "Action",
            "SciFi",
            "History",
            "Horror",
        ]

    @pytest.mark.asyncio
    async def test_duplicate_name_returns_field_error(self, client: AsyncClient):
        response = await client.post(
            "/api/v1/categories", json={"name": "action", "display_order": 5}
        )
        assert response.status_code == 422
        body = response.json()
        assert body["code"] == "VALIDATION_ERROR"
        assert body["errors"] == [
            {
                "field": "name",
                "code": "name_duplicate",
                "message": "Category with this name already exists",
            }
        ]
        assert body["candidate"] == {"name": "action", "display_order": 5}

    @pytest.mark.asyncio
    async def test_invalid_input_is_redisplayed_normalized(self, client: AsyncClient):
        response = await client.post(
            "/api/v1/categories", json={"name": "  7  ", "display_order": 7}
        )
        assert response.status_code == 422
        body = response.json()
        assert [e["code"] for e in body["errors"]] == ["name_equals_order"]
        assert body["candidate"]["name"] == "7"

    @pytest.mark.asyncio
    async def test_zero_display_order_rejected(self, client: AsyncClient):
        response = await client.post(
            "/api/v1/categories", json={"name": "Horror", "display_order": 0}
        )
        assert response.status_code == 422
        assert response.json()["errors"][0]["field"] == "display_order"

    @pytest.mark.asyncio
    async def test_display_order_too_large_rejected(self, client: AsyncClient):
        response = await client.post(
            "/api/v1/categories", json={"name": "Huge", "display_order": 2**63}
        )
        assert response.status_code == 422
        body = response.json()
        assert body["errors"] == [
            {
                "field": "display_order",
                "code": "display_order_range",
                "message": "Display Order must be between 1 and 2147483647.",
            }
        ]
        assert body["candidate"]["display_order"] == 2**63

    @pytest.mark.asyncio
    async def test_invalid_unicode_never_500(self, client: AsyncClient):
        response = await client.post(
            "/api/v1/categories",
            content='{"name": "bad \\ud800", "display_order": 4}',
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code in (400, 422)

    @pytest.mark.asyncio
    async def test_missing_display_order_is_request_error(self, client: AsyncClient):
        response = await client.post("/api/v1/categories", json={"name": "Horror"})
        assert response.status_code == 422
        assert isinstance(response.json()["detail"], list)

    @pytest.mark.asyncio
    async def test_form_body_rejected_with_415(self, client: AsyncClient):
        response = await client.post(
            "/api/v1/categories", data={"name": "Horror", "display_order": "4"}
        )
        assert response.status_code == 415

    @pytest.mark.asyncio
    async def test_chunked_text_body_rejected_with_415(self, client: AsyncClient):
        async def body():
            yield b"name=Horror&"
            yield b"display_order=4"

        # Streamed content goes out chunked, without a Content-Length header
        response = await client.post(
            "/api/v1/categories",
            content=body(),
            headers={"Content-Type": "text/plain"},
        )
        assert response.status_code == 415
        assert response.json()["code"] == "UNSUPPORTED_MEDIA_TYPE"


class TestEditEndpoints:

    @pytest.mark.asyncio
    async def test_get_category(self, client: AsyncClient):
        response = await client.get("/api/v1/categories/2")
        assert response.status_code == 200
        assert response.json()["name"] == "SciFi"

    @pytest.mark.asyncio
    async def test_get_missing_category(self, client: AsyncClient):
        response = await client.get("/api/v1/categories/99")
        assert response.status_code == 404
        assert response.json()["code"] == "NOT_FOUND"

    @pytest.mark.asyncio
    async def test_update_category(self, client: AsyncClient):
        response = await client.put(
            "/api/v1/categories/2",
            json={"id": 2, "name": "Science Fiction", "display_order": 2, "version": 1},
        )
        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Category updated successfully"
        assert body["category"]["name"] == "Science Fiction"
        assert body["category"]["version"] == 2

    @pytest.mark.asyncio
    async def test_update_to_existing_name(self, client: AsyncClient):
        response = await client.put(
            "/api/v1/categories/2",
            json={"id": 2, "name": "History", "display_order": 2},
        )
        assert response.status_code == 422
        assert response.json()["errors"][0]["code"] == "name_duplicate"

    @pytest.mark.asyncio
    async def test_update_id_mismatch(self, client: AsyncClient):
        response = await client.put(
            "/api/v1/categories/1",
            json={"id": 2, "name": "Adventure", "display_order": 1},
        )
        assert response.status_code == 400
        assert response.json()["code"] == "BAD_REQUEST"

    @pytest.mark.asyncio
    async def test_update_stale_version_conflict(self, client: AsyncClient):
        first = await client.put(
            "/api/v1/categories/3",
            json={"id": 3, "name": "World History", "display_order": 3, "version": 1},
        )
        assert first.status_code == 200

        second = await client.put(
            "/api/v1/categories/3",
            json={"id": 3, "name": "Old History", "display_order": 3, "version": 1},
        )
        assert second.status_code == 409
        assert second.json()["code"] == "CONCURRENCY_CONFLICT"


class TestDeleteEndpoints:

    @pytest.mark.asyncio
    async def test_get_for_delete(self, client: AsyncClient):
        response = await client.get("/api/v1/categories/1/delete")
        assert response.status_code == 200
        assert response.json()["name"] == "Action"

    @pytest.mark.asyncio
    async def test_delete_twice(self, client: AsyncClient):
        first = await client.delete("/api/v1/categories/1")
        assert first.status_code == 200
        assert first.json()["message"] == "Category deleted successfully"

        second = await client.delete("/api/v1/categories/1")
        assert second.status_code == 404


class TestServiceEndpoints:

    @pytest.mark.asyncio
    async def test_health(self, client: AsyncClient):
        response = await client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    @pytest.mark.asyncio
    async def test_root(self, client: AsyncClient):
        response = await client.get("/")
        assert response.status_code == 200
        assert response.json()["categories"] == "/api/v1/categories"
