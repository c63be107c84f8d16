"""
Menu API — Dish Endpoint Tests
================================

What:  The /api/dishes HTTP surface end to end: status codes, bodies,
       error format and headers.
How:   httpx AsyncClient over ASGITransport against the real app, with the
       session dependency pointed at a per-test SQLite database.
"""

import asyncio
from unittest.mock import AsyncMock

import pytest
from sqlalchemy.exc import OperationalError

from menu_api.database import get_db_session
from menu_api.main import app


class TestCreateEndpoint:

    @pytest.mark.asyncio
    async def test_create_single_returns_201(self, test_client, sample_dish):
        response = await test_client.post("/api/dishes", json=sample_dish)

        assert response.status_code == 201
        body = response.json()
        assert body["sequential_id"] == 1
        assert body["name"] == "Spicy Basil Chicken"
        assert body["price"] == "14.99"
        assert set(body) == {
            "id", "sequential_id", "name", "price", "description",
            "image", "created_at", "updated_at",
        }

    @pytest.mark.asyncio
    async def test_create_missing_price_returns_400(self, test_client):
        response = await test_client.post("/api/dishes", json={"name": "Soup"})

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "validation_error"
        assert body["message"] == "Name and Price are required"
        assert body["details"] == {"missing": ["price"]}

        listed = await test_client.get("/api/dishes")
        assert listed.json() == []

    @pytest.mark.asyncio
    async def test_bulk_create_drops_invalid_entries(self, test_client):
        response = await test_client.post(
            "/api/dishes",
            json=[{"name": "A", "price": 1}, {"price": 2}, {"name": "C", "price": 3}],
        )

        assert response.status_code == 201
        body = response.json()
        assert [d["name"] for d in body] == ["A", "C"]
        assert [d["sequential_id"] for d in body] == [1, 2]
        assert response.headers["X-Total-Count"] == "2"

    @pytest.mark.asyncio
    async def test_bulk_create_with_no_valid_entries_returns_400(self, test_client):
        response = await test_client.post("/api/dishes", json=[{"price": 2}, {"name": "B"}])

        assert response.status_code == 400
        assert response.json()["message"] == "No valid dishes found"

    @pytest.mark.asyncio
    async def test_concurrent_posts_get_distinct_ids(self, test_client):
        responses = await asyncio.gather(
            *[test_client.post("/api/dishes", json={"name": f"D{i}", "price": i}) for i in range(3)]
        )

        assert all(r.status_code == 201 for r in responses)
        assert sorted(r.json()["sequential_id"] for r in responses) == [1, 2, 3]

    @pytest.mark.asyncio
    async def test_scalar_body_returns_400(self, test_client):
        response = await test_client.post("/api/dishes", json="soup")

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "validation_error"
        assert body["message"] == "Each dish must be a JSON object"

    @pytest.mark.asyncio
    async def test_empty_body_returns_400(self, test_client):
        response = await test_client.post("/api/dishes")

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "validation_error"
        assert body["message"] == "Name and Price are required"
        assert body["details"] == {"missing": ["name", "price"]}


class TestReadEndpoints:

    @pytest.mark.asyncio
    async def test_list_after_creates(self, test_client):
        for name in ["Paella", "Burger", "Bowl"]:
            await test_client.post("/api/dishes", json={"name": name, "price": "10.00"})

        response = await test_client.get("/api/dishes")

        assert response.status_code == 200
        body = response.json()
        assert len(body) == 3
        assert [d["sequential_id"] for d in body] == [1, 2, 3]

    @pytest.mark.asyncio
    async def test_get_by_sequential_id_and_uuid(self, test_client, sample_dish):
        created = (await test_client.post("/api/dishes", json=sample_dish)).json()

        by_seq = await test_client.get(f"/api/dishes/{created['sequential_id']}")
        by_uuid = await test_client.get(f"/api/dishes/{created['id']}")

        assert by_seq.status_code == 200
        assert by_uuid.status_code == 200
        assert by_seq.json()["id"] == created["id"]
        assert by_uuid.json()["sequential_id"] == created["sequential_id"]

    @pytest.mark.asyncio
    async def test_fetch_returns_the_created_record_unchanged(self, test_client):
        created = (await test_client.post("/api/dishes", json={"name": "Miso Soup", "price": 9})).json()

        by_uuid = await test_client.get(f"/api/dishes/{created['id']}")
        by_seq = await test_client.get(f"/api/dishes/{created['sequential_id']}")
        listed = await test_client.get("/api/dishes")

        assert created["price"] == "9.00"
        assert created["created_at"].endswith("Z")
        assert by_uuid.json() == created
        assert by_seq.json() == created
        assert listed.json() == [created]

    @pytest.mark.asyncio
    async def test_unknown_integer_returns_404(self, test_client):
        response = await test_client.get("/api/dishes/999999")

        assert response.status_code == 404
        assert response.json()["error"] == "not_found"

    @pytest.mark.asyncio
    async def test_integer_too_long_to_convert_returns_404(self, test_client):
        response = await test_client.get("/api/dishes/" + "9" * 5000)

        assert response.status_code == 404
        assert response.json()["error"] == "not_found"

    @pytest.mark.asyncio
    async def test_non_ascii_digits_are_malformed(self, test_client):
        await test_client.post("/api/dishes", json={"name": "A", "price": 1})

        response = await test_client.get("/api/dishes/\u0661")

        assert response.status_code == 400
        assert response.json()["error"] == "malformed_identifier"

    @pytest.mark.asyncio
    async def test_malformed_identifier_returns_400(self, test_client):
        response = await test_client.get("/api/dishes/not-a-dish-id")

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "malformed_identifier"
        assert body["details"] == {"identifier": "not-a-dish-id"}

    @pytest.mark.asyncio
    async def test_request_id_echoed(self, test_client):
        response = await test_client.get("/api/dishes", headers={"X-Request-ID": "abc123"})
        assert response.headers["X-Request-ID"] == "abc123"


class TestStorageFailure:

    @pytest.mark.asyncio
    async def test_storage_error_returns_generic_500(self, test_client, mock_db_session):
        mock_db_session.execute = AsyncMock(
            side_effect=OperationalError("SELECT", {}, Exception("password authentication failed"))
        )

        async def broken_session():
            yield mock_db_session

        app.dependency_overrides[get_db_session] = broken_session

        response = await test_client.get("/api/dishes")

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "server_error"
        assert body["message"] == "Failed to fetch dishes"
        assert body["details"] is None
        assert "password" not in response.text
