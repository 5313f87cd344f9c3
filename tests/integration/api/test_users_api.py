"""Integration tests for the user API endpoints."""

import pytest
from httpx import AsyncClient

from app.modules.users.models import User


def user_payload(**overrides) -> dict:
    """Build a valid request body for creating or updating a user."""
    data = {
        "forename": "Ada",
        "surname": "Lovelace",
        "email": "ada@example.com",
        "date_of_birth": "1990-12-10",
        "is_active": True,
    }
    data.update(overrides)
    return data


class TestCreateUser:
    """Tests for POST /api/v1/users."""

    @pytest.mark.asyncio
    async def test_create_returns_created_user(self, client: AsyncClient):
        """A valid body creates the user and returns 201."""
        response = await client.post("/api/v1/users", json=user_payload())

        assert response.status_code == 201
        data = response.json()
        assert data["id"] > 0
        assert data["forename"] == "Ada"
        assert data["date_of_birth"] == "1990-12-10"

    @pytest.mark.asyncio
    async def test_create_records_add_entry(self, client: AsyncClient):
        """The new user's details show a single Add entry."""
        created = (await client.post("/api/v1/users", json=user_payload())).json()

        response = await client.get(f"/api/v1/users/{created['id']}")

        logs = response.json()["logs"]
        assert logs["total_count"] == 1
        assert logs["items"][0]["action"] == "Add"

    @pytest.mark.asyncio
    async def test_create_rejects_invalid_email(self, client: AsyncClient):
        """An invalid email is a validation error."""
        response = await client.post(
            "/api/v1/users", json=user_payload(email="not-an-email")
        )

        assert response.status_code == 422
        fields = [e["field"] for e in response.json()["errors"]]
        assert "email" in fields

    @pytest.mark.asyncio
    async def test_create_rejects_empty_forename(self, client: AsyncClient):
        """Names must not be empty."""
        response = await client.post("/api/v1/users", json=user_payload(forename=""))

        assert response.status_code == 422


class TestListUsers:
    """Tests for GET /api/v1/users."""

    @pytest.mark.asyncio
    async def test_list_and_filter(self, client: AsyncClient):
        """Users can be listed in full or filtered by active status."""
        await client.post("/api/v1/users", json=user_payload(email="a@example.com"))
        await client.post(
            "/api/v1/users",
            json=user_payload(email="b@example.com", is_active=False),
        )

        everyone = (await client.get("/api/v1/users")).json()["items"]
        active = (await client.get("/api/v1/users?is_active=true")).json()["items"]
        inactive = (await client.get("/api/v1/users?is_active=false")).json()["items"]

        assert len(everyone) == 2
        assert [u["email"] for u in active] == ["a@example.com"]
        assert [u["email"] for u in inactive] == ["b@example.com"]


class TestGetUser:
    """Tests for GET /api/v1/users/{id}."""

    @pytest.mark.asyncio
    async def test_get_existing_user(self, client: AsyncClient, user: User):
        """Details include the user and an empty first page of logs."""
        response = await client.get(f"/api/v1/users/{user.id}")

        assert response.status_code == 200
        data = response.json()
        assert data["user"]["email"] == user.email
        assert data["logs"]["items"] == []
        assert data["logs"]["page_number"] == 1
        assert data["logs"]["has_previous_page"] is False

    @pytest.mark.asyncio
    async def test_get_missing_user(self, client: AsyncClient):
        """An unknown ID is a 404 problem response."""
        response = await client.get("/api/v1/users/99999")

        assert response.status_code == 404
        data = response.json()
        assert data["status"] == 404
        assert data["resource"] == "user"

    @pytest.mark.asyncio
    async def test_get_with_invalid_log_page(self, client: AsyncClient, user: User):
        """A log page below 1 is rejected."""
        response = await client.get(f"/api/v1/users/{user.id}?page=0")

        assert response.status_code == 422
        assert response.json()["parameter"] == "page_number"


class TestUpdateUser:
    """Tests for PUT /api/v1/users/{id}."""

    @pytest.mark.asyncio
    async def test_update_records_changes(self, client: AsyncClient):
        """Each changed field shows up as an Update entry."""
        created = (await client.post("/api/v1/users", json=user_payload())).json()

        response = await client.put(
            f"/api/v1/users/{created['id']}",
            json=user_payload(forename="Augusta", is_active=False),
        )

        assert response.status_code == 200
        assert response.json()["forename"] == "Augusta"

        logs = (await client.get(f"/api/v1/users/{created['id']}")).json()["logs"]
        actions = [item["action"] for item in logs["items"]]
        assert actions.count("Update") == 2
        assert actions.count("Add") == 1

    @pytest.mark.asyncio
    async def test_update_missing_user(self, client: AsyncClient):
        """Updating an unknown ID is a 404."""
        response = await client.put("/api/v1/users/99999", json=user_payload())

        assert response.status_code == 404


class TestDeleteUser:
    """Tests for DELETE /api/v1/users/{id}."""

    @pytest.mark.asyncio
    async def test_delete_user(self, client: AsyncClient):
        """Deleting returns 204, removes the user and keeps the log."""
        created = (await client.post("/api/v1/users", json=user_payload())).json()

        response = await client.delete(f"/api/v1/users/{created['id']}")

        assert response.status_code == 204
        missing = await client.get(f"/api/v1/users/{created['id']}")
        assert missing.status_code == 404

        logs = (await client.get("/api/v1/logs")).json()
        assert [item["action"] for item in logs["items"]] == ["Delete", "Add"]
        assert all(item["user_id"] == created["id"] for item in logs["items"])

    @pytest.mark.asyncio
    async def test_delete_missing_user(self, client: AsyncClient):
        """Deleting an unknown ID is a 404."""
        response = await client.delete("/api/v1/users/99999")

        assert response.status_code == 404
