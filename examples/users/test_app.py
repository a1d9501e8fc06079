"""Tests for the users example — CRUD over exact-match routes."""

from tern.testing import TestClient


class TestUsers:
    async def test_empty_list(self, example_app) -> None:
        async with TestClient(example_app) as client:
            response = await client.get("/users")
            assert response.status == 200
            assert response.json() == []

    async def test_create_and_list(self, example_app) -> None:
        async with TestClient(example_app) as client:
            created = await client.post("/users", json={"name": "Test", "age": 14})
            assert created.status == 201
            assert created.json() == {"id": 1, "name": "Test", "age": 14}

            listed = await client.get("/users")
            assert listed.json() == [{"id": 1, "name": "Test", "age": 14}]

    async def test_update(self, example_app) -> None:
        async with TestClient(example_app) as client:
            await client.post("/users", json={"name": "Test", "age": 14})
            updated = await client.put("/users", json={"id": 1, "age": 15})
            assert updated.json() == {"id": 1, "name": "Test", "age": 15}

    async def test_delete(self, example_app) -> None:
        async with TestClient(example_app) as client:
            await client.post("/users", json={"name": "Test"})
            deleted = await client.request("DELETE", "/users", json={"id": 1})
            assert deleted.status == 204
            assert (await client.get("/users")).json() == []

    async def test_missing_user(self, example_app) -> None:
        async with TestClient(example_app) as client:
            response = await client.put("/users", json={"id": 99})
            assert response.status == 404

    async def test_array_body_rejected(self, example_app) -> None:
        async with TestClient(example_app) as client:
            response = await client.post("/users", json=[12, 213, 54, 67, 19])
            assert response.status == 422

    async def test_missing_name_is_500(self, example_app) -> None:
        async with TestClient(example_app) as client:
            response = await client.post("/users", json={"age": 3})
            assert response.status == 500

    async def test_unknown_route(self, example_app) -> None:
        async with TestClient(example_app) as client:
            response = await client.get("/users/")
            assert response.status == 404
