"""
Phonebook Backend — HTTP API Tests
===================================

What:  End-to-end tests of the /api/persons and /info routes through the
       full middleware stack, using an in-process ASGI client.
"""

import re

import pytest


class TestListPersons:

    @pytest.mark.asyncio
    async def test_list_returns_seed(self, test_client):
        response = await test_client.get("/api/persons")

        assert response.status_code == 200
        assert response.json() == [
            {"id": 1, "name": "Arto Hellas", "number": "040-123456"},
            {"id": 2, "name": "Ada Lovelace", "number": "39-44-5323523"},
            {"id": 3, "name": "Dan Abramov", "number": "12-43-234345"},
            {"id": 4, "name": "Mary Poppendieck", "number": "39-23-6423122"},
        ]


class TestGetPerson:

    @pytest.mark.asyncio
    async def test_get_existing(self, test_client):
        response = await test_client.get("/api/persons/2")

        assert response.status_code == 200
        assert response.json() == {"id": 2, "name": "Ada Lovelace", "number": "39-44-5323523"}

    @pytest.mark.asyncio
    async def test_get_missing_is_empty_404(self, test_client):
        response = await test_client.get("/api/persons/999")

        assert response.status_code == 404
        assert response.content == b""

    @pytest.mark.asyncio
    async def test_get_non_numeric_is_404(self, test_client):
        response = await test_client.get("/api/persons/abc")

        assert response.status_code == 404
        assert response.content == b""


class TestDeletePerson:

    @pytest.mark.asyncio
    async def test_delete_then_list(self, test_client):
        response = await test_client.delete("/api/persons/2")
        assert response.status_code == 204
        assert response.content == b""

        remaining = (await test_client.get("/api/persons")).json()
        assert len(remaining) == 3
        assert all(person["id"] != 2 for person in remaining)

        assert (await test_client.get("/api/persons/2")).status_code == 404

    @pytest.mark.asyncio
    async def test_delete_missing_is_204(self, test_client, directory):
        response = await test_client.delete("/api/persons/999")

        assert response.status_code == 204
        assert len(directory) == 4


class TestCreatePerson:

    @pytest.mark.asyncio
    async def test_create(self, test_client, directory, fixed_ids):
        response = await test_client.post(
            "/api/persons", json={"name": "Grace Hopper", "number": "555-0101"}
        )

        assert response.status_code == 200
        assert response.json() == {"id": 500, "name": "Grace Hopper", "number": "555-0101"}
        assert len(directory) == 5

        fetched = await test_client.get("/api/persons/500")
        assert fetched.json()["name"] == "Grace Hopper"

    @pytest.mark.asyncio
    async def test_create_random_id_in_range(self, test_client):
        response = await test_client.post(
            "/api/persons", json={"name": "Grace Hopper", "number": "555-0101"}
        )

        assert response.status_code == 200
        assert 0 <= response.json()["id"] < 1000

    @pytest.mark.asyncio
    async def test_duplicate_name(self, test_client, directory):
        response = await test_client.post(
            "/api/persons", json={"name": "Mary Poppendieck", "number": "1"}
        )

        assert response.status_code == 400
        assert response.json() == {"error": "name must be unique"}
        assert len(directory) == 4

    @pytest.mark.asyncio
    async def test_missing_name(self, test_client, directory):
        response = await test_client.post("/api/persons", json={"number": "123"})

        assert response.status_code == 400
        assert response.json() == {"error": "name is missing"}
        assert len(directory) == 4

    @pytest.mark.asyncio
    async def test_missing_number(self, test_client, directory):
        response = await test_client.post("/api/persons", json={"name": "Grace Hopper"})

        assert response.status_code == 400
        assert response.json() == {"error": "number is missing"}
        assert len(directory) == 4

    @pytest.mark.asyncio
    async def test_empty_body(self, test_client):
        response = await test_client.post("/api/persons")

        assert response.status_code == 400
        assert response.json() == {"error": "name is missing"}

    @pytest.mark.asyncio
    async def test_array_body(self, test_client, directory):
        response = await test_client.post(
            "/api/persons", json=[{"name": "Grace Hopper", "number": "1"}]
        )

        assert response.status_code == 400
        assert response.json() == {"error": "name is missing"}
        assert len(directory) == 4

    @pytest.mark.asyncio
    async def test_plain_text_body(self, test_client, directory):
        response = await test_client.post(
            "/api/persons",
            content=b'{"name": "Grace Hopper", "number": "1"}',
            headers={"Content-Type": "text/plain"},
        )

        assert response.status_code == 400
        assert response.json() == {"error": "name is missing"}
        assert len(directory) == 4

    @pytest.mark.asyncio
    async def test_form_body(self, test_client, directory):
        response = await test_client.post(
            "/api/persons", data={"name": "Grace Hopper", "number": "1"}
        )

        assert response.status_code == 400
        assert response.json() == {"error": "name is missing"}
        assert len(directory) == 4

    @pytest.mark.asyncio
    async def test_json_with_charset(self, test_client, fixed_ids):
        response = await test_client.post(
            "/api/persons",
            content=b'{"name": "Grace Hopper", "number": "1"}',
            headers={"Content-Type": "application/json; charset=utf-8"},
        )

        assert response.status_code == 200
        assert response.json() == {"id": 500, "name": "Grace Hopper", "number": "1"}

    @pytest.mark.asyncio
    async def test_malformed_json_is_422(self, test_client, directory):
        response = await test_client.post(
            "/api/persons",
            content=b'{"name": ',
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 422
        assert response.json()["detail"][0]["type"] == "json_invalid"
        assert len(directory) == 4


class TestInfo:

    @pytest.mark.asyncio
    async def test_info_reports_count(self, test_client):
        response = await test_client.get("/info")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")
        assert "Phonebook has info for 4" in response.text

    @pytest.mark.asyncio
    async def test_info_tracks_changes(self, test_client):
        await test_client.delete("/api/persons/1")
        await test_client.delete("/api/persons/3")

        response = await test_client.get("/info")

        match = re.search(r"info for (\d+)", response.text)
        assert match is not None
        assert int(match.group(1)) == 2


class TestIsolation:

    @pytest.mark.asyncio
    async def test_each_app_starts_from_seed(self, test_client):
        # Earlier tests deleted and created contacts on their own apps
        response = await test_client.get("/api/persons")
        assert len(response.json()) == 4
