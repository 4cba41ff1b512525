"""Tests for the city directory HTTP endpoints."""
import asyncio

import pytest
from fastapi.testclient import TestClient

from city_directory.core.dependencies import get_document_store
from city_directory.domain.exceptions import StoreUnavailableError
from city_directory.infrastructure.persistence.repositories.in_memory_document_store import (
    InMemoryDocumentStore,
)
from city_directory.main import app, create_app

API = "/api/v1"


class UnavailableStore(InMemoryDocumentStore):
    """Store whose backend is down for every call."""

    async def list_documents(self, collection):
        raise StoreUnavailableError("Document store unavailable: OperationalError")

    async def get_document(self, collection, doc_id):
        raise StoreUnavailableError("Document store unavailable: OperationalError")

    async def set_document(self, collection, doc_id, data, if_revision=None):
        raise StoreUnavailableError("Document store unavailable: OperationalError")

    async def delete_document(self, collection, doc_id):
        raise StoreUnavailableError("Document store unavailable: OperationalError")

    async def ping(self):
        raise StoreUnavailableError("Document store unavailable: OperationalError")


@pytest.fixture
def seeded(memory_store, sample_city_documents):
    for city_id, body in sample_city_documents.items():
        asyncio.run(memory_store.set_document("cities", city_id, body))
    return memory_store


@pytest.fixture
def unavailable_client(client):
    app.dependency_overrides[get_document_store] = lambda: UnavailableStore()
    return client


def _stored_body(store, city_id):
    return asyncio.run(store.get_document("cities", city_id)).data


class TestListCities:

    def test_empty(self, client):
        response = client.get(f"{API}/getFriends")

        assert response.status_code == 200
        assert response.json() == []

    def test_lists_seeded_cities(self, client, seeded):
        response = client.get(f"{API}/getFriends")

        assert response.status_code == 200
        assert response.json() == [
            {"id": "paris", "friends": ["lyon", "marseille"], "neighbour": "versailles"},
            {"id": "lyon", "friends": ["paris"], "neighbour": "villeurbanne"},
            {"id": "nantes", "friends": []},
        ]

    def test_corrupt_document_is_left_out(self, client, memory_store):
        asyncio.run(memory_store.set_document("cities", "good", {"friends": ["a"]}))
        asyncio.run(memory_store.set_document("cities", "bad", {"friends": "not-a-list"}))

        response = client.get(f"{API}/getFriends")

        assert response.status_code == 200
        assert response.json() == [{"id": "good", "friends": ["a"]}]

    def test_store_unavailable(self, unavailable_client):
        response = unavailable_client.get(f"{API}/getFriends")

        assert response.status_code == 502
        assert response.json()["error"] == "store_unavailable"


class TestAddCity:

    def test_add_city_then_list(self, client):
        response = client.post(f"{API}/addCity", json={"cityName": "rome", "friends": ["milan"]})

        assert response.status_code == 200
        assert response.json() == {"message": "City successfully added!"}
        assert client.get(f"{API}/getFriends").json() == [{"id": "rome", "friends": ["milan"]}]

    def test_replace_existing_city(self, client, seeded):
        client.post(f"{API}/addCity", json={"cityName": "paris", "friends": []})

        assert _stored_body(seeded, "paris") == {"friends": []}

    @pytest.mark.parametrize(
        "body",
        [
            {"friends": []},
            {"cityName": "rome"},
            {"cityName": "", "friends": []},
            {"cityName": "rome", "friends": "milan"},
        ],
    )
    def test_invalid_body(self, client, body):
        response = client.post(f"{API}/addCity", json=body)

        assert response.status_code == 400
        assert response.json()["error"] == "invalid_request"

    def test_id_with_slash_is_rejected(self, client):
        response = client.post(f"{API}/addCity", json={"cityName": "a/b", "friends": []})

        assert response.status_code == 400

    def test_store_failure_is_reported(self, unavailable_client):
        response = unavailable_client.post(f"{API}/addCity", json={"cityName": "rome", "friends": []})

        assert response.status_code == 502


class TestGetNeighbourDetail:

    def test_returns_plain_neighbour(self, client, seeded):
        response = client.get(f"{API}/getNeighbourDetail", params={"city": "paris"})

        assert response.status_code == 200
        assert response.text == "versailles"

    def test_missing_query_parameter(self, client):
        response = client.get(f"{API}/getNeighbourDetail")

        assert response.status_code == 400
        assert response.json()["message"] == "Missing 'city' query parameter"

    def test_unknown_city(self, client):
        response = client.get(f"{API}/getNeighbourDetail", params={"city": "atlantis"})

        assert response.status_code == 404
        assert response.json() == {"error": "not_found", "message": "City 'atlantis' not found"}

    def test_city_without_neighbour(self, client, seeded):
        response = client.get(f"{API}/getNeighbourDetail", params={"city": "nantes"})

        assert response.status_code == 404
        assert response.json()["error"] == "missing_field"

    def test_corrupt_document(self, client, memory_store):
        asyncio.run(memory_store.set_document("cities", "paris", {"friends": [1, 2]}))

        response = client.get(f"{API}/getNeighbourDetail", params={"city": "paris"})

        assert response.status_code == 500
        assert response.json()["error"] == "type_mismatch"


class TestFriends:

    def test_add_friend(self, client, seeded):
        response = client.post(f"{API}/addFriend", params={"city": "paris"}, json={"newFriend": "nice"})

        assert response.status_code == 200
        assert response.json() == {"message": "New friend successfully added!"}
        assert _stored_body(seeded, "paris") == {
            "friends": ["lyon", "marseille", "nice"],
            "neighbour": "versailles",
        }

    def test_add_friend_unknown_city(self, client):
        response = client.post(f"{API}/addFriend", params={"city": "atlantis"}, json={"newFriend": "nice"})

        assert response.status_code == 404

    def test_add_friend_missing_city(self, client, seeded):
        response = client.post(f"{API}/addFriend", json={"newFriend": "nice"})

        assert response.status_code == 400

    def test_add_friend_missing_body(self, client, seeded):
        response = client.post(f"{API}/addFriend", params={"city": "paris"}, json={})

        assert response.status_code == 400

    def test_remove_friend_removes_all_occurrences(self, client, memory_store):
        asyncio.run(memory_store.set_document("cities", "paris", {"friends": ["a", "b", "a"]}))

        response = client.post(f"{API}/removeFriend", params={"city": "paris"}, json={"newFriend": "a"})

        assert response.status_code == 200
        assert response.json() == {"message": "Friend successfully removed!"}
        assert _stored_body(memory_store, "paris") == {"friends": ["b"]}

    def test_remove_friend_unknown_city(self, client):
        response = client.post(f"{API}/removeFriend", params={"city": "atlantis"}, json={"newFriend": "a"})

        assert response.status_code == 404

    def test_store_failure_is_reported(self, unavailable_client):
        response = unavailable_client.post(
            f"{API}/addFriend", params={"city": "paris"}, json={"newFriend": "nice"}
        )

        assert response.status_code == 502


class TestDeleteCity:

    def test_delete_city(self, client, seeded):
        response = client.post(f"{API}/deleteCity", json={"chosenCity": "paris"})

        assert response.status_code == 200
        assert response.json() == {"message": "City successfully deleted"}
        neighbour = client.get(f"{API}/getNeighbourDetail", params={"city": "paris"})
        assert neighbour.status_code == 404

    def test_delete_with_delete_method(self, client, seeded):
        response = client.request("DELETE", f"{API}/deleteCity", json={"chosenCity": "lyon"})

        assert response.status_code == 200

    def test_delete_unknown_city(self, client):
        response = client.post(f"{API}/deleteCity", json={"chosenCity": "atlantis"})

        assert response.status_code == 404
        assert response.json()["message"] == "City to be deleted is not found"

    def test_store_failure_is_not_reported_as_not_found(self, unavailable_client):
        response = unavailable_client.post(f"{API}/deleteCity", json={"chosenCity": "paris"})

        assert response.status_code == 502


class TestServiceEndpoints:

    def test_hello(self, client):
        response = client.get("/hello")

        assert response.status_code == 200
        assert response.text == "Hello from the city directory!"

    def test_hello_on_factory_built_app(self):
        with TestClient(create_app()) as fresh_client:
            response = fresh_client.get("/hello")

        assert response.status_code == 200
        assert response.text == "Hello from the city directory!"

    def test_health(self, client):
        assert client.get(f"{API}/health").json() == {"status": "ok"}

    def test_detailed_health(self, client):
        response = client.get(f"{API}/health/detailed")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["components"]["document_store"]["details"]["backend"] == "InMemoryDocumentStore"

    def test_detailed_health_store_down(self, unavailable_client):
        response = unavailable_client.get(f"{API}/health/detailed")

        assert response.status_code == 503
        assert response.json()["status"] == "unhealthy"
