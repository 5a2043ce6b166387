"""
End-to-end API tests: real routes, real DefaultUserService, in-memory repository.
"""
from unittest.mock import patch

import pytest

pytestmark = pytest.mark.integration
from fastapi.testclient import TestClient

from users_api.application.services.user_service import DefaultUserService, UserService
from users_api.core.security import verify_password
from users_api.di.base_container import BaseContainer
from users_api.main import create_application


@pytest.fixture
def container(memory_user_repo):
    container = BaseContainer()
    container.register_singleton(
        UserService,
        DefaultUserService(memory_user_repo, password_hash_rounds=4),
    )
    return container


@pytest.fixture
def client(container, test_settings):
    app = create_application(test_settings)
    with patch("users_api.api.v1.users_controller.get_container", return_value=container):
        yield TestClient(app)


def _create(client, **fields):
    payload = {"name": "Alice", "password": "P@ssword123", **fields}
    response = client.post("/users", json=payload)
    assert response.status_code == 201
    return response


def _only_user_id(client):
    users = client.get("/users").json()
    assert len(users) == 1
    return users[0]["id"]


class TestUserLifecycle:

    def test_create_then_get_returns_matching_fields(self, client, memory_user_repo):
        _create(client, age=30, email="alice@example.com", address="1 Main Street")
        user_id = _only_user_id(client)

        response = client.get(f"/users/{user_id}")

        assert response.status_code == 200
        assert response.json() == {
            "id": user_id,
            "name": "Alice",
            "age": 30,
            "email": "alice@example.com",
            "address": "1 Main Street",
        }
        stored = memory_user_repo.documents[user_id]
        assert stored.password != "P@ssword123"
        assert verify_password("P@ssword123", stored.password)

    def test_partial_update_keeps_other_fields(self, client):
        _create(client, age=30)
        user_id = _only_user_id(client)

        response = client.put(f"/users/{user_id}", json={"address": "X Street"})
        assert response.status_code == 200

        user = client.get(f"/users/{user_id}").json()
        assert user["name"] == "Alice"
        assert user["age"] == 30
        assert user["address"] == "X Street"

    def test_delete_twice(self, client):
        _create(client)
        user_id = _only_user_id(client)

        assert client.delete(f"/users/{user_id}").status_code == 204
        assert client.delete(f"/users/{user_id}").status_code == 404
        assert client.get(f"/users/{user_id}").status_code == 404
        assert client.get("/users").json() == []


class TestValidationOverHttp:

    def test_weak_password_writes_nothing(self, client, memory_user_repo):
        response = client.post("/users", json={"name": "Alice", "password": "password123"})
        assert response.status_code == 400
        assert "strong" in response.json()["error"]
        assert "create" not in memory_user_repo.calls

    def test_invalid_name_writes_nothing(self, client, memory_user_repo):
        response = client.post("/users", json={"name": "Al1ce", "password": "P@ssword123"})
        assert response.status_code == 400
        assert memory_user_repo.documents == {}

    def test_oversized_age_is_rejected(self, client, memory_user_repo):
        response = client.post("/users", json={"name": "Alice", "password": "P@ssword123", "age": 10**20})
        assert response.status_code == 400
        assert "Age" in response.json()["error"]
        assert memory_user_repo.documents == {}

    @pytest.mark.parametrize("method", ["get", "delete"])
    def test_malformed_id_makes_no_store_call(self, client, memory_user_repo, method):
        response = getattr(client, method)("/users/not-a-valid-id")
        assert response.status_code == 400
        assert memory_user_repo.calls == []

    def test_malformed_id_on_update_makes_no_store_call(self, client, memory_user_repo):
        response = client.put("/users/12345", json={"address": "X Street"})
        assert response.status_code == 400
        assert memory_user_repo.calls == []
