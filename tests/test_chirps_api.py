# tests/test_chirps_api.py
"""
Tests for the chirp JSON API.

Tests the /api/chirps endpoints:
- GET /api/chirps - Feed
- POST /api/chirps - Create (201)
- GET /api/chirps/{id} - Read
- PUT/PATCH /api/chirps/{id} - Update
- DELETE /api/chirps/{id} - Delete (204)
"""

import pytest


@pytest.fixture
def alice(make_user):
    return make_user("Alice", "alice@example.com")


@pytest.fixture
def bob(make_user):
    return make_user("Bob", "bob@example.com")


class TestRouting:
    """The chirps routers mount at their public paths."""

    def test_app_builds_with_chirp_routes(self, config):
        from chirper.main import create_app

        paths = {route.path for route in create_app(config).routes}

        assert "/api/chirps" in paths
        assert "/api/chirps/{chirp_id}" in paths
        assert "/chirps" in paths
        assert "/chirps/{chirp_id}/edit" in paths


class TestAuthRequired:
    """API routes answer 401 instead of redirecting."""

    def test_list_requires_session(self, client):
        response = client.get("/api/chirps")

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "AUTH_REQUIRED"

    def test_create_requires_session(self, client, chirp_store):
        response = client.post("/api/chirps", json={"message": "Hello"})

        assert response.status_code == 401
        assert chirp_store.count() == 0


class TestCreateChirp:
    """Tests for POST /api/chirps."""

    def test_create_returns_201(self, client_for, alice):
        response = client_for(alice).post("/api/chirps", json={"message": "Hello API"})

        assert response.status_code == 201
        data = response.json()
        assert data["status"] == "ok"
        assert data["chirp"]["message"] == "Hello API"
        assert data["chirp"]["user_id"] == alice.id
        assert data["chirp"]["edited"] is False

    def test_create_ignores_client_supplied_owner(self, client_for, alice, bob):
        response = client_for(alice).post(
            "/api/chirps", json={"message": "Mine", "user_id": bob.id}
        )

        assert response.json()["chirp"]["user_id"] == alice.id

    @pytest.mark.parametrize("body", [{}, {"message": ""}, {"message": "x" * 256}, {"message": 12}])
    def test_invalid_message_is_422(self, client_for, alice, chirp_store, body):
        response = client_for(alice).post("/api/chirps", json=body)

        assert response.status_code == 422
        error = response.json()["error"]
        assert error["code"] == "VALIDATION_ERROR"
        assert error["field_errors"][0]["field"] == "message"
        assert chirp_store.count() == 0


class TestReadChirps:
    """Tests for GET /api/chirps and /api/chirps/{id}."""

    def test_feed_newest_first_with_authors(self, client_for, alice, bob, service):
        first = service.create(alice.id, "first")
        second = service.create(bob.id, "second")

        data = client_for(alice).get("/api/chirps").json()

        assert data["count"] == 2
        assert [c["id"] for c in data["chirps"]] == [second.id, first.id]
        assert data["chirps"][0]["user"] == {"id": bob.id, "name": "Bob"}
        assert data["chirps"][0]["is_own"] is False
        assert data["chirps"][1]["is_own"] is True

    def test_get_one(self, client_for, alice, service):
        chirp = service.create(alice.id, "single")

        response = client_for(alice).get(f"/api/chirps/{chirp.id}")

        assert response.status_code == 200
        assert response.json()["chirp"]["message"] == "single"

    def test_get_missing_is_404(self, client_for, alice):
        response = client_for(alice).get("/api/chirps/31337")

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "NOT_FOUND"


class TestUpdateChirp:
    """Tests for PUT/PATCH /api/chirps/{id}."""

    @pytest.mark.parametrize("method", ["put", "patch"])
    def test_owner_updates(self, client_for, alice, service, method):
        chirp = service.create(alice.id, "before")

        response = getattr(client_for(alice), method)(
            f"/api/chirps/{chirp.id}", json={"message": "after"}
        )

        assert response.status_code == 200
        assert response.json()["chirp"]["message"] == "after"
        assert response.json()["chirp"]["edited"] is True

    def test_other_user_gets_403(self, client_for, alice, bob, service, chirp_store):
        chirp = service.create(alice.id, "before")

        response = client_for(bob).put(f"/api/chirps/{chirp.id}", json={"message": "hijack"})

        assert response.status_code == 403
        assert response.json()["error"]["code"] == "PERMISSION_DENIED"
        assert chirp_store.find_by_id(chirp.id).message == "before"


class TestDeleteChirp:
    """Tests for DELETE /api/chirps/{id}."""

    def test_owner_deletes(self, client_for, alice, service, chirp_store):
        chirp = service.create(alice.id, "bye")

        response = client_for(alice).delete(f"/api/chirps/{chirp.id}")

        assert response.status_code == 204
        assert chirp_store.count() == 0

    def test_other_user_gets_403(self, client_for, alice, bob, service, chirp_store):
        chirp = service.create(alice.id, "stay")

        response = client_for(bob).delete(f"/api/chirps/{chirp.id}")

        assert response.status_code == 403
        assert chirp_store.count() == 1

    def test_delete_missing_is_404(self, client_for, alice):
        assert client_for(alice).delete("/api/chirps/777").status_code == 404
