# tests/test_notifications_api.py
"""
Tests for the notification API and end-to-end fan-out.

Tests the /api/notifications endpoints:
- GET /api/notifications - List notifications
- GET /api/notifications/unread-count - Badge count
- PATCH /api/notifications/{id}/read - Mark read
- POST /api/notifications/read-all - Mark everything read
"""

import pytest


@pytest.fixture
def alice(make_user):
    return make_user("Alice", "alice@example.com")


@pytest.fixture
def bob(make_user):
    return make_user("Bob", "bob@example.com")


@pytest.fixture
def carol(make_user):
    return make_user("Carol", "carol@example.com")


# =============================================================================
# FAN-OUT THROUGH THE WEB SURFACE
# =============================================================================

class TestChirpNotifications:
    """Posting a chirp notifies every other user."""

    def test_other_users_receive_new_chirp(self, client_for, alice, bob, carol):
        client_for(alice).post("/chirps", data={"message": "Hello from Alice"})

        for user in (bob, carol):
            notes = client_for(user).get("/api/notifications").json()
            assert len(notes) == 1
            assert notes[0]["type"] == "new_chirp"
            assert notes[0]["read"] is False
            assert notes[0]["data"]["subject"] == "New Chirp from Alice"
            assert notes[0]["data"]["excerpt"] == "Hello from Alice"

    def test_author_receives_nothing(self, client_for, alice, bob):
        client_for(alice).post("/api/chirps", json={"message": "Hi"})

        assert client_for(alice).get("/api/notifications").json() == []

    def test_updates_and_deletes_do_not_notify(self, client_for, alice, bob):
        client = client_for(alice)
        chirp_id = client.post("/api/chirps", json={"message": "Hi"}).json()["chirp"]["id"]
        client.put(f"/api/chirps/{chirp_id}", json={"message": "Hi again"})
        client.delete(f"/api/chirps/{chirp_id}")

        assert client_for(bob).get("/api/notifications/unread-count").json() == {"count": 1}


# =============================================================================
# READ STATE
# =============================================================================

class TestReadState:
    """Tests for unread counts and marking read."""

    def test_unread_count(self, client_for, alice, bob, service):
        service.create(alice.id, "one")
        service.create(alice.id, "two")

        response = client_for(bob).get("/api/notifications/unread-count")

        assert response.status_code == 200
        assert response.json() == {"count": 2}

    def test_mark_read(self, client_for, alice, bob, service):
        service.create(alice.id, "one")
        client = client_for(bob)
        notification_id = client.get("/api/notifications").json()[0]["id"]

        response = client.patch(f"/api/notifications/{notification_id}/read")

        assert response.status_code == 200
        assert response.json() == {"success": True, "notification_id": notification_id}
        assert client.get("/api/notifications/unread-count").json() == {"count": 0}
        assert client.get("/api/notifications", params={"unread_only": True}).json() == []

    def test_cannot_mark_someone_elses_notification(self, client_for, alice, bob, carol, service):
        service.create(alice.id, "one")
        notification_id = client_for(bob).get("/api/notifications").json()[0]["id"]

        response = client_for(carol).patch(f"/api/notifications/{notification_id}/read")

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "NOT_FOUND"
        assert client_for(bob).get("/api/notifications/unread-count").json() == {"count": 1}

    def test_read_all(self, client_for, alice, bob, service):
        for message in ("one", "two", "three"):
            service.create(alice.id, message)
        client = client_for(bob)

        response = client.post("/api/notifications/read-all")

        assert response.json() == {"success": True, "count": 3}
        assert client.get("/api/notifications/unread-count").json() == {"count": 0}

    def test_limit(self, client_for, alice, bob, service):
        for i in range(5):
            service.create(alice.id, f"chirp {i}")

        notes = client_for(bob).get("/api/notifications", params={"limit": 2}).json()

        assert len(notes) == 2

    def test_requires_session(self, client):
        response = client.get("/api/notifications")
        assert response.status_code == 401
