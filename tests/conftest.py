"""
Pytest configuration and fixtures for the Chirper test suite.

Provides:
- A fresh SQLite-backed container per test (temporary database file)
- FastAPI test clients logged in as specific users
- An in-memory mock Supabase client for the Supabase adapters
- A recording notification channel for fan-out assertions
"""

import copy
import itertools
from typing import Any, Dict, List, Optional, Tuple

import pytest
from fastapi.testclient import TestClient

from chirper.auth import hash_password
from chirper.config import ChirperConfig
from chirper.core.container import Container
from chirper.core.models import NewChirp
from chirper.core.ports import NotificationChannel
from chirper.main import create_app

TEST_PASSWORD = "password123"


# ============== Container Fixtures ==============

@pytest.fixture
def config(tmp_path) -> ChirperConfig:
    """Test configuration backed by a temporary SQLite file."""
    return ChirperConfig(
        environment="test",
        debug=False,
        database_backend="sqlite",
        database_path=str(tmp_path / "chirper-test.db"),
        notification_channel="database",
        log_level="WARNING",
    )


@pytest.fixture
def container(config) -> Container:
    return Container(config)


@pytest.fixture
def chirp_store(container):
    return container.chirp_store()


@pytest.fixture
def user_store(container):
    return container.user_store()


@pytest.fixture
def notifications_repo(container):
    return container.notifications_repository()


@pytest.fixture
def service(container):
    return container.chirp_service()


@pytest.fixture
def make_user(user_store):
    """Factory for creating users with the shared test password."""
    counter = itertools.count(1)

    def _make_user(name: Optional[str] = None, email: Optional[str] = None):
        n = next(counter)
        return user_store.create(
            name or f"User {n}",
            email or f"user{n}@example.com",
            hash_password(TEST_PASSWORD),
        )

    return _make_user


@pytest.fixture
def password() -> str:
    """Plain-text password shared by every ``make_user`` account."""
    return TEST_PASSWORD


# ============== FastAPI Client Fixtures ==============

@pytest.fixture
def app(config, container):
    """App whose container is the same one the store fixtures use."""
    application = create_app(config)
    application.state.container = container
    return application


@pytest.fixture
def client(app) -> TestClient:
    """Anonymous client that does not follow redirects."""
    return TestClient(app, follow_redirects=False)


@pytest.fixture
def client_for(app):
    """Factory returning a client logged in as the given user."""

    def _client_for(user) -> TestClient:
        test_client = TestClient(app, follow_redirects=False)
        response = test_client.post(
            "/login",
            data={"email": user.email, "password": TEST_PASSWORD},
        )
        assert response.status_code == 303, response.text
        return test_client

    return _client_for


# ============== Notification Channel Doubles ==============

class RecordingChannel(NotificationChannel):
    """Channel that remembers every delivery; can fail for chosen recipients."""

    name = "recording"

    def __init__(self, fail_for: Tuple[int, ...] = (), refuse_for: Tuple[int, ...] = ()):
        self.fail_for = set(fail_for)
        self.refuse_for = set(refuse_for)
        self.attempts: List[int] = []
        self.sent: List[Tuple[int, NewChirp]] = []

    def deliver(self, recipient_id: int, notification: NewChirp) -> bool:
        self.attempts.append(recipient_id)
        if recipient_id in self.fail_for:
            raise RuntimeError(f"mail server rejected user {recipient_id}")
        if recipient_id in self.refuse_for:
            return False
        self.sent.append((recipient_id, notification))
        return True

    @property
    def recipients(self) -> List[int]:
        return [recipient for recipient, _ in self.sent]


@pytest.fixture
def recording_channel() -> RecordingChannel:
    return RecordingChannel()


@pytest.fixture
def make_channel():
    """Factory for channels that fail or refuse for chosen recipients."""
    return RecordingChannel


# ============== Supabase Mock Fixtures ==============

class MockSupabaseResponse:
    """Mock response from Supabase operations."""
    def __init__(self, data: List[Dict] = None, count: int = None):
        self.data = data or []
        self.count = count


class MockSupabaseTable:
    """Mock Supabase table query with chainable methods."""

    def __init__(self, table_name: str, client: "MockSupabaseClient"):
        self.table_name = table_name
        self._client = client
        self._op = "select"
        self._payload: Any = None
        self._filters: List[Tuple[str, str, Any]] = []
        self._orders: List[Tuple[str, bool]] = []
        self._limit: Optional[int] = None
        self._count: Optional[str] = None

    # --- operations ---

    def select(self, columns: str = "*", count: Optional[str] = None):
        self._op = "select"
        self._count = count
        return self

    def insert(self, data):
        self._op = "insert"
        self._payload = data if isinstance(data, list) else [data]
        return self

    def update(self, data: Dict):
        self._op = "update"
        self._payload = data
        return self

    def delete(self):
        self._op = "delete"
        return self

    # --- filters ---

    def eq(self, column: str, value: Any):
        self._filters.append(("eq", column, value))
        return self

    def neq(self, column: str, value: Any):
        self._filters.append(("neq", column, value))
        return self

    def in_(self, column: str, values: List[Any]):
        self._filters.append(("in", column, list(values)))
        return self

    def is_(self, column: str, value: Any):
        self._filters.append(("is", column, value))
        return self

    def order(self, column: str, desc: bool = False):
        self._orders.append((column, desc))
        return self

    def limit(self, count: int):
        self._limit = count
        return self

    # --- execution ---

    def _matches(self, row: Dict) -> bool:
        for kind, column, value in self._filters:
            actual = row.get(column)
            if kind == "eq" and actual != value:
                return False
            if kind == "neq" and actual == value:
                return False
            if kind == "in" and actual not in value:
                return False
            if kind == "is" and value == "null" and actual is not None:
                return False
        return True

    def execute(self) -> MockSupabaseResponse:
        if self._client.fail:
            raise ConnectionError("Supabase unreachable")

        rows = self._client.tables.setdefault(self.table_name, [])

        if self._op == "insert":
            inserted = []
            for item in self._payload:
                item = dict(item)
                if item.get("id") is None:
                    item["id"] = next(self._client.ids[self.table_name])
                rows.append(item)
                inserted.append(copy.deepcopy(item))
            return MockSupabaseResponse(data=inserted)

        matched = [row for row in rows if self._matches(row)]

        if self._op == "update":
            for row in matched:
                row.update(self._payload)
            return MockSupabaseResponse(data=copy.deepcopy(matched))

        if self._op == "delete":
            self._client.tables[self.table_name] = [row for row in rows if row not in matched]
            return MockSupabaseResponse(data=copy.deepcopy(matched))

        for column, desc in reversed(self._orders):
            matched.sort(key=lambda r: (r.get(column) is None, r.get(column)), reverse=desc)
        total = len(matched)
        if self._limit is not None:
            matched = matched[:self._limit]
        count = total if self._count else None
        return MockSupabaseResponse(data=copy.deepcopy(matched), count=count)


class MockSupabaseClient:
    """Mock Supabase client for testing."""

    def __init__(self):
        self.tables: Dict[str, List[Dict]] = {}
        self.ids: Dict[str, Any] = {}
        self.fail = False

    def table(self, name: str) -> MockSupabaseTable:
        self.ids.setdefault(name, itertools.count(1))
        return MockSupabaseTable(name, self)

    def seed_data(self, table_name: str, data: List[Dict]):
        """Seed test data into a table."""
        self.tables[table_name] = [dict(row) for row in data]
        start = max((row["id"] for row in data if isinstance(row.get("id"), int)), default=0) + 1
        self.ids[table_name] = itertools.count(start)


@pytest.fixture
def mock_supabase() -> MockSupabaseClient:
    """
    Mock Supabase client for testing.

    Stores data in memory and supports select, insert, update, delete
    with the filters the adapters use.
    """
    return MockSupabaseClient()
