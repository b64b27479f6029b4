# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - FakeSupabase: an in-memory stand-in for the supabase-py query builder
#   (table().select().eq()...execute()) so services run without a database
# - A TestClient with the Supabase dependencies overridden
# - JWT helpers for authenticated requests
# =============================================================================

import os
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path
from types import SimpleNamespace
from typing import Any
from uuid import uuid4

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

TEST_JWT_SECRET = "test-jwt-secret-with-enough-length-0123456789"
TEST_SERVICE_ROLE_KEY = "test-service-role-key"

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_ANON_KEY", "test-anon-key")
os.environ.setdefault("SUPABASE_SERVICE_ROLE_KEY", TEST_SERVICE_ROLE_KEY)
os.environ.setdefault("SUPABASE_JWT_SECRET", TEST_JWT_SECRET)
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")

# Project root on sys.path so `app`, `core`, `lib`, `scripts` import
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

import pytest  # noqa: E402
from jose import jwt  # noqa: E402


# =============================================================================
# Fake Supabase
# =============================================================================

class FakeAPIError(Exception):
    """Shaped like postgrest.exceptions.APIError: the text is on .message."""

    def __init__(self, message: str, code: str = "P0001"):
        super().__init__({"message": message, "code": code})
        self.message = message
        self.code = code


class FakeResponse:
    def __init__(self, data: list[dict[str, Any]]):
        self.data = data


def _matches(row: dict[str, Any], filters: list[tuple[str, str, Any]]) -> bool:
    for column, op, value in filters:
        actual = row.get(column)
        if op == "eq" and str(actual) != str(value):
            return False
        if op == "neq" and str(actual) == str(value):
            return False
        if op == "gte" and (actual is None or str(actual) < str(value)):
            return False
        if op == "lte" and (actual is None or str(actual) > str(value)):
            return False
    return True


class FakeQuery:
    """One chained query against a FakeSupabase table."""

    def __init__(self, db: "FakeSupabase", table: str):
        self.db = db
        self.table = table
        self.op = "select"
        self.columns: list[str] | None = None
        self.payload: Any = None
        self.filters: list[tuple[str, str, Any]] = []
        self.order_by: tuple[str, bool] | None = None
        self.limit_n: int | None = None

    # -- operations --------------------------------------------------------

    def select(self, columns: str = "*", count: str | None = None) -> "FakeQuery":
        self.op = "select"
        self.columns = None if columns.strip() == "*" else [c.strip() for c in columns.split(",")]
        return self

    def insert(self, rows: dict[str, Any] | list[dict[str, Any]]) -> "FakeQuery":
        self.op = "insert"
        self.payload = rows
        return self

    def update(self, values: dict[str, Any]) -> "FakeQuery":
        self.op = "update"
        self.payload = values
        return self

    def delete(self) -> "FakeQuery":
        self.op = "delete"
        return self

    # -- filters and modifiers ---------------------------------------------

    def eq(self, column: str, value: Any) -> "FakeQuery":
        self.filters.append((column, "eq", value))
        return self

    def neq(self, column: str, value: Any) -> "FakeQuery":
        self.filters.append((column, "neq", value))
        return self

    def gte(self, column: str, value: Any) -> "FakeQuery":
        self.filters.append((column, "gte", value))
        return self

    def lte(self, column: str, value: Any) -> "FakeQuery":
        self.filters.append((column, "lte", value))
        return self

    def order(self, column: str, desc: bool = False) -> "FakeQuery":
        self.order_by = (column, desc)
        return self

    def limit(self, n: int) -> "FakeQuery":
        self.limit_n = n
        return self

    # -- execution ---------------------------------------------------------

    def execute(self) -> FakeResponse:
        self.db.calls.append(SimpleNamespace(
            table=self.table, op=self.op, payload=self.payload, filters=list(self.filters),
        ))
        failure = self.db.failures.get((self.table, self.op))
        if failure is not None:
            raise failure

        rows = self.db.tables.setdefault(self.table, [])

        if self.op == "insert":
            new_rows = self.payload if isinstance(self.payload, list) else [self.payload]
            inserted = []
            for row in new_rows:
                stored = dict(row)
                stored.setdefault("id", self.db.next_id())
                rows.append(stored)
                inserted.append(dict(stored))
            return FakeResponse(inserted)

        matched = [row for row in rows if _matches(row, self.filters)]

        if self.op == "update":
            for row in matched:
                row.update(self.payload)
            return FakeResponse([dict(row) for row in matched])

        if self.op == "delete":
            self.db.tables[self.table] = [row for row in rows if row not in matched]
            return FakeResponse([dict(row) for row in matched])

        if self.order_by:
            column, desc = self.order_by
            matched = sorted(matched, key=lambda row: str(row.get(column)), reverse=desc)
        if self.limit_n is not None:
            matched = matched[: self.limit_n]
        if self.columns:
            matched = [{c: row.get(c) for c in self.columns} for row in matched]
        return FakeResponse([dict(row) for row in matched])


class FakeAuthAdmin:
    def __init__(self):
        self.created: list[dict[str, Any]] = []
        self.rejected_emails: set[str] = set()

    def create_user(self, attributes: dict[str, Any]) -> SimpleNamespace:
        if attributes["email"] in self.rejected_emails:
            raise FakeAPIError("A user with this email address has already been registered")
        self.created.append(attributes)
        return SimpleNamespace(user=SimpleNamespace(id=uuid4(), email=attributes["email"]))


class FakeSupabase:
    """
    In-memory replacement for supabase.Client in tests.

    Supports the subset of the fluent API the services use. Use
    fail(table, op, exc) to make the next matching execute() raise.
    """

    def __init__(self, tables: dict[str, list[dict[str, Any]]] | None = None):
        self.tables: dict[str, list[dict[str, Any]]] = {
            name: [dict(row) for row in rows] for name, rows in (tables or {}).items()
        }
        self.calls: list[SimpleNamespace] = []
        self.failures: dict[tuple[str, str], Exception] = {}
        self.auth = SimpleNamespace(admin=FakeAuthAdmin())
        self._id = 1000

    def next_id(self) -> int:
        self._id += 1
        return self._id

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)

    def fail(self, table: str, op: str, exc: Exception) -> None:
        self.failures[(table, op)] = exc

    def writes(self, table: str | None = None) -> list[SimpleNamespace]:
        return [
            call for call in self.calls
            if call.op != "select" and (table is None or call.table == table)
        ]


# =============================================================================
# JWT Helpers
# =============================================================================

def make_token(
    sub: str | None = None,
    role: str = "authenticated",
    audience: str | None = "authenticated",
    expires_in: timedelta = timedelta(hours=1),
    secret: str = TEST_JWT_SECRET,
) -> str:
    """Sign an HS256 token shaped like a Supabase access token."""
    now = datetime.now(timezone.utc)
    claims: dict[str, Any] = {
        "role": role,
        "iat": int(now.timestamp()),
        "exp": int((now + expires_in).timestamp()),
    }
    if sub is not None:
        claims["sub"] = sub
        claims["email"] = f"{sub[:8]}@example.com"
    if audience is not None:
        claims["aud"] = audience
    return jwt.encode(claims, secret, algorithm="HS256")


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


# =============================================================================
# Fixtures
# =============================================================================

CLIENT_ID = "11111111-1111-4111-8111-111111111111"
OTHER_CLIENT_ID = "22222222-2222-4222-8222-222222222222"
ADMIN_ID = "33333333-3333-4333-8333-333333333333"
DRIVER_ID = "44444444-4444-4444-8444-444444444444"


@pytest.fixture
def sample_tables() -> dict[str, list[dict[str, Any]]]:
    """A small Nashik dataset covering every table the handlers touch."""
    return {
        "profiles": [
            {"id": CLIENT_ID, "role": "client", "full_name": "Aarav Sharma"},
            {"id": OTHER_CLIENT_ID, "role": "client", "full_name": "Diya Patel"},
            {"id": ADMIN_ID, "role": "admin", "full_name": "Admin User"},
            {"id": DRIVER_ID, "role": "driver", "full_name": "Driver User"},
        ],
        "addresses": [
            {"id": 1, "user_id": CLIENT_ID, "line1": "123 Gangapur Road", "city": "Nashik",
             "pincode": "422013", "lat": 20.0084, "lng": 73.7639},
            {"id": 2, "user_id": OTHER_CLIENT_ID, "line1": "456 College Road", "city": "Nashik",
             "pincode": "422005", "lat": None, "lng": 73.7898},
        ],
        "driver_locations": [
            {"id": 1, "driver_id": DRIVER_ID, "lat": 20.10, "lng": 73.90,
             "updated_at": "2024-01-15T06:00:00+00:00"},
            {"id": 2, "driver_id": DRIVER_ID, "lat": 19.9975, "lng": 73.7898,
             "updated_at": "2024-01-15T06:30:00+00:00"},
        ],
        "subscriptions": [
            {"id": 7, "user_id": CLIENT_ID, "status": "active", "start_date": "2024-01-01"},
            {"id": 8, "user_id": OTHER_CLIENT_ID, "status": "active", "start_date": "2024-01-01"},
            {"id": 9, "user_id": OTHER_CLIENT_ID, "status": "cancelled", "start_date": "2023-06-01"},
        ],
        "pauses": [],
        "deliveries": [
            {"id": 101, "subscription_id": 7, "date": "2024-01-31", "status": "scheduled", "meal_slot": "lunch"},
            {"id": 102, "subscription_id": 7, "date": "2024-02-01", "status": "scheduled", "meal_slot": "lunch"},
            {"id": 103, "subscription_id": 7, "date": "2024-02-03", "status": "scheduled", "meal_slot": "lunch"},
            {"id": 104, "subscription_id": 7, "date": "2024-02-04", "status": "scheduled", "meal_slot": "lunch"},
            {"id": 105, "subscription_id": 8, "date": "2024-02-02", "status": "scheduled", "meal_slot": "lunch"},
        ],
        "menu_templates": [
            {"id": 1, "week_no": 1, "dow": 1, "recipe_id": 11, "meal_slot": "lunch"},
            {"id": 2, "week_no": 2, "dow": 1, "recipe_id": 17, "meal_slot": "lunch"},
        ],
        "menu_instances": [],
        "v_client_macro_range": [
            {"user_id": CLIENT_ID, "date": "2024-01-03", "kcal": 400, "protein_g": 25},
            {"user_id": CLIENT_ID, "date": "2024-01-01", "kcal": 350, "protein_g": 40},
            {"user_id": CLIENT_ID, "date": "2024-01-10", "kcal": 320, "protein_g": 12},
            {"user_id": CLIENT_ID, "date": "2024-01-02", "kcal": 450, "protein_g": 20},
            {"user_id": OTHER_CLIENT_ID, "date": "2024-01-02", "kcal": 550, "protein_g": 30},
        ],
    }


@pytest.fixture
def fake_db(sample_tables) -> FakeSupabase:
    return FakeSupabase(sample_tables)


@pytest.fixture
def api_client(fake_db):
    """TestClient with both Supabase clients replaced by fake_db."""
    from fastapi.testclient import TestClient

    from app.dependencies import get_service_client, get_user_client
    from app.main import app

    app.dependency_overrides[get_user_client] = lambda: fake_db
    app.dependency_overrides[get_service_client] = lambda: fake_db
    with TestClient(app, raise_server_exceptions=False) as client:
        yield client
    app.dependency_overrides.clear()
