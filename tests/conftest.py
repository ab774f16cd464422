"""Shared test fixtures.

Provides a FastAPI ``test_client``, a chainable ``MagicMock`` Supabase client,
and ``fake_db``: a small in-memory stand-in for the PostgREST query builder
used where a test needs state to persist between calls (toggle round-trips,
saved lists, hire visibility).
"""

import os

os.environ.setdefault("SUPABASE_URL", "https://test.supabase.co")
os.environ.setdefault("SUPABASE_KEY", "test-key")

import itertools  # noqa: E402
import re  # noqa: E402
from collections.abc import Generator  # noqa: E402
from typing import Any  # noqa: E402
from unittest.mock import MagicMock, patch  # noqa: E402
from uuid import uuid4  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

ARCHITECT_ID = "11111111-1111-1111-1111-111111111111"
HOMEOWNER_ID = "22222222-2222-2222-2222-222222222222"
OTHER_ARCHITECT_ID = "33333333-3333-3333-3333-333333333333"


# ---------------------------------------------------------------------------
# Row factories
# ---------------------------------------------------------------------------

def make_user_row(
    user_id: str,
    role: str,
    username: str | None = None,
    **overrides: Any,
) -> dict[str, Any]:
    """Return a realistic ``users`` row."""
    row: dict[str, Any] = {
        "id": user_id,
        "email": f"{username or role}@example.com",
        "username": username or role,
        "role": role,
        "avatar_url": None,
        "bio": f"{role} bio",
        "contact_details": f"+1 555 0100 ({username or role})",
        "contact_email": f"contact-{username or role}@example.com",
        "education": None,
        "experience": None,
        "skills": None,
        "social_links": None,
        "created_at": "2026-01-01T00:00:00+00:00",
        "updated_at": "2026-01-01T00:00:00+00:00",
    }
    row.update(overrides)
    return row


def make_post_row(post_id: str, owner_id: str, **overrides: Any) -> dict[str, Any]:
    """Return a realistic ``posts`` row."""
    row: dict[str, Any] = {
        "id": post_id,
        "title": "Courtyard house",
        "description": "Single-storey house around a planted courtyard",
        "image_url": f"https://test.supabase.co/storage/v1/object/public/designs/{post_id}.jpg",
        "user_id": owner_id,
        "design_type": "Residential",
        "tags": ["modern"],
        "hire_me": False,
        "created_at": "2026-01-02T00:00:00+00:00",
        "updated_at": "2026-01-02T00:00:00+00:00",
    }
    row.update(overrides)
    return row


def chainable_table_mock() -> MagicMock:
    """Return a mock that supports fluent chaining."""
    m = MagicMock()
    for method in (
        "select", "insert", "upsert", "update", "delete", "eq", "limit",
        "in_", "order",
    ):
        getattr(m, method).return_value = m
    m.execute.return_value = MagicMock(data=[], count=None)
    return m


# ---------------------------------------------------------------------------
# In-memory PostgREST fake
# ---------------------------------------------------------------------------

_EMBED_RE = re.compile(r"^(\w+):(\w+)(?:!(\w+))?\((.*)\)$")


def _split_select(columns: str) -> list[str]:
    parts: list[str] = []
    depth = 0
    current = ""
    for ch in columns:
        if ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
        if ch == "," and depth == 0:
            parts.append(current.strip())
            current = ""
        else:
            current += ch
    if current.strip():
        parts.append(current.strip())
    return parts


class FakeResponse:
    def __init__(self, data: list[dict[str, Any]], count: int | None = None) -> None:
        self.data = data
        self.count = count


class FakeQuery:
    """Subset of the postgrest-py request builder used by the services."""

    def __init__(self, db: "FakeSupabase", table: str) -> None:
        self.db = db
        self.table = table
        self.op = "select"
        self.columns = "*"
        self.count: str | None = None
        self.head = False
        self.payload: Any = None
        self.on_conflict: str | None = None
        self.ignore_duplicates = False
        self.filters: list[tuple[str, str, Any]] = []
        self.order_by: tuple[str, bool] | None = None
        self.limit_n: int | None = None

    # -- operations --
    def select(self, columns: str = "*", count: str | None = None, head: bool = False) -> "FakeQuery":
        self.op, self.columns, self.count, self.head = "select", columns, count, head
        return self

    def insert(self, payload: Any) -> "FakeQuery":
        self.op, self.payload = "insert", payload
        return self

    def upsert(
        self,
        payload: Any,
        on_conflict: str | None = None,
        ignore_duplicates: bool = False,
    ) -> "FakeQuery":
        self.op, self.payload = "upsert", payload
        self.on_conflict, self.ignore_duplicates = on_conflict, ignore_duplicates
        return self

    def update(self, payload: dict[str, Any]) -> "FakeQuery":
        self.op, self.payload = "update", payload
        return self

    def delete(self) -> "FakeQuery":
        self.op = "delete"
        return self

    # -- filters / modifiers --
    def eq(self, column: str, value: Any) -> "FakeQuery":
        self.filters.append(("eq", column, value))
        return self

    def in_(self, column: str, values: list[Any]) -> "FakeQuery":
        self.filters.append(("in", column, list(values)))
        return self

    def order(self, column: str, desc: bool = False) -> "FakeQuery":
        self.order_by = (column, desc)
        return self

    def limit(self, n: int) -> "FakeQuery":
        self.limit_n = n
        return self

    # -- execution --
    def _matches(self, row: dict[str, Any]) -> bool:
        for kind, column, value in self.filters:
            if kind == "eq" and row.get(column) != value:
                return False
            if kind == "in" and row.get(column) not in value:
                return False
        return True

    def execute(self) -> FakeResponse:
        self.db.calls.append((self.table, self.op))
        if self.table in self.db.failing_tables:
            raise RuntimeError(f"relation {self.table} unavailable")

        rows = self.db.tables.setdefault(self.table, [])
        if self.op == "select":
            matched = [r for r in rows if self._matches(r)]
            if self.order_by:
                column, desc = self.order_by
                matched.sort(key=lambda r: r.get(column) or "", reverse=desc)
            if self.limit_n is not None:
                matched = matched[: self.limit_n]
            count = len(matched) if self.count == "exact" else None
            if self.head:
                return FakeResponse([], count)
            return FakeResponse([self.db.project(self.table, r, self.columns) for r in matched], count)

        if self.op in ("insert", "upsert"):
            payload = self.payload if isinstance(self.payload, list) else [self.payload]
            written: list[dict[str, Any]] = []
            for item in payload:
                if self.op == "upsert" and self.on_conflict:
                    keys = self.on_conflict.split(",")
                    existing = [r for r in rows if all(r.get(k) == item.get(k) for k in keys)]
                    if existing:
                        if not self.ignore_duplicates:
                            existing[0].update(item)
                            written.append(dict(existing[0]))
                        continue
                written.append(dict(self.db.add(self.table, item)))
            return FakeResponse(written)

        if self.op == "update":
            updated = []
            for r in rows:
                if self._matches(r):
                    r.update(self.payload)
                    updated.append(dict(r))
            return FakeResponse(updated)

        deleted = [r for r in rows if self._matches(r)]
        self.db.tables[self.table] = [r for r in rows if not self._matches(r)]
        return FakeResponse(deleted)


class FakeSupabase:
    """In-memory tables addressed through ``table(name)``."""

    def __init__(self) -> None:
        self.tables: dict[str, list[dict[str, Any]]] = {}
        self.calls: list[tuple[str, str]] = []
        self.failing_tables: set[str] = set()
        self._clock = itertools.count(1)
        self.storage = MagicMock()
        self.auth = MagicMock()
        self.functions = MagicMock()

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)

    def add(self, table: str, row: dict[str, Any]) -> dict[str, Any]:
        stored = dict(row)
        stored.setdefault("id", str(uuid4()))
        stored.setdefault("created_at", f"2026-03-01T00:00:{next(self._clock):02d}+00:00")
        self.tables.setdefault(table, []).append(stored)
        return stored

    def rows(self, table: str) -> list[dict[str, Any]]:
        return self.tables.get(table, [])

    def project(self, table: str, row: dict[str, Any], columns: str) -> dict[str, Any]:
        out: dict[str, Any] = {}
        for item in _split_select(columns):
            if item == "*":
                out.update(row)
                continue
            embed = _EMBED_RE.match(item)
            if embed is None:
                out[item] = row.get(item)
                continue
            alias, target, fk, inner = embed.groups()
            fk = fk or f"{target[:-1]}_id"
            related = next((r for r in self.rows(target) if r.get("id") == row.get(fk)), None)
            out[alias] = self.project(target, related, inner) if related else None
        return out


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture()
def mock_supabase() -> Generator[MagicMock, None, None]:
    """Install a ``MagicMock`` as the process-wide Supabase client."""
    import archconnect.db.supabase as supa_mod

    mock_client = MagicMock()
    mock_client.table.return_value = chainable_table_mock()
    with patch.object(supa_mod, "_client", mock_client):
        yield mock_client


@pytest.fixture()
def fake_db() -> Generator[FakeSupabase, None, None]:
    """Install an in-memory ``FakeSupabase`` seeded with two architects and a homeowner."""
    import archconnect.db.supabase as supa_mod

    db = FakeSupabase()
    db.add("users", make_user_row(ARCHITECT_ID, "architect", "ana"))
    db.add("users", make_user_row(OTHER_ARCHITECT_ID, "architect", "otto"))
    db.add("users", make_user_row(HOMEOWNER_ID, "homeowner", "hugo"))
    with patch.object(supa_mod, "_client", db):
        yield db


@pytest.fixture()
def test_client() -> Generator[TestClient, None, None]:
    """Provide a FastAPI TestClient."""
    from archconnect.main import app

    with TestClient(app) as client:
        yield client


def _override_user(role: str, user_id: str, username: str) -> Generator[TestClient, None, None]:
    from archconnect.auth.dependencies import get_current_user
    from archconnect.main import app
    from archconnect.models.user import user_from_row

    user = user_from_row(make_user_row(user_id, role, username))
    app.dependency_overrides[get_current_user] = lambda: user
    try:
        with TestClient(app) as client:
            yield client
    finally:
        app.dependency_overrides.clear()


@pytest.fixture()
def architect_client() -> Generator[TestClient, None, None]:
    """TestClient authenticated as the seeded architect ``ana``."""
    yield from _override_user("architect", ARCHITECT_ID, "ana")


@pytest.fixture()
def homeowner_client() -> Generator[TestClient, None, None]:
    """TestClient authenticated as the seeded homeowner ``hugo``."""
    yield from _override_user("homeowner", HOMEOWNER_ID, "hugo")
