# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Pytest configuration and shared fixtures.

This module provides fixtures used across all test types:
- Unit tests (in-memory tenant-data store, fast password hashing)
- Integration tests (SQLite-backed store, see tests/integration)
"""

from collections.abc import Iterable, Mapping
from datetime import datetime, timedelta, timezone
from typing import Any

import pytest

from unihub.core.config.settings import OperatorAccount
from unihub.domains.auth.credentials import CredentialResolver
from unihub.domains.auth.password import PasswordHasher
from unihub.domains.auth.service import AuthSessionManager
from unihub.domains.auth.session_store import SessionStore
from unihub.infrastructure.database.models.base import generate_id
from unihub.infrastructure.database.store import (
    Filters,
    Row,
    StoreOperationError,
    TenantDataStore,
)
from unihub.infrastructure.storage.local import InMemoryKeyValueStorage


# =============================================================================
# In-Memory Tenant-Data Store
# =============================================================================


_DEFAULTS: dict[str, dict[str, Any]] = {
    "tenants": {},
    "tenant_administrators": {"role": "tenant_admin", "password_hash": None},
    "tenant_users": {
        "status": "active",
        "student_id": None,
        "department": None,
        "year_level": None,
    },
    "announcements": {"status": "draft"},
}

_UNIQUE: dict[str, tuple[str, ...]] = {
    "tenants": ("domain",),
    "tenant_users": ("email",),
}

_CHILD_TABLES = ("tenant_administrators", "tenant_users", "announcements")


def _matches(row: Row, filters: Filters | None) -> bool:
    for name, value in (filters or {}).items():
        if isinstance(value, (list, tuple, set, frozenset)):
            if row.get(name) not in value:
                return False
        elif value is None:
            if row.get(name) is not None:
                return False
        elif row.get(name) != value:
            return False
    return True


class InMemoryTenantDataStore(TenantDataStore):
    """TenantDataStore kept in dicts, with failure injection.

    Enforces unique domains and emails, tenant foreign keys and the
    cascade on tenant delete. Every call is recorded in ``calls`` as
    ``(operation, table)``.
    """

    def __init__(self) -> None:
        self.tables: dict[str, list[Row]] = {name: [] for name in _DEFAULTS}
        self.calls: list[tuple[str, str]] = []
        self._failures: dict[tuple[str, str], Exception] = {}
        self._clock = datetime(2025, 1, 1, tzinfo=timezone.utc)

    def fail(self, operation: str, table: str, error: Exception | None = None) -> None:
        """Make every later ``operation`` on ``table`` raise ``error``."""
        self._failures[(operation, table)] = error or StoreOperationError(
            f"Injected {operation} failure on {table}"
        )

    def recover(self, operation: str, table: str) -> None:
        self._failures.pop((operation, table), None)

    def seed(self, table: str, **values: Any) -> Row:
        """Insert a row directly, skipping constraints and failure injection."""
        row = self._new_row(table, values)
        self.tables[table].append(row)
        return dict(row)

    def rows(self, table: str) -> list[Row]:
        return [dict(row) for row in self.tables[table]]

    def _tick(self) -> datetime:
        self._clock += timedelta(seconds=1)
        return self._clock

    def _new_row(self, table: str, values: Mapping[str, Any]) -> Row:
        now = self._tick()
        row = {"id": generate_id(), "created_at": now, "updated_at": now}
        row.update(_DEFAULTS[table])
        row.update(values)
        return row

    def _check(self, operation: str, table: str) -> None:
        self.calls.append((operation, table))
        if table not in self.tables:
            raise ValueError(f"Unknown table: {table}")
        error = self._failures.get((operation, table))
        if error is not None:
            raise error

    def _check_constraints(self, table: str, row: Row) -> None:
        for column in _UNIQUE.get(table, ()):
            for other in self.tables[table]:
                if other["id"] != row["id"] and other.get(column) == row.get(column):
                    raise StoreOperationError(f"Duplicate {column} in {table}")
        if table in _CHILD_TABLES:
            if not any(t["id"] == row.get("tenant_id") for t in self.tables["tenants"]):
                raise StoreOperationError(f"Unknown tenant for {table}")

    async def insert(self, table: str, values: Mapping[str, Any]) -> Row:
        self._check("insert", table)
        row = self._new_row(table, values)
        self._check_constraints(table, row)
        self.tables[table].append(row)
        return dict(row)

    async def update(self, table: str, values: Mapping[str, Any], filters: Filters) -> list[Row]:
        self._check("update", table)
        matched = [row for row in self.tables[table] if _matches(row, filters)]
        for row in matched:
            self._check_constraints(table, {**row, **values})
        now = self._tick()
        for row in matched:
            row.update(values)
            row["updated_at"] = now
        return [dict(row) for row in matched]

    async def delete(self, table: str, filters: Filters) -> int:
        self._check("delete", table)
        doomed = [row for row in self.tables[table] if _matches(row, filters)]
        self.tables[table] = [row for row in self.tables[table] if row not in doomed]
        if table == "tenants":
            ids = {row["id"] for row in doomed}
            for child in _CHILD_TABLES:
                self.tables[child] = [r for r in self.tables[child] if r["tenant_id"] not in ids]
        return len(doomed)

    async def select(
        self,
        table: str,
        filters: Filters | None = None,
        columns: Iterable[str] | None = None,
        order_by: str | None = None,
        descending: bool = False,
        limit: int | None = None,
    ) -> list[Row]:
        self._check("select", table)
        rows = [row for row in self.tables[table] if _matches(row, filters)]
        if order_by is not None:
            rows.sort(key=lambda row: row[order_by], reverse=descending)
        if limit is not None:
            rows = rows[:limit]
        if columns is not None:
            names = list(columns)
            return [{name: row[name] for name in names} for row in rows]
        return [dict(row) for row in rows]

    async def count(self, table: str, filters: Filters | None = None) -> int:
        self._check("count", table)
        return sum(1 for row in self.tables[table] if _matches(row, filters))


# =============================================================================
# Store Fixtures
# =============================================================================


@pytest.fixture
def store() -> InMemoryTenantDataStore:
    """Provide an empty in-memory tenant-data store."""
    return InMemoryTenantDataStore()


@pytest.fixture
def password_hasher() -> PasswordHasher:
    """Provide a password hasher with the minimum bcrypt cost."""
    return PasswordHasher(rounds=4)


@pytest.fixture
def tenant_user_secret() -> str:
    return "student-secret"


@pytest.fixture
def seeded_store(
    store: InMemoryTenantDataStore,
    password_hasher: PasswordHasher,
    tenant_user_secret: str,
) -> InMemoryTenantDataStore:
    """Provide a store holding one tenant with active, inactive and suspended users."""
    tenant = store.seed("tenants", id="tenant-acme", name="Acme U", domain="acme.edu")
    store.seed("tenant_administrators", tenant_id=tenant["id"], email="admin@acme.edu")

    password_hash = password_hasher.hash(tenant_user_secret)
    store.seed(
        "tenant_users",
        id="user-jane",
        tenant_id=tenant["id"],
        email="jane@acme.edu",
        first_name="Jane",
        last_name="Doe",
        student_id="S-1001",
        department="Physics",
        year_level="2",
        password_hash=password_hash,
    )
    store.seed(
        "tenant_users",
        tenant_id=tenant["id"],
        email="bob@acme.edu",
        first_name="Bob",
        last_name="Inactive",
        status="inactive",
        password_hash=password_hash,
    )
    store.seed(
        "tenant_users",
        tenant_id=tenant["id"],
        email="sue@acme.edu",
        first_name="Sue",
        last_name="Suspended",
        status="suspended",
        password_hash=password_hash,
    )
    return store


# =============================================================================
# Auth Fixtures
# =============================================================================


@pytest.fixture
def operator_secret() -> str:
    return "operator-secret"


@pytest.fixture
def operator_account(password_hasher: PasswordHasher, operator_secret: str) -> OperatorAccount:
    """Provide one configured platform operator."""
    return OperatorAccount(
        id="operator-1",
        email="admin@platform.com",
        password_hash=password_hasher.hash(operator_secret),
    )


@pytest.fixture
def resolver(
    seeded_store: InMemoryTenantDataStore,
    operator_account: OperatorAccount,
    password_hasher: PasswordHasher,
) -> CredentialResolver:
    return CredentialResolver(seeded_store, [operator_account], password_hasher)


@pytest.fixture
def session_storage() -> InMemoryKeyValueStorage:
    return InMemoryKeyValueStorage()


@pytest.fixture
def session_store(session_storage: InMemoryKeyValueStorage) -> SessionStore:
    return SessionStore(session_storage)


@pytest.fixture
def auth_manager(resolver: CredentialResolver, session_store: SessionStore) -> AuthSessionManager:
    return AuthSessionManager(resolver, session_store)


# =============================================================================
# Marker Configuration
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test (SQLite store)"
    )
