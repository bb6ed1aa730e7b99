# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Tenant-data store port and its SQLAlchemy adapter.

The port exposes per-table, single-statement operations in the shape of a
managed REST datastore: insert, update, delete, filtered select and
filtered count. Rows travel as plain dicts keyed by column name.

There is deliberately no multi-call transaction on the port. Every call is
its own unit of work; callers that need several dependent writes (tenant
provisioning) coordinate them explicitly.

Example:
    >>> store = SQLAlchemyTenantDataStore(get_sessionmaker())
    >>> tenant = await store.insert("tenants", {"name": "Acme U", "domain": "acme.edu"})
    >>> await store.count("announcements", {"tenant_id": tenant["id"]})
    0
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Any, AsyncIterator

from sqlalchemy import delete as sa_delete
from sqlalchemy import func, select
from sqlalchemy.exc import InterfaceError, OperationalError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from unihub.infrastructure.database.connection import DatabaseError
from unihub.infrastructure.database.models import TABLES, Base
from unihub.utils.datetime import ensure_utc

logger = logging.getLogger(__name__)

Row = dict[str, Any]
Filters = Mapping[str, Any]


class StoreError(DatabaseError):
    """Base exception for tenant-data store operations."""

    pass


class StoreUnavailableError(StoreError):
    """Raised when a store call cannot complete (network, timeout)."""

    pass


class StoreOperationError(StoreError):
    """Raised when the store rejects an operation (constraint violation etc.)."""

    pass


class RowNotFoundError(StoreError):
    """Raised when a single-row lookup matches no row."""

    pass


class MultipleRowsError(StoreError):
    """Raised when a single-row lookup matches more than one row."""

    pass


class TenantDataStore(ABC):
    """Per-table access to the tenant registry.

    Filters are equality matches on column names. A list, tuple or set value
    matches any of its members; ``None`` matches NULL.
    """

    @abstractmethod
    async def insert(self, table: str, values: Mapping[str, Any]) -> Row:
        """Insert one row and return it with server-assigned id and timestamps."""

    @abstractmethod
    async def update(self, table: str, values: Mapping[str, Any], filters: Filters) -> list[Row]:
        """Update all matching rows and return them after the change."""

    @abstractmethod
    async def delete(self, table: str, filters: Filters) -> int:
        """Delete all matching rows and return how many were removed."""

    @abstractmethod
    async def select(
        self,
        table: str,
        filters: Filters | None = None,
        columns: Iterable[str] | None = None,
        order_by: str | None = None,
        descending: bool = False,
        limit: int | None = None,
    ) -> list[Row]:
        """Select matching rows."""

    @abstractmethod
    async def count(self, table: str, filters: Filters | None = None) -> int:
        """Count matching rows without fetching them."""

    async def select_one(self, table: str, filters: Filters) -> Row:
        """Select exactly one row.

        Raises:
            RowNotFoundError: If no row matches.
            MultipleRowsError: If more than one row matches.
        """
        rows = await self.select(table, filters, limit=2)
        if not rows:
            raise RowNotFoundError(f"No row in {table} matches {dict(filters)}")
        if len(rows) > 1:
            raise MultipleRowsError(f"More than one row in {table} matches {dict(filters)}")
        return rows[0]


def _model_for(table: str) -> type[Base]:
    try:
        return TABLES[table]
    except KeyError:
        raise ValueError(f"Unknown table: {table}") from None


def _column(model: type[Base], name: str) -> Any:
    if name not in model.__table__.columns:
        raise ValueError(f"Unknown column {name!r} for table {model.__tablename__}")
    return getattr(model, name)


def _conditions(model: type[Base], filters: Filters | None) -> list[Any]:
    conditions = []
    for name, value in (filters or {}).items():
        column = _column(model, name)
        if isinstance(value, (list, tuple, set, frozenset)):
            conditions.append(column.in_(list(value)))
        elif value is None:
            conditions.append(column.is_(None))
        else:
            conditions.append(column == value)
    return conditions


def _to_row(obj: Base, columns: Iterable[str] | None = None) -> Row:
    names = list(columns) if columns is not None else list(obj.__table__.columns.keys())
    row: Row = {}
    for name in names:
        value = getattr(obj, name)
        # SQLite hands back naive datetimes even for timezone-aware columns
        row[name] = ensure_utc(value) if isinstance(value, datetime) else value
    return row


class SQLAlchemyTenantDataStore(TenantDataStore):
    """TenantDataStore backed by a SQLAlchemy async engine.

    Each operation opens its own session and commits before returning.

    Attributes:
        _sessionmaker: Factory for short-lived async sessions.
    """

    def __init__(self, sessionmaker: async_sessionmaker[AsyncSession]) -> None:
        """Initialize the store.

        Args:
            sessionmaker: Async sessionmaker bound to the tenant-data database.
        """
        self._sessionmaker = sessionmaker

    @asynccontextmanager
    async def _unit_of_work(self, operation: str, table: str) -> AsyncIterator[AsyncSession]:
        try:
            async with self._sessionmaker() as session:
                yield session
        except (OperationalError, InterfaceError, OSError, TimeoutError) as e:
            logger.warning("Store unavailable during %s on %s: %s", operation, table, e)
            raise StoreUnavailableError(f"Store unavailable during {operation} on {table}", e) from e
        except SQLAlchemyError as e:
            raise StoreOperationError(f"Store rejected {operation} on {table}", e) from e

    async def insert(self, table: str, values: Mapping[str, Any]) -> Row:
        model = _model_for(table)
        for name in values:
            _column(model, name)

        async with self._unit_of_work("insert", table) as session:
            obj = model(**values)
            session.add(obj)
            await session.commit()
            await session.refresh(obj)
            return _to_row(obj)

    async def update(self, table: str, values: Mapping[str, Any], filters: Filters) -> list[Row]:
        model = _model_for(table)
        for name in values:
            _column(model, name)
        stmt = select(model).where(*_conditions(model, filters))

        async with self._unit_of_work("update", table) as session:
            result = await session.execute(stmt)
            objs = list(result.scalars().all())
            for obj in objs:
                for name, value in values.items():
                    setattr(obj, name, value)
            await session.commit()
            for obj in objs:
                await session.refresh(obj)
            return [_to_row(obj) for obj in objs]

    async def delete(self, table: str, filters: Filters) -> int:
        model = _model_for(table)
        stmt = sa_delete(model).where(*_conditions(model, filters))

        async with self._unit_of_work("delete", table) as session:
            result = await session.execute(stmt)
            await session.commit()
            return result.rowcount or 0

    async def select(
        self,
        table: str,
        filters: Filters | None = None,
        columns: Iterable[str] | None = None,
        order_by: str | None = None,
        descending: bool = False,
        limit: int | None = None,
    ) -> list[Row]:
        model = _model_for(table)
        if columns is not None:
            columns = list(columns)
            for name in columns:
                _column(model, name)

        stmt = select(model).where(*_conditions(model, filters))
        if order_by is not None:
            order_column = _column(model, order_by)
            stmt = stmt.order_by(order_column.desc() if descending else order_column.asc())
        if limit is not None:
            stmt = stmt.limit(limit)

        async with self._unit_of_work("select", table) as session:
            result = await session.execute(stmt)
            return [_to_row(obj, columns) for obj in result.scalars().all()]

    async def count(self, table: str, filters: Filters | None = None) -> int:
        model = _model_for(table)
        stmt = select(func.count()).select_from(model).where(*_conditions(model, filters))

        async with self._unit_of_work("count", table) as session:
            result = await session.execute(stmt)
            return int(result.scalar_one())
