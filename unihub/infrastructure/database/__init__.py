# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Tenant-data store access.

This package provides:
- connection: async engine and session lifecycle
- models: SQLAlchemy table definitions
- store: the TenantDataStore port and its SQLAlchemy adapter
"""

from unihub.infrastructure.database.connection import (
    DatabaseError,
    check_database_connection,
    close_database,
    create_schema,
    get_engine,
    get_sessionmaker,
    init_database,
)
from unihub.infrastructure.database.store import (
    MultipleRowsError,
    RowNotFoundError,
    SQLAlchemyTenantDataStore,
    StoreError,
    StoreOperationError,
    StoreUnavailableError,
    TenantDataStore,
)

__all__ = [
    "DatabaseError",
    "check_database_connection",
    "init_database",
    "close_database",
    "create_schema",
    "get_engine",
    "get_sessionmaker",
    "TenantDataStore",
    "SQLAlchemyTenantDataStore",
    "StoreError",
    "StoreUnavailableError",
    "StoreOperationError",
    "RowNotFoundError",
    "MultipleRowsError",
]
