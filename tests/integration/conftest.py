# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Pytest fixtures for store integration tests.

Runs the SQLAlchemy store against a throwaway SQLite file through
aiosqlite, or against TEST_DATABASE_URL when it is set.
"""

import os

import pytest
import pytest_asyncio

from unihub.infrastructure.database.connection import create_engine_for_url, create_sessionmaker
from unihub.infrastructure.database.models.base import Base
from unihub.infrastructure.database.store import SQLAlchemyTenantDataStore


@pytest.fixture
def database_url(tmp_path) -> str:
    """Get database URL for tests."""
    return os.environ.get("TEST_DATABASE_URL", f"sqlite+aiosqlite:///{tmp_path / 'unihub.db'}")


@pytest_asyncio.fixture(scope="function")
async def db_engine(database_url: str):
    """Create async engine with a fresh schema."""
    engine = create_engine_for_url(database_url)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
def sql_store(db_engine) -> SQLAlchemyTenantDataStore:
    """Create the SQLAlchemy store over the test engine."""
    return SQLAlchemyTenantDataStore(create_sessionmaker(db_engine))
