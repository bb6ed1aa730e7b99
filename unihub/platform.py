# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Service wiring.

Builds every service of the platform from Settings and a tenant-data store.

Example:
    >>> platform = await create_platform()
    >>> await platform.auth.sign_in("admin@platform.com", "secret", "platform_operator")
    >>> stats = await platform.tenants.platform_stats()
    >>> await shutdown_platform()
"""

from dataclasses import dataclass

from unihub.core.config.settings import Settings, get_settings
from unihub.domains.announcement.service import AnnouncementService
from unihub.domains.auth.credentials import CredentialResolver
from unihub.domains.auth.password import PasswordHasher
from unihub.domains.auth.service import AuthSessionManager, SessionRevoker
from unihub.domains.auth.session_store import SessionStore
from unihub.domains.system.tenant_service import TenantService
from unihub.domains.tenant_user.service import TenantUserService
from unihub.infrastructure.database.connection import (
    DatabaseError,
    check_database_connection,
    close_database,
    create_schema,
    get_engine,
    get_sessionmaker,
    init_database,
)
from unihub.infrastructure.database.store import SQLAlchemyTenantDataStore, TenantDataStore
from unihub.infrastructure.storage.local import FileKeyValueStorage, KeyValueStorage
from unihub.utils.logging import get_logger, setup_logging

logger = get_logger(__name__)


@dataclass
class Platform:
    """All services sharing one store and one session."""

    store: TenantDataStore
    auth: AuthSessionManager
    tenants: TenantService
    tenant_users: TenantUserService
    announcements: AnnouncementService


def build_platform(
    settings: Settings,
    store: TenantDataStore,
    storage: KeyValueStorage | None = None,
    revoker: SessionRevoker | None = None,
) -> Platform:
    """Wire services over an existing store.

    Args:
        settings: Application settings.
        store: Tenant-data store.
        storage: Durable session storage; a file store under
            settings.auth.session_storage_dir when not provided.
        revoker: Optional backend session revocation hook.

    Returns:
        Platform.
    """
    hasher = PasswordHasher(rounds=settings.auth.bcrypt_rounds)
    storage = storage or FileKeyValueStorage(settings.auth.session_storage_dir)

    resolver = CredentialResolver(store, settings.platform_operators, hasher)
    session_store = SessionStore(storage, key=settings.auth.session_key)

    return Platform(
        store=store,
        auth=AuthSessionManager(resolver, session_store, revoker),
        tenants=TenantService(store, hasher, recent_limit=settings.recent_activity_limit),
        tenant_users=TenantUserService(store, hasher),
        announcements=AnnouncementService(store),
    )


async def create_platform(
    settings: Settings | None = None,
    create_tables: bool = False,
) -> Platform:
    """Configure logging, connect the database and wire all services.

    Args:
        settings: Application settings (cached settings when not provided).
        create_tables: Create missing tables before returning.

    Returns:
        Platform backed by the SQLAlchemy store.

    Raises:
        DatabaseError: If the store cannot be reached.
    """
    settings = settings or get_settings()
    setup_logging(settings)

    await init_database(settings)
    if not await check_database_connection():
        await close_database()
        raise DatabaseError("Tenant-data store is not reachable")
    if create_tables:
        await create_schema(get_engine())

    logger.info("Platform ready", environment=settings.environment)

    return build_platform(settings, SQLAlchemyTenantDataStore(get_sessionmaker()))


async def shutdown_platform() -> None:
    """Release database connections."""
    await close_database()
