# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""SQLAlchemy models for the tenant-data store."""

from unihub.infrastructure.database.models.base import Base, IdMixin, TimestampMixin
from unihub.infrastructure.database.models.tenant import (
    Announcement,
    Tenant,
    TenantAdministrator,
    TenantUser,
)

TABLES: dict[str, type[Base]] = {
    Tenant.__tablename__: Tenant,
    TenantAdministrator.__tablename__: TenantAdministrator,
    TenantUser.__tablename__: TenantUser,
    Announcement.__tablename__: Announcement,
}

__all__ = [
    "Base",
    "IdMixin",
    "TimestampMixin",
    "Tenant",
    "TenantAdministrator",
    "TenantUser",
    "Announcement",
    "TABLES",
]
