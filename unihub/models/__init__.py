# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Pydantic models shared across domains."""

from unihub.models.announcement import AnnouncementCreateRequest
from unihub.models.auth import Identity, IdentityDomain, Session, TenantUserStatus
from unihub.models.tenant import (
    Announcement,
    AnnouncementActivity,
    AnnouncementStatus,
    PlatformStats,
    RecentActivity,
    Tenant,
    TenantActivity,
    TenantAdministrator,
    TenantUser,
    TenantWithStats,
)
from unihub.models.tenant_user import TenantUserCreateRequest, TenantUserUpdateRequest

__all__ = [
    "Identity",
    "IdentityDomain",
    "Session",
    "TenantUserStatus",
    "Tenant",
    "TenantAdministrator",
    "TenantUser",
    "TenantWithStats",
    "Announcement",
    "AnnouncementStatus",
    "PlatformStats",
    "RecentActivity",
    "TenantActivity",
    "AnnouncementActivity",
    "TenantUserCreateRequest",
    "TenantUserUpdateRequest",
    "AnnouncementCreateRequest",
]
