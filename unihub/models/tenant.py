# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Tenant registry models.

Pydantic views over store rows plus the derived, non-persisted
statistics returned to platform dashboards.
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from unihub.models.auth import TenantUserStatus


class AnnouncementStatus(str, Enum):
    """Publication status of an announcement."""

    DRAFT = "draft"
    PUBLISHED = "published"
    ARCHIVED = "archived"


class Tenant(BaseModel):
    """One university account."""

    model_config = ConfigDict(extra="ignore")

    id: str
    name: str
    domain: str
    created_at: datetime
    updated_at: datetime


class TenantAdministrator(BaseModel):
    """The administrator record kept in lock-step with its tenant."""

    model_config = ConfigDict(extra="ignore")

    id: str
    tenant_id: str
    email: str
    role: str
    created_at: datetime
    updated_at: datetime


class TenantUser(BaseModel):
    """A tenant end user. The credential hash is never exposed."""

    model_config = ConfigDict(extra="ignore")

    id: str
    tenant_id: str
    email: str
    first_name: str
    last_name: str
    student_id: str | None = None
    department: str | None = None
    year_level: str | None = None
    status: TenantUserStatus
    created_at: datetime
    updated_at: datetime


class Announcement(BaseModel):
    """A tenant-scoped announcement."""

    model_config = ConfigDict(extra="ignore")

    id: str
    tenant_id: str
    title: str
    content: str
    status: AnnouncementStatus
    created_at: datetime
    updated_at: datetime


class TenantWithStats(Tenant):
    """Tenant row enriched for the platform tenant list.

    Attributes:
        announcements_count: Announcements owned by the tenant, 0 when none.
        admin_email: Administrator email, None if the record is missing.
    """

    announcements_count: int = 0
    admin_email: str | None = None


class PlatformStats(BaseModel):
    """Cross-tenant aggregate counts for the platform overview.

    Attributes:
        tenant_count: Number of tenants.
        announcement_count: Number of announcements across tenants.
        tenant_user_count: Number of tenant users across tenants.
        growth_percentage: Month-over-month tenant growth, 0 at zero baseline.
        this_month_count: Tenants created in the current calendar month.
        last_month_count: Tenants created in the previous calendar month.
    """

    tenant_count: int
    announcement_count: int
    tenant_user_count: int
    growth_percentage: int
    this_month_count: int
    last_month_count: int


class TenantActivity(BaseModel):
    """A recently created tenant."""

    name: str
    created_at: datetime


class AnnouncementActivity(BaseModel):
    """A recently created announcement."""

    title: str
    created_at: datetime
    tenant_name: str | None = None


class RecentActivity(BaseModel):
    """Two independent newest-first feeds."""

    tenants: list[TenantActivity] = Field(default_factory=list)
    announcements: list[AnnouncementActivity] = Field(default_factory=list)
