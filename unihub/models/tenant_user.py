# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Request models for tenant user management."""

from pydantic import BaseModel, Field

from unihub.models.auth import TenantUserStatus


class TenantUserCreateRequest(BaseModel):
    """Fields of a new tenant user."""

    tenant_id: str
    email: str = Field(min_length=3, max_length=255)
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    password: str = Field(min_length=1, repr=False)
    student_id: str | None = None
    department: str | None = None
    year_level: str | None = None
    status: TenantUserStatus = TenantUserStatus.ACTIVE


class TenantUserUpdateRequest(BaseModel):
    """Partial update of a tenant user; unset fields are left unchanged."""

    email: str | None = Field(default=None, min_length=3, max_length=255)
    first_name: str | None = Field(default=None, min_length=1, max_length=100)
    last_name: str | None = Field(default=None, min_length=1, max_length=100)
    password: str | None = Field(default=None, min_length=1, repr=False)
    student_id: str | None = None
    department: str | None = None
    year_level: str | None = None
    status: TenantUserStatus | None = None
