# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Tenant user domain."""

from unihub.domains.tenant_user.service import (
    TenantUserEmailExistsError,
    TenantUserNotFoundError,
    TenantUserService,
    TenantUserServiceError,
)

__all__ = [
    "TenantUserService",
    "TenantUserServiceError",
    "TenantUserNotFoundError",
    "TenantUserEmailExistsError",
]
