# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""System domain for platform-level administration.

This module provides services for:
- Tenant provisioning (tenant + administrator with compensating delete)
- Tenant update and deletion
- Cross-tenant statistics for platform dashboards
"""

from unihub.domains.system.provisioning import (
    ProvisioningOutcome,
    ProvisioningResult,
    TenantProvisioningSaga,
)
from unihub.domains.system.stats import bucket_by_month, compute_growth_percentage
from unihub.domains.system.tenant_service import (
    AdminCreateFailedError,
    CompensationFailedError,
    PartialUpdateError,
    TenantCreateFailedError,
    TenantNotFoundError,
    TenantService,
    TenantServiceError,
)

__all__ = [
    "TenantService",
    "TenantServiceError",
    "TenantNotFoundError",
    "TenantCreateFailedError",
    "AdminCreateFailedError",
    "CompensationFailedError",
    "PartialUpdateError",
    "TenantProvisioningSaga",
    "ProvisioningOutcome",
    "ProvisioningResult",
    "bucket_by_month",
    "compute_growth_percentage",
]
