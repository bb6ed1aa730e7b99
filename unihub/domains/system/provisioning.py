# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Two-step tenant provisioning with a compensating delete.

The tenant-data store has no transaction spanning several calls, so a
tenant and its administrator are written one after the other:

1. Insert the tenant row. On failure nothing else happens (ABORTED).
2. Insert the administrator row referencing the new tenant id.
3. If step 2 fails, delete the tenant row again (COMPENSATED).
4. If that delete fails too, the tenant is left without an administrator
   (UNCOMPENSATED) and the caller must escalate.

The saga reports what happened; it does not raise for store failures.

Example:
    >>> saga = TenantProvisioningSaga(store)
    >>> result = await saga.run(
    ...     {"name": "Acme U", "domain": "acme.edu"},
    ...     {"email": "admin@acme.edu", "role": "tenant_admin"},
    ... )
    >>> result.outcome
    <ProvisioningOutcome.SUCCEEDED: 'succeeded'>
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from unihub.infrastructure.database.store import StoreError, TenantDataStore

logger = logging.getLogger(__name__)


class ProvisioningOutcome(str, Enum):
    """How a provisioning run ended."""

    SUCCEEDED = "succeeded"
    ABORTED = "aborted"
    COMPENSATED = "compensated"
    UNCOMPENSATED = "uncompensated"


@dataclass(frozen=True)
class ProvisioningResult:
    """Outcome of one provisioning run.

    Attributes:
        outcome: How the run ended.
        tenant: Inserted tenant row; for COMPENSATED it no longer exists.
        administrator: Inserted administrator row on success.
        error: Store failure of the tenant or administrator insert.
        compensation_error: Store failure of the compensating delete.
    """

    outcome: ProvisioningOutcome
    tenant: dict[str, Any] | None = None
    administrator: dict[str, Any] | None = None
    error: StoreError | None = None
    compensation_error: StoreError | None = None

    @property
    def succeeded(self) -> bool:
        return self.outcome is ProvisioningOutcome.SUCCEEDED


class TenantProvisioningSaga:
    """Creates a tenant and its administrator as dependent writes.

    Attributes:
        _store: Tenant-data store.
    """

    def __init__(self, store: TenantDataStore) -> None:
        self._store = store

    async def run(
        self,
        tenant_values: Mapping[str, Any],
        admin_values: Mapping[str, Any],
    ) -> ProvisioningResult:
        """Execute the saga.

        Args:
            tenant_values: Column values of the tenant row.
            admin_values: Column values of the administrator row, without
                tenant_id (filled in from the inserted tenant).

        Returns:
            ProvisioningResult describing the outcome.
        """
        try:
            tenant = await self._store.insert("tenants", tenant_values)
        except StoreError as e:
            logger.error("Tenant insert failed for %s: %s", tenant_values.get("domain"), e)
            return ProvisioningResult(outcome=ProvisioningOutcome.ABORTED, error=e)

        tenant_id = tenant["id"]

        try:
            administrator = await self._store.insert(
                "tenant_administrators",
                {**admin_values, "tenant_id": tenant_id},
            )
        except StoreError as e:
            logger.error("Administrator insert failed for tenant %s: %s", tenant_id, e)
            return await self._compensate(tenant, e)

        logger.info("Provisioned tenant %s with administrator %s", tenant_id, administrator["id"])

        return ProvisioningResult(
            outcome=ProvisioningOutcome.SUCCEEDED,
            tenant=tenant,
            administrator=administrator,
        )

    async def _compensate(self, tenant: dict[str, Any], error: StoreError) -> ProvisioningResult:
        """Delete the tenant inserted in step 1."""
        tenant_id = tenant["id"]

        try:
            await self._store.delete("tenants", {"id": tenant_id})
        except StoreError as e:
            return ProvisioningResult(
                outcome=ProvisioningOutcome.UNCOMPENSATED,
                tenant=tenant,
                error=error,
                compensation_error=e,
            )

        logger.info("Rolled back tenant %s after administrator insert failure", tenant_id)

        return ProvisioningResult(
            outcome=ProvisioningOutcome.COMPENSATED,
            tenant=tenant,
            error=error,
        )
