# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Tenant lifecycle management service.

This module provides tenant management for platform operators:
- Tenant creation together with its administrator (see provisioning.py)
- Tenant update, including the administrator email
- Tenant deletion, cascading in the store
- Tenant listing with per-tenant statistics
- Cross-tenant platform statistics and recent activity feeds

Example:
    >>> tenant_service = TenantService(store)
    >>> tenant = await tenant_service.create_tenant(
    ...     name="Acme U",
    ...     domain="acme.edu",
    ...     admin_email="admin@acme.edu",
    ...     admin_secret="changeme",
    ... )
"""

import asyncio
import logging
from datetime import datetime

from unihub.domains.auth.password import PasswordHasher
from unihub.domains.system.provisioning import ProvisioningOutcome, TenantProvisioningSaga
from unihub.domains.system.stats import bucket_by_month, compute_growth_percentage
from unihub.infrastructure.database.store import StoreError, TenantDataStore
from unihub.models.tenant import (
    AnnouncementActivity,
    PlatformStats,
    RecentActivity,
    Tenant,
    TenantActivity,
    TenantWithStats,
)
from unihub.utils.datetime import utc_now

logger = logging.getLogger(__name__)

TENANT_ADMIN_ROLE = "tenant_admin"


class TenantServiceError(Exception):
    """Base exception for tenant management errors."""

    pass


class TenantNotFoundError(TenantServiceError):
    """Raised when tenant is not found."""

    pass


class TenantCreateFailedError(TenantServiceError):
    """Raised when the tenant row could not be inserted."""

    pass


class AdminCreateFailedError(TenantServiceError):
    """Raised when the administrator insert failed and the tenant was removed again."""

    pass


class CompensationFailedError(TenantServiceError):
    """Raised when a tenant without administrator was left behind.

    Attributes:
        tenant_id: Identifier of the orphaned tenant needing manual cleanup.
    """

    def __init__(self, message: str, tenant_id: str) -> None:
        super().__init__(message)
        self.tenant_id = tenant_id


class PartialUpdateError(TenantServiceError):
    """Raised when tenant fields changed but the administrator email did not.

    Attributes:
        tenant: The tenant as stored after its successful update.
    """

    def __init__(self, message: str, tenant: Tenant) -> None:
        super().__init__(message)
        self.tenant = tenant


class TenantService:
    """Tenant lifecycle management service.

    Attributes:
        _store: Tenant-data store.
        _password_hasher: Hasher for administrator secrets.
        _recent_limit: Items per recent-activity feed.
    """

    def __init__(
        self,
        store: TenantDataStore,
        password_hasher: PasswordHasher | None = None,
        recent_limit: int = 5,
    ) -> None:
        """Initialize the tenant service.

        Args:
            store: Tenant-data store.
            password_hasher: Password hasher (uses default if not provided).
            recent_limit: Items per recent-activity feed.
        """
        self._store = store
        self._password_hasher = password_hasher or PasswordHasher()
        self._recent_limit = recent_limit

    async def create_tenant(
        self,
        name: str,
        domain: str,
        admin_email: str,
        admin_secret: str,
    ) -> Tenant:
        """Create a tenant and its administrator.

        Args:
            name: Display name of the university.
            domain: Unique domain name of the university.
            admin_email: Administrator email.
            admin_secret: Administrator initial secret, stored hashed.

        Returns:
            The created Tenant, only after both inserts succeeded.

        Raises:
            TenantCreateFailedError: If the tenant insert fails.
            AdminCreateFailedError: If the administrator insert fails
                (the tenant was deleted again).
            CompensationFailedError: If removing the tenant after a failed
                administrator insert failed as well.
            ValueError: If admin_secret is empty.
        """
        saga = TenantProvisioningSaga(self._store)
        result = await saga.run(
            {"name": name, "domain": domain},
            {
                "email": admin_email,
                "role": TENANT_ADMIN_ROLE,
                "password_hash": self._password_hasher.hash(admin_secret),
            },
        )

        if result.outcome is ProvisioningOutcome.SUCCEEDED:
            return Tenant.model_validate(result.tenant)

        if result.outcome is ProvisioningOutcome.ABORTED:
            raise TenantCreateFailedError(
                f"Failed to create tenant '{domain}': {result.error}"
            ) from result.error

        if result.outcome is ProvisioningOutcome.COMPENSATED:
            raise AdminCreateFailedError(
                f"Failed to create administrator for tenant '{domain}': {result.error}"
            ) from result.error

        tenant_id = result.tenant["id"]
        logger.critical(
            "Tenant %s (%s) has no administrator and could not be removed; "
            "manual cleanup required: %s",
            tenant_id,
            domain,
            result.compensation_error,
        )
        raise CompensationFailedError(
            f"Tenant '{domain}' ({tenant_id}) was left without administrator",
            tenant_id=tenant_id,
        ) from result.compensation_error

    async def update_tenant(
        self,
        tenant_id: str,
        name: str,
        domain: str,
        admin_email: str,
    ) -> Tenant:
        """Update tenant fields, then the administrator email.

        There is no rollback: when the administrator update fails the tenant
        keeps its new fields and PartialUpdateError reports it.

        Args:
            tenant_id: Tenant identifier.
            name: New display name.
            domain: New domain name.
            admin_email: New administrator email.

        Returns:
            Updated Tenant.

        Raises:
            TenantNotFoundError: If tenant not found.
            PartialUpdateError: If the administrator email was not updated.
        """
        rows = await self._store.update(
            "tenants",
            {"name": name, "domain": domain},
            {"id": tenant_id},
        )
        if not rows:
            raise TenantNotFoundError(f"Tenant not found: {tenant_id}")

        tenant = Tenant.model_validate(rows[0])

        try:
            admins = await self._store.update(
                "tenant_administrators",
                {"email": admin_email},
                {"tenant_id": tenant_id},
            )
        except StoreError as e:
            logger.error("Administrator email update failed for tenant %s: %s", tenant_id, e)
            raise PartialUpdateError(
                f"Tenant {tenant_id} updated but administrator email was not: {e}",
                tenant=tenant,
            ) from e

        if not admins:
            logger.error("Tenant %s has no administrator to update", tenant_id)
            raise PartialUpdateError(
                f"Tenant {tenant_id} updated but it has no administrator record",
                tenant=tenant,
            )

        logger.info("Updated tenant: %s", tenant.domain)

        return tenant

    async def delete_tenant(self, tenant_id: str) -> None:
        """Delete a tenant; the store removes its dependent rows.

        Args:
            tenant_id: Tenant identifier.

        Raises:
            TenantNotFoundError: If tenant not found.
        """
        deleted = await self._store.delete("tenants", {"id": tenant_id})
        if not deleted:
            raise TenantNotFoundError(f"Tenant not found: {tenant_id}")

        logger.info("Deleted tenant: %s", tenant_id)

    async def get_tenant(self, tenant_id: str) -> Tenant | None:
        """Get tenant by ID.

        Returns:
            Tenant if found, None otherwise.
        """
        rows = await self._store.select("tenants", {"id": tenant_id}, limit=1)
        return Tenant.model_validate(rows[0]) if rows else None

    async def list_tenants_with_stats(self) -> list[TenantWithStats]:
        """List tenants newest first with announcement count and admin email.

        Issues two store calls per tenant, concurrently.

        Returns:
            One TenantWithStats per tenant.
        """
        tenants = await self._store.select("tenants", order_by="created_at", descending=True)
        return list(await asyncio.gather(*(self._with_stats(row) for row in tenants)))

    async def _with_stats(self, row: dict) -> TenantWithStats:
        announcements_count, admins = await asyncio.gather(
            self._store.count("announcements", {"tenant_id": row["id"]}),
            self._store.select(
                "tenant_administrators",
                {"tenant_id": row["id"]},
                columns=["email"],
                limit=1,
            ),
        )
        return TenantWithStats.model_validate(
            {
                **row,
                "announcements_count": announcements_count or 0,
                "admin_email": admins[0]["email"] if admins else None,
            }
        )

    async def platform_stats(self, now: datetime | None = None) -> PlatformStats:
        """Compute cross-tenant counts and month-over-month tenant growth.

        Args:
            now: Reference time for calendar months (defaults to current UTC).

        Returns:
            PlatformStats.
        """
        now = now or utc_now()

        tenant_count, announcement_count, tenant_user_count, created = await asyncio.gather(
            self._store.count("tenants"),
            self._store.count("announcements"),
            self._store.count("tenant_users"),
            self._store.select(
                "tenants",
                columns=["created_at"],
                order_by="created_at",
                descending=True,
            ),
        )

        buckets = bucket_by_month((row["created_at"] for row in created), now)

        return PlatformStats(
            tenant_count=tenant_count,
            announcement_count=announcement_count,
            tenant_user_count=tenant_user_count,
            growth_percentage=compute_growth_percentage(buckets.this_month, buckets.last_month),
            this_month_count=buckets.this_month,
            last_month_count=buckets.last_month,
        )

    async def recent_activity(self) -> RecentActivity:
        """Fetch the newest tenants and the newest announcements.

        The two feeds are independent and are not merged.

        Returns:
            RecentActivity.
        """
        tenants, announcements = await asyncio.gather(
            self._store.select(
                "tenants",
                columns=["name", "created_at"],
                order_by="created_at",
                descending=True,
                limit=self._recent_limit,
            ),
            self._store.select(
                "announcements",
                columns=["title", "created_at", "tenant_id"],
                order_by="created_at",
                descending=True,
                limit=self._recent_limit,
            ),
        )

        tenant_names: dict[str, str] = {}
        tenant_ids = {row["tenant_id"] for row in announcements}
        if tenant_ids:
            owners = await self._store.select(
                "tenants",
                {"id": tenant_ids},
                columns=["id", "name"],
            )
            tenant_names = {row["id"]: row["name"] for row in owners}

        return RecentActivity(
            tenants=[TenantActivity.model_validate(row) for row in tenants],
            announcements=[
                AnnouncementActivity(
                    title=row["title"],
                    created_at=row["created_at"],
                    tenant_name=tenant_names.get(row["tenant_id"]),
                )
                for row in announcements
            ],
        )
