# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Tenant user management service.

Tenant users are the end users who sign in through the tenant user
domain. This service is the only writer of their credential hashes.

Example:
    >>> user_service = TenantUserService(store)
    >>> user = await user_service.create_user(
    ...     TenantUserCreateRequest(
    ...         tenant_id=tenant.id,
    ...         email="jane@acme.edu",
    ...         first_name="Jane",
    ...         last_name="Doe",
    ...         password="s3cret",
    ...     )
    ... )
"""

import logging

from unihub.domains.auth.password import PasswordHasher
from unihub.infrastructure.database.store import StoreOperationError, TenantDataStore
from unihub.models.tenant import TenantUser
from unihub.models.tenant_user import TenantUserCreateRequest, TenantUserUpdateRequest

logger = logging.getLogger(__name__)


class TenantUserServiceError(Exception):
    """Base exception for tenant user service errors."""

    pass


class TenantUserNotFoundError(TenantUserServiceError):
    """Raised when a tenant user is not found."""

    pass


class TenantUserEmailExistsError(TenantUserServiceError):
    """Raised when the email is already used by another tenant user."""

    pass


class TenantUserService:
    """CRUD for tenant users.

    Attributes:
        _store: Tenant-data store.
        _password_hasher: Hasher for user secrets.
    """

    def __init__(
        self,
        store: TenantDataStore,
        password_hasher: PasswordHasher | None = None,
    ) -> None:
        self._store = store
        self._password_hasher = password_hasher or PasswordHasher()

    async def create_user(self, request: TenantUserCreateRequest) -> TenantUser:
        """Create a tenant user with a hashed secret.

        Raises:
            TenantUserEmailExistsError: If the email is already taken.
            StoreOperationError: If the store rejects the row (e.g. unknown tenant).
        """
        if await self._store.count("tenant_users", {"email": request.email}):
            raise TenantUserEmailExistsError(f"Tenant user with email '{request.email}' already exists")

        values = request.model_dump(exclude={"password"})
        values["status"] = request.status.value
        values["password_hash"] = self._password_hasher.hash(request.password)

        row = await self._store.insert("tenant_users", values)

        logger.info("Tenant user created: %s (tenant=%s)", row["id"], row["tenant_id"])

        return TenantUser.model_validate(row)

    async def get_user(self, user_id: str) -> TenantUser:
        """Get a tenant user by ID.

        Raises:
            TenantUserNotFoundError: If user not found.
        """
        rows = await self._store.select("tenant_users", {"id": user_id}, limit=1)
        if not rows:
            raise TenantUserNotFoundError(f"Tenant user {user_id} not found")
        return TenantUser.model_validate(rows[0])

    async def list_users(self, tenant_id: str | None = None) -> list[TenantUser]:
        """List tenant users newest first, optionally for one tenant."""
        filters = {"tenant_id": tenant_id} if tenant_id is not None else None
        rows = await self._store.select(
            "tenant_users",
            filters,
            order_by="created_at",
            descending=True,
        )
        return [TenantUser.model_validate(row) for row in rows]

    async def update_user(self, user_id: str, request: TenantUserUpdateRequest) -> TenantUser:
        """Apply a partial update. A new password replaces the stored hash.

        Raises:
            TenantUserNotFoundError: If user not found.
            TenantUserEmailExistsError: If the new email is already taken.
        """
        values = request.model_dump(exclude={"password"}, exclude_unset=True)
        if request.status is not None:
            values["status"] = request.status.value
        if request.password is not None:
            values["password_hash"] = self._password_hasher.hash(request.password)

        if not values:
            return await self.get_user(user_id)

        try:
            rows = await self._store.update("tenant_users", values, {"id": user_id})
        except StoreOperationError as e:
            if "email" in values:
                raise TenantUserEmailExistsError(
                    f"Tenant user with email '{values['email']}' already exists"
                ) from e
            raise

        if not rows:
            raise TenantUserNotFoundError(f"Tenant user {user_id} not found")

        logger.info("Tenant user updated: %s", user_id)

        return TenantUser.model_validate(rows[0])

    async def delete_user(self, user_id: str) -> None:
        """Delete a tenant user.

        Raises:
            TenantUserNotFoundError: If user not found.
        """
        deleted = await self._store.delete("tenant_users", {"id": user_id})
        if not deleted:
            raise TenantUserNotFoundError(f"Tenant user {user_id} not found")

        logger.info("Tenant user deleted: %s", user_id)
