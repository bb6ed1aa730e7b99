# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Credential resolution for both identity domains.

A login attempt is one of two credential variants:

- OperatorCredentials: checked against the out-of-band platform operator
  list from settings. Operators have no tenant.
- TenantUserCredentials: checked against the ``tenant_users`` table. Only
  users with status ``active`` exist for the purpose of signing in.

The resolver is read-only; the same inputs over the same store state always
produce the same result.

Example:
    >>> resolver = CredentialResolver(store, settings.platform_operators)
    >>> identity = await resolver.resolve(
    ...     TenantUserCredentials(email="jane@acme.edu", secret="s3cret")
    ... )
    >>> identity.profile["tenant_name"]
    'Acme U'
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import ClassVar

from unihub.core.config.settings import OperatorAccount
from unihub.domains.auth.password import PasswordHasher
from unihub.infrastructure.database.store import (
    MultipleRowsError,
    RowNotFoundError,
    StoreError,
    TenantDataStore,
)
from unihub.models.auth import Identity, IdentityDomain, TenantUserStatus

logger = logging.getLogger(__name__)

OPERATOR_PROFILE_NAME = "Platform Admin"
TENANT_NAME_PLACEHOLDER = "University"


class AuthenticationError(Exception):
    """Base exception for authentication errors."""

    pass


class InvalidCredentialsError(AuthenticationError):
    """Raised when the email/secret pair does not match."""

    pass


class UserNotFoundError(AuthenticationError):
    """Raised when no active tenant user has the given email."""

    pass


@dataclass(frozen=True)
class OperatorCredentials:
    """Login input for the platform operator domain."""

    email: str
    secret: str = field(repr=False)

    domain: ClassVar[IdentityDomain] = IdentityDomain.PLATFORM_OPERATOR


@dataclass(frozen=True)
class TenantUserCredentials:
    """Login input for the tenant user domain."""

    email: str
    secret: str = field(repr=False)

    domain: ClassVar[IdentityDomain] = IdentityDomain.TENANT_USER


Credentials = OperatorCredentials | TenantUserCredentials


def credentials_for(email: str, secret: str, domain: IdentityDomain | str) -> Credentials:
    """Build the credential variant for a raw login form.

    Raises:
        ValueError: If domain is not a known identity domain.
    """
    domain = IdentityDomain(domain)
    if domain is IdentityDomain.PLATFORM_OPERATOR:
        return OperatorCredentials(email=email, secret=secret)
    return TenantUserCredentials(email=email, secret=secret)


class CredentialResolver:
    """Turns login input into an Identity or an authentication failure.

    Attributes:
        _store: Read access to tenants and tenant users.
        _operators: Platform operator credential list.
        _password_hasher: Hash verifier for stored secrets.
    """

    def __init__(
        self,
        store: TenantDataStore,
        operators: Sequence[OperatorAccount],
        password_hasher: PasswordHasher | None = None,
    ) -> None:
        """Initialize the resolver.

        Args:
            store: Tenant-data store.
            operators: Configured platform operator accounts.
            password_hasher: Password hasher (uses default if not provided).
        """
        self._store = store
        self._operators = tuple(operators)
        self._password_hasher = password_hasher or PasswordHasher()

        if not self._operators:
            logger.warning("No platform operators configured; operator sign-in is disabled")

    async def resolve(self, credentials: Credentials) -> Identity:
        """Resolve a credential variant into an Identity.

        Args:
            credentials: Operator or tenant user credentials.

        Returns:
            The authenticated Identity.

        Raises:
            InvalidCredentialsError: If the secret does not match.
            UserNotFoundError: If no active tenant user has the email.
            StoreUnavailableError: If the tenant user lookup cannot complete.
        """
        if isinstance(credentials, OperatorCredentials):
            return self._resolve_operator(credentials)
        if isinstance(credentials, TenantUserCredentials):
            return await self._resolve_tenant_user(credentials)
        raise TypeError(f"Unsupported credentials: {type(credentials).__name__}")

    async def resolve_login(
        self,
        email: str,
        secret: str,
        domain: IdentityDomain | str,
    ) -> Identity:
        """Resolve raw login input for the claimed identity domain."""
        return await self.resolve(credentials_for(email, secret, domain))

    def _resolve_operator(self, credentials: OperatorCredentials) -> Identity:
        account = next(
            (
                op
                for op in self._operators
                if op.email == credentials.email
                and self._password_hasher.verify(
                    credentials.secret, op.password_hash.get_secret_value()
                )
            ),
            None,
        )
        if account is None:
            logger.info("Operator sign-in rejected for %s", credentials.email)
            raise InvalidCredentialsError("Invalid email or password")

        return Identity(
            id=account.id,
            email=account.email,
            domain=IdentityDomain.PLATFORM_OPERATOR,
            tenant_id=None,
            profile={"tenant_name": OPERATOR_PROFILE_NAME},
        )

    async def _resolve_tenant_user(self, credentials: TenantUserCredentials) -> Identity:
        try:
            row = await self._store.select_one(
                "tenant_users",
                {"email": credentials.email, "status": TenantUserStatus.ACTIVE.value},
            )
        except (RowNotFoundError, MultipleRowsError) as e:
            logger.info("No active tenant user for %s", credentials.email)
            raise UserNotFoundError("Invalid credentials or user account not found") from e

        if not self._password_hasher.verify(credentials.secret, row.get("password_hash")):
            logger.info("Tenant user sign-in rejected for %s", credentials.email)
            raise InvalidCredentialsError("Invalid email or password")

        tenant_name = await self._tenant_name(row["tenant_id"])

        return Identity(
            id=row["id"],
            email=row["email"],
            domain=IdentityDomain.TENANT_USER,
            tenant_id=row["tenant_id"],
            profile={
                "first_name": row.get("first_name"),
                "last_name": row.get("last_name"),
                "student_id": row.get("student_id"),
                "department": row.get("department"),
                "year_level": row.get("year_level"),
                "tenant_name": tenant_name,
            },
        )

    async def _tenant_name(self, tenant_id: str) -> str:
        """Look up the display name of a tenant, falling back to a placeholder."""
        try:
            tenant = await self._store.select_one("tenants", {"id": tenant_id})
        except StoreError as e:
            logger.warning("Tenant name lookup failed for %s: %s", tenant_id, e)
            return TENANT_NAME_PLACEHOLDER
        return tenant.get("name") or TENANT_NAME_PLACEHOLDER
