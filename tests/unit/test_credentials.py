# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for credential resolution."""

import pytest

from unihub.domains.auth.credentials import (
    CredentialResolver,
    InvalidCredentialsError,
    OperatorCredentials,
    TenantUserCredentials,
    UserNotFoundError,
    credentials_for,
)
from unihub.core.config.settings import OperatorAccount
from unihub.infrastructure.database.store import StoreUnavailableError
from unihub.models.auth import IdentityDomain


class TestCredentialsFor:
    """Tests for building credential variants from a login form."""

    def test_operator_domain(self) -> None:
        credentials = credentials_for("a@b.c", "x", "platform_operator")

        assert isinstance(credentials, OperatorCredentials)
        assert credentials.domain is IdentityDomain.PLATFORM_OPERATOR

    def test_tenant_user_domain(self) -> None:
        credentials = credentials_for("a@b.c", "x", IdentityDomain.TENANT_USER)

        assert isinstance(credentials, TenantUserCredentials)

    def test_unknown_domain_raises_error(self) -> None:
        with pytest.raises(ValueError):
            credentials_for("a@b.c", "x", "super_admin")

    def test_secret_not_in_repr(self) -> None:
        assert "hunter2" not in repr(OperatorCredentials(email="a@b.c", secret="hunter2"))


class TestOperatorResolution:
    """Tests for the platform operator domain."""

    @pytest.mark.asyncio
    async def test_valid_operator(self, resolver, operator_secret) -> None:
        identity = await resolver.resolve(
            OperatorCredentials(email="admin@platform.com", secret=operator_secret)
        )

        assert identity.id == "operator-1"
        assert identity.domain is IdentityDomain.PLATFORM_OPERATOR
        assert identity.tenant_id is None
        assert identity.profile == {"tenant_name": "Platform Admin"}

    @pytest.mark.asyncio
    async def test_wrong_secret(self, resolver) -> None:
        with pytest.raises(InvalidCredentialsError):
            await resolver.resolve(OperatorCredentials(email="admin@platform.com", secret="nope"))

    @pytest.mark.asyncio
    async def test_unknown_email(self, resolver, operator_secret) -> None:
        with pytest.raises(InvalidCredentialsError):
            await resolver.resolve(
                OperatorCredentials(email="other@platform.com", secret=operator_secret)
            )

    @pytest.mark.asyncio
    async def test_does_not_touch_store(self, resolver, seeded_store, operator_secret) -> None:
        await resolver.resolve(
            OperatorCredentials(email="admin@platform.com", secret=operator_secret)
        )

        assert seeded_store.calls == []

    @pytest.mark.asyncio
    async def test_no_operators_configured(self, seeded_store, password_hasher) -> None:
        resolver = CredentialResolver(seeded_store, [], password_hasher)

        with pytest.raises(InvalidCredentialsError):
            await resolver.resolve(OperatorCredentials(email="admin@platform.com", secret="x"))

    @pytest.mark.asyncio
    async def test_shared_email_matches_each_secret(
        self, seeded_store, password_hasher, operator_account, operator_secret
    ) -> None:
        """Test that every entry sharing an email can sign in with its own secret."""
        second = OperatorAccount(
            id="operator-2",
            email="admin@platform.com",
            password_hash=password_hasher.hash("second-secret"),
        )
        resolver = CredentialResolver(seeded_store, [operator_account, second], password_hasher)

        first = await resolver.resolve(
            OperatorCredentials(email="admin@platform.com", secret=operator_secret)
        )
        other = await resolver.resolve(
            OperatorCredentials(email="admin@platform.com", secret="second-secret")
        )

        assert first.id == "operator-1"
        assert other.id == "operator-2"


class TestTenantUserResolution:
    """Tests for the tenant user domain."""

    @pytest.mark.asyncio
    async def test_active_user(self, resolver, tenant_user_secret) -> None:
        identity = await resolver.resolve(
            TenantUserCredentials(email="jane@acme.edu", secret=tenant_user_secret)
        )

        assert identity.id == "user-jane"
        assert identity.email == "jane@acme.edu"
        assert identity.domain is IdentityDomain.TENANT_USER
        assert identity.tenant_id == "tenant-acme"
        assert identity.profile == {
            "first_name": "Jane",
            "last_name": "Doe",
            "student_id": "S-1001",
            "department": "Physics",
            "year_level": "2",
            "tenant_name": "Acme U",
        }

    @pytest.mark.asyncio
    @pytest.mark.parametrize("email", ["bob@acme.edu", "sue@acme.edu"])
    async def test_non_active_user_is_not_found(self, resolver, tenant_user_secret, email) -> None:
        """Test that inactive and suspended users cannot sign in even with the right secret."""
        with pytest.raises(UserNotFoundError):
            await resolver.resolve(TenantUserCredentials(email=email, secret=tenant_user_secret))

    @pytest.mark.asyncio
    async def test_unknown_email(self, resolver, tenant_user_secret) -> None:
        with pytest.raises(UserNotFoundError):
            await resolver.resolve(
                TenantUserCredentials(email="nobody@acme.edu", secret=tenant_user_secret)
            )

    @pytest.mark.asyncio
    async def test_wrong_secret(self, resolver) -> None:
        with pytest.raises(InvalidCredentialsError):
            await resolver.resolve(TenantUserCredentials(email="jane@acme.edu", secret="wrong"))

    @pytest.mark.asyncio
    async def test_operator_email_is_not_a_tenant_user(self, resolver, operator_secret) -> None:
        """Test that the two identity domains are disjoint."""
        with pytest.raises(UserNotFoundError):
            await resolver.resolve_login("admin@platform.com", operator_secret, "tenant_user")

    @pytest.mark.asyncio
    async def test_tenant_name_falls_back_when_lookup_fails(
        self, resolver, seeded_store, tenant_user_secret
    ) -> None:
        seeded_store.fail("select", "tenants")

        identity = await resolver.resolve(
            TenantUserCredentials(email="jane@acme.edu", secret=tenant_user_secret)
        )

        assert identity.profile["tenant_name"] == "University"

    @pytest.mark.asyncio
    async def test_tenant_name_falls_back_when_tenant_missing(
        self, resolver, seeded_store, password_hasher
    ) -> None:
        seeded_store.seed(
            "tenant_users",
            tenant_id="tenant-gone",
            email="orphan@acme.edu",
            first_name="Or",
            last_name="Phan",
            password_hash=password_hasher.hash("pw"),
        )

        identity = await resolver.resolve_login("orphan@acme.edu", "pw", "tenant_user")

        assert identity.profile["tenant_name"] == "University"

    @pytest.mark.asyncio
    async def test_store_unavailable_propagates(self, resolver, seeded_store) -> None:
        seeded_store.fail("select", "tenant_users", StoreUnavailableError("timeout"))

        with pytest.raises(StoreUnavailableError):
            await resolver.resolve_login("jane@acme.edu", "x", "tenant_user")

    @pytest.mark.asyncio
    async def test_resolution_is_deterministic(self, resolver, tenant_user_secret) -> None:
        credentials = TenantUserCredentials(email="jane@acme.edu", secret=tenant_user_secret)

        first = await resolver.resolve(credentials)
        second = await resolver.resolve(credentials)

        assert first == second

    @pytest.mark.asyncio
    async def test_resolution_does_not_write(self, resolver, seeded_store, tenant_user_secret) -> None:
        await resolver.resolve_login("jane@acme.edu", tenant_user_secret, "tenant_user")

        assert {operation for operation, _ in seeded_store.calls} == {"select"}
