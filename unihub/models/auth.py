# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Identity and session models."""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class IdentityDomain(str, Enum):
    """The two disjoint login populations."""

    PLATFORM_OPERATOR = "platform_operator"
    TENANT_USER = "tenant_user"


class TenantUserStatus(str, Enum):
    """Lifecycle status of a tenant user. Only active users may sign in."""

    ACTIVE = "active"
    INACTIVE = "inactive"
    SUSPENDED = "suspended"


class Identity(BaseModel):
    """A resolved, authenticated identity.

    Attributes:
        id: Identifier, unique within its domain.
        email: Login email, unique within its domain.
        domain: Which login population the identity belongs to.
        tenant_id: Owning tenant for tenant users, None for operators.
        profile: Opaque display attributes.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    email: str
    domain: IdentityDomain
    tenant_id: str | None = None
    profile: dict[str, Any] = Field(default_factory=dict)


class Session(BaseModel):
    """The single live authentication of this process."""

    model_config = ConfigDict(frozen=True)

    identity: Identity
    authenticated_at: datetime

    @property
    def domain(self) -> IdentityDomain:
        return self.identity.domain

    @property
    def tenant_id(self) -> str | None:
        return self.identity.tenant_id

    @property
    def profile(self) -> dict[str, Any]:
        return self.identity.profile

    @property
    def user_id(self) -> str:
        return self.identity.id

    @property
    def email(self) -> str:
        return self.identity.email
