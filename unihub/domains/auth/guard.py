# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Access decision for protected pages.

``decide`` is a pure function of the current session and the identity
domain a page requires. It is meant to run on every protected navigation.
A signed-in user asking for the other domain's page is sent to their own
dashboard, never to the login page of the requested domain.
"""

from dataclasses import dataclass

from unihub.models.auth import IdentityDomain, Session

LOGIN_PATHS: dict[IdentityDomain, str] = {
    IdentityDomain.PLATFORM_OPERATOR: "/platform/login",
    IdentityDomain.TENANT_USER: "/university/login",
}

DASHBOARD_PATHS: dict[IdentityDomain, str] = {
    IdentityDomain.PLATFORM_OPERATOR: "/platform/dashboard",
    IdentityDomain.TENANT_USER: "/university/dashboard",
}


@dataclass(frozen=True)
class Allow:
    """Render the requested page."""


@dataclass(frozen=True)
class RedirectToLogin:
    """Send the visitor to the login page of the required domain."""

    domain: IdentityDomain

    @property
    def path(self) -> str:
        return LOGIN_PATHS[self.domain]


@dataclass(frozen=True)
class RedirectToOwnDashboard:
    """Send a signed-in user to the dashboard of their own domain."""

    domain: IdentityDomain

    @property
    def path(self) -> str:
        return DASHBOARD_PATHS[self.domain]


GuardDecision = Allow | RedirectToLogin | RedirectToOwnDashboard


def decide(session: Session | None, required_domain: IdentityDomain | str) -> GuardDecision:
    """Decide whether a protected page may be shown.

    Args:
        session: The current session, or None when signed out.
        required_domain: Identity domain the page belongs to.

    Returns:
        Allow, RedirectToLogin(required_domain) or
        RedirectToOwnDashboard(session.domain).

    Raises:
        ValueError: If required_domain is not a known identity domain.
    """
    required = IdentityDomain(required_domain)

    if session is None:
        return RedirectToLogin(required)
    if session.domain != required:
        return RedirectToOwnDashboard(session.domain)
    return Allow()
