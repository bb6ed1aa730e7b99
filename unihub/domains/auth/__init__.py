# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Authentication domain.

This module provides:
- Credential resolution for platform operators and tenant users
- The single-slot session store with a durable mirror
- Sign-in / sign-out orchestration
- The route guard decision for protected pages
- bcrypt password hashing
"""

from unihub.domains.auth.credentials import (
    AuthenticationError,
    CredentialResolver,
    Credentials,
    InvalidCredentialsError,
    OperatorCredentials,
    TenantUserCredentials,
    UserNotFoundError,
    credentials_for,
)
from unihub.domains.auth.guard import (
    Allow,
    GuardDecision,
    RedirectToLogin,
    RedirectToOwnDashboard,
    decide,
)
from unihub.domains.auth.password import PasswordHasher
from unihub.domains.auth.service import AuthSessionManager, SessionRevoker
from unihub.domains.auth.session_store import SessionStore

__all__ = [
    # Credentials
    "CredentialResolver",
    "Credentials",
    "OperatorCredentials",
    "TenantUserCredentials",
    "credentials_for",
    "AuthenticationError",
    "InvalidCredentialsError",
    "UserNotFoundError",
    # Session
    "SessionStore",
    "AuthSessionManager",
    "SessionRevoker",
    # Guard
    "decide",
    "GuardDecision",
    "Allow",
    "RedirectToLogin",
    "RedirectToOwnDashboard",
    # Password
    "PasswordHasher",
]
