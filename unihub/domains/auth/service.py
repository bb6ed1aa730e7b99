# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Authentication service for sign-in and sign-out.

This module provides the AuthSessionManager that orchestrates:
- Sign-in: credential resolution, then session persistence
- Sign-out: local session removal, then best-effort backend revocation
- Access to the current session, restored after a process restart

Example:
    >>> manager = AuthSessionManager(resolver, SessionStore(storage))
    >>> session = await manager.sign_in("admin@platform.com", "secret", "platform_operator")
    >>> session.domain
    <IdentityDomain.PLATFORM_OPERATOR: 'platform_operator'>
    >>> await manager.sign_out()
"""

import logging
from typing import Protocol

from unihub.domains.auth.credentials import CredentialResolver, credentials_for
from unihub.domains.auth.session_store import SessionStore
from unihub.models.auth import IdentityDomain, Session
from unihub.utils.datetime import utc_now
from unihub.utils.logging import bind_context, clear_context

logger = logging.getLogger(__name__)


class SessionRevoker(Protocol):
    """Backend-side session revocation hook."""

    async def revoke(self, session: Session | None) -> None: ...


class AuthSessionManager:
    """Owns the process-wide authenticated session.

    Attributes:
        _resolver: Credential resolver.
        _session_store: Session holder with durable mirror.
        _revoker: Optional backend session revocation hook.
    """

    def __init__(
        self,
        resolver: CredentialResolver,
        session_store: SessionStore,
        revoker: SessionRevoker | None = None,
    ) -> None:
        """Initialize the manager.

        Args:
            resolver: Credential resolver.
            session_store: Session store.
            revoker: Backend revocation hook, skipped when not provided.
        """
        self._resolver = resolver
        self._session_store = session_store
        self._revoker = revoker

    async def sign_in(
        self,
        email: str,
        secret: str,
        domain: IdentityDomain | str,
    ) -> Session:
        """Authenticate and make the result the current session.

        Any previous session is replaced. On failure the current session is
        left untouched.

        Args:
            email: Login email.
            secret: Plain text secret.
            domain: Claimed identity domain.

        Returns:
            The new Session.

        Raises:
            InvalidCredentialsError: If the secret does not match.
            UserNotFoundError: If no active tenant user has the email.
            StoreUnavailableError: If the store cannot be reached.
            ValueError: If domain is not a known identity domain.
        """
        identity = await self._resolver.resolve(credentials_for(email, secret, domain))
        session = Session(identity=identity, authenticated_at=utc_now())
        await self._session_store.set(session)

        clear_context()
        bind_context(user_id=identity.id, identity_domain=identity.domain.value)
        logger.info("Signed in %s as %s", identity.id, identity.domain.value)

        return session

    async def sign_out(self) -> None:
        """End the current session. Never raises.

        Storage failures are logged; the in-memory session is dropped
        regardless and backend revocation is still attempted.
        """
        try:
            session = await self._session_store.get()
        except Exception:
            logger.warning("Reading the stored session failed", exc_info=True)
            session = None

        try:
            await self._session_store.clear()
        except Exception:
            logger.warning("Removing the stored session failed", exc_info=True)
        clear_context()

        if self._revoker is None:
            return

        try:
            await self._revoker.revoke(session)
        except Exception:
            logger.warning("Backend session revocation failed", exc_info=True)

    async def current_session(self) -> Session | None:
        """Return the current session, if any."""
        return await self._session_store.get()

    async def is_authenticated(self) -> bool:
        return await self.current_session() is not None
