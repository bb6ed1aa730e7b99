# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Single-slot session holder mirrored to durable storage."""

import logging

from pydantic import ValidationError

from unihub.infrastructure.storage.local import KeyValueStorage
from unihub.models.auth import Session

logger = logging.getLogger(__name__)

DEFAULT_SESSION_KEY = "auth_user"


class SessionStore:
    """Holds at most one Session in memory and one durable copy.

    ``set`` replaces the slot and the durable record together. The first
    ``get`` of a fresh store restores from the durable record (the process
    has just started). A durable record that does not parse back into a
    Session is discarded. Once ``set`` or ``clear`` has run, the memory slot
    is authoritative, so a durable record that could not be deleted does
    not bring the session back in this process.

    Attributes:
        _storage: Durable key-value storage.
        _key: Key of the serialized session.
        _session: The in-memory slot.
        _loaded: Whether the slot reflects the durable record.
    """

    def __init__(self, storage: KeyValueStorage, key: str = DEFAULT_SESSION_KEY) -> None:
        self._storage = storage
        self._key = key
        self._session: Session | None = None
        self._loaded = False

    async def set(self, session: Session) -> None:
        """Replace the current session."""
        payload = session.model_dump_json()
        await self._storage.write(self._key, payload)
        self._session = session
        self._loaded = True

    async def get(self) -> Session | None:
        """Return the current session, restoring it from storage on first use."""
        if self._loaded:
            return self._session

        payload = await self._storage.read(self._key)
        self._loaded = True
        if payload is None:
            return None

        try:
            session = Session.model_validate_json(payload)
        except ValidationError as e:
            logger.warning(
                "Discarding malformed stored session (%d errors)", e.error_count()
            )
            await self._storage.delete(self._key)
            return None

        self._session = session
        return session

    async def clear(self) -> None:
        """Drop the current session; calling it again is a no-op.

        The memory slot is emptied even when the durable delete raises.
        """
        self._session = None
        self._loaded = True
        await self._storage.delete(self._key)
