# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Bcrypt hashing for every secret the platform stores.

Operator hashes come from the configured operator list, tenant
administrator hashes are written during provisioning, and tenant user
hashes by the user service. All of them are checked here.

Example:
    >>> hasher = PasswordHasher(rounds=4)
    >>> stored = hasher.hash("student-secret")
    >>> hasher.verify("student-secret", stored)
    True
"""

import logging

import bcrypt

logger = logging.getLogger(__name__)

# bcrypt only looks at the first 72 bytes of its input.
MAX_SECRET_BYTES = 72


class PasswordHasher:
    """Hashes and checks login secrets with a fixed bcrypt cost.

    The cost is embedded in each hash, so hashes written with an older
    ``rounds`` value keep verifying after the setting changes.

    Attributes:
        _rounds: bcrypt cost factor used for new hashes.
    """

    def __init__(self, rounds: int = 12) -> None:
        self._rounds = rounds

    @property
    def rounds(self) -> int:
        return self._rounds

    def hash(self, secret: str) -> str:
        """Return a salted bcrypt hash of ``secret``.

        Raises:
            ValueError: If the secret is empty or longer than 72 bytes.
        """
        if not secret:
            raise ValueError("Secret cannot be empty")

        encoded = secret.encode("utf-8")
        if len(encoded) > MAX_SECRET_BYTES:
            raise ValueError(f"Secret cannot exceed {MAX_SECRET_BYTES} bytes")

        return bcrypt.hashpw(encoded, bcrypt.gensalt(rounds=self._rounds)).decode("utf-8")

    def verify(self, secret: str, stored_hash: str | None) -> bool:
        """Check a login secret against a stored hash.

        Rows without a hash, empty secrets and unreadable hashes all count
        as a mismatch.
        """
        if not secret or not stored_hash:
            return False

        try:
            return bcrypt.checkpw(secret.encode("utf-8"), stored_hash.encode("utf-8"))
        except ValueError as e:
            logger.warning("Stored secret hash could not be checked: %s", e)
            return False
