# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Durable process-local storage."""

from unihub.infrastructure.storage.local import (
    FileKeyValueStorage,
    InMemoryKeyValueStorage,
    KeyValueStorage,
)

__all__ = [
    "KeyValueStorage",
    "FileKeyValueStorage",
    "InMemoryKeyValueStorage",
]
