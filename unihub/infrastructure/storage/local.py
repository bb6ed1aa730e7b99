# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Process-local durable key-value storage.

Used by the session store to survive process restarts. Each key maps to
one file; writes go to a temporary file in the same directory and are
moved into place with ``aiofiles.os.replace``, so readers only ever see
the old or the new value.
"""

import logging
import os
import re
import tempfile
from pathlib import Path
from typing import Protocol

import aiofiles
import aiofiles.os

logger = logging.getLogger(__name__)

_KEY_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+$")


class KeyValueStorage(Protocol):
    """Durable string storage addressed by key."""

    async def read(self, key: str) -> str | None: ...

    async def write(self, key: str, value: str) -> None: ...

    async def delete(self, key: str) -> None: ...


def _validate_key(key: str) -> str:
    if not _KEY_PATTERN.match(key) or key in {".", ".."}:
        raise ValueError(f"Invalid storage key: {key!r}")
    return key


class FileKeyValueStorage:
    """KeyValueStorage keeping one UTF-8 file per key in a directory.

    Attributes:
        directory: Directory holding the value files.
    """

    def __init__(self, directory: str | Path) -> None:
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        return self.directory / _validate_key(key)

    async def read(self, key: str) -> str | None:
        path = self._path(key)
        try:
            async with aiofiles.open(path, "r", encoding="utf-8") as fh:
                return await fh.read()
        except FileNotFoundError:
            return None
        except UnicodeDecodeError:
            logger.warning("Stored value for %s is not valid UTF-8", key)
            return ""

    async def write(self, key: str, value: str) -> None:
        path = self._path(key)
        self.directory.mkdir(parents=True, exist_ok=True)

        fd, tmp_name = tempfile.mkstemp(dir=self.directory, prefix=f".{key}.", suffix=".tmp")
        os.close(fd)
        try:
            async with aiofiles.open(tmp_name, "w", encoding="utf-8") as fh:
                await fh.write(value)
                await fh.flush()
            await aiofiles.os.replace(tmp_name, path)
        except BaseException:
            if Path(tmp_name).exists():
                await aiofiles.os.remove(tmp_name)
            raise

    async def delete(self, key: str) -> None:
        try:
            await aiofiles.os.remove(self._path(key))
        except FileNotFoundError:
            pass


class InMemoryKeyValueStorage:
    """KeyValueStorage kept in a dict; lives as long as the object."""

    def __init__(self) -> None:
        self._values: dict[str, str] = {}

    async def read(self, key: str) -> str | None:
        return self._values.get(_validate_key(key))

    async def write(self, key: str, value: str) -> None:
        self._values[_validate_key(key)] = value

    async def delete(self, key: str) -> None:
        self._values.pop(_validate_key(key), None)
