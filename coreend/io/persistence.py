"""
Durable storage for the refresh token.

The SDK persists a single string, the refresh token, under one fixed key.
Stores are plain synchronous objects; the default :class:`NullTokenStore`
keeps nothing so environments without local storage run unchanged.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Dict, Optional, Protocol, Union, runtime_checkable

REFRESH_TOKEN_KEY = "coreend-sdk-authentication-refreshToken"

logger = logging.getLogger(__name__)


@runtime_checkable
class TokenStore(Protocol):
    def load(self) -> Optional[str]: ...

    def save(self, value: str) -> None: ...

    def clear(self) -> None: ...


class NullTokenStore:
    """Store used when no persistent storage is available."""

    def load(self) -> Optional[str]:
        return None

    def save(self, value: str) -> None:
        return None

    def clear(self) -> None:
        return None


class MemoryTokenStore:
    """Keeps the slot in process memory. Useful to share a login between instances."""

    def __init__(self, value: Optional[str] = None):
        self._value = value or None

    def load(self) -> Optional[str]:
        return self._value

    def save(self, value: str) -> None:
        self._value = value

    def clear(self) -> None:
        self._value = None


class FileTokenStore:
    """
    Key-value JSON file holding the refresh token under :data:`REFRESH_TOKEN_KEY`.

    Other keys already present in the file are preserved. The file is replaced
    atomically and is readable by its owner only.
    """

    def __init__(self, path: Union[str, Path], key: str = REFRESH_TOKEN_KEY):
        self._path = Path(path).expanduser()
        self._key = key

    @property
    def path(self) -> Path:
        return self._path

    def _read(self) -> Dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable token store {self._path}: {e}")
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, data: Dict[str, str]) -> None:
        """Write ``data`` to a temporary file readable by the owner only, then move it into place."""
        self._path.parent.mkdir(parents=True, exist_ok=True)
        temp_path = self._path.with_name(f"{self._path.name}.tmp")
        try:
            fd = os.open(temp_path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f)
            temp_path.chmod(0o600)
            temp_path.replace(self._path)
        except OSError:
            if temp_path.exists():
                temp_path.unlink()
            raise

    def load(self) -> Optional[str]:
        value = self._read().get(self._key)
        return value if isinstance(value, str) and value else None

    def save(self, value: str) -> None:
        data = self._read()
        data[self._key] = value
        self._write(data)

    def clear(self) -> None:
        data = self._read()
        if self._key not in data:
            return
        del data[self._key]
        self._write(data)


def token_store_from_path(path: Optional[Union[str, Path]]) -> TokenStore:
    """Return a :class:`FileTokenStore` for ``path`` or a no-op store when it is unset."""
    if path is None:
        return NullTokenStore()
    return FileTokenStore(path)
