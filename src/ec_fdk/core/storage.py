"""Token stores: anything exposing get/set/remove, sync or async."""

from __future__ import annotations

import inspect
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Awaitable, Dict, Mapping, Optional, Protocol, Union

log = logging.getLogger("ec_fdk.storage")

DEFAULT_AUTH_FILE = Path.home() / ".ec-fdk" / "auth.json"

MaybeAwaitable = Union[Any, Awaitable[Any]]


class TokenStore(Protocol):
    def get(self, key: str) -> MaybeAwaitable: ...

    def set(self, key: str, token: str) -> MaybeAwaitable: ...

    def remove(self, key: str) -> MaybeAwaitable: ...


async def maybe_await(value: MaybeAwaitable) -> Any:
    if inspect.isawaitable(value):
        return await value
    return value


class MemoryTokenStore:
    """Process-local store; tokens are gone when the object is."""

    def __init__(self, initial: Optional[Mapping[str, str]] = None):
        self._tokens: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._tokens.get(key)

    def set(self, key: str, token: str) -> None:
        self._tokens[key] = token

    def remove(self, key: str) -> None:
        self._tokens.pop(key, None)

    def __len__(self) -> int:
        return len(self._tokens)


class FileTokenStore:
    """
    JSON file store shared by the CLI and the MCP server.
    - Directory is created with mode 0700, the file is written 0600
    - Writes go through a temp file + os.replace so readers never see a torn file
    - A missing or unreadable file reads as empty
    """

    def __init__(self, path: Union[str, Path, None] = None):
        self.path = Path(path) if path else DEFAULT_AUTH_FILE

    def _read(self) -> Dict[str, str]:
        try:
            with self.path.open("r", encoding="utf-8") as fh:
                data = json.load(fh)
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as exc:
            log.warning("Ignoring unreadable token file %s: %s", self.path, exc)
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, data: Dict[str, str]) -> None:
        self.path.parent.mkdir(mode=0o700, parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=self.path.parent, prefix=".auth-")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(data, fh, indent=2)
            os.chmod(tmp, 0o600)
            os.replace(tmp, self.path)
        except Exception:
            Path(tmp).unlink(missing_ok=True)
            raise

    def get(self, key: str) -> Optional[str]:
        return self._read().get(key)

    def set(self, key: str, token: str) -> None:
        data = self._read()
        data[key] = token
        self._write(data)

    def remove(self, key: str) -> None:
        data = self._read()
        if data.pop(key, None) is not None:
            self._write(data)


__all__ = [
    "TokenStore",
    "MemoryTokenStore",
    "FileTokenStore",
    "DEFAULT_AUTH_FILE",
    "maybe_await",
]
