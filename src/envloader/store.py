from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, MutableMapping, Optional, Protocol

DEFAULT_ENV_PATH = ".env"


class EnvFileNotFoundError(FileNotFoundError):
    """Raised when an env file path does not resolve to a readable file."""


class EnvStore(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...


class LineSource(Protocol):
    def lines(self, path: Path) -> List[str]: ...


class OsEnvStore:
    """Live view of the process environment; nothing is cached."""

    def __init__(self, environ: Optional[MutableMapping[str, str]] = None):
        self.environ = os.environ if environ is None else environ

    def get(self, key: str) -> Optional[str]:
        return self.environ.get(key)

    def set(self, key: str, value: str) -> None:
        self.environ[key] = value

    def remove(self, key: str) -> None:
        self.environ.pop(key, None)


@dataclass
class DictEnvStore:
    values: Dict[str, str] = field(default_factory=dict)

    def get(self, key: str) -> Optional[str]:
        return self.values.get(key)

    def set(self, key: str, value: str) -> None:
        self.values[key] = value

    def remove(self, key: str) -> None:
        self.values.pop(key, None)


@dataclass(frozen=True)
class FileLineSource:
    encoding: str = "utf-8-sig"

    def lines(self, path: Path) -> List[str]:
        """Read the whole file up front so a read error never leaves a partial load."""
        if not path.is_file():
            raise EnvFileNotFoundError(f"Env file not found: {path}")
        try:
            text = path.read_text(encoding=self.encoding)
        except OSError as exc:
            raise EnvFileNotFoundError(f"Env file not readable: {path}") from exc
        return text.splitlines()
