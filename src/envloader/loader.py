from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Tuple

from .parsing import LineKind, classify_line, is_valid_key, normalize_value
from .store import DEFAULT_ENV_PATH, EnvStore, FileLineSource, LineSource, OsEnvStore

logger = logging.getLogger(__name__)


@dataclass
class LoadResult:
    path: Path
    loaded: Dict[str, str] = field(default_factory=dict)
    skipped: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


@dataclass
class UnloadResult:
    path: Path
    removed: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


class EnvFileLoader:
    def __init__(self, store: Optional[EnvStore] = None, source: Optional[LineSource] = None):
        self.store = store if store is not None else OsEnvStore()
        self.source = source if source is not None else FileLineSource()

    def load(self, path: Path | str = DEFAULT_ENV_PATH, clobber: bool = False) -> LoadResult:
        env_path = Path(path)
        lines = self.source.lines(env_path)
        result = LoadResult(path=env_path)

        for key, raw_value in self._valid_assignments(env_path, lines, result.warnings):
            value = normalize_value(raw_value)
            # a key repeated within the same file overrides its earlier value
            preexisting = key not in result.loaded and self.store.get(key) is not None
            if not clobber and preexisting:
                logger.debug("Keeping existing value for %s", key)
                if key not in result.skipped:
                    result.skipped.append(key)
                continue
            self.store.set(key, value)
            result.loaded[key] = value
            logger.debug("Set %s from %s", key, env_path)

        logger.info(
            "Loaded %d entries from %s (%d kept existing, %d warnings)",
            len(result.loaded),
            env_path,
            len(result.skipped),
            len(result.warnings),
        )
        return result

    def unload(self, path: Path | str = DEFAULT_ENV_PATH) -> UnloadResult:
        env_path = Path(path)
        lines = self.source.lines(env_path)
        result = UnloadResult(path=env_path)

        for key, _ in self._valid_assignments(env_path, lines, result.warnings):
            if self.store.get(key) is None:
                continue
            self.store.remove(key)
            result.removed.append(key)
            logger.debug("Removed %s", key)

        logger.info("Removed %d entries listed in %s", len(result.removed), env_path)
        return result

    @staticmethod
    def _valid_assignments(
        env_path: Path, lines: List[str], warnings: List[str]
    ) -> Iterator[Tuple[str, str]]:
        for line_number, raw_line in enumerate(lines, start=1):
            classified = classify_line(raw_line)
            if classified.kind is not LineKind.ASSIGNMENT:
                continue
            if not is_valid_key(classified.key):
                msg = f"line {line_number}: invalid key {classified.key!r}, skipped"
                logger.warning("%s %s", env_path, msg)
                warnings.append(msg)
                continue
            yield classified.key, classified.raw_value


def load_env_file(
    path: Path | str = DEFAULT_ENV_PATH,
    clobber: bool = False,
    passthru: bool = False,
    store: Optional[EnvStore] = None,
    source: Optional[LineSource] = None,
) -> Optional[Dict[str, str]]:
    """
    Apply the entries of an env file to the environment.

    Existing variables are kept unless ``clobber`` is true. With ``passthru``
    the mapping of entries actually written is returned (possibly empty);
    otherwise the call returns ``None``.
    """
    result = EnvFileLoader(store=store, source=source).load(path, clobber=clobber)
    if passthru:
        return result.loaded
    return None


def unload_env_file(
    path: Path | str = DEFAULT_ENV_PATH,
    store: Optional[EnvStore] = None,
    source: Optional[LineSource] = None,
) -> None:
    """Remove every variable whose key is assigned in the env file."""
    EnvFileLoader(store=store, source=source).unload(path)
