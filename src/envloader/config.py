"""
Optional YAML configuration for the command-line tool.

The file only supplies defaults; command-line flags always win. Sections
mirror the subcommands plus a ``logging`` section:

    load:
      path: .env
      clobber: false
      passthru: false
    unload:
      path: .env
    logging:
      level: WARNING
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, Optional

from .store import DEFAULT_ENV_PATH

try:
    import yaml
except ImportError as exc:  # pragma: no cover - handled at runtime
    raise RuntimeError(
        "PyYAML is required to load configuration files. "
        "Install with `pip install pyyaml`."
    ) from exc

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _require_keys(source: Dict[str, Any], allowed: Iterable[str], section: str) -> None:
    unknown = set(source) - set(allowed)
    if unknown:
        raise ValueError(f"Unknown keys in {section}: {sorted(unknown)}")


def _require_bool(payload: Dict[str, Any], key: str, section: str) -> bool:
    value = payload.get(key, False)
    if not isinstance(value, bool):
        raise ValueError(f"{section}.{key} must be true or false, got {value!r}")
    return value


def _section(payload: Dict[str, Any], name: str) -> Dict[str, Any]:
    value = payload.get(name) or {}
    if not isinstance(value, dict):
        raise ValueError(f"{name} must be a mapping")
    return value


@dataclass(frozen=True)
class LoadConfig:
    path: Path = Path(DEFAULT_ENV_PATH)
    clobber: bool = False
    passthru: bool = False

    @classmethod
    def from_dict(cls, payload: Optional[Dict[str, Any]]) -> "LoadConfig":
        payload = payload or {}
        _require_keys(payload, ("path", "clobber", "passthru"), "load")
        path = Path(payload.get("path") or DEFAULT_ENV_PATH)
        return cls(
            path=path,
            clobber=_require_bool(payload, "clobber", "load"),
            passthru=_require_bool(payload, "passthru", "load"),
        )


@dataclass(frozen=True)
class UnloadConfig:
    path: Path = Path(DEFAULT_ENV_PATH)

    @classmethod
    def from_dict(cls, payload: Optional[Dict[str, Any]]) -> "UnloadConfig":
        payload = payload or {}
        _require_keys(payload, ("path",), "unload")
        return cls(path=Path(payload.get("path") or DEFAULT_ENV_PATH))


@dataclass(frozen=True)
class LoggingConfig:
    level: str = "WARNING"

    @classmethod
    def from_dict(cls, payload: Optional[Dict[str, Any]]) -> "LoggingConfig":
        payload = payload or {}
        _require_keys(payload, ("level",), "logging")
        level = str(payload.get("level", "WARNING")).upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"logging.level must be one of {', '.join(LOG_LEVELS)}")
        return cls(level=level)


@dataclass(frozen=True)
class EnvLoaderConfig:
    load: LoadConfig = field(default_factory=LoadConfig)
    unload: UnloadConfig = field(default_factory=UnloadConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "EnvLoaderConfig":
        _require_keys(payload, ("load", "unload", "logging"), "root")
        return cls(
            load=LoadConfig.from_dict(_section(payload, "load")),
            unload=UnloadConfig.from_dict(_section(payload, "unload")),
            logging=LoggingConfig.from_dict(_section(payload, "logging")),
        )


def load_config(path: Path) -> EnvLoaderConfig:
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    with path.open("r", encoding="utf-8") as fh:
        payload = yaml.safe_load(fh) or {}
    if not isinstance(payload, dict):
        raise ValueError("Configuration root must be a mapping/object")
    return EnvLoaderConfig.from_dict(payload)
