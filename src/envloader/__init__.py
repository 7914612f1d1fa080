"""
Load ``KEY=VALUE`` entries from ``.env`` files into the process environment.

The package exposes two convenience entrypoints, `load_env_file` and
`unload_env_file`, on top of `EnvFileLoader`, which takes an injectable
environment store and line source.
"""

from .loader import EnvFileLoader, LoadResult, UnloadResult, load_env_file, unload_env_file
from .parsing import classify_line, is_valid_key, normalize_value, remove_inline_comment, strip_quotes
from .store import DictEnvStore, EnvFileNotFoundError, FileLineSource, OsEnvStore

__all__ = [
    "DictEnvStore",
    "EnvFileLoader",
    "EnvFileNotFoundError",
    "FileLineSource",
    "LoadResult",
    "OsEnvStore",
    "UnloadResult",
    "classify_line",
    "is_valid_key",
    "load_env_file",
    "normalize_value",
    "remove_inline_comment",
    "strip_quotes",
    "unload_env_file",
]
