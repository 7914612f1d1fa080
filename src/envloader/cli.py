from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional

from .config import EnvLoaderConfig, load_config
from .loader import EnvFileLoader
from .store import DictEnvStore, EnvFileNotFoundError


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Load or unload KEY=VALUE entries from a .env file.")
    parser.add_argument(
        "--config",
        "-c",
        help="Path to an optional YAML file with default options.",
    )
    # lets --config also follow the subcommand without overwriting an earlier value
    config_parent = argparse.ArgumentParser(add_help=False)
    config_parent.add_argument(
        "--config",
        "-c",
        default=argparse.SUPPRESS,
        help="Path to an optional YAML file with default options.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    load_parser = subparsers.add_parser("load", parents=[config_parent], help="Apply the file's entries to the environment.")
    load_parser.add_argument("path", nargs="?", help="Env file to read (default: .env).")
    load_parser.add_argument(
        "--clobber",
        action="store_true",
        default=None,
        help="Overwrite variables that are already set.",
    )
    load_parser.add_argument(
        "--passthru",
        action="store_true",
        default=None,
        help="Print the entries that were applied as KEY=VALUE lines.",
    )

    unload_parser = subparsers.add_parser("unload", parents=[config_parent], help="Remove the file's keys from the environment.")
    unload_parser.add_argument("path", nargs="?", help="Env file to read (default: .env).")

    parse_parser = subparsers.add_parser("parse", parents=[config_parent], help="Print the normalized entries without applying them.")
    parse_parser.add_argument("path", nargs="?", help="Env file to read (default: .env).")
    return parser.parse_args(argv)


def _resolve_config(args: argparse.Namespace) -> EnvLoaderConfig:
    if args.config:
        return load_config(Path(args.config))
    return EnvLoaderConfig()


def _print_entries(entries: Dict[str, str]) -> None:
    for key, value in entries.items():
        print(f"{key}={value}")


def _print_warnings(path: Path, warnings: List[str]) -> None:
    if warnings:
        print(f"[envloader][{path}] warnings:")
        for msg in warnings:
            print(f"  - {msg}")


def run(args: argparse.Namespace, config: EnvLoaderConfig) -> int:
    if args.command == "load":
        path = Path(args.path) if args.path else config.load.path
        clobber = config.load.clobber if args.clobber is None else args.clobber
        passthru = config.load.passthru if args.passthru is None else args.passthru
        result = EnvFileLoader().load(path, clobber=clobber)
        print(
            f"[envloader] Loaded {len(result.loaded)} entries from {path}"
            + (f", kept {len(result.skipped)} existing" if result.skipped else "")
        )
        _print_warnings(path, result.warnings)
        if passthru:
            _print_entries(result.loaded)
    elif args.command == "unload":
        path = Path(args.path) if args.path else config.unload.path
        result = EnvFileLoader().unload(path)
        print(f"[envloader] Removed {len(result.removed)} entries listed in {path}")
        _print_warnings(path, result.warnings)
    else:
        path = Path(args.path) if args.path else config.load.path
        result = EnvFileLoader(store=DictEnvStore()).load(path, clobber=True)
        _print_entries(result.loaded)
        _print_warnings(path, result.warnings)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = _parse_args(argv)
    try:
        config = _resolve_config(args)
    except (FileNotFoundError, ValueError) as exc:
        print(f"[envloader] Invalid configuration: {exc}", file=sys.stderr)
        return 2
    logging.basicConfig(
        level=config.logging.level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    try:
        return run(args, config)
    except EnvFileNotFoundError as exc:
        print(f"[envloader] {exc}", file=sys.stderr)
        return 1
    except UnicodeDecodeError as exc:
        print(f"[envloader] Env file is not valid UTF-8: {exc}", file=sys.stderr)
        return 3


if __name__ == "__main__":
    raise SystemExit(main())
