"""Harness CLI entry points.

This module exposes storage-key derivation, genesis override generation,
and suite runs. It maps argparse commands onto library calls.
"""

from __future__ import annotations

import argparse
from dataclasses import replace
from pathlib import Path
from typing import Any, Sequence

from cli.genesis_command import add_genesis_override_command, run_genesis_override_command
from cli.suite_command import (
    add_run_suite_command,
    add_validate_command,
    run_run_suite_command,
    run_validate_command,
)
from core.config import HarnessConfig
from storage.storage_keys import (
    from_hex,
    storage_double_map_key,
    storage_map_key,
    storage_value_key,
    to_hex,
)


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(prog="harness", description="Referenda test harness CLI")
    parser.add_argument("--data-root", help="Override HARNESS_DATA_ROOT for this command")
    subparsers = parser.add_subparsers(dest="command", required=True)
    _add_storage_key_command(subparsers)
    add_genesis_override_command(subparsers)
    add_run_suite_command(subparsers)
    add_validate_command(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the harness CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.command == "storage-key":
        return _run_storage_key_command(args)
    if args.command == "genesis-override":
        return run_genesis_override_command(args)
    config = _build_config(args.data_root)
    if args.command == "run-suite":
        return run_run_suite_command(config, args)
    if args.command == "validate":
        return run_validate_command(config, args)
    parser.error(f"Unsupported command: {args.command}")
    return 2


def _build_config(data_root: str | None) -> HarnessConfig:
    """Build runtime config with optional data-root override.

    Args:
        data_root: Optional override path.

    Returns:
        Validated config.
    """
    config = HarnessConfig.from_env()
    if data_root:
        config = replace(config, data_root=Path(data_root).expanduser().resolve())
    return config


def _hex_bytes(value: str) -> bytes:
    """Argparse type for hex-encoded byte strings."""
    try:
        return from_hex(value)
    except ValueError as error:
        raise argparse.ArgumentTypeError(f"'{value}' is not valid hex.") from error


def _run_storage_key_command(args: argparse.Namespace) -> int:
    """Handle storage-key command."""
    if args.second_key is not None and args.map_key is None:
        print("storage_key_error=--second-key requires --map-key")
        return 1
    if args.second_key is not None:
        key = storage_double_map_key(args.pallet, args.item, args.map_key, args.second_key)
    elif args.map_key is not None:
        key = storage_map_key(args.pallet, args.item, args.map_key)
    else:
        key = storage_value_key(args.pallet, args.item)
    print(to_hex(key))
    return 0


def _add_storage_key_command(subparsers: Any) -> None:
    """Register storage-key subcommand."""
    parser = subparsers.add_parser(
        "storage-key",
        help="Derive the raw storage key of a pallet item",
    )
    parser.add_argument("pallet", help="Pallet name, e.g. System")
    parser.add_argument("item", help="Storage item name, e.g. Account")
    parser.add_argument(
        "--map-key",
        type=_hex_bytes,
        help="Hex-encoded first map key (Twox64Concat hasher)",
    )
    parser.add_argument(
        "--second-key",
        type=_hex_bytes,
        help="Hex-encoded second map key of a double map",
    )
