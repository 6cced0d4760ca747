"""Genesis override command wiring for the harness CLI."""

from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Any

from core.constants import ALICE_ACCOUNT_ID, DEFAULT_FELLOWSHIP_RANK
from storage.genesis_override import (
    apply_override,
    fellowship_membership_override,
    load_chain_spec,
    migration_stage_override,
    write_json,
)
from storage.storage_keys import from_hex


def add_genesis_override_command(subparsers: Any) -> None:
    """Register genesis-override subcommand."""
    parser = subparsers.add_parser(
        "genesis-override",
        help="Build a raw genesis storage override",
    )
    parser.add_argument(
        "kind",
        choices=("migration", "fellowship"),
        help="Override to build",
    )
    parser.add_argument(
        "--rank",
        type=int,
        default=DEFAULT_FELLOWSHIP_RANK,
        help="Fellowship rank granted to the member",
    )
    parser.add_argument(
        "--account",
        default=ALICE_ACCOUNT_ID.hex(),
        help="Hex-encoded 32-byte member account id (defaults to //Alice)",
    )
    parser.add_argument("--chain-spec", help="Raw chain spec JSON to merge the override into")
    parser.add_argument("--output", help="Write the result to this path instead of stdout")


def run_genesis_override_command(args: argparse.Namespace) -> int:
    """Build the override, optionally merge it, and print or write it."""
    if args.kind == "fellowship":
        try:
            account_id = from_hex(args.account)
        except ValueError:
            print(f"genesis_override_error=account '{args.account}' is not valid hex")
            return 1
        if len(account_id) != 32:
            print(f"genesis_override_error=account must be 32 bytes, got {len(account_id)}")
            return 1
        if args.rank < 0 or args.rank > 0xFFFF:
            print(f"genesis_override_error=rank must fit in u16, got {args.rank}")
            return 1
        document = fellowship_membership_override(account_id, args.rank)
    else:
        document = migration_stage_override()
    payload: dict[str, Any] = document
    if args.chain_spec:
        payload = apply_override(load_chain_spec(Path(args.chain_spec)), document)
    if args.output:
        print(write_json(Path(args.output), payload))
        return 0
    print(json.dumps(payload, indent=2))
    return 0
