"""Genesis override documents for raw chain specs.

This module turns storage key/value pairs into the ``genesis.raw.top``
document merged into a chain spec before the first block is produced.
Values are written as given; callers own their SCALE shape.
"""

from __future__ import annotations

import copy
import json
from pathlib import Path
from typing import Any, Iterable, Mapping

from core.constants import (
    ALICE_ACCOUNT_ID,
    DEFAULT_FELLOWSHIP_RANK,
    FELLOWSHIP_COLLECTIVE_PALLET,
    MIGRATION_DONE_VALUE,
    MIGRATION_STAGE_ITEM,
    MIGRATOR_PALLET,
)
from storage.storage_keys import (
    encode_u16,
    encode_u32,
    storage_double_map_key,
    storage_map_key,
    storage_value_key,
    to_hex,
)

StorageEntries = Iterable[tuple[bytes, bytes]]


def build_raw_override(entries: StorageEntries) -> dict[str, Any]:
    """Wrap storage entries into a raw spec override document.

    Args:
        entries: Key/value byte pairs. A later pair overwrites an earlier
            pair with the same key.

    Returns:
        Mapping shaped as ``{"genesis": {"raw": {"top": {...}}}}``.
    """
    top: dict[str, str] = {}
    for key, value in entries:
        top[to_hex(key)] = to_hex(value)
    return {"genesis": {"raw": {"top": top}}}


def override_entries(document: Mapping[str, Any]) -> dict[str, str]:
    """Return the ``genesis.raw.top`` mapping of an override document."""
    return dict(document["genesis"]["raw"]["top"])


def migration_stage_override() -> dict[str, Any]:
    """Set the Asset Hub migration stage to ``MigrationDone``.

    The terminal stage lifts the base call filter that otherwise blocks
    referendum submission on Asset Hub.
    """
    key = storage_value_key(MIGRATOR_PALLET, MIGRATION_STAGE_ITEM)
    return build_raw_override([(key, MIGRATION_DONE_VALUE)])


def fellowship_membership_entries(account_id: bytes, rank: int) -> list[tuple[bytes, bytes]]:
    """Build the collective entries that register one member at ``rank``.

    A rank-R member is also a member of every rank below R, and the
    collective iterates each rank independently, so every rank layer
    gets its own count, id-to-index, and index-to-id entries.

    Args:
        account_id: Raw 32-byte account id.
        rank: Target rank.

    Returns:
        Ordered key/value pairs.
    """
    pallet = FELLOWSHIP_COLLECTIVE_PALLET
    member_index = encode_u32(0)
    entries = [(storage_map_key(pallet, "Members", account_id), encode_u16(rank))]
    for layer in range(rank + 1):
        layer_key = encode_u16(layer)
        entries.append((storage_map_key(pallet, "MemberCount", layer_key), encode_u32(1)))
        entries.append(
            (storage_double_map_key(pallet, "IdToIndex", layer_key, account_id), member_index)
        )
        entries.append(
            (storage_double_map_key(pallet, "IndexToId", layer_key, member_index), account_id)
        )
    return entries


def fellowship_membership_override(
    account_id: bytes = ALICE_ACCOUNT_ID,
    rank: int = DEFAULT_FELLOWSHIP_RANK,
) -> dict[str, Any]:
    """Register ``account_id`` as a fellowship member of ``rank`` at genesis."""
    return build_raw_override(fellowship_membership_entries(account_id, rank))


def merge_overrides(*documents: Mapping[str, Any]) -> dict[str, Any]:
    """Combine override documents; later documents win on key clashes."""
    top: dict[str, str] = {}
    for document in documents:
        top.update(override_entries(document))
    return {"genesis": {"raw": {"top": top}}}


def apply_override(chain_spec: Mapping[str, Any], document: Mapping[str, Any]) -> dict[str, Any]:
    """Deep-merge an override document into a raw chain spec.

    Args:
        chain_spec: Parsed chain spec. Not mutated.
        document: Override document.

    Returns:
        New chain spec mapping with the override applied.
    """
    merged = copy.deepcopy(dict(chain_spec))
    _deep_merge(merged, document)
    return merged


def _deep_merge(target: dict[str, Any], source: Mapping[str, Any]) -> None:
    for key, value in source.items():
        existing = target.get(key)
        if isinstance(value, Mapping) and isinstance(existing, dict):
            _deep_merge(existing, value)
        else:
            target[key] = copy.deepcopy(value)


def load_chain_spec(path: Path) -> dict[str, Any]:
    """Read a JSON chain spec from disk."""
    return json.loads(path.read_text(encoding="utf-8"))


def write_json(path: Path, payload: Mapping[str, Any]) -> Path:
    """Write a JSON document and return its resolved path."""
    path = path.expanduser().resolve()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, indent=2) + "\n", encoding="utf-8")
    return path
