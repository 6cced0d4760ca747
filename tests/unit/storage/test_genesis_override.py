"""Unit tests for genesis override documents."""

from __future__ import annotations

import json
from pathlib import Path

from core.constants import ALICE_ACCOUNT_ID
from storage.genesis_override import (
    apply_override,
    build_raw_override,
    fellowship_membership_entries,
    fellowship_membership_override,
    load_chain_spec,
    merge_overrides,
    migration_stage_override,
    override_entries,
    write_json,
)
from storage.storage_keys import (
    encode_u16,
    encode_u32,
    storage_double_map_key,
    storage_map_key,
    storage_prefix,
    storage_value_key,
    to_hex,
)


def test_build_raw_override_last_write_wins() -> None:
    """Duplicate keys should keep the last value."""
    document = build_raw_override([(b"\x01", b"\x0a"), (b"\x01", b"\x0b")])

    assert document == {"genesis": {"raw": {"top": {"0x01": "0x0b"}}}}


def test_migration_stage_override_sets_done_stage() -> None:
    """Migration override should store 0x02 at AhMigrator.AhMigrationStage."""
    entries = override_entries(migration_stage_override())

    key = to_hex(storage_value_key("AhMigrator", "AhMigrationStage"))
    assert entries == {key: "0x02"}


def test_fellowship_entries_cover_every_rank_layer() -> None:
    """A rank-R member needs R+1 entries of each per-rank kind."""
    rank = 3
    entries = fellowship_membership_entries(ALICE_ACCOUNT_ID, rank)

    count_prefix = storage_prefix("FellowshipCollective", "MemberCount")
    id_prefix = storage_prefix("FellowshipCollective", "IdToIndex")
    index_prefix = storage_prefix("FellowshipCollective", "IndexToId")
    assert len(entries) == 1 + 3 * (rank + 1)
    assert sum(1 for key, _ in entries if key.startswith(count_prefix)) == rank + 1
    assert sum(1 for key, _ in entries if key.startswith(id_prefix)) == rank + 1
    assert sum(1 for key, _ in entries if key.startswith(index_prefix)) == rank + 1


def test_fellowship_override_values() -> None:
    """Override should record rank, counts, and both index directions."""
    entries = override_entries(fellowship_membership_override(ALICE_ACCOUNT_ID, 2))

    member_key = storage_map_key("FellowshipCollective", "Members", ALICE_ACCOUNT_ID)
    count_key = storage_map_key("FellowshipCollective", "MemberCount", encode_u16(2))
    id_key = storage_double_map_key(
        "FellowshipCollective", "IdToIndex", encode_u16(1), ALICE_ACCOUNT_ID
    )
    index_key = storage_double_map_key(
        "FellowshipCollective", "IndexToId", encode_u16(0), encode_u32(0)
    )
    assert entries[to_hex(member_key)] == "0x0200"
    assert entries[to_hex(count_key)] == "0x01000000"
    assert entries[to_hex(id_key)] == "0x00000000"
    assert entries[to_hex(index_key)] == to_hex(ALICE_ACCOUNT_ID)


def test_fellowship_override_defaults_to_alice_at_rank_nine() -> None:
    """Default override should register //Alice at rank 9."""
    entries = override_entries(fellowship_membership_override())

    member_key = storage_map_key("FellowshipCollective", "Members", ALICE_ACCOUNT_ID)
    assert entries[to_hex(member_key)] == "0x0900"
    assert len(entries) == 1 + 3 * 10


def test_merge_overrides_combines_documents() -> None:
    """Merged document should hold entries of every input."""
    merged = merge_overrides(migration_stage_override(), fellowship_membership_override(rank=0))

    assert len(override_entries(merged)) == 1 + 1 + 3


def test_apply_override_keeps_existing_storage_and_input(tmp_path: Path) -> None:
    """Applying an override should not drop or mutate existing raw storage."""
    spec_path = tmp_path / "spec.json"
    spec_path.write_text(
        json.dumps({"name": "dev", "genesis": {"raw": {"top": {"0xaa": "0x01"}}}}),
        encoding="utf-8",
    )
    chain_spec = load_chain_spec(spec_path)

    merged = apply_override(chain_spec, build_raw_override([(b"\xbb", b"\x02")]))

    assert merged["genesis"]["raw"]["top"] == {"0xaa": "0x01", "0xbb": "0x02"}
    assert merged["name"] == "dev"
    assert chain_spec["genesis"]["raw"]["top"] == {"0xaa": "0x01"}


def test_write_json_creates_parent_directories(tmp_path: Path) -> None:
    """Written documents should round-trip through load_chain_spec."""
    target = tmp_path / "nested" / "override.json"

    written = write_json(target, migration_stage_override())

    assert load_chain_spec(written) == migration_stage_override()
