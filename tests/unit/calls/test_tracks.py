"""Unit tests for referendum track tables."""

from __future__ import annotations

import pytest

from calls.tracks import (
    FELLOWSHIP_TRACK_SETS,
    GOVERNANCE_TRACKS,
    KUSAMA_FELLOWSHIP_TRACKS,
    POLKADOT_FELLOWSHIP_TRACKS,
    find_fellowship_track,
)
from core.errors import HarnessError


def test_track_ids_are_unique_per_table() -> None:
    """No table should register the same track id twice."""
    for tracks in (GOVERNANCE_TRACKS, POLKADOT_FELLOWSHIP_TRACKS, KUSAMA_FELLOWSHIP_TRACKS):
        ids = [track.id for track in tracks]
        assert len(ids) == len(set(ids))


def test_only_root_track_is_root() -> None:
    """Exactly one governance track should use the root origin."""
    assert [track.name for track in GOVERNANCE_TRACKS if track.is_root] == ["Root"]


def test_table_sizes() -> None:
    """Track tables should list every track of each runtime."""
    assert len(GOVERNANCE_TRACKS) == 16
    assert len(POLKADOT_FELLOWSHIP_TRACKS) == 24
    assert len(KUSAMA_FELLOWSHIP_TRACKS) == 10
    assert set(FELLOWSHIP_TRACK_SETS) == {"polkadot", "kusama"}


def test_find_fellowship_track_by_name() -> None:
    """Lookup should return the named track or fail with known names."""
    assert find_fellowship_track(KUSAMA_FELLOWSHIP_TRACKS, "Fellows").id == 3
    with pytest.raises(HarnessError, match="Known tracks"):
        find_fellowship_track(KUSAMA_FELLOWSHIP_TRACKS, "Architects")
