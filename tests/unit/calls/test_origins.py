"""Unit tests for proposal origin resolution."""

from __future__ import annotations

from calls.origins import fellowship_origin, governance_origin, root_origin
from calls.tracks import GOVERNANCE_TRACKS, KUSAMA_FELLOWSHIP_TRACKS, POLKADOT_FELLOWSHIP_TRACKS


def test_root_track_uses_bare_root_origin() -> None:
    """Root track proposals should use the system Root origin."""
    root_track = GOVERNANCE_TRACKS[0]

    assert governance_origin(root_track) == {"system": "Root"} == root_origin()


def test_non_root_track_wraps_variant_in_outer_origin() -> None:
    """Non-root governance tracks should nest their variant under Origins."""
    treasurer = next(track for track in GOVERNANCE_TRACKS if track.name == "Treasurer")

    assert governance_origin(treasurer) == {"Origins": "Treasurer"}


def test_fellowship_origin_outer_variant_follows_topology() -> None:
    """Fellowship origin should use the configured outer variant."""
    polkadot_fellows = POLKADOT_FELLOWSHIP_TRACKS[2]
    kusama_fellows = KUSAMA_FELLOWSHIP_TRACKS[3]

    assert fellowship_origin(polkadot_fellows, "FellowshipOrigins") == {
        "FellowshipOrigins": "Fellows"
    }
    assert fellowship_origin(kusama_fellows, "Origins") == {"Origins": "Fellows"}
