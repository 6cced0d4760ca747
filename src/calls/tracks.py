"""Referendum track tables.

Origin variant names must match the runtime's origin enum exactly.
Governance tracks are shared by the Polkadot and Kusama Asset Hubs.
"""

from __future__ import annotations

from core.errors import HarnessError
from core.types import FellowshipTrack, GovernanceTrack


def _governance(track_id: int, name: str, is_root: bool = False) -> GovernanceTrack:
    return GovernanceTrack(id=track_id, name=name, origin_variant=name, is_root=is_root)


def _fellowship(track_id: int, name: str, min_rank: int) -> FellowshipTrack:
    return FellowshipTrack(id=track_id, name=name, origin_variant=name, min_rank=min_rank)


GOVERNANCE_TRACKS: tuple[GovernanceTrack, ...] = (
    _governance(0, "Root", is_root=True),
    _governance(1, "WhitelistedCaller"),
    _governance(2, "WishForChange"),
    _governance(10, "StakingAdmin"),
    _governance(11, "Treasurer"),
    _governance(12, "LeaseAdmin"),
    _governance(13, "FellowshipAdmin"),
    _governance(14, "GeneralAdmin"),
    _governance(15, "AuctionAdmin"),
    _governance(20, "ReferendumCanceller"),
    _governance(21, "ReferendumKiller"),
    _governance(30, "SmallTipper"),
    _governance(31, "BigTipper"),
    _governance(32, "SmallSpender"),
    _governance(33, "MediumSpender"),
    _governance(34, "BigSpender"),
)

# Polkadot Collectives parachain, outer origin variant "FellowshipOrigins".
POLKADOT_FELLOWSHIP_TRACKS: tuple[FellowshipTrack, ...] = (
    _fellowship(1, "Members", 1),
    _fellowship(2, "Fellowship2Dan", 2),
    _fellowship(3, "Fellows", 3),
    _fellowship(4, "Architects", 4),
    _fellowship(5, "Fellowship5Dan", 5),
    _fellowship(6, "Fellowship6Dan", 6),
    _fellowship(7, "Masters", 7),
    _fellowship(8, "Fellowship8Dan", 8),
    _fellowship(9, "Fellowship9Dan", 9),
    _fellowship(11, "RetainAt1Dan", 1),
    _fellowship(12, "RetainAt2Dan", 2),
    _fellowship(13, "RetainAt3Dan", 3),
    _fellowship(14, "RetainAt4Dan", 4),
    _fellowship(15, "RetainAt5Dan", 5),
    _fellowship(16, "RetainAt6Dan", 6),
    _fellowship(21, "PromoteTo1Dan", 1),
    _fellowship(22, "PromoteTo2Dan", 2),
    _fellowship(23, "PromoteTo3Dan", 3),
    _fellowship(24, "PromoteTo4Dan", 4),
    _fellowship(25, "PromoteTo5Dan", 5),
    _fellowship(26, "PromoteTo6Dan", 6),
    _fellowship(31, "FastPromoteTo1Dan", 1),
    _fellowship(32, "FastPromoteTo2Dan", 2),
    _fellowship(33, "FastPromoteTo3Dan", 3),
)

# Kusama relay chain, outer origin variant "Origins".
KUSAMA_FELLOWSHIP_TRACKS: tuple[FellowshipTrack, ...] = (
    _fellowship(0, "FellowshipInitiates", 0),
    _fellowship(1, "Fellowship1Dan", 1),
    _fellowship(2, "Fellowship2Dan", 2),
    _fellowship(3, "Fellows", 3),
    _fellowship(4, "Fellowship4Dan", 4),
    _fellowship(5, "FellowshipExperts", 5),
    _fellowship(6, "Fellowship6Dan", 6),
    _fellowship(7, "FellowshipMasters", 7),
    _fellowship(8, "Fellowship8Dan", 8),
    _fellowship(9, "Fellowship9Dan", 9),
)

FELLOWSHIP_TRACK_SETS: dict[str, tuple[FellowshipTrack, ...]] = {
    "polkadot": POLKADOT_FELLOWSHIP_TRACKS,
    "kusama": KUSAMA_FELLOWSHIP_TRACKS,
}


def find_fellowship_track(tracks: tuple[FellowshipTrack, ...], name: str) -> FellowshipTrack:
    """Return the track called ``name`` from a fellowship track table."""
    for track in tracks:
        if track.name == name:
            return track
    known = ", ".join(track.name for track in tracks)
    raise HarnessError(f"Unknown fellowship track '{name}'. Known tracks: {known}.")
