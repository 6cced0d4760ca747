"""Proposal origin values for referendum submission.

Origins are two-level enum values: an outer origin-caller variant that
wraps a named inner variant. Values use the dict/str enum notation the
Substrate client library encodes against live metadata.
"""

from __future__ import annotations

from typing import Any

from core.constants import DEFAULT_GOVERNANCE_ORIGIN_VARIANT
from core.types import FellowshipTrack, GovernanceTrack

ROOT_OUTER_VARIANT = "system"
ROOT_INNER_VARIANT = "Root"


def nested_origin(outer_variant: str, inner_variant: str) -> dict[str, Any]:
    """Wrap an inner origin variant in its outer origin-caller variant."""
    return {outer_variant: inner_variant}


def root_origin() -> dict[str, Any]:
    """Return the bare root origin."""
    return nested_origin(ROOT_OUTER_VARIANT, ROOT_INNER_VARIANT)


def governance_origin(
    track: GovernanceTrack,
    outer_variant: str = DEFAULT_GOVERNANCE_ORIGIN_VARIANT,
) -> dict[str, Any]:
    """Resolve the proposal origin of a governance track."""
    if track.is_root:
        return root_origin()
    return nested_origin(outer_variant, track.origin_variant)


def fellowship_origin(track: FellowshipTrack, outer_variant: str) -> dict[str, Any]:
    """Resolve the proposal origin of a fellowship track.

    The outer variant differs by topology: ``FellowshipOrigins`` when the
    collective lives on a satellite chain, ``Origins`` on the relay chain.
    """
    return nested_origin(outer_variant, track.origin_variant)
