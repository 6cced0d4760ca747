"""Shared typed models.

This module defines the data models passed between storage, call,
chain, and suite layers to keep interfaces explicit and stable.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class GovernanceTrack:
    """A governance referendum track.

    Attributes:
        id: Track id as registered in the runtime.
        name: Track name.
        origin_variant: Inner origin variant name for proposals on this track.
        is_root: Whether proposals use the bare root origin.
    """

    id: int
    name: str
    origin_variant: str
    is_root: bool = False


@dataclass(frozen=True)
class FellowshipTrack:
    """A fellowship referendum track.

    Attributes:
        id: Track id as registered in the runtime.
        name: Track name.
        origin_variant: Inner origin variant name for proposals on this track.
        min_rank: Minimum collective rank associated with the origin.
    """

    id: int
    name: str
    origin_variant: str
    min_rank: int


@dataclass(frozen=True)
class ProposalDescriptor:
    """Hash and length used to reference a noted preimage."""

    hash: bytes
    length: int


@dataclass(frozen=True)
class ReferendumCallData:
    """Hex call data needed to create and resolve one referendum.

    Attributes:
        preimage_hex: Encoded Preimage.note_preimage call.
        submit_hex: Encoded referendum submission call.
        descriptor: Descriptor the submission references.
    """

    preimage_hex: str
    submit_hex: str
    descriptor: ProposalDescriptor


@dataclass
class ForkPoint:
    """Endpoint and block a simulation forks from.

    Block numbers are refreshed before reuse since nodes prune old state.
    """

    chain_id: str
    endpoint: str
    block_number: int

    @property
    def address(self) -> str:
        """Return the ``<endpoint>,<block>`` form the simulation tool expects."""
        return f"{self.endpoint},{self.block_number}"


@dataclass(frozen=True)
class SubmittedEntity:
    """Entity created on chain by a finalized extrinsic.

    Attributes:
        assigned_id: Id derived from the on-chain counter.
        block_number: Block the extrinsic was included in.
    """

    assigned_id: int
    block_number: int
