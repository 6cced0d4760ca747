"""Shared state handed to every sub-test."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from calls.call_encoder import CallEncoder
from calls.tracks import POLKADOT_FELLOWSHIP_TRACKS
from chain.chain_state import ChainStateTracker
from chain.extrinsic_submitter import ExtrinsicSubmitter
from chain.port_allocator import PortAllocator
from core.constants import DEFAULT_GOVERNANCE_ORIGIN_VARIANT, POLKADOT_FELLOWSHIP_ORIGIN_VARIANT
from core.errors import HarnessError
from core.types import FellowshipTrack
from tool.tool_runner import ToolArgs, ToolOutput, ToolRunner


@dataclass(frozen=True)
class ChainAccess:
    """Encoder and submitter bound to one connected chain."""

    encoder: CallEncoder
    submitter: ExtrinsicSubmitter


@dataclass
class SuiteContext:
    """Runtime state shared by sub-test functions.

    Attributes:
        runner: Simulation tool runner.
        ports: Port allocator for tool runs.
        tracker: Fork points of every connected chain.
        chains: Encoder and submitter per connected chain id.
        governance_origin_variant: Outer origin variant of governance tracks.
        fellowship_origin_variant: Outer origin variant of fellowship tracks.
        fellowship_tracks: Fellowship track table of the network under test.
    """

    runner: ToolRunner
    ports: PortAllocator
    tracker: ChainStateTracker = field(default_factory=ChainStateTracker)
    chains: dict[str, ChainAccess] = field(default_factory=dict)
    governance_origin_variant: str = DEFAULT_GOVERNANCE_ORIGIN_VARIANT
    fellowship_origin_variant: str = POLKADOT_FELLOWSHIP_ORIGIN_VARIANT
    fellowship_tracks: tuple[FellowshipTrack, ...] = POLKADOT_FELLOWSHIP_TRACKS

    def chain(self, chain_id: str) -> ChainAccess:
        """Return encoder and submitter of a connected chain."""
        try:
            return self.chains[chain_id]
        except KeyError as error:
            raise HarnessError(
                f"Chain '{chain_id}' is not connected. Add it to the suite spec."
            ) from error

    def has_chain(self, chain_id: str) -> bool:
        return chain_id in self.chains

    def run_tool(self, **fields: Any) -> ToolOutput:
        """Run the simulation tool on a freshly allocated port."""
        return self.runner.run(ToolArgs(port=self.ports.next_port(), **fields))
