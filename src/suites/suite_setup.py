"""Suite context construction from config and suite spec."""

from __future__ import annotations

from typing import Any, Callable

from calls.call_encoder import CallEncoder
from calls.tracks import FELLOWSHIP_TRACK_SETS
from chain.chain_client import connect, create_keypair
from chain.chain_state import ChainStateTracker
from chain.extrinsic_submitter import ExtrinsicSubmitter
from chain.port_allocator import PortAllocator
from core.config import HarnessConfig
from core.suite_spec import SuiteSpec
from suites.suite_context import ChainAccess, SuiteContext
from tool.tool_runner import ToolRunner

Connector = Callable[[str, int], Any]
KeypairFactory = Callable[[str], Any]


def build_tool_context(config: HarnessConfig) -> SuiteContext:
    """Build a context with no connected chains."""
    return SuiteContext(
        runner=ToolRunner(config.tool_project_dir, config.tool_timeout_seconds),
        ports=PortAllocator(base=config.port_base),
    )


def build_suite_context(
    spec: SuiteSpec,
    config: HarnessConfig,
    connector: Connector = connect,
    keypair_factory: KeypairFactory = create_keypair,
) -> SuiteContext:
    """Connect every chain in ``spec`` and build the shared suite context.

    Chains are only contacted when a selected suite needs the network.

    Args:
        spec: Validated suite spec.
        config: Runtime configuration.
        connector: Client factory taking an endpoint and a timeout.
        keypair_factory: Signer factory taking a secret URI.

    Returns:
        Context with one tracked chain, encoder, and submitter per chain entry.

    Raises:
        ChainConnectionError: If a node is unreachable.
    """
    context = build_tool_context(config)
    context.governance_origin_variant = spec.governance_origin_variant
    context.fellowship_origin_variant = spec.fellowship.origin_variant
    context.fellowship_tracks = FELLOWSHIP_TRACK_SETS[spec.fellowship.track_set]
    if not spec.needs_network:
        return context
    keypair = keypair_factory(config.signer_uri)
    tracker = ChainStateTracker()
    for chain_id, entry in spec.chains.items():
        client = connector(entry.url, config.finalization_timeout_seconds)
        tracker.track(chain_id, entry.url, client, epoch_length=entry.epoch_length)
        context.chains[chain_id] = ChainAccess(
            encoder=CallEncoder(client),
            submitter=ExtrinsicSubmitter(
                chain_id,
                client,
                keypair,
                finalization_timeout_seconds=config.finalization_timeout_seconds,
            ),
        )
    context.tracker = tracker
    return context
