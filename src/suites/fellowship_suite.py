"""Fellowship referendum sub-tests.

The fellowship pallets live on the Collectives parachain on Polkadot and
on the relay chain itself on Kusama. The suite reads the topology from
the context: the fellowship chain, its origin variant, and its tracks.
The signer must already hold the top fellowship rank, which the genesis
override grants.
"""

from __future__ import annotations

from typing import Any

from calls.tracks import find_fellowship_track
from core.constants import (
    FAILURE_PHRASE,
    FELLOWS_TRACK_NAME,
    FELLOWSHIP_CHAIN_ID,
    GOVERNANCE_CHAIN_ID,
    RELAY_CHAIN_ID,
)
from core.types import FellowshipTrack, ReferendumCallData
from suites.suite_context import SuiteContext
from suites.suite_types import SubTestFn, SubTestRow

MULTICHAIN_REMARK_TEXT = "integration-test"
FELLOWSHIP_ONLY_REMARK_TEXT = "fellowship-only-test"
NONEXISTENT_REFERENDUM_ID = 999


def fellowship_track_rows(context: SuiteContext) -> tuple[SubTestRow, ...]:
    """Build create and by-number rows for every fellowship track."""
    rows: list[SubTestRow] = []
    for track in context.fellowship_tracks:
        rows.append((f"fell_create_{track.name}", _create_on_track(track)))
    for track in context.fellowship_tracks:
        rows.append((f"fell_bynum_{track.name}", _submit_on_track(track)))
    return tuple(rows)


def fellowship_scenario_rows(context: SuiteContext) -> tuple[SubTestRow, ...]:
    """Build fellowship scenario rows."""
    return (
        ("multichain_happy_path", check_multichain_happy_path),
        ("fellowship_only", check_fellowship_only),
        ("nonexistent_referendum", check_nonexistent_referendum),
        ("fellowship_create_no_preimage", check_create_without_preimage),
    )


def _create_on_track(track: FellowshipTrack) -> SubTestFn:
    def check(context: SuiteContext) -> str:
        encoder = context.chain(FELLOWSHIP_CHAIN_ID).encoder
        call_data = encoder.fellowship_track_call_data(track, context.fellowship_origin_variant)
        output = context.run_tool(
            **_governance_fork(context),
            fellowship_chain_url=context.tracker.fork_address(FELLOWSHIP_CHAIN_ID),
            call_to_create_fellowship_referendum=call_data.submit_hex,
            call_to_note_preimage_for_fellowship_referendum=call_data.preimage_hex,
        )
        output.check_success()
        return f"track_id={track.id} min_rank={track.min_rank}"

    return check


def _submit_on_track(track: FellowshipTrack) -> SubTestFn:
    def check(context: SuiteContext) -> str:
        access = context.chain(FELLOWSHIP_CHAIN_ID)
        submitted = access.submitter.submit_fellowship_referendum(
            access.encoder, track, context.fellowship_origin_variant
        )
        endpoint = context.tracker.endpoint(FELLOWSHIP_CHAIN_ID)
        output = context.run_tool(
            **_governance_fork(context),
            fellowship_chain_url=f"{endpoint},{submitted.block_number}",
            fellowship=submitted.assigned_id,
        )
        output.check_success()
        return (
            f"track_id={track.id} referendum={submitted.assigned_id} "
            f"block={submitted.block_number}"
        )

    return check


def check_multichain_happy_path(context: SuiteContext) -> str:
    """Governance upgrade plus a Fellows remark, watching the relay when separate."""
    governance_data = context.chain(GOVERNANCE_CHAIN_ID).encoder.governance_call_data()
    fellowship_data = _fellows_remark(context, MULTICHAIN_REMARK_TEXT)
    additional_chains = _separate_relay_address(context)
    output = context.run_tool(
        governance_chain_url=context.tracker.fork_address(GOVERNANCE_CHAIN_ID),
        fellowship_chain_url=context.tracker.fork_address(FELLOWSHIP_CHAIN_ID),
        additional_chains=additional_chains,
        call_to_create_governance_referendum=governance_data.submit_hex,
        call_to_note_preimage_for_governance_referendum=governance_data.preimage_hex,
        call_to_create_fellowship_referendum=fellowship_data.submit_hex,
        call_to_note_preimage_for_fellowship_referendum=fellowship_data.preimage_hex,
    )
    output.check_success()
    if additional_chains is None:
        return "governance and fellowship referenda executed"
    output.check_stdout_contains("Additional Chain Events")
    output.check_stdout_contains("Block #")
    return "governance and fellowship referenda executed; relay events shown"


def check_fellowship_only(context: SuiteContext) -> str:
    call_data = _fellows_remark(context, FELLOWSHIP_ONLY_REMARK_TEXT)
    output = context.run_tool(
        fellowship_chain_url=context.tracker.fork_address(FELLOWSHIP_CHAIN_ID),
        call_to_create_fellowship_referendum=call_data.submit_hex,
        call_to_note_preimage_for_fellowship_referendum=call_data.preimage_hex,
    )
    output.check_success()
    return "fellowship referendum executed without governance chain"


def check_nonexistent_referendum(context: SuiteContext) -> str:
    output = context.run_tool(
        governance_chain_url=context.tracker.fork_address(GOVERNANCE_CHAIN_ID),
        referendum=NONEXISTENT_REFERENDUM_ID,
    )
    output.check_failure()
    return f"referendum {NONEXISTENT_REFERENDUM_ID} rejected"


def check_create_without_preimage(context: SuiteContext) -> str:
    call_data = _fellows_remark(context, FELLOWSHIP_ONLY_REMARK_TEXT)
    output = context.run_tool(
        fellowship_chain_url=context.tracker.fork_address(FELLOWSHIP_CHAIN_ID),
        call_to_create_fellowship_referendum=call_data.submit_hex,
    )
    output.check_failure()
    output.check_stdout_contains(FAILURE_PHRASE)
    return "missing preimage failed as expected"


def _fellows_remark(context: SuiteContext, text: str) -> ReferendumCallData:
    return context.chain(FELLOWSHIP_CHAIN_ID).encoder.fellowship_track_call_data(
        find_fellowship_track(context.fellowship_tracks, FELLOWS_TRACK_NAME),
        context.fellowship_origin_variant,
        remark=text,
    )


def _governance_fork(context: SuiteContext) -> dict[str, Any]:
    if GOVERNANCE_CHAIN_ID not in context.tracker:
        return {}
    return {"governance_chain_url": context.tracker.fork_address(GOVERNANCE_CHAIN_ID)}


def _separate_relay_address(context: SuiteContext) -> str | None:
    if RELAY_CHAIN_ID not in context.tracker:
        return None
    if context.tracker.endpoint(RELAY_CHAIN_ID) == context.tracker.endpoint(FELLOWSHIP_CHAIN_ID):
        return None
    return context.tracker.fork_address(RELAY_CHAIN_ID)
