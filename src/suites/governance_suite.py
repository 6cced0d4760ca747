"""Governance referendum sub-tests.

Per-track tests create a remark referendum on every governance track,
once through call data handed to the simulation tool and once by
submitting it on chain and replaying it by number. Scenario tests cover
pre-calls, dispatch failures, and malformed input.
"""

from __future__ import annotations

from calls.tracks import GOVERNANCE_TRACKS
from core.constants import FAILURE_PHRASE, GOVERNANCE_CHAIN_ID
from core.types import GovernanceTrack, ReferendumCallData
from suites.suite_context import SuiteContext
from suites.suite_types import SubTestFn, SubTestRow
from tool.tool_runner import ToolOutput

INVALID_CALL_HEX = "0xDEADBEEFCAFE"
REMARK_PROPOSAL_TEXT = "integration-test-remark"


def governance_track_rows(context: SuiteContext) -> tuple[SubTestRow, ...]:
    """Build create and by-number rows for every governance track."""
    rows: list[SubTestRow] = []
    for track in GOVERNANCE_TRACKS:
        rows.append((f"gov_create_{track.name}", _create_on_track(track)))
    for track in GOVERNANCE_TRACKS:
        rows.append((f"gov_bynum_{track.name}", _submit_on_track(track)))
    return tuple(rows)


def governance_scenario_rows(context: SuiteContext) -> tuple[SubTestRow, ...]:
    """Build governance scenario rows."""
    return (
        ("gov_happy_path", check_happy_path),
        ("gov_dispatch_failure", check_dispatch_failure),
        ("gov_pre_call_remark", check_pre_call_root),
        ("gov_remark_proposal", check_remark_proposal),
        ("gov_invalid_hex", check_invalid_hex),
        ("gov_pre_call_non_root_origin", check_pre_call_non_root_origin),
        ("gov_pre_call_invalid_origin", check_pre_call_invalid_origin),
        ("gov_create_no_preimage", check_create_without_preimage),
    )


def _create_on_track(track: GovernanceTrack) -> SubTestFn:
    def check(context: SuiteContext) -> str:
        encoder = context.chain(GOVERNANCE_CHAIN_ID).encoder
        call_data = encoder.governance_track_call_data(track, context.governance_origin_variant)
        output = _run_created(context, call_data)
        output.check_success()
        return f"track_id={track.id} proposal_len={call_data.descriptor.length}"

    return check


def _submit_on_track(track: GovernanceTrack) -> SubTestFn:
    def check(context: SuiteContext) -> str:
        access = context.chain(GOVERNANCE_CHAIN_ID)
        submitted = access.submitter.submit_governance_referendum(
            access.encoder, track, context.governance_origin_variant
        )
        endpoint = context.tracker.endpoint(GOVERNANCE_CHAIN_ID)
        output = context.run_tool(
            governance_chain_url=f"{endpoint},{submitted.block_number}",
            referendum=submitted.assigned_id,
        )
        output.check_success()
        return (
            f"track_id={track.id} referendum={submitted.assigned_id} "
            f"block={submitted.block_number}"
        )

    return check


def check_happy_path(context: SuiteContext) -> str:
    """Root-origin upgrade authorization executes."""
    call_data = context.chain(GOVERNANCE_CHAIN_ID).encoder.governance_call_data()
    _run_created(context, call_data).check_success()
    return "authorize_upgrade executed"


def check_dispatch_failure(context: SuiteContext) -> str:
    """A descriptor pointing at no noted preimage fails on enactment."""
    call_data = context.chain(GOVERNANCE_CHAIN_ID).encoder.mismatched_preimage_call_data()
    output = _run_created(context, call_data)
    output.check_failure()
    output.check_stdout_contains(FAILURE_PHRASE)
    return "mismatched preimage failed as expected"


def check_pre_call_root(context: SuiteContext) -> str:
    output = _run_with_pre_call(context, "Root")
    output.check_success()
    output.check_stdout_contains("Executing Pre-Call")
    return "pre-call as Root executed"


def check_remark_proposal(context: SuiteContext) -> str:
    encoder = context.chain(GOVERNANCE_CHAIN_ID).encoder
    call_data = encoder.governance_call_data(encoder.remark_call(REMARK_PROPOSAL_TEXT))
    _run_created(context, call_data).check_success()
    return "System.remark proposal executed"


def check_invalid_hex(context: SuiteContext) -> str:
    output = context.run_tool(
        governance_chain_url=context.tracker.fork_address(GOVERNANCE_CHAIN_ID),
        call_to_create_governance_referendum=INVALID_CALL_HEX,
    )
    output.check_failure()
    return "garbage call data rejected"


def check_pre_call_non_root_origin(context: SuiteContext) -> str:
    output = _run_with_pre_call(context, "Treasurer")
    output.check_success()
    output.check_stdout_contains("Executing Pre-Call")
    return "pre-call as Treasurer executed"


def check_pre_call_invalid_origin(context: SuiteContext) -> str:
    output = _run_with_pre_call(context, "NonExistentOrigin")
    output.check_failure()
    output.check_any_output_contains("unknown origin")
    return "unknown pre-call origin rejected"


def check_create_without_preimage(context: SuiteContext) -> str:
    """A referendum whose preimage was never noted fails on enactment."""
    call_data = context.chain(GOVERNANCE_CHAIN_ID).encoder.governance_call_data()
    output = context.run_tool(
        governance_chain_url=context.tracker.fork_address(GOVERNANCE_CHAIN_ID),
        call_to_create_governance_referendum=call_data.submit_hex,
    )
    output.check_failure()
    output.check_stdout_contains(FAILURE_PHRASE)
    return "missing preimage failed as expected"


def _run_created(context: SuiteContext, call_data: ReferendumCallData) -> ToolOutput:
    return context.run_tool(
        governance_chain_url=context.tracker.fork_address(GOVERNANCE_CHAIN_ID),
        call_to_create_governance_referendum=call_data.submit_hex,
        call_to_note_preimage_for_governance_referendum=call_data.preimage_hex,
    )


def _run_with_pre_call(context: SuiteContext, pre_origin: str) -> ToolOutput:
    encoder = context.chain(GOVERNANCE_CHAIN_ID).encoder
    call_data = encoder.governance_call_data()
    return context.run_tool(
        governance_chain_url=context.tracker.fork_address(GOVERNANCE_CHAIN_ID),
        call_to_create_governance_referendum=call_data.submit_hex,
        call_to_note_preimage_for_governance_referendum=call_data.preimage_hex,
        pre_call=encoder.pre_call_hex(),
        pre_origin=pre_origin,
    )
