"""Unit tests for fellowship sub-tests."""

from __future__ import annotations

import pytest

from core.errors import CheckFailedError
from suites.fellowship_suite import (
    check_create_without_preimage,
    check_fellowship_only,
    check_multichain_happy_path,
    check_nonexistent_referendum,
    fellowship_scenario_rows,
    fellowship_track_rows,
)
from tests.fake_context import build_context
from tests.fake_tool import FAILURE_OUTPUT, SUCCESS_OUTPUT, FakeToolRunner
from tool.tool_runner import ToolOutput

RELAY_EVENTS_OUTPUT = ToolOutput(
    exit_code=0,
    stdout="executed successfully\nAdditional Chain Events\nBlock #121",
    stderr="",
)


def test_track_rows_follow_topology() -> None:
    """Track rows should come from the configured fellowship track table."""
    polkadot, _ = build_context(FakeToolRunner())
    kusama, _ = build_context(FakeToolRunner(), kusama=True)

    assert len(fellowship_track_rows(polkadot)) == 48
    assert len(fellowship_track_rows(kusama)) == 20
    assert fellowship_track_rows(kusama)[0][0] == "fell_create_FellowshipInitiates"


def test_create_row_sends_governance_and_fellowship_forks() -> None:
    """Create rows should fork both chains and pass fellowship call data."""
    runner = FakeToolRunner()
    context, clients = build_context(runner)
    rows = dict(fellowship_track_rows(context))

    rows["fell_create_Architects"](context)

    args = runner.calls[0]
    assert args.governance_chain_url == "ws://127.0.0.1:9910,100"
    assert args.fellowship_chain_url == "ws://127.0.0.1:9920,110"
    assert args.call_to_create_fellowship_referendum is not None
    submit = clients["fellowship"].composed[-1]
    assert submit[:2] == ("FellowshipReferenda", "submit")
    assert submit[2]["proposal_origin"] == {"FellowshipOrigins": "Architects"}


def test_by_number_row_uses_kusama_relay_origins() -> None:
    """Kusama by-number rows should submit on the relay with Origins."""
    runner = FakeToolRunner()
    context, clients = build_context(runner, kusama=True)
    clients["fellowship"].counters[("FellowshipReferenda", "ReferendumCount")] = 2
    rows = dict(fellowship_track_rows(context))

    rows["fell_bynum_FellowshipMasters"](context)

    args = runner.calls[0]
    assert args.fellowship == 2
    assert args.fellowship_chain_url == "ws://127.0.0.1:9900,112"
    assert clients["fellowship"].composed[-1][2]["proposal_origin"] == {
        "Origins": "FellowshipMasters"
    }


def test_scenario_rows_are_named() -> None:
    """Scenario rows should keep their stable names."""
    context, _ = build_context(FakeToolRunner())

    assert [name for name, _ in fellowship_scenario_rows(context)] == [
        "multichain_happy_path",
        "fellowship_only",
        "nonexistent_referendum",
        "fellowship_create_no_preimage",
    ]


def test_multichain_watches_separate_relay() -> None:
    """On Polkadot the relay should be watched as an additional chain."""
    runner = FakeToolRunner(lambda args: RELAY_EVENTS_OUTPUT)
    context, clients = build_context(runner)

    details = check_multichain_happy_path(context)

    args = runner.calls[0]
    assert args.additional_chains == "ws://127.0.0.1:9900,120"
    assert args.call_to_create_governance_referendum is not None
    assert args.call_to_create_fellowship_referendum is not None
    assert clients["fellowship"].composed[-1][2]["proposal_origin"] == {
        "FellowshipOrigins": "Fellows"
    }
    assert "relay events" in details


def test_multichain_requires_relay_events_when_watching() -> None:
    """Missing relay output should fail the multichain scenario."""
    context, _ = build_context(FakeToolRunner(lambda args: SUCCESS_OUTPUT))

    with pytest.raises(CheckFailedError, match="Additional Chain Events"):
        check_multichain_happy_path(context)


def test_multichain_on_kusama_has_no_additional_chain() -> None:
    """When fellowship lives on the relay there is no extra chain to watch."""
    runner = FakeToolRunner()
    context, _ = build_context(runner, kusama=True)

    check_multichain_happy_path(context)

    assert runner.calls[0].additional_chains is None


def test_fellowship_only_omits_governance_chain() -> None:
    """Fellowship-only runs should not fork the governance chain."""
    runner = FakeToolRunner()
    context, _ = build_context(runner)

    check_fellowship_only(context)

    assert runner.calls[0].governance_chain_url is None
    assert runner.calls[0].call_to_note_preimage_for_fellowship_referendum is not None


def test_negative_fellowship_scenarios() -> None:
    """Nonexistent and preimage-less referenda should fail in the tool."""
    runner = FakeToolRunner(lambda args: FAILURE_OUTPUT)
    context, _ = build_context(runner)

    check_nonexistent_referendum(context)
    check_create_without_preimage(context)

    assert runner.calls[0].referendum == 999
    assert runner.calls[1].call_to_note_preimage_for_fellowship_referendum is None
