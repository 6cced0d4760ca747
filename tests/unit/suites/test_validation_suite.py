"""Unit tests for argument validation sub-tests."""

from __future__ import annotations

import pytest

from chain.port_allocator import PortAllocator
from core.errors import CheckFailedError
from suites.suite_context import SuiteContext
from suites.validation_suite import UNREACHABLE_FORK_ADDRESS, validation_rows
from tests.fake_tool import FakeToolRunner
from tool.tool_runner import ToolArgs, ToolOutput


def _rejecting(message: str) -> FakeToolRunner:
    output = ToolOutput(exit_code=1, stdout="", stderr=f"Error: {message}")
    return FakeToolRunner(lambda args: output)


def test_validation_rows_cover_every_rejected_argument_set() -> None:
    """Each invalid argument combination gets its own row."""
    context = SuiteContext(runner=FakeToolRunner(), ports=PortAllocator())  # type: ignore[arg-type]

    assert [name for name, _ in validation_rows(context)] == [
        "no_args",
        "mutually_exclusive_gov",
        "mutually_exclusive_fellowship",
        "missing_governance_url",
        "missing_fellowship_url",
        "invalid_referendum_id",
        "invalid_fellowship_id",
    ]


def test_no_args_row_expects_referendum_message() -> None:
    """An empty argument set should be rejected without a port."""
    runner = _rejecting("At least one referendum must be specified")
    context = SuiteContext(runner=runner, ports=PortAllocator())  # type: ignore[arg-type]
    rows = dict(validation_rows(context))

    details = rows["no_args"](context)

    assert runner.calls == [ToolArgs()]
    assert "exit_code=1" in details


def test_mutually_exclusive_row_uses_unreachable_fork() -> None:
    """Conflicting flags should point at a node that is never contacted."""
    runner = _rejecting("Cannot specify both --referendum and --call-to-create")
    context = SuiteContext(runner=runner, ports=PortAllocator())  # type: ignore[arg-type]
    rows = dict(validation_rows(context))

    rows["mutually_exclusive_gov"](context)

    args = runner.calls[0]
    assert args.governance_chain_url == UNREACHABLE_FORK_ADDRESS
    assert args.port is None


def test_row_fails_when_tool_accepts_arguments() -> None:
    """A zero exit for invalid arguments is a failed sub-test."""
    context = SuiteContext(runner=FakeToolRunner(), ports=PortAllocator())  # type: ignore[arg-type]
    rows = dict(validation_rows(context))

    with pytest.raises(CheckFailedError):
        rows["invalid_referendum_id"](context)


def test_row_fails_on_wrong_message() -> None:
    """The expected error message must appear in the tool output."""
    runner = _rejecting("something unrelated")
    context = SuiteContext(runner=runner, ports=PortAllocator())  # type: ignore[arg-type]
    rows = dict(validation_rows(context))

    with pytest.raises(CheckFailedError, match="invalid fellowship referendum id"):
        rows["invalid_fellowship_id"](context)
