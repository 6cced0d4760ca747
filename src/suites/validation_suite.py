"""Simulation tool argument validation sub-tests.

These sub-tests need no network: the tool rejects each argument set
before connecting anywhere. They share no state and run concurrently.
"""

from __future__ import annotations

from typing import Any

from suites.suite_context import SuiteContext
from suites.suite_types import SubTestFn, SubTestRow
from tool.tool_runner import ToolArgs

# Port 1 is never listening, so any connection attempt would fail loudly.
UNREACHABLE_FORK_ADDRESS = "ws://127.0.0.1:1,1"

_VALIDATION_CASES: tuple[tuple[str, dict[str, Any], str], ...] = (
    ("no_args", {}, "at least one referendum must be specified"),
    (
        "mutually_exclusive_gov",
        {
            "governance_chain_url": UNREACHABLE_FORK_ADDRESS,
            "referendum": "0",
            "call_to_create_governance_referendum": "0x00",
        },
        "cannot specify both",
    ),
    (
        "mutually_exclusive_fellowship",
        {
            "fellowship_chain_url": UNREACHABLE_FORK_ADDRESS,
            "fellowship": "0",
            "call_to_create_fellowship_referendum": "0x00",
        },
        "cannot specify both",
    ),
    ("missing_governance_url", {"referendum": "0"}, "governance-chain-url is required"),
    ("missing_fellowship_url", {"fellowship": "0"}, "fellowship-chain-url is required"),
    (
        "invalid_referendum_id",
        {"governance_chain_url": UNREACHABLE_FORK_ADDRESS, "referendum": "abc"},
        "invalid referendum id",
    ),
    (
        "invalid_fellowship_id",
        {"fellowship_chain_url": UNREACHABLE_FORK_ADDRESS, "fellowship": "xyz"},
        "invalid fellowship referendum id",
    ),
)


def validation_rows(context: SuiteContext) -> tuple[SubTestRow, ...]:
    """Build one row per rejected argument set."""
    return tuple(
        (name, _expect_rejection(fields, message)) for name, fields, message in _VALIDATION_CASES
    )


def _expect_rejection(fields: dict[str, Any], message: str) -> SubTestFn:
    def check(context: SuiteContext) -> str:
        output = context.runner.run(ToolArgs(**fields))
        output.check_failure()
        output.check_any_output_contains(message)
        return f"exit_code={output.exit_code} message='{message}'"

    return check
