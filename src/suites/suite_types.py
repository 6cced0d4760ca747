"""Typed models for suite runs."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Literal

if TYPE_CHECKING:
    from suites.suite_context import SuiteContext

SubTestStatus = Literal["passed", "failed"]
SubTestFn = Callable[["SuiteContext"], str]
SubTestRow = tuple[str, SubTestFn]


@dataclass(frozen=True)
class SubTestResult:
    """One sub-test result row."""

    name: str
    status: SubTestStatus
    details: str
    duration_seconds: float


@dataclass(frozen=True)
class SuiteReport:
    """Final report for one suite."""

    suite: str
    results: tuple[SubTestResult, ...]

    @property
    def failed_count(self) -> int:
        """Count failed sub-tests in this report."""
        return sum(1 for row in self.results if row.status == "failed")

    @property
    def passed_count(self) -> int:
        """Count passed sub-tests in this report."""
        return sum(1 for row in self.results if row.status == "passed")
