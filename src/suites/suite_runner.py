"""Suite orchestration and report formatting."""

from __future__ import annotations

import json
import time
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Callable, Sequence

from core.constants import REPORTS_DIR_NAME
from core.errors import HarnessError, SubmissionError
from core.logging_config import get_logger
from core.suite_spec import SuiteName
from suites.fellowship_suite import fellowship_scenario_rows, fellowship_track_rows
from suites.governance_suite import governance_scenario_rows, governance_track_rows
from suites.suite_context import SuiteContext
from suites.suite_types import SubTestResult, SubTestRow, SubTestStatus, SuiteReport
from suites.validation_suite import validation_rows

_LOGGER = get_logger(__name__)

RowBuilder = Callable[[SuiteContext], tuple[SubTestRow, ...]]

SUITE_ROW_BUILDERS: dict[SuiteName, RowBuilder] = {
    "governance_tracks": governance_track_rows,
    "fellowship_tracks": fellowship_track_rows,
    "governance_scenarios": governance_scenario_rows,
    "fellowship_scenarios": fellowship_scenario_rows,
    "validation": validation_rows,
}
# Sub-tests of these suites share no chain, signer, or port state.
PARALLEL_SUITES: frozenset[str] = frozenset({"validation"})
REFRESH_ROW_NAME = "refresh_fork_points"


def run_suites(suites: Sequence[SuiteName], context: SuiteContext) -> tuple[SuiteReport, ...]:
    """Run suites in order, refreshing fork points before each one.

    Args:
        suites: Suite names to run.
        context: Shared runtime state.

    Returns:
        One report per suite, in run order. A suite whose fork points
        cannot be refreshed reports a single failed refresh row.
    """
    reports = []
    for suite in suites:
        rows = SUITE_ROW_BUILDERS[suite](context)
        if rows and suite not in PARALLEL_SUITES:
            refresh_failure = _refresh_fork_points(context)
            if refresh_failure is not None:
                reports.append(SuiteReport(suite=suite, results=(refresh_failure,)))
                continue
        reports.append(run_sub_tests(suite, rows, context, parallel=suite in PARALLEL_SUITES))
    return tuple(reports)


def _refresh_fork_points(context: SuiteContext) -> SubTestResult | None:
    started_at = time.monotonic()
    try:
        context.tracker.refresh_all()
    except HarnessError as error:
        _LOGGER.warning("fork_refresh_failed", error=str(error))
        return SubTestResult(
            name=REFRESH_ROW_NAME,
            status="failed",
            details=f"{type(error).__name__}: {error}",
            duration_seconds=round(time.monotonic() - started_at, 3),
        )
    return None


def run_sub_tests(
    suite: str,
    rows: Sequence[SubTestRow],
    context: SuiteContext,
    parallel: bool = False,
) -> SuiteReport:
    """Run sub-test rows and collect every outcome as a result row.

    A failing sub-test never stops the suite; its error text becomes the
    row details.
    """
    _LOGGER.info("suite_started", suite=suite, sub_tests=len(rows), parallel=parallel)
    if parallel and len(rows) > 1:
        with ThreadPoolExecutor(max_workers=len(rows)) as executor:
            results = list(executor.map(lambda row: _run_single(row, context), rows))
    else:
        results = [_run_single(row, context) for row in rows]
    report = SuiteReport(suite=suite, results=tuple(results))
    _LOGGER.info(
        "suite_finished",
        suite=suite,
        passed=report.passed_count,
        failed=report.failed_count,
    )
    return report


def _run_single(row: SubTestRow, context: SuiteContext) -> SubTestResult:
    name, sub_test = row
    started_at = time.monotonic()
    status, details = _run_sub_test(sub_test, context)
    result = SubTestResult(
        name=name,
        status=status,
        details=details,
        duration_seconds=round(time.monotonic() - started_at, 3),
    )
    _LOGGER.info(
        "sub_test_finished",
        name=name,
        status=status,
        duration_seconds=result.duration_seconds,
    )
    return result


def _run_sub_test(
    sub_test: Callable[[SuiteContext], str],
    context: SuiteContext,
) -> tuple[SubTestStatus, str]:
    try:
        return "passed", str(sub_test(context))
    except SubmissionError as error:
        return "failed", f"{type(error).__name__} at stage {error.stage}: {error}"
    except Exception as error:
        return "failed", f"{type(error).__name__}: {error}"


def render_suite_report(report: SuiteReport) -> str:
    """Render report into stable multi-line text for CLI output."""
    lines = [f"suite={report.suite}"]
    for row in report.results:
        lines.append(
            f"[{row.status.upper()}] {row.name} ({row.duration_seconds:.3f}s) :: {row.details}"
        )
    lines.append(f"passed={report.passed_count}")
    lines.append(f"failed={report.failed_count}")
    return "\n".join(lines)


def save_suite_report(report: SuiteReport, data_root: Path) -> Path:
    """Persist report JSON under the data root for debugging."""
    report_path = data_root / REPORTS_DIR_NAME / f"{report.suite}_report.json"
    report_path.parent.mkdir(parents=True, exist_ok=True)
    payload = {
        "suite": report.suite,
        "passed": report.passed_count,
        "failed": report.failed_count,
        "results": [
            {
                "name": row.name,
                "status": row.status,
                "details": row.details,
                "duration_seconds": row.duration_seconds,
            }
            for row in report.results
        ],
    }
    report_path.write_text(json.dumps(payload, indent=2) + "\n", encoding="utf-8")
    return report_path
