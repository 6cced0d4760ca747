"""Suite run command wiring for the harness CLI."""

from __future__ import annotations

import argparse
from typing import Any

from core.config import HarnessConfig
from core.errors import HarnessError
from core.suite_spec import load_suite_spec
from suites.suite_runner import render_suite_report, run_suites, save_suite_report
from suites.suite_setup import build_suite_context, build_tool_context
from suites.suite_types import SuiteReport


def add_run_suite_command(subparsers: Any) -> None:
    """Register run-suite subcommand."""
    parser = subparsers.add_parser(
        "run-suite",
        help="Run the suites listed in a YAML suite spec",
    )
    parser.add_argument("spec_file", help="Path to the YAML suite spec")


def add_validate_command(subparsers: Any) -> None:
    """Register validate subcommand."""
    subparsers.add_parser(
        "validate",
        help="Run the network-free simulation tool argument checks",
    )


def run_run_suite_command(config: HarnessConfig, args: argparse.Namespace) -> int:
    """Execute every suite of a suite spec and print the reports."""
    try:
        spec = load_suite_spec(args.spec_file)
        context = build_suite_context(spec, config)
        reports = run_suites(spec.suites, context)
    except HarnessError as error:
        print(f"suite_error={error}")
        return 1
    return _print_reports(reports, config)


def run_validate_command(config: HarnessConfig, args: argparse.Namespace) -> int:
    """Execute the validation suite alone."""
    reports = run_suites(("validation",), build_tool_context(config))
    return _print_reports(reports, config)


def _print_reports(reports: tuple[SuiteReport, ...], config: HarnessConfig) -> int:
    for report in reports:
        report_path = save_suite_report(report, config.data_root)
        print(render_suite_report(report))
        print(f"report_path={report_path}")
    return 0 if all(report.failed_count == 0 for report in reports) else 1
