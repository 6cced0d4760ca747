"""Unit tests for suite run commands."""

from __future__ import annotations

import json

import pytest

from cli.main import main
from core.errors import ChainConnectionError
from suites.suite_types import SubTestResult, SuiteReport
from tests.fake_context import build_context
from tests.fake_tool import FakeToolRunner
from tests.fixture_paths import fixture_path


def _report(status: str) -> SuiteReport:
    return SuiteReport(
        suite="validation",
        results=(
            SubTestResult(name="no_args", status=status, details="d", duration_seconds=0.0),
        ),
    )


def test_validate_prints_and_saves_report(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path,
    capsys,
) -> None:
    """Validate should render the report and save it under the data root."""
    monkeypatch.setattr(
        "cli.suite_command.run_suites", lambda suites, context: (_report("passed"),)
    )

    exit_code = main(["--data-root", str(tmp_path), "validate"])
    output = capsys.readouterr().out

    assert exit_code == 0
    assert "[PASSED] no_args" in output
    report_path = tmp_path.resolve() / "reports" / "validation_report.json"
    assert f"report_path={report_path}" in output
    assert json.loads(report_path.read_text(encoding="utf-8"))["passed"] == 1


def test_failed_sub_test_gives_nonzero_exit(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path,
    capsys,
) -> None:
    """Any failed row should fail the command."""
    monkeypatch.setattr(
        "cli.suite_command.run_suites", lambda suites, context: (_report("failed"),)
    )

    exit_code = main(["--data-root", str(tmp_path), "validate"])

    assert exit_code == 1
    assert "failed=1" in capsys.readouterr().out


def test_run_suite_passes_spec_suites(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path,
    capsys,
) -> None:
    """Run-suite should run exactly the suites listed in the suite spec."""
    seen: list[tuple[str, ...]] = []

    def fake_run_suites(suites, context):
        seen.append(tuple(suites))
        return (_report("passed"),)

    monkeypatch.setattr("cli.suite_command.run_suites", fake_run_suites)
    spec_file = fixture_path("suite_spec/validation_only.yaml")

    exit_code = main(["--data-root", str(tmp_path), "run-suite", str(spec_file)])

    assert exit_code == 0
    assert seen == [("validation",)]


def test_run_suite_reports_spec_errors(tmp_path, capsys) -> None:
    """Invalid specs should print an error line and exit 1."""
    spec_file = fixture_path("suite_spec/unknown_suite.yaml")

    exit_code = main(["--data-root", str(tmp_path), "run-suite", str(spec_file)])

    assert exit_code == 1
    assert "suite_error=Unsupported suite 'staking'" in capsys.readouterr().out


def test_run_suite_reports_connection_errors(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path,
    capsys,
) -> None:
    """Unreachable nodes should fail the command without a traceback."""

    def fail_to_connect(spec, config):
        raise ChainConnectionError("Failed to connect to ws://127.0.0.1:9910")

    monkeypatch.setattr("cli.suite_command.build_suite_context", fail_to_connect)
    spec_file = fixture_path("suite_spec/polkadot_full.yaml")

    exit_code = main(["--data-root", str(tmp_path), "run-suite", str(spec_file)])

    assert exit_code == 1
    assert "suite_error=Failed to connect" in capsys.readouterr().out


def test_run_suite_prints_reports_when_fork_refresh_fails(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path,
    capsys,
) -> None:
    """A node lost mid-run should still leave every suite report on disk."""
    context, clients = build_context(FakeToolRunner())

    def unreachable_head() -> str:
        raise ConnectionError("node unreachable")

    for client in clients.values():
        client.get_chain_head = unreachable_head  # type: ignore[method-assign]
    monkeypatch.setattr("cli.suite_command.build_suite_context", lambda spec, config: context)
    spec_file = fixture_path("suite_spec/polkadot_full.yaml")

    exit_code = main(["--data-root", str(tmp_path), "run-suite", str(spec_file)])
    output = capsys.readouterr().out

    assert exit_code == 1
    assert "suite_error=" not in output
    assert output.count("[FAILED] refresh_fork_points") == 4
    for suite in ("governance_tracks", "governance_scenarios"):
        assert (tmp_path.resolve() / "reports" / f"{suite}_report.json").is_file()
