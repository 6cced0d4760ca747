"""Simulation tool invocation and output assertions.

The simulation tool forks live chains, executes referenda, and reports
the outcome on stdout. This module builds its command line, runs it
under a wall-clock timeout, and checks the captured output.
"""

from __future__ import annotations

import subprocess
import time
from dataclasses import dataclass
from pathlib import Path

from core.constants import SUCCESS_PHRASE, TOOL_COMMAND
from core.errors import CheckFailedError, ToolRunError
from core.logging_config import get_logger

_LOGGER = get_logger(__name__)

_OUTPUT_EXCERPT_CHARS = 2000


@dataclass(frozen=True)
class ToolArgs:
    """Arguments for one simulation tool run."""

    governance_chain_url: str | None = None
    fellowship_chain_url: str | None = None
    additional_chains: str | None = None
    referendum: int | str | None = None
    fellowship: int | str | None = None
    port: int | None = None
    pre_call: str | None = None
    pre_origin: str | None = None
    call_to_create_governance_referendum: str | None = None
    call_to_note_preimage_for_governance_referendum: str | None = None
    call_to_create_fellowship_referendum: str | None = None
    call_to_note_preimage_for_fellowship_referendum: str | None = None
    verbose: bool = True


_FLAG_FIELDS: tuple[tuple[str, str], ...] = (
    ("governance_chain_url", "--governance-chain-url"),
    ("fellowship_chain_url", "--fellowship-chain-url"),
    ("additional_chains", "--additional-chains"),
    ("referendum", "--referendum"),
    ("fellowship", "--fellowship"),
    ("pre_call", "--pre-call"),
    ("pre_origin", "--pre-origin"),
    ("call_to_create_governance_referendum", "--call-to-create-governance-referendum"),
    (
        "call_to_note_preimage_for_governance_referendum",
        "--call-to-note-preimage-for-governance-referendum",
    ),
    ("call_to_create_fellowship_referendum", "--call-to-create-fellowship-referendum"),
    (
        "call_to_note_preimage_for_fellowship_referendum",
        "--call-to-note-preimage-for-fellowship-referendum",
    ),
    ("port", "--port"),
)


def build_command(args: ToolArgs) -> list[str]:
    """Build the argv for one tool run; unset fields are omitted."""
    command = list(TOOL_COMMAND)
    for field_name, flag in _FLAG_FIELDS:
        value = getattr(args, field_name)
        if value is None:
            continue
        command.extend([flag, str(value)])
    if args.verbose:
        command.append("--verbose")
    return command


@dataclass(frozen=True)
class ToolOutput:
    """Captured result of one tool run."""

    exit_code: int
    stdout: str
    stderr: str

    @property
    def succeeded(self) -> bool:
        return self.exit_code == 0

    def check_success(self) -> None:
        """Require a zero exit code and the success phrase on stdout."""
        if not self.succeeded:
            raise CheckFailedError(
                f"Expected success, tool exited with {self.exit_code}. {self._excerpt()}"
            )
        self.check_stdout_contains(SUCCESS_PHRASE)

    def check_failure(self) -> None:
        """Require a non-zero exit code."""
        if self.succeeded:
            raise CheckFailedError(f"Expected failure, tool exited with 0. {self._excerpt()}")

    def check_stdout_contains(self, text: str) -> None:
        """Case-insensitive substring check on stdout."""
        if text.lower() not in self.stdout.lower():
            raise CheckFailedError(f"Expected '{text}' in stdout. {self._excerpt()}")

    def check_any_output_contains(self, text: str) -> None:
        """Case-insensitive substring check on stdout or stderr."""
        needle = text.lower()
        if needle not in self.stdout.lower() and needle not in self.stderr.lower():
            raise CheckFailedError(f"Expected '{text}' in tool output. {self._excerpt()}")

    def check_event_present(self, section: str, method: str) -> None:
        """Exact check that ``Section.Method`` appears in stdout."""
        event = f"{section}.{method}"
        if event not in self.stdout:
            raise CheckFailedError(f"Expected event {event} in stdout. {self._excerpt()}")

    def _excerpt(self) -> str:
        stdout_tail = self.stdout[-_OUTPUT_EXCERPT_CHARS:]
        stderr_tail = self.stderr[-_OUTPUT_EXCERPT_CHARS:]
        return f"stdout tail: {stdout_tail!r} stderr tail: {stderr_tail!r}"


class ToolRunner:
    """Run the simulation tool from its project directory."""

    def __init__(self, project_dir: Path, timeout_seconds: int) -> None:
        self._project_dir = project_dir
        self._timeout_seconds = timeout_seconds

    def run(self, args: ToolArgs) -> ToolOutput:
        """Run the tool and capture its output.

        A non-zero exit is a normal result, not an error, since negative
        scenarios expect it.

        Raises:
            ToolRunError: If the tool cannot be started or times out.
        """
        command = build_command(args)
        started_at = time.monotonic()
        try:
            completed = subprocess.run(
                command,
                cwd=self._project_dir,
                capture_output=True,
                encoding="utf-8",
                errors="replace",
                timeout=self._timeout_seconds,
                check=False,
            )
        except subprocess.TimeoutExpired as error:
            raise ToolRunError(
                f"Simulation tool timed out after {self._timeout_seconds}s: {' '.join(command)}."
            ) from error
        except OSError as error:
            raise ToolRunError(
                f"Failed to start simulation tool in {self._project_dir}: {error}. "
                "Set TOOL_PROJECT_DIR to the tool checkout."
            ) from error
        _LOGGER.info(
            "tool_finished",
            exit_code=completed.returncode,
            port=args.port,
            duration_seconds=round(time.monotonic() - started_at, 3),
        )
        return ToolOutput(
            exit_code=completed.returncode,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
        )

