"""Harness exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Each subsystem raises a specific error type so sub-test reports can
tell a chain that was never reached from a chain that rejected a call.
"""

from __future__ import annotations


class HarnessError(Exception):
    """Base exception for all harness failures."""


class HarnessConfigError(HarnessError):
    """Raised for invalid runtime configuration."""


class HarnessDependencyError(HarnessError):
    """Raised when a required runtime dependency is missing."""


class SuiteSpecError(HarnessError):
    """Raised for invalid or unsupported suite-spec files."""


class CallEncodingError(HarnessError):
    """Raised when a call cannot be resolved or encoded against live metadata."""


class ChainConnectionError(HarnessError):
    """Raised when a chain endpoint cannot be reached or queried."""


class SubmissionError(HarnessError):
    """Raised when an extrinsic does not make it through a submission stage.

    Attributes:
        stage: Stage name where submission stopped.
    """

    stage = "submission"

    def __init__(self, message: str, stage: str | None = None) -> None:
        super().__init__(message)
        if stage is not None:
            self.stage = stage


class InclusionError(SubmissionError):
    """Raised when an extrinsic never reached a block."""

    stage = "inclusion"


class FinalizationError(SubmissionError):
    """Raised when an included block was not finalized in time."""

    stage = "finalization"


class DispatchFailedError(SubmissionError):
    """Raised when a finalized extrinsic reported a dispatch error."""

    stage = "dispatch"


class ConcurrentSubmissionError(SubmissionError):
    """Raised when a second submission races the same signer and chain."""

    stage = "precondition"


class ToolRunError(HarnessError):
    """Raised when the simulation tool cannot be spawned or times out."""


class CheckFailedError(HarnessError):
    """Raised when tool output does not match a sub-test expectation."""
