"""Runtime configuration model for the harness.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path

from core.constants import (
    DEFAULT_DATA_ROOT,
    DEFAULT_FINALIZATION_TIMEOUT_SECONDS,
    DEFAULT_PORT_BASE,
    DEFAULT_SIGNER_URI,
    DEFAULT_TOOL_TIMEOUT_SECONDS,
)
from core.errors import HarnessConfigError


@dataclass(frozen=True)
class HarnessConfig:
    """Validated runtime configuration.

    Attributes:
        data_root: Local root directory for suite reports.
        tool_project_dir: Directory the simulation tool is launched from.
        tool_timeout_seconds: Wall-clock limit for one tool invocation.
        finalization_timeout_seconds: Limit for waiting on block finalization.
        port_base: First port handed out by the port allocator.
        signer_uri: Secret URI of the submitting dev account.
    """

    data_root: Path
    tool_project_dir: Path
    tool_timeout_seconds: int
    finalization_timeout_seconds: int
    port_base: int
    signer_uri: str

    @classmethod
    def from_env(cls) -> "HarnessConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            HarnessConfigError: If environment values are invalid.
        """
        data_root_value = os.getenv("HARNESS_DATA_ROOT", str(DEFAULT_DATA_ROOT))
        tool_project_value = os.getenv("TOOL_PROJECT_DIR")
        if tool_project_value:
            tool_project_dir = Path(tool_project_value).expanduser().resolve()
        else:
            tool_project_dir = Path.cwd().resolve().parent
        return cls(
            data_root=Path(data_root_value).expanduser().resolve(),
            tool_project_dir=tool_project_dir,
            tool_timeout_seconds=_parse_positive_int(
                "HARNESS_TOOL_TIMEOUT_SECONDS", DEFAULT_TOOL_TIMEOUT_SECONDS
            ),
            finalization_timeout_seconds=_parse_positive_int(
                "HARNESS_FINALIZATION_TIMEOUT_SECONDS", DEFAULT_FINALIZATION_TIMEOUT_SECONDS
            ),
            port_base=_parse_positive_int("HARNESS_PORT_BASE", DEFAULT_PORT_BASE),
            signer_uri=os.getenv("HARNESS_SIGNER_URI", DEFAULT_SIGNER_URI),
        )


def _parse_positive_int(env_name: str, default_value: int) -> int:
    """Parse a positive integer environment value.

    Args:
        env_name: Environment variable name.
        default_value: Value used when the variable is unset.

    Returns:
        Parsed integer.

    Raises:
        HarnessConfigError: If value is not a positive integer.
    """
    raw_value = os.getenv(env_name)
    if raw_value is None:
        return default_value
    try:
        parsed = int(raw_value)
    except ValueError as error:
        raise HarnessConfigError(
            f"Invalid {env_name} value: "
            f"expected integer, got '{raw_value}'. "
            f"Set {env_name} to a numeric value."
        ) from error
    if parsed <= 0:
        raise HarnessConfigError(
            f"Invalid {env_name} value: expected a positive integer, got {parsed}."
        )
    return parsed
