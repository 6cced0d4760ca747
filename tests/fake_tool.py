"""Recording stand-in for the simulation tool runner."""

from __future__ import annotations

from typing import Callable

from tool.tool_runner import ToolArgs, ToolOutput

SUCCESS_OUTPUT = ToolOutput(exit_code=0, stdout="Referendum executed successfully", stderr="")
FAILURE_OUTPUT = ToolOutput(exit_code=1, stdout="Referendum execution failed", stderr="")


class FakeToolRunner:
    """Return scripted outputs and remember every argument set."""

    def __init__(self, respond: Callable[[ToolArgs], ToolOutput] | None = None) -> None:
        self.calls: list[ToolArgs] = []
        self._respond = respond or (lambda args: SUCCESS_OUTPUT)

    def run(self, args: ToolArgs) -> ToolOutput:
        self.calls.append(args)
        return self._respond(args)
