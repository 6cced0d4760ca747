"""Port allocation for concurrent simulation tool runs.

Each allocation returns a fresh base port, spaced so the simulation
tool's internal ports never overlap between runs. The counter only
grows; one allocator is created per process from the harness config
and threaded through every suite, so it is never reset mid-run.
"""

from __future__ import annotations

import threading

from core.constants import DEFAULT_PORT_BASE, PORT_STEP


class PortAllocator:
    """Thread-safe monotonically increasing port counter."""

    def __init__(self, base: int = DEFAULT_PORT_BASE, step: int = PORT_STEP) -> None:
        self._next = base
        self._step = step
        self._lock = threading.Lock()

    def next_port(self) -> int:
        """Return the next free port and advance the counter by one step."""
        with self._lock:
            port = self._next
            self._next += self._step
            return port

