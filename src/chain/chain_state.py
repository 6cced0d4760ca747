"""Per-chain fork point tracking.

Nodes prune old state, so a stored fork block goes stale as the suite
runs. The tracker refreshes each chain's block on demand and composes
the ``<endpoint>,<block>`` address the simulation tool forks from.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

from chain.chain_client import latest_block_number
from core.errors import HarnessError
from core.logging_config import get_logger
from core.types import ForkPoint

_LOGGER = get_logger(__name__)

BlockFetcher = Callable[[Any], int]


def adjust_for_epoch_boundary(block_number: int, epoch_length: int | None) -> int:
    """Step back one block when ``block_number`` sits on an epoch boundary.

    The forking engine cannot resolve preimage availability exactly at a
    session boundary, so positive multiples of the epoch length move to
    the previous block.
    """
    if epoch_length and block_number > 0 and block_number % epoch_length == 0:
        return block_number - 1
    return block_number


@dataclass
class _TrackedChain:
    client: Any
    epoch_length: int | None
    fork_point: ForkPoint


class ChainStateTracker:
    """Hold the current fork point of every tracked chain."""

    def __init__(self, fetch_block: BlockFetcher = latest_block_number) -> None:
        self._fetch_block = fetch_block
        self._chains: dict[str, _TrackedChain] = {}

    def track(
        self,
        chain_id: str,
        endpoint: str,
        client: Any,
        epoch_length: int | None = None,
    ) -> ForkPoint:
        """Register a chain and capture its first fork point.

        Args:
            chain_id: Stable chain name used by the suites.
            endpoint: Node websocket URL.
            client: Connected client for the node.
            epoch_length: Session length when the chain hosts the
                fellowship pallets on a fixed-epoch runtime.

        Returns:
            The initial fork point.
        """
        self._chains[chain_id] = _TrackedChain(
            client=client,
            epoch_length=epoch_length,
            fork_point=ForkPoint(chain_id=chain_id, endpoint=endpoint, block_number=0),
        )
        return self.refresh(chain_id)

    def refresh(self, chain_id: str) -> ForkPoint:
        """Replace a chain's fork block with its latest block.

        Raises:
            ChainConnectionError: If the node cannot be queried.
        """
        tracked = self._get(chain_id)
        fetched = self._fetch_block(tracked.client)
        adjusted = adjust_for_epoch_boundary(fetched, tracked.epoch_length)
        if adjusted != fetched:
            _LOGGER.info(
                "fork_block_adjusted_for_epoch_boundary",
                chain_id=chain_id,
                fetched_block=fetched,
                fork_block=adjusted,
            )
        tracked.fork_point.block_number = adjusted
        _LOGGER.info("fork_block_refreshed", chain_id=chain_id, fork_block=adjusted)
        return tracked.fork_point

    def refresh_all(self) -> dict[str, ForkPoint]:
        """Refresh every tracked chain."""
        return {chain_id: self.refresh(chain_id) for chain_id in self._chains}

    def fork_point(self, chain_id: str) -> ForkPoint:
        """Return the stored fork point of a chain."""
        return self._get(chain_id).fork_point

    def fork_address(self, chain_id: str) -> str:
        """Return the ``<endpoint>,<block>`` address of a chain."""
        return self.fork_point(chain_id).address

    def client(self, chain_id: str) -> Any:
        """Return the client registered for a chain."""
        return self._get(chain_id).client

    def endpoint(self, chain_id: str) -> str:
        """Return the endpoint registered for a chain."""
        return self.fork_point(chain_id).endpoint

    def __contains__(self, chain_id: object) -> bool:
        return chain_id in self._chains

    def _get(self, chain_id: str) -> _TrackedChain:
        try:
            return self._chains[chain_id]
        except KeyError as error:
            raise HarnessError(f"Chain '{chain_id}' is not tracked.") from error
