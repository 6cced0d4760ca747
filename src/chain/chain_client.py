"""Substrate client creation and block queries.

This module encapsulates substrate-interface client creation and the
few RPC reads shared by fork tracking and extrinsic submission.
"""

from __future__ import annotations

from typing import Any

from core.errors import ChainConnectionError, HarnessDependencyError
from core.logging_config import get_logger

_LOGGER = get_logger(__name__)


def connect(endpoint: str, timeout_seconds: int | None = None) -> Any:
    """Open a websocket client to one node.

    Args:
        endpoint: Node websocket URL.
        timeout_seconds: Optional socket timeout for every RPC.

    Returns:
        Connected ``SubstrateInterface``.

    Raises:
        HarnessDependencyError: If substrate-interface is missing.
        ChainConnectionError: If the endpoint is unreachable.
    """
    try:
        from substrateinterface import SubstrateInterface
    except ImportError as error:
        raise HarnessDependencyError(
            "Chain access requires substrate-interface, but it is not installed. "
            "Install substrate-interface to connect to nodes."
        ) from error
    ws_options = {"timeout": timeout_seconds} if timeout_seconds else None
    try:
        client = SubstrateInterface(url=endpoint, ws_options=ws_options)
    except Exception as error:
        raise ChainConnectionError(
            f"Failed to connect to {endpoint}: {error}. Check that the node is running."
        ) from error
    _LOGGER.info("chain_connected", endpoint=endpoint, chain=client.chain)
    return client


def create_keypair(secret_uri: str) -> Any:
    """Create an sr25519 keypair from a secret URI such as ``//Alice``."""
    try:
        from substrateinterface import Keypair
    except ImportError as error:
        raise HarnessDependencyError(
            "Signing requires substrate-interface, but it is not installed."
        ) from error
    return Keypair.create_from_uri(secret_uri)


def latest_block_number(client: Any) -> int:
    """Return the number of the node's best block.

    Raises:
        ChainConnectionError: If the node cannot be queried.
    """
    try:
        return int(client.get_block_number(client.get_chain_head()))
    except Exception as error:
        raise ChainConnectionError(f"Failed to fetch latest block number: {error}.") from error


def finalized_block_number(client: Any) -> int:
    """Return the number of the node's latest finalized block.

    Raises:
        ChainConnectionError: If the node cannot be queried.
    """
    try:
        return int(client.get_block_number(client.get_chain_finalised_head()))
    except Exception as error:
        raise ChainConnectionError(f"Failed to fetch finalized block number: {error}.") from error
