"""Signed extrinsic submission tracked through finalization.

Each submission waits, in order, for inclusion in a block, finalization
of that block, and a successful dispatch. A failure at any stage raises
an error tagged with that stage, so a call that never reached the chain
is distinguishable from one the chain rejected.

Ids of created entities are recovered as ``counter - 1`` from the
pallet's on-chain counter. That only holds with a single writer per
chain, so one submitter refuses overlapping use and checks that the
counter moved by exactly one.
"""

from __future__ import annotations

import threading
import time
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Callable, Iterator

from calls.call_encoder import CallEncoder, proposal_descriptor
from calls.origins import fellowship_origin, governance_origin
from chain.chain_client import finalized_block_number
from core.constants import (
    DEFAULT_FINALIZATION_TIMEOUT_SECONDS,
    DEFAULT_POLL_INTERVAL_SECONDS,
    FELLOWSHIP_REFERENDA_PALLET,
    GOVERNANCE_REFERENDA_PALLET,
    REFERENDUM_COUNT_ITEM,
)
from core.errors import (
    ChainConnectionError,
    ConcurrentSubmissionError,
    DispatchFailedError,
    FinalizationError,
    InclusionError,
    SubmissionError,
)
from core.logging_config import get_logger
from core.types import FellowshipTrack, GovernanceTrack, SubmittedEntity

_LOGGER = get_logger(__name__)


@dataclass(frozen=True)
class FinalizedExtrinsic:
    """Extrinsic confirmed included, finalized, and dispatched."""

    label: str
    block_hash: str
    block_number: int


class ExtrinsicSubmitter:
    """Submit extrinsics for one signer on one chain, strictly in sequence."""

    def __init__(
        self,
        chain_id: str,
        client: Any,
        keypair: Any,
        finalization_timeout_seconds: float = DEFAULT_FINALIZATION_TIMEOUT_SECONDS,
        poll_interval_seconds: float = DEFAULT_POLL_INTERVAL_SECONDS,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.chain_id = chain_id
        self._client = client
        self._keypair = keypair
        self._finalization_timeout = finalization_timeout_seconds
        self._poll_interval = poll_interval_seconds
        self._sleep = sleep
        self._clock = clock
        self._lock = threading.Lock()

    def submit(self, call: Any, label: str) -> FinalizedExtrinsic:
        """Sign and submit ``call``, returning once it is finalized and dispatched.

        Raises:
            InclusionError: If the extrinsic never reached a block.
            FinalizationError: If its block was not finalized in time.
            DispatchFailedError: If the call failed when dispatched.
            ConcurrentSubmissionError: If another submission is in flight.
        """
        with self._exclusive(label):
            return self._submit(call, label)

    def submit_and_track(
        self,
        call: Any,
        label: str,
        counter_pallet: str,
        counter_item: str = REFERENDUM_COUNT_ITEM,
    ) -> SubmittedEntity:
        """Submit ``call`` and derive the id of the entity it created.

        Args:
            call: Composed call creating one entity.
            label: Human-readable call name for logs and errors.
            counter_pallet: Pallet holding the entity counter.
            counter_item: Storage item of the counter.

        Returns:
            The assigned id and inclusion block.

        Raises:
            SubmissionError: If any stage fails or the counter did not move
                by exactly one (another writer raced this signer).
        """
        with self._exclusive(label):
            before = self._read_counter(counter_pallet, counter_item, None)
            finalized = self._submit(call, label)
            try:
                after = self._read_counter(counter_pallet, counter_item, finalized.block_hash)
            except ChainConnectionError as error:
                raise SubmissionError(
                    f"{label} on {self.chain_id} landed in block {finalized.block_number} "
                    f"but its id could not be derived: {error}",
                    stage="counter",
                ) from error
            if after != before + 1:
                raise SubmissionError(
                    f"{label} on {self.chain_id}: {counter_pallet}.{counter_item} moved from "
                    f"{before} to {after}; expected exactly one new entry from a single writer.",
                    stage="counter",
                )
            entity = SubmittedEntity(assigned_id=after - 1, block_number=finalized.block_number)
            _LOGGER.info(
                "entity_created",
                chain_id=self.chain_id,
                label=label,
                assigned_id=entity.assigned_id,
                block_number=entity.block_number,
            )
            return entity

    def submit_governance_referendum(
        self,
        encoder: CallEncoder,
        track: GovernanceTrack,
        outer_variant: str,
    ) -> SubmittedEntity:
        """Note a remark preimage and open a governance referendum on ``track``."""
        remark = encoder.remark_call(f"bynum-gov-{track.name}")
        self.submit(encoder.compose_note_preimage(remark), "Preimage.note_preimage")
        call = encoder.compose_submit_referendum(
            governance_origin(track, outer_variant),
            proposal_descriptor(remark),
            GOVERNANCE_REFERENDA_PALLET,
        )
        return self.submit_and_track(
            call, f"{GOVERNANCE_REFERENDA_PALLET}.submit", GOVERNANCE_REFERENDA_PALLET
        )

    def submit_fellowship_referendum(
        self,
        encoder: CallEncoder,
        track: FellowshipTrack,
        outer_variant: str,
    ) -> SubmittedEntity:
        """Note a remark preimage and open a fellowship referendum on ``track``.

        The signer must already hold a sufficient collective rank.
        """
        remark = encoder.remark_call(f"bynum-fell-{track.name}")
        self.submit(encoder.compose_note_preimage(remark), "Preimage.note_preimage")
        call = encoder.compose_submit_referendum(
            fellowship_origin(track, outer_variant),
            proposal_descriptor(remark),
            FELLOWSHIP_REFERENDA_PALLET,
        )
        return self.submit_and_track(
            call, f"{FELLOWSHIP_REFERENDA_PALLET}.submit", FELLOWSHIP_REFERENDA_PALLET
        )

    @contextmanager
    def _exclusive(self, label: str) -> Iterator[None]:
        if not self._lock.acquire(blocking=False):
            raise ConcurrentSubmissionError(
                f"{label} on {self.chain_id}: another submission from this signer is in flight."
            )
        try:
            yield
        finally:
            self._lock.release()

    def _submit(self, call: Any, label: str) -> FinalizedExtrinsic:
        receipt, block_hash, block_number = self._await_inclusion(call, label)
        self._await_finalization(label, block_hash, block_number)
        self._check_dispatch(receipt, label)
        return FinalizedExtrinsic(label=label, block_hash=block_hash, block_number=block_number)

    def _await_inclusion(self, call: Any, label: str) -> tuple[Any, str, int]:
        try:
            extrinsic = self._client.create_signed_extrinsic(call=call, keypair=self._keypair)
            receipt = self._client.submit_extrinsic(extrinsic, wait_for_inclusion=True)
            block_hash = receipt.block_hash
            if not block_hash:
                raise InclusionError(f"{label} on {self.chain_id}: node returned no block hash.")
            block_number = int(self._client.get_block_number(block_hash))
        except InclusionError:
            raise
        except Exception as error:
            raise InclusionError(
                f"{label} on {self.chain_id} was not included in a block: {error}."
            ) from error
        _LOGGER.info(
            "extrinsic_included",
            chain_id=self.chain_id,
            label=label,
            block_hash=block_hash,
            block_number=block_number,
        )
        return receipt, block_hash, block_number

    def _await_finalization(self, label: str, block_hash: str, block_number: int) -> None:
        deadline = self._clock() + self._finalization_timeout
        while True:
            try:
                finalized = finalized_block_number(self._client)
                if finalized >= block_number:
                    canonical_hash = self._client.get_block_hash(block_number)
                    break
            except Exception as error:
                raise FinalizationError(
                    f"{label} on {self.chain_id}: lost contact while awaiting finalization: {error}"
                ) from error
            if self._clock() >= deadline:
                raise FinalizationError(
                    f"{label} on {self.chain_id}: block #{block_number} not finalized within "
                    f"{self._finalization_timeout}s (finalized head #{finalized})."
                )
            self._sleep(self._poll_interval)
        if canonical_hash != block_hash:
            raise FinalizationError(
                f"{label} on {self.chain_id}: inclusion block {block_hash} was retracted; "
                f"finalized block #{block_number} is {canonical_hash}."
            )
        _LOGGER.info(
            "extrinsic_finalized",
            chain_id=self.chain_id,
            label=label,
            block_number=block_number,
        )

    def _check_dispatch(self, receipt: Any, label: str) -> None:
        try:
            succeeded = bool(receipt.is_success)
        except Exception as error:
            raise DispatchFailedError(
                f"{label} on {self.chain_id}: could not read dispatch events: {error}."
            ) from error
        if not succeeded:
            raise DispatchFailedError(
                f"{label} on {self.chain_id} dispatch failed: {receipt.error_message}."
            )

    def _read_counter(self, pallet: str, item: str, block_hash: str | None) -> int:
        try:
            return int(self._client.query(pallet, item, block_hash=block_hash).value)
        except Exception as error:
            raise ChainConnectionError(
                f"Failed to read {pallet}.{item} on {self.chain_id}: {error}."
            ) from error
