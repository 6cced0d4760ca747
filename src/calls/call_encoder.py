"""Dynamic call encoding against live runtime metadata.

This module builds referendum-related calls by pallet and call name.
Positions are resolved from the connected runtime's metadata on every
call, never from a fixed index table, so the harness follows runtime
upgrades without edits. A name missing from metadata fails immediately.
"""

from __future__ import annotations

from typing import Any, Mapping, Protocol

from calls.origins import fellowship_origin, governance_origin, root_origin
from core.constants import (
    DEFAULT_GOVERNANCE_ORIGIN_VARIANT,
    DUMMY_CODE_HASH,
    FELLOWSHIP_REFERENDA_PALLET,
    GOVERNANCE_REFERENDA_PALLET,
    MISMATCHED_PROPOSAL_HASH,
    MISMATCHED_PROPOSAL_LENGTH,
)
from core.errors import CallEncodingError, ChainConnectionError
from core.logging_config import get_logger
from core.types import FellowshipTrack, GovernanceTrack, ProposalDescriptor, ReferendumCallData
from storage.storage_keys import blake2_256, to_hex

_LOGGER = get_logger(__name__)


class RuntimeClient(Protocol):
    """Subset of the Substrate client used for call construction."""

    def get_metadata_call_function(self, module_name: str, call_function_name: str) -> Any: ...

    def compose_call(
        self,
        call_module: str,
        call_function: str,
        call_params: Mapping[str, object],
    ) -> Any: ...


def proposal_descriptor(payload: bytes) -> ProposalDescriptor:
    """Describe a proposal the way the preimage pallet indexes it."""
    return ProposalDescriptor(hash=blake2_256(payload), length=len(payload))


class CallEncoder:
    """Encode calls for one connected runtime."""

    def __init__(self, client: RuntimeClient) -> None:
        self._client = client

    def resolve(self, pallet: str, call: str) -> Any:
        """Look up a call definition in live metadata.

        Args:
            pallet: Pallet name.
            call: Call name within the pallet.

        Returns:
            Metadata call definition.

        Raises:
            CallEncodingError: If the runtime has no such call.
            ChainConnectionError: If metadata cannot be fetched.
        """
        try:
            definition = self._client.get_metadata_call_function(pallet, call)
        except Exception as error:
            raise ChainConnectionError(
                f"Failed to load runtime metadata while resolving {pallet}.{call}: {error}."
            ) from error
        if definition is None:
            raise CallEncodingError(
                f"Call {pallet}.{call} is not present in the live runtime metadata. "
                "Check the pallet and call names against the target runtime."
            )
        return definition

    def compose(self, pallet: str, call: str, args: Mapping[str, object]) -> Any:
        """Resolve and compose a call object ready for signing."""
        self.resolve(pallet, call)
        try:
            return self._client.compose_call(
                call_module=pallet,
                call_function=call,
                call_params=dict(args),
            )
        except Exception as error:
            raise CallEncodingError(
                f"Failed to encode {pallet}.{call} with args {sorted(args)}: {error}."
            ) from error

    def encode_call(self, pallet: str, call: str, args: Mapping[str, object]) -> bytes:
        """Return the SCALE-encoded bytes of a call."""
        return bytes(self.compose(pallet, call, args).data.data)

    def remark_call(self, text: str) -> bytes:
        """Encode ``System.remark`` carrying ``text``."""
        return self.encode_call("System", "remark", {"remark": to_hex(text.encode("utf-8"))})

    def authorize_upgrade_call(self, code_hash: bytes = DUMMY_CODE_HASH) -> bytes:
        """Encode ``System.authorize_upgrade`` for ``code_hash``."""
        return self.encode_call("System", "authorize_upgrade", {"code_hash": to_hex(code_hash)})

    def compose_note_preimage(self, payload: bytes) -> Any:
        """Compose ``Preimage.note_preimage`` registering ``payload``."""
        return self.compose("Preimage", "note_preimage", {"bytes": to_hex(payload)})

    def note_preimage(self, payload: bytes) -> bytes:
        """Encode ``Preimage.note_preimage`` registering ``payload``."""
        return bytes(self.compose_note_preimage(payload).data.data)

    def compose_submit_referendum(
        self,
        origin: Mapping[str, object],
        descriptor: ProposalDescriptor,
        pallet: str = GOVERNANCE_REFERENDA_PALLET,
    ) -> Any:
        """Compose a referendum submission call ready for signing."""
        return self.compose(pallet, "submit", self.submit_args(origin, descriptor))

    def submit_referendum(
        self,
        origin: Mapping[str, object],
        descriptor: ProposalDescriptor,
        pallet: str = GOVERNANCE_REFERENDA_PALLET,
    ) -> bytes:
        """Encode a referendum submission enacted right after approval.

        Args:
            origin: Proposal origin value.
            descriptor: Hash and length of the noted proposal.
            pallet: Referenda pallet instance name.

        Returns:
            Encoded ``<pallet>.submit`` call.
        """
        return bytes(self.compose_submit_referendum(origin, descriptor, pallet).data.data)

    @staticmethod
    def submit_args(
        origin: Mapping[str, object],
        descriptor: ProposalDescriptor,
    ) -> dict[str, object]:
        """Build the argument mapping of a referendum submission."""
        return {
            "proposal_origin": dict(origin),
            "proposal": {
                "Lookup": {"hash": to_hex(descriptor.hash), "len": descriptor.length},
            },
            "enactment_moment": {"After": 0},
        }

    def referendum_call_data(
        self,
        proposal: bytes,
        origin: Mapping[str, object],
        pallet: str = GOVERNANCE_REFERENDA_PALLET,
        descriptor: ProposalDescriptor | None = None,
    ) -> ReferendumCallData:
        """Build preimage and submission hex for one proposal.

        Args:
            proposal: Encoded proposal call.
            origin: Proposal origin value.
            pallet: Referenda pallet instance name.
            descriptor: Override for the submitted descriptor. Defaults to
                the descriptor of ``proposal``.

        Returns:
            Call data bundle.
        """
        preimage = self.note_preimage(proposal)
        submitted = descriptor if descriptor is not None else proposal_descriptor(proposal)
        submit = self.submit_referendum(origin, submitted, pallet)
        _LOGGER.info(
            "referendum_call_data_built",
            pallet=pallet,
            proposal_bytes=len(proposal),
            proposal_hash=to_hex(submitted.hash),
            proposal_len=submitted.length,
        )
        return ReferendumCallData(
            preimage_hex=to_hex(preimage),
            submit_hex=to_hex(submit),
            descriptor=submitted,
        )

    def governance_call_data(self, proposal: bytes | None = None) -> ReferendumCallData:
        """Root-origin referendum for ``proposal`` (an upgrade authorization by default)."""
        body = proposal if proposal is not None else self.authorize_upgrade_call()
        return self.referendum_call_data(body, root_origin())

    def mismatched_preimage_call_data(self, proposal: bytes | None = None) -> ReferendumCallData:
        """Root-origin referendum whose descriptor points at no noted preimage.

        The preimage itself is valid, so the referendum is created, but its
        enactment cannot find the proposal and dispatch fails.
        """
        body = proposal if proposal is not None else self.authorize_upgrade_call()
        wrong = ProposalDescriptor(hash=MISMATCHED_PROPOSAL_HASH, length=MISMATCHED_PROPOSAL_LENGTH)
        return self.referendum_call_data(body, root_origin(), descriptor=wrong)

    def governance_track_call_data(
        self,
        track: GovernanceTrack,
        outer_variant: str = DEFAULT_GOVERNANCE_ORIGIN_VARIANT,
        remark: str | None = None,
    ) -> ReferendumCallData:
        """Remark referendum on a governance track."""
        text = remark if remark is not None else f"gov-track-{track.name}-test"
        return self.referendum_call_data(
            self.remark_call(text),
            governance_origin(track, outer_variant),
        )

    def fellowship_track_call_data(
        self,
        track: FellowshipTrack,
        outer_variant: str,
        remark: str | None = None,
    ) -> ReferendumCallData:
        """Remark referendum on a fellowship track."""
        text = remark if remark is not None else f"fellowship-track-{track.name}-test"
        return self.referendum_call_data(
            self.remark_call(text),
            fellowship_origin(track, outer_variant),
            pallet=FELLOWSHIP_REFERENDA_PALLET,
        )

    def pre_call_hex(self, text: str = "pre-call-test") -> str:
        """Hex of a remark call for the simulation tool's pre-call flag."""
        return to_hex(self.remark_call(text))
