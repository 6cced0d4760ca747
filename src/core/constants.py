"""Core constants used across harness modules.

This module centralizes defaults and ledger constants.
Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

from pathlib import Path

DEFAULT_DATA_ROOT = Path(".harness")
REPORTS_DIR_NAME = "reports"
DEFAULT_SIGNER_URI = "//Alice"
DEFAULT_TOOL_TIMEOUT_SECONDS = 600
DEFAULT_FINALIZATION_TIMEOUT_SECONDS = 120
DEFAULT_POLL_INTERVAL_SECONDS = 1.0
DEFAULT_PORT_BASE = 9000
# Chopsticks binds a few ports above the one it is given.
PORT_STEP = 10
TOOL_COMMAND = ("yarn", "cli", "test")

# Sr25519 public key of the //Alice dev account.
ALICE_ACCOUNT_ID = bytes.fromhex(
    "d43593c715fdd31c61141abd04a99fd6822c8558854ccde39a5684e7a56da27d"
)
# Rank 9 covers every fellowship track up to Fellowship9Dan.
DEFAULT_FELLOWSHIP_RANK = 9

MIGRATOR_PALLET = "AhMigrator"
MIGRATION_STAGE_ITEM = "AhMigrationStage"
# SCALE index of the MigrationDone variant.
MIGRATION_DONE_VALUE = b"\x02"
FELLOWSHIP_COLLECTIVE_PALLET = "FellowshipCollective"

GOVERNANCE_REFERENDA_PALLET = "Referenda"
FELLOWSHIP_REFERENDA_PALLET = "FellowshipReferenda"
REFERENDUM_COUNT_ITEM = "ReferendumCount"
DEFAULT_GOVERNANCE_ORIGIN_VARIANT = "Origins"
POLKADOT_FELLOWSHIP_ORIGIN_VARIANT = "FellowshipOrigins"

DUMMY_CODE_HASH = bytes([1] * 32)
MISMATCHED_PROPOSAL_HASH = bytes(32)
MISMATCHED_PROPOSAL_LENGTH = 999

SUCCESS_PHRASE = "executed successfully"
FAILURE_PHRASE = "execution failed"

GOVERNANCE_CHAIN_ID = "governance"
FELLOWSHIP_CHAIN_ID = "fellowship"
RELAY_CHAIN_ID = "relay"
FELLOWS_TRACK_NAME = "Fellows"
