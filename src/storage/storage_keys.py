"""Raw storage key derivation.

This module reproduces the ledger's own storage addressing: a 32-byte
pallet/item prefix built from two twox128 hashes, followed by one
Twox64Concat segment per map key. Any deviation yields a key the runtime
never reads, so every helper here is a pure function over bytes.
"""

from __future__ import annotations

import hashlib

import xxhash


def twox_64(data: bytes) -> bytes:
    """Return the 8-byte twox64 digest (xxHash64, seed 0, little-endian)."""
    return xxhash.xxh64_intdigest(data, seed=0).to_bytes(8, "little")


def twox_128(data: bytes) -> bytes:
    """Return the 16-byte twox128 digest (xxHash64 seeds 0 and 1, little-endian)."""
    return b"".join(
        xxhash.xxh64_intdigest(data, seed=seed).to_bytes(8, "little") for seed in (0, 1)
    )


def blake2_256(data: bytes) -> bytes:
    """Return the 32-byte BLAKE2b digest used for preimage hashes."""
    return hashlib.blake2b(data, digest_size=32).digest()


def twox64_concat(key: bytes) -> bytes:
    """Hash a map key with the transparent Twox64Concat hasher.

    The original key bytes follow the digest, so the key stays
    recoverable from the derived address.
    """
    return twox_64(key) + key


def storage_prefix(pallet: str, item: str) -> bytes:
    """Compute the 32-byte prefix shared by every key of one storage item.

    Args:
        pallet: Pallet name as declared in the runtime.
        item: Storage item name.

    Returns:
        twox128(pallet) ++ twox128(item).
    """
    return twox_128(pallet.encode("utf-8")) + twox_128(item.encode("utf-8"))


def storage_value_key(pallet: str, item: str) -> bytes:
    """Build the key of a plain storage value."""
    return storage_prefix(pallet, item)


def storage_map_key(pallet: str, item: str, key: bytes) -> bytes:
    """Build the key of one storage map entry hashed with Twox64Concat."""
    return storage_prefix(pallet, item) + twox64_concat(key)


def storage_double_map_key(pallet: str, item: str, key1: bytes, key2: bytes) -> bytes:
    """Build the key of one double map entry.

    Segments are concatenated in declaration order; swapping the keys
    addresses an unrelated entry.
    """
    return storage_prefix(pallet, item) + twox64_concat(key1) + twox64_concat(key2)


def encode_u16(value: int) -> bytes:
    """SCALE-encode an unsigned 16-bit integer."""
    return value.to_bytes(2, "little")


def encode_u32(value: int) -> bytes:
    """SCALE-encode an unsigned 32-bit integer."""
    return value.to_bytes(4, "little")


def to_hex(data: bytes) -> str:
    """Render bytes as lowercase hex with a ``0x`` prefix."""
    return "0x" + data.hex()


def from_hex(value: str) -> bytes:
    """Parse hex with or without a ``0x`` prefix."""
    return bytes.fromhex(value[2:] if value.startswith(("0x", "0X")) else value)
