"""
Module 02 - Hashing Utilities
Digest primitives for receipt leaves and Merkle nodes.

Owner: Protocol/Crypto Engineer
Module ID: M02

This module provides:
- SHA-256 hashing for raw bytes
- 32-byte big-endian encoding of unsigned integers (uint256 layout)
- Leaf hashing for ledger receipts
- Internal node hashing (left operand first)
- Hex encoding/decoding with 0x prefix

Commitment Rules (Hard Contracts):
1. Leaf: sha256(sha256(BE32(amount)) || sha256(target) || sha256(BE32(id)))
2. Node: sha256(left || right), never sorted
3. Every digest is exactly 32 bytes; nothing is truncated between levels
"""
from __future__ import annotations

import hashlib


DIGEST_SIZE: int = 32

# Largest value representable in the 32-byte unsigned encoding
UINT256_MAX: int = (1 << 256) - 1


def sha256(data: bytes) -> bytes:
    """
    Compute SHA-256 hash of raw bytes.

    Args:
        data: Raw bytes to hash

    Returns:
        32-byte SHA-256 digest

    Example:
        >>> sha256(b"hello").hex()
        '2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824'
    """
    return hashlib.sha256(data).digest()


def encode_uint256(value: int) -> bytes:
    """
    Encode an unsigned integer as a 32-byte big-endian word.

    Args:
        value: Non-negative integer below 2**256

    Returns:
        32 bytes, most significant byte first

    Raises:
        ValueError: If value is negative or does not fit in 256 bits

    Example:
        >>> encode_uint256(1).hex()[-4:]
        '0001'
    """
    if value < 0 or value > UINT256_MAX:
        raise ValueError(f"Value does not fit in uint256: {value}")
    return value.to_bytes(DIGEST_SIZE, "big")


def leaf_hash(amount: int, target: bytes, receipt_id: int) -> bytes:
    """
    Compute the leaf hash for one receipt.

    Each field is digested on its own and the three digests are
    concatenated before the final digest:

        sha256(sha256(BE32(amount)) || sha256(target) || sha256(BE32(id)))

    Args:
        amount: Receipt amount (uint256)
        target: Opaque target bytes
        receipt_id: Sequential receipt id (uint256)

    Returns:
        32-byte leaf hash
    """
    return sha256(
        sha256(encode_uint256(amount))
        + sha256(target)
        + sha256(encode_uint256(receipt_id))
    )


def node_hash(left: bytes, right: bytes) -> bytes:
    """
    Hash the concatenation of two child digests.

    Order is structural: the left child always comes first.

    Args:
        left: Left child hash (32 bytes)
        right: Right child hash (32 bytes)

    Returns:
        32-byte SHA-256 digest of left || right
    """
    return sha256(left + right)


def to_hex(data: bytes) -> str:
    """
    Convert bytes to hexadecimal string with 0x prefix.

    Example:
        >>> to_hex(bytes.fromhex("deadbeef"))
        '0xdeadbeef'
    """
    return "0x" + data.hex()


def from_hex(hex_string: str) -> bytes:
    """
    Convert hexadecimal string (with 0x prefix) to bytes.

    Args:
        hex_string: Hex string with 0x prefix

    Returns:
        Decoded bytes

    Raises:
        ValueError: If string doesn't start with 0x, has odd length,
                   or contains invalid hex characters

    Example:
        >>> from_hex("0xdeadbeef").hex()
        'deadbeef'
    """
    if not hex_string.startswith("0x"):
        raise ValueError(
            f"Hex string must start with '0x' prefix, got: {hex_string[:10]}..."
        )

    hex_content = hex_string[2:]

    if len(hex_content) % 2 != 0:
        raise ValueError(
            f"Hex string must have even length after 0x prefix, "
            f"got length {len(hex_content)}"
        )

    try:
        return bytes.fromhex(hex_content)
    except ValueError as e:
        raise ValueError(f"Invalid hex characters in string: {e}") from e


def digest_from_hex(hex_string: str) -> bytes:
    """
    Decode a 0x-prefixed hex string that must hold exactly one digest.

    Raises:
        ValueError: If the decoded value is not 32 bytes long
    """
    data = from_hex(hex_string)
    if len(data) != DIGEST_SIZE:
        raise ValueError(
            f"Expected a {DIGEST_SIZE}-byte digest, got {len(data)} bytes"
        )
    return data


__all__ = [
    "DIGEST_SIZE",
    "UINT256_MAX",
    "sha256",
    "encode_uint256",
    "leaf_hash",
    "node_hash",
    "to_hex",
    "from_hex",
    "digest_from_hex",
]
