"""
Core cryptographic utilities.

Module 02 provides the digest primitives shared by leaves and tree nodes.
"""
from .hashing import (
    DIGEST_SIZE,
    UINT256_MAX,
    sha256,
    encode_uint256,
    leaf_hash,
    node_hash,
    to_hex,
    from_hex,
    digest_from_hex,
)

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
