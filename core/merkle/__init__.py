"""
Module 02 - Merkle Tree and Commitments
Padded Merkle tree construction over receipt ranges, plus proof
generation and verification.

Owner: Protocol/Crypto Engineer
Module ID: M02

Canonical Commitment Rules:
1. Leaf hashing: sha256(sha256(BE32(amount)) + sha256(target) + sha256(BE32(id)))
2. Parent hashing: sha256(left + right)
3. Width: smallest power of two >= max(count, 2)
4. Padding: virtual leaf slots take the last real leaf's hash
5. Layout: level order, root last, size 2N - 1

Usage:
    from core.merkle import build_tree_from_receipts, build_proof, verify_proof

    tree = build_tree_from_receipts(receipts)
    proof = build_proof(tree, receipt_id=2)
    assert verify_proof(receipts[2].leaf_hash(), proof, tree.root)
"""
from .merkle_tree import (
    EMPTY_NODE,
    MerkleTree,
    leaf_slot_count,
    tree_size,
    level_layout,
    value_at,
    build_tree,
    build_root,
    build_tree_from_receipts,
    build_root_from_receipts,
)

from .merkle_proofs import (
    MerkleProof,
    build_proof,
    compute_root,
    verify_proof,
    MerkleProver,
    MerkleVerifier,
)


__all__ = [
    # Core types
    "MerkleTree",
    "MerkleProof",
    "EMPTY_NODE",
    # Tree construction
    "leaf_slot_count",
    "tree_size",
    "level_layout",
    "value_at",
    "build_tree",
    "build_root",
    "build_tree_from_receipts",
    "build_root_from_receipts",
    # Proofs
    "build_proof",
    "compute_root",
    "verify_proof",
    # Convenience classes
    "MerkleProver",
    "MerkleVerifier",
]
