"""
Module 02 - Merkle Proofs
Inclusion proof generation against a built tree, and caller-side
verification.

Owner: Protocol/Crypto Engineer
Module ID: M02

A proof is the ordered list of sibling hashes from the leaf level up to
(not including) the root, plus one position bit per sibling:

    positions[i] is True   -> sibling is the LEFT operand at level i
    positions[i] is False  -> sibling is the RIGHT operand at level i

This module provides:
- MerkleProof: Dataclass representing an inclusion proof
- build_proof: Generate a proof for a receipt id in a MerkleTree
- compute_root / verify_proof: Recombine a leaf with its path
- MerkleProver / MerkleVerifier: Receipt-level convenience wrappers
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from core.crypto.hashing import node_hash
from core.merkle.merkle_tree import MerkleTree, level_layout, value_at
from core.receipts.models import Receipt
from core.schemas.errors import MerkleVerificationException, OutOfRangeException


@dataclass(frozen=True)
class MerkleProof:
    """
    An inclusion proof for a single leaf.

    Attributes:
        path_length: Number of levels between the leaf and the root
        siblings: Sibling hashes, leaf level first
        positions: Position bit per sibling (True = sibling on the left)
    """
    path_length: int
    siblings: tuple[bytes, ...]
    positions: tuple[bool, ...]

    def __post_init__(self) -> None:
        """Validate proof structure."""
        if len(self.siblings) != self.path_length or len(self.positions) != self.path_length:
            raise ValueError(
                f"Proof of length {self.path_length} has {len(self.siblings)} siblings "
                f"and {len(self.positions)} positions"
            )


def build_proof(tree: MerkleTree, receipt_id: int) -> MerkleProof:
    """
    Generate the inclusion proof for a receipt covered by a tree.

    Algorithm:
    1. idx = receipt_id - tree.first_id
    2. At each level below the root:
       - sibling slot is idx ^ 1
       - position bit is True iff idx is odd
       - the sibling value goes through value_at, so a virtual leaf slot
         yields the duplicate of the last real leaf
       - idx = idx // 2
    3. path_length = log2(N)

    Args:
        tree: A built tree
        receipt_id: Id of the receipt to prove

    Returns:
        MerkleProof for the receipt

    Raises:
        OutOfRangeException: If the tree does not cover receipt_id
    """
    if not tree.covers(receipt_id):
        raise OutOfRangeException(
            f"Receipt {receipt_id} is outside [{tree.first_id}, {tree.last_id}]",
            receipt_id=receipt_id,
        )

    idx = receipt_id - tree.first_id
    siblings: list[bytes] = []
    positions: list[bool] = []
    materialized = tree.count

    for offset, width in level_layout(tree.leaf_slots):
        if width == 1:
            break
        siblings.append(value_at(tree.nodes, offset, idx ^ 1, materialized))
        positions.append(idx % 2 == 1)
        idx //= 2
        materialized = width // 2

    return MerkleProof(
        path_length=len(siblings),
        siblings=tuple(siblings),
        positions=tuple(positions),
    )


def compute_root(
    leaf: bytes,
    siblings: Sequence[bytes],
    positions: Sequence[bool],
) -> bytes:
    """
    Recombine a leaf hash with its path, bottom-up.

    Raises:
        MerkleVerificationException: If siblings and positions differ in length
    """
    if len(siblings) != len(positions):
        raise MerkleVerificationException(
            "Siblings and positions must have the same length",
            details={"siblings": len(siblings), "positions": len(positions)},
        )

    current = leaf
    for sibling, sibling_on_left in zip(siblings, positions):
        if sibling_on_left:
            current = node_hash(sibling, current)
        else:
            current = node_hash(current, sibling)
    return current


def verify_proof(leaf: bytes, proof: MerkleProof, root: bytes) -> bool:
    """Return True if the proof recombines leaf into root."""
    return compute_root(leaf, proof.siblings, proof.positions) == root


class MerkleProver:
    """
    Convenience class for generating proofs.

    Example:
        >>> tree = build_tree_from_receipts(receipts)
        >>> proof = MerkleProver.prove(tree, receipt_id=2)
    """

    @staticmethod
    def prove(tree: MerkleTree, receipt_id: int) -> MerkleProof:
        return build_proof(tree, receipt_id)

    @staticmethod
    def prove_receipt(tree: MerkleTree, receipt: Receipt) -> MerkleProof:
        """
        Generate a proof for a receipt, checking it is the one the tree holds.

        Raises:
            OutOfRangeException: If the tree does not cover the receipt id
            MerkleVerificationException: If the receipt hashes to a different leaf
        """
        proof = build_proof(tree, receipt.receipt_id)
        if tree.nodes[receipt.receipt_id - tree.first_id] != receipt.leaf_hash():
            raise MerkleVerificationException(
                f"Receipt {receipt.receipt_id} does not match the committed leaf",
                details={"receipt_id": receipt.receipt_id},
            )
        return proof


class MerkleVerifier:
    """Convenience class for verifying proofs."""

    @staticmethod
    def verify(leaf: bytes, proof: MerkleProof, root: bytes) -> bool:
        return verify_proof(leaf, proof, root)

    @staticmethod
    def verify_receipt(receipt: Receipt, proof: MerkleProof, root: bytes) -> bool:
        """
        Verify a receipt is included under a root.

        The receipt is hashed with its own id to produce the leaf.
        """
        return verify_proof(receipt.leaf_hash(), proof, root)


__all__ = [
    "MerkleProof",
    "build_proof",
    "compute_root",
    "verify_proof",
    "MerkleProver",
    "MerkleVerifier",
]
