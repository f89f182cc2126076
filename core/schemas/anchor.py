"""
Module 01 - Schemas & Canonicalization
File: anchor.py

Purpose: Value shapes returned by the core operations. Digests are
0x-prefixed lowercase hex strings so the views serialize directly to JSON.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

from core.crypto.hashing import digest_from_hex, to_hex

if TYPE_CHECKING:
    from core.batching.store import Snapshot
    from core.merkle.merkle_proofs import MerkleProof
    from core.merkle.merkle_tree import MerkleTree


class TreeView(BaseModel):
    """A built tree: (root, first_id, count, size, nodes)."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    root: str = Field(..., description="Merkle root (0x-prefixed)")
    first_id: int = Field(..., ge=0, description="First receipt id covered")
    count: int = Field(..., ge=1, description="Number of real receipts covered")
    size: int = Field(..., ge=3, description="Total node count, 2N - 1")
    nodes: list[str] = Field(
        default_factory=list,
        description="Level-order node layout; virtual leaf slots are all-zero",
    )

    @classmethod
    def from_tree(cls, tree: "MerkleTree") -> "TreeView":
        return cls(
            root=to_hex(tree.root),
            first_id=tree.first_id,
            count=tree.count,
            size=tree.size,
            nodes=[to_hex(node) for node in tree.nodes],
        )


class SnapshotView(TreeView):
    """A tree tagged with its tree_index."""

    tree_index: int = Field(..., ge=0, description="Commit-order index")

    @classmethod
    def from_snapshot(cls, snapshot: "Snapshot") -> "SnapshotView":
        tree = TreeView.from_tree(snapshot.tree)
        return cls(tree_index=snapshot.tree_index, **tree.model_dump())


class ProofView(BaseModel):
    """An inclusion proof: (path_length, siblings, positions)."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    path_length: int = Field(..., ge=0)
    siblings: list[str] = Field(default_factory=list, description="Leaf level first")
    positions: list[bool] = Field(
        default_factory=list,
        description="True when the sibling is the left operand",
    )

    @classmethod
    def from_proof(cls, proof: "MerkleProof") -> "ProofView":
        return cls(
            path_length=proof.path_length,
            siblings=[to_hex(s) for s in proof.siblings],
            positions=list(proof.positions),
        )

    def to_proof(self) -> "MerkleProof":
        from core.merkle.merkle_proofs import MerkleProof

        return MerkleProof(
            path_length=self.path_length,
            siblings=tuple(digest_from_hex(s) for s in self.siblings),
            positions=tuple(self.positions),
        )


class CommittedProofView(ProofView):
    """A proof against a committed snapshot."""

    tree_index: int = Field(..., ge=0)


class CapacityView(BaseModel):
    """Current batch capacity."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    path_limit: int = Field(..., ge=0)
    max_leaves: int = Field(..., ge=1)
