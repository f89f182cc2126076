"""
Module 02 - Merkle Tree Implementation
Padded binary Merkle tree over a contiguous run of ledger receipts.

Owner: Protocol/Crypto Engineer
Module ID: M02

This module provides:
- Power-of-two leaf slot sizing (minimum two slots)
- Full level-order node layout for a receipt range
- Root-only computation without retaining the layout
- The value_at helper used for virtual leaf slots

Canonical Commitment Rules (Hard Contracts):
1. Leaf hashing: core.crypto.hashing.leaf_hash(amount, target, id)
2. Parent hashing: parent = sha256(left + right)
3. Width: N = smallest power of two with N >= max(count, 2)
4. Padding: every leaf slot in [count, N) is virtual and takes the value of
   the last real leaf while hashing. Virtual slots are never materialized;
   their layout entries hold EMPTY_NODE.
5. Levels above the leaves are always even-sized, so no padding is needed
   above level 0.

Layout:
    nodes[0 .. N-1]        level 0 (real leaves, then EMPTY_NODE placeholders)
    nodes[N .. N+N/2-1]    level 1
    ...
    nodes[2N-2]            root
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Sequence

from core.crypto.hashing import DIGEST_SIZE, node_hash
from core.receipts.models import Receipt
from core.schemas.errors import InvalidRangeException


# Placeholder stored in virtual leaf slots
EMPTY_NODE: bytes = b"\x00" * DIGEST_SIZE


@dataclass(frozen=True)
class MerkleTree:
    """
    A built tree over receipts [first_id, first_id + count - 1].

    Attributes:
        root: The Merkle root (also the last entry of nodes)
        first_id: Id of the first receipt covered
        count: Number of real receipts covered
        size: Total node count, 2N - 1
        nodes: Level-order node layout of length size
    """
    root: bytes
    first_id: int
    count: int
    size: int
    nodes: tuple[bytes, ...]

    def __post_init__(self) -> None:
        if self.count < 1:
            raise ValueError(f"Tree must cover at least one receipt, got {self.count}")
        if len(self.nodes) != self.size:
            raise ValueError(
                f"Node layout has {len(self.nodes)} entries, expected {self.size}"
            )
        if self.nodes[-1] != self.root:
            raise ValueError("Last node of the layout must be the root")

    @property
    def leaf_slots(self) -> int:
        """Number of leaf slots N (real plus virtual)."""
        return (self.size + 1) // 2

    @property
    def depth(self) -> int:
        """Number of levels between a leaf and the root."""
        return self.leaf_slots.bit_length() - 1

    @property
    def last_id(self) -> int:
        return self.first_id + self.count - 1

    @property
    def leaves(self) -> tuple[bytes, ...]:
        """The materialized leaf hashes, in receipt order."""
        return self.nodes[: self.count]

    def covers(self, receipt_id: int) -> bool:
        return self.first_id <= receipt_id <= self.last_id


def leaf_slot_count(count: int) -> int:
    """
    Smallest power of two N with N >= max(count, 2).

    A lone receipt still gets two slots so it is always paired.

    Raises:
        InvalidRangeException: If count < 1
    """
    if count < 1:
        raise InvalidRangeException(
            f"Cannot size a tree for {count} receipts",
            details={"count": count},
        )
    width = 2
    while width < count:
        width <<= 1
    return width


def tree_size(count: int) -> int:
    """Total node count 2N - 1 for a tree over count receipts."""
    return 2 * leaf_slot_count(count) - 1


def level_layout(leaf_slots: int) -> Iterator[tuple[int, int]]:
    """
    Yield (offset, width) for every level, leaves first, root last.

    Args:
        leaf_slots: Leaf slot count N (a power of two)
    """
    offset = 0
    width = leaf_slots
    while width >= 1:
        yield offset, width
        offset += width
        width //= 2


def value_at(
    nodes: Sequence[bytes],
    offset: int,
    slot: int,
    materialized: int,
) -> bytes:
    """
    Value of a slot for hashing purposes.

    Slots below ``materialized`` are read from the layout; anything past
    that is a virtual duplicate of the last materialized node of the level.

    Args:
        nodes: Node storage
        offset: Index in nodes where the level starts
        slot: 0-based slot within the level
        materialized: Number of materialized nodes in the level
    """
    if slot < materialized:
        return nodes[offset + slot]
    return nodes[offset + materialized - 1]


def build_tree(leaves: Sequence[bytes], first_id: int = 0) -> MerkleTree:
    """
    Build the full padded tree over an ordered list of leaf hashes.

    Algorithm:
    1. N = leaf_slot_count(len(leaves))
    2. Level 0: the real leaves, then EMPTY_NODE for each virtual slot
    3. For each level, hash adjacent pairs via value_at and append the
       parents, so the layout is level order and ends with the root

    Args:
        leaves: Leaf hashes in receipt order
        first_id: Id of the receipt behind leaves[0]

    Returns:
        MerkleTree with size 2N - 1

    Raises:
        InvalidRangeException: If leaves is empty

    Example:
        >>> tree = build_tree([a, b, c])
        >>> tree.size, tree.count
        (7, 3)
    """
    count = len(leaves)
    if count == 0:
        raise InvalidRangeException(
            "Cannot build a tree over zero receipts",
            details={"count": 0},
        )

    width = leaf_slot_count(count)
    nodes: list[bytes] = list(leaves)
    nodes.extend([EMPTY_NODE] * (width - count))

    offset = 0
    materialized = count
    while width > 1:
        for slot in range(0, width, 2):
            left = value_at(nodes, offset, slot, materialized)
            right = value_at(nodes, offset, slot + 1, materialized)
            nodes.append(node_hash(left, right))
        offset += width
        width //= 2
        materialized = width

    return MerkleTree(
        root=nodes[-1],
        first_id=first_id,
        count=count,
        size=len(nodes),
        nodes=tuple(nodes),
    )


def build_root(leaves: Sequence[bytes]) -> bytes:
    """
    Compute the root only, keeping a single level in memory at a time.

    Always equal to build_tree(leaves).root.

    Raises:
        InvalidRangeException: If leaves is empty
    """
    count = len(leaves)
    if count == 0:
        raise InvalidRangeException(
            "Cannot build a tree over zero receipts",
            details={"count": 0},
        )

    width = leaf_slot_count(count)
    level: list[bytes] = list(leaves)
    materialized = count
    while width > 1:
        level = [
            node_hash(
                value_at(level, 0, slot, materialized),
                value_at(level, 0, slot + 1, materialized),
            )
            for slot in range(0, width, 2)
        ]
        width //= 2
        materialized = width

    return level[0]


def _receipt_leaves(receipts: Sequence[Receipt]) -> list[bytes]:
    if not receipts:
        raise InvalidRangeException(
            "Cannot build a tree over zero receipts",
            details={"count": 0},
        )
    first_id = receipts[0].receipt_id
    for offset, receipt in enumerate(receipts):
        if receipt.receipt_id != first_id + offset:
            raise InvalidRangeException(
                "Receipts must have contiguous ids",
                details={"expected": first_id + offset, "actual": receipt.receipt_id},
            )
    return [receipt.leaf_hash() for receipt in receipts]


def build_tree_from_receipts(receipts: Sequence[Receipt]) -> MerkleTree:
    """Hash a contiguous run of receipts and build their tree."""
    leaves = _receipt_leaves(receipts)
    return build_tree(leaves, first_id=receipts[0].receipt_id)


def build_root_from_receipts(receipts: Sequence[Receipt]) -> bytes:
    """Hash a contiguous run of receipts and compute only their root."""
    return build_root(_receipt_leaves(receipts))


__all__ = [
    "EMPTY_NODE",
    "MerkleTree",
    "leaf_slot_count",
    "tree_size",
    "level_layout",
    "value_at",
    "build_tree",
    "build_root",
    "build_tree_from_receipts",
    "build_root_from_receipts",
]
