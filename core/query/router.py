"""
Query Router

Read-only facade over the ledger and the committed snapshots.

Ad-hoc queries rebuild the requested range from the ledger on every call.
Committed queries read the recorder's snapshot arena. Nothing here mutates
shared state.
"""

from __future__ import annotations

from core.batching.recorder import BatchRecorder
from core.batching.store import Snapshot
from core.merkle.merkle_proofs import MerkleProof, build_proof
from core.merkle.merkle_tree import (
    MerkleTree,
    build_root_from_receipts,
    build_tree_from_receipts,
)
from core.schemas.errors import (
    InvalidRangeException,
    NotFoundException,
    OutOfRangeException,
)


class QueryRouter:
    """Resolves range, snapshot and proof queries."""

    def __init__(self, recorder: BatchRecorder) -> None:
        self._recorder = recorder

    def _check_range(self, start: int, end: int) -> None:
        total = self._recorder.ledger.count()
        if start < 0 or end < start or end >= total:
            raise InvalidRangeException(
                f"Invalid receipt range [{start}, {end}] for a ledger of {total}",
                start=start,
                end=end,
                details={"count": total},
            )

    # -------------------------------------------------------------------------
    # Ad-hoc ranges
    # -------------------------------------------------------------------------

    def build_range(self, start: int, end: int) -> MerkleTree:
        """
        Build the tree over receipts [start, end].

        Raises:
            InvalidRangeException: If end < start or end >= ledger count
        """
        self._check_range(start, end)
        return build_tree_from_receipts(self._recorder.ledger.receipts(start, end))

    def root_of_range(self, start: int, end: int) -> bytes:
        """Root of [start, end] without keeping the node layout."""
        self._check_range(start, end)
        return build_root_from_receipts(self._recorder.ledger.receipts(start, end))

    def proof_in_range(self, receipt_id: int, start: int, end: int) -> MerkleProof:
        """
        Proof for receipt_id in the ad-hoc tree over [start, end].

        Raises:
            InvalidRangeException: If the range itself is invalid
            OutOfRangeException: If receipt_id lies outside [start, end]
        """
        self._check_range(start, end)
        if not start <= receipt_id <= end:
            raise OutOfRangeException(
                f"Receipt {receipt_id} is outside [{start}, {end}]",
                receipt_id=receipt_id,
                details={"start": start, "end": end},
            )
        return build_proof(self.build_range(start, end), receipt_id)

    # -------------------------------------------------------------------------
    # Snapshots
    # -------------------------------------------------------------------------

    def snapshot_by_index(self, tree_index: int) -> Snapshot:
        """
        Raises:
            NotFoundException: If tree_index is not yet committed
        """
        return self._recorder.store.get(tree_index)

    def snapshot_covering_count(self, n: int) -> Snapshot:
        """
        Live tree for the capacity-aligned batch holding the n-th receipt.

        The batch is [b * max_leaves, min((b + 1) * max_leaves, count) - 1]
        with b = (n - 1) // max_leaves. It is rebuilt from the ledger, so it
        reflects the receipts that exist now rather than what was committed.

        Raises:
            NotFoundException: If n < 1 or the batch holds no receipts yet
        """
        if n < 1:
            raise NotFoundException(
                f"Receipt total must be at least 1, got {n}",
                details={"n": n},
            )

        max_leaves = self._recorder.max_leaves
        total = self._recorder.ledger.count()
        batch_index = (n - 1) // max_leaves
        batch_start = batch_index * max_leaves
        if batch_start >= total:
            raise NotFoundException(
                f"No receipts exist yet in batch {batch_index}",
                details={"n": n, "batch_start": batch_start, "count": total},
            )

        batch_end = min(batch_start + max_leaves - 1, total - 1)
        tree = build_tree_from_receipts(self._recorder.ledger.receipts(batch_start, batch_end))
        return Snapshot(tree_index=batch_index, tree=tree)

    def proof_for_receipt(self, receipt_id: int) -> tuple[int, MerkleProof]:
        """
        Proof for receipt_id against the committed snapshot covering it.

        Returns:
            (tree_index, proof)

        Raises:
            NotFoundException: If no committed snapshot covers receipt_id
        """
        snapshot = self._recorder.store.find_covering(receipt_id)
        if snapshot is None:
            raise NotFoundException(
                f"Receipt {receipt_id} is not covered by any committed snapshot",
                details={"receipt_id": receipt_id},
            )
        return snapshot.tree_index, build_proof(snapshot.tree, receipt_id)
