"""
Module 09 - Anchor Service

In-process entry point binding the batch recorder and the query router to
the externally exposed operation names. Every read returns a pydantic view
with 0x-hex digests; operator actions take the caller identity explicitly.

Usage:
    service = ReceiptAnchorService.from_config(RuntimeConfig.from_env())
    service.commit(caller="ops")
    view = service.get_snapshot(0)
"""
from __future__ import annotations

import logging
from typing import Optional

from core.batching.recorder import BatchRecorder
from core.batching.store import FileSnapshotStore, SnapshotStore
from core.config.runtime import RuntimeConfig
from core.crypto.hashing import to_hex
from core.ledger.base import ReceiptLedger
from core.ledger.jsonl import JsonlReceiptLedger
from core.ledger.memory import InMemoryReceiptLedger
from core.query.router import QueryRouter
from core.schemas.anchor import (
    CapacityView,
    CommittedProofView,
    ProofView,
    SnapshotView,
    TreeView,
)


logger = logging.getLogger(__name__)


class ReceiptAnchorService:
    """Facade over BatchRecorder and QueryRouter."""

    def __init__(self, recorder: BatchRecorder) -> None:
        self.recorder = recorder
        self.router = QueryRouter(recorder)

    @classmethod
    def from_config(
        cls,
        config: RuntimeConfig,
        ledger: Optional[ReceiptLedger] = None,
    ) -> "ReceiptAnchorService":
        """
        Wire ledger, snapshot store and recorder from a RuntimeConfig.

        An explicit ledger wins over storage.ledger_path; with neither, an
        empty in-memory ledger is used.
        """
        if ledger is None:
            if config.storage.ledger_path:
                ledger = JsonlReceiptLedger(config.storage.ledger_path)
            else:
                logger.warning("No ledger_path configured, using an empty in-memory ledger")
                ledger = InMemoryReceiptLedger()

        store: SnapshotStore
        if config.storage.snapshot_dir:
            store = FileSnapshotStore(config.storage.snapshot_dir)
        else:
            store = SnapshotStore()

        recorder = BatchRecorder(
            ledger,
            operator=config.anchor.operator,
            path_limit=config.anchor.path_limit,
            store=store,
        )
        logger.debug(
            f"Anchor service ready: ledger={type(ledger).__name__} "
            f"store={type(store).__name__} path_limit={recorder.path_limit}"
        )
        return cls(recorder)

    # -------------------------------------------------------------------------
    # Operator actions
    # -------------------------------------------------------------------------

    def commit(self, caller: str) -> list[int]:
        return self.recorder.commit(caller)

    def set_capacity(self, path_limit: int, caller: str) -> CapacityView:
        max_leaves = self.recorder.set_capacity(path_limit, caller)
        return CapacityView(path_limit=path_limit, max_leaves=max_leaves)

    def set_ledger(self, ledger: ReceiptLedger, caller: str) -> None:
        self.recorder.set_ledger(ledger, caller)

    def get_capacity(self) -> CapacityView:
        return CapacityView(
            path_limit=self.recorder.path_limit,
            max_leaves=self.recorder.max_leaves,
        )

    # -------------------------------------------------------------------------
    # Committed snapshots
    # -------------------------------------------------------------------------

    def get_snapshot(self, tree_index: int) -> SnapshotView:
        return SnapshotView.from_snapshot(self.router.snapshot_by_index(tree_index))

    def get_snapshot_root(self, tree_index: int) -> str:
        return to_hex(self.router.snapshot_by_index(tree_index).root)

    def get_snapshot_by_total(self, n: int) -> SnapshotView:
        """Live tree of the capacity-aligned batch holding the n-th receipt."""
        return SnapshotView.from_snapshot(self.router.snapshot_covering_count(n))

    def prove_committed(self, receipt_id: int) -> CommittedProofView:
        tree_index, proof = self.router.proof_for_receipt(receipt_id)
        return CommittedProofView(tree_index=tree_index, **ProofView.from_proof(proof).model_dump())

    # -------------------------------------------------------------------------
    # Ad-hoc ranges
    # -------------------------------------------------------------------------

    def get_range_tree(self, start: int, end: int) -> TreeView:
        return TreeView.from_tree(self.router.build_range(start, end))

    def get_range_root(self, start: int, end: int) -> str:
        return to_hex(self.router.root_of_range(start, end))

    def prove_range(self, receipt_id: int, start: int, end: int) -> ProofView:
        return ProofView.from_proof(self.router.proof_in_range(receipt_id, start, end))


def create_service(
    config: Optional[RuntimeConfig] = None,
    ledger: Optional[ReceiptLedger] = None,
) -> ReceiptAnchorService:
    """Build a service from the given config, or the process default."""
    if config is None:
        from core.config.runtime import get_default_config
        config = get_default_config()
    return ReceiptAnchorService.from_config(config, ledger=ledger)
