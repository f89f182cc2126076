"""
Batch Recorder

Owns the append-only sequence of committed snapshots. On commit it consumes
every receipt the ledger holds beyond the last snapshot, in batches of at
most max_leaves receipts, and appends one snapshot per batch.

Usage:
    recorder = BatchRecorder(ledger, operator="ops", path_limit=4)
    new_indices = recorder.commit(caller="ops")
    recorder.set_capacity(10, caller="ops")
"""

from __future__ import annotations

import logging
import threading
from typing import Callable

from core.ledger.base import ReceiptLedger
from core.merkle.merkle_tree import build_tree_from_receipts
from core.schemas.errors import (
    LimitExceededException,
    NothingPendingException,
    UnauthorizedException,
)

from .store import Snapshot, SnapshotStore


logger = logging.getLogger(__name__)


# Absolute ceiling on proof length; 2**10 = 1024 leaves per snapshot
MAX_PATH_LIMIT: int = 10

DEFAULT_PATH_LIMIT: int = 4


CommitListener = Callable[[Snapshot], None]


def check_path_limit(path_limit: int) -> None:
    """
    Raises:
        LimitExceededException: If path_limit is outside [0, MAX_PATH_LIMIT]
    """
    if path_limit < 0 or path_limit > MAX_PATH_LIMIT:
        raise LimitExceededException(
            f"Path length limit must be within [0, {MAX_PATH_LIMIT}], got {path_limit}",
            path_limit=path_limit,
            details={"max_path_limit": MAX_PATH_LIMIT},
        )


class BatchRecorder:
    """
    Single-writer owner of the snapshot arena and the batch capacity.

    Mutations (commit, set_capacity, set_ledger) are serialized by a lock
    and restricted to the configured operator.
    """

    def __init__(
        self,
        ledger: ReceiptLedger,
        operator: str,
        path_limit: int = DEFAULT_PATH_LIMIT,
        store: SnapshotStore | None = None,
    ) -> None:
        self._ledger = ledger
        self._operator = operator
        self._store = store if store is not None else SnapshotStore()
        self._lock = threading.Lock()
        self._listeners: list[CommitListener] = []

        persisted = self._store.load_path_limit()
        if persisted is not None:
            check_path_limit(persisted)
            if persisted != path_limit:
                logger.info(
                    f"Using persisted path limit {persisted} instead of configured {path_limit}"
                )
            self._path_limit = persisted
        else:
            check_path_limit(path_limit)
            self._path_limit = path_limit
            self._store.save_path_limit(path_limit)

    # -------------------------------------------------------------------------
    # Read-only state
    # -------------------------------------------------------------------------

    @property
    def operator(self) -> str:
        return self._operator

    @property
    def ledger(self) -> ReceiptLedger:
        return self._ledger

    @property
    def store(self) -> SnapshotStore:
        return self._store

    @property
    def path_limit(self) -> int:
        return self._path_limit

    @property
    def max_leaves(self) -> int:
        return 1 << self._path_limit

    @property
    def next_unrecorded_id(self) -> int:
        return self._store.next_unrecorded_id

    # -------------------------------------------------------------------------
    # Operator actions
    # -------------------------------------------------------------------------

    def commit(self, caller: str) -> list[int]:
        """
        Record every pending receipt as one or more new snapshots.

        Batches are [next, min(next + max_leaves - 1, T - 1)] until the
        ledger count T is reached. All trees are built before any snapshot
        is appended.

        Returns:
            The tree_index of each new snapshot, in order

        Raises:
            UnauthorizedException: If caller is not the operator
            NothingPendingException: If the ledger has no unrecorded receipts
        """
        self._authorize(caller, "commit")

        with self._lock:
            total = self._ledger.count()
            next_id = self._store.next_unrecorded_id
            if total <= next_id:
                raise NothingPendingException(
                    details={"count": total, "next_unrecorded_id": next_id},
                )

            max_leaves = self.max_leaves
            tree_index = len(self._store)
            batch: list[Snapshot] = []
            while next_id < total:
                batch_end = min(next_id + max_leaves - 1, total - 1)
                tree = build_tree_from_receipts(self._ledger.receipts(next_id, batch_end))
                batch.append(Snapshot(tree_index=tree_index, tree=tree))
                tree_index += 1
                next_id = batch_end + 1

            self._store.append_batch(batch)

        for snapshot in batch:
            logger.info(
                f"Committed snapshot {snapshot.tree_index}: receipts "
                f"[{snapshot.first_id}, {snapshot.last_id}] root=0x{snapshot.root.hex()}"
            )
            for listener in self._listeners:
                try:
                    listener(snapshot)
                except Exception:
                    # Already persisted; keep notifying the remaining listeners
                    logger.exception(f"Commit listener failed for snapshot {snapshot.tree_index}")

        return [snapshot.tree_index for snapshot in batch]

    def set_capacity(self, path_limit: int, caller: str) -> int:
        """
        Change the batch capacity to 2**path_limit for future commits.

        Returns:
            The new max_leaves

        Raises:
            UnauthorizedException: If caller is not the operator
            LimitExceededException: If path_limit exceeds MAX_PATH_LIMIT
        """
        self._authorize(caller, "set_capacity")
        check_path_limit(path_limit)

        with self._lock:
            previous = self._path_limit
            self._store.save_path_limit(path_limit)
            self._path_limit = path_limit

        logger.info(f"Path limit changed from {previous} to {path_limit} ({1 << path_limit} leaves)")
        return 1 << path_limit

    def set_ledger(self, ledger: ReceiptLedger, caller: str) -> None:
        """
        Point the recorder at a different receipt ledger.

        Already committed snapshots are unaffected.

        Raises:
            UnauthorizedException: If caller is not the operator
        """
        self._authorize(caller, "set_ledger")
        with self._lock:
            self._ledger = ledger
        logger.info(f"Receipt ledger replaced with {type(ledger).__name__}")

    def add_listener(self, listener: CommitListener) -> None:
        """Register a callback invoked once per newly committed snapshot."""
        self._listeners.append(listener)

    def _authorize(self, caller: str, action: str) -> None:
        if caller != self._operator:
            logger.warning(f"Rejected {action} from non-operator {caller!r}")
            raise UnauthorizedException(caller=caller, details={"action": action})
