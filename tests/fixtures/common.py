"""
Common test fixtures shared by all modules.

Provides factory functions for the core data structures:
- Receipt
- InMemoryReceiptLedger
- JSON-lines ledger files
- BatchRecorder / ReceiptAnchorService

Receipt values mirror the deployment test vectors: amount 100000 and
target "AAAAAAAAA", or amount == receipt id for batch scenarios.
"""

import json
from pathlib import Path
from typing import Optional

from core.batching.recorder import BatchRecorder
from core.batching.store import SnapshotStore
from core.ledger.memory import InMemoryReceiptLedger
from core.receipts.models import Receipt
from core.service import ReceiptAnchorService


DEFAULT_AMOUNT = 100000
DEFAULT_TARGET = "AAAAAAAAA"
OPERATOR = "operator"


# =============================================================================
# Receipt Factories
# =============================================================================

def make_receipt(
    receipt_id: int = 0,
    amount: int = DEFAULT_AMOUNT,
    target: str | bytes = DEFAULT_TARGET,
) -> Receipt:
    """Create a single Receipt for testing."""
    return Receipt(receipt_id=receipt_id, amount=amount, target=target)


def make_ledger(
    count: int = 0,
    amount: Optional[int] = DEFAULT_AMOUNT,
    target: str = DEFAULT_TARGET,
) -> InMemoryReceiptLedger:
    """
    Create an in-memory ledger holding count receipts.

    Args:
        count: Number of receipts to append
        amount: Amount for every receipt; None uses the receipt id as amount
        target: Target for every receipt
    """
    ledger = InMemoryReceiptLedger()
    for i in range(count):
        ledger.append(i if amount is None else amount, target)
    return ledger


def write_jsonl_ledger(
    path: Path,
    count: int,
    amount: Optional[int] = DEFAULT_AMOUNT,
    target: str = DEFAULT_TARGET,
) -> Path:
    """Append count receipts to a JSON-lines ledger file, continuing its ids."""
    start = 0
    if path.exists():
        start = len([line for line in path.read_text(encoding="utf-8").splitlines() if line.strip()])
    with open(path, "a", encoding="utf-8") as f:
        for i in range(start, start + count):
            f.write(json.dumps({"amount": i if amount is None else amount, "target": target}) + "\n")
    return path


# =============================================================================
# Recorder / Service Factories
# =============================================================================

def make_recorder(
    ledger: Optional[InMemoryReceiptLedger] = None,
    path_limit: int = 4,
    operator: str = OPERATOR,
    store: Optional[SnapshotStore] = None,
) -> BatchRecorder:
    """Create a BatchRecorder over the given (or an empty) ledger."""
    return BatchRecorder(
        ledger if ledger is not None else make_ledger(),
        operator=operator,
        path_limit=path_limit,
        store=store,
    )


def make_service(
    ledger: Optional[InMemoryReceiptLedger] = None,
    path_limit: int = 4,
    operator: str = OPERATOR,
    store: Optional[SnapshotStore] = None,
) -> ReceiptAnchorService:
    """Create a ReceiptAnchorService over an in-memory ledger."""
    return ReceiptAnchorService(
        make_recorder(ledger, path_limit=path_limit, operator=operator, store=store)
    )
