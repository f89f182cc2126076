"""
In-memory ledger, used when embedding the core and in tests.
"""

from __future__ import annotations

from core.receipts.models import Receipt

from .base import ReceiptLedger


class InMemoryReceiptLedger(ReceiptLedger):
    """
    Receipt ledger held in a Python list.

    Usage:
        ledger = InMemoryReceiptLedger()
        ledger.append(100000, "AAAAAAAAA")
        ledger.count()  # 1
    """

    def __init__(self) -> None:
        self._receipts: list[Receipt] = []

    def append(self, amount: int, target: bytes | str) -> Receipt:
        """Append a receipt and return it with its assigned id."""
        receipt = Receipt(
            receipt_id=len(self._receipts),
            amount=amount,
            target=target,
        )
        self._receipts.append(receipt)
        return receipt

    def count(self) -> int:
        return len(self._receipts)

    def receipt_at(self, receipt_id: int) -> Receipt:
        self._check_id(receipt_id, len(self._receipts))
        return self._receipts[receipt_id]
