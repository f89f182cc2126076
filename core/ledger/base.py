"""
Ledger Collaborator Contract

The anchoring core never creates receipts. It reads them from a ledger
that reports a monotonically increasing receipt count and returns a
receipt's hashed fields by id.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from core.receipts.models import Receipt
from core.schemas.errors import OutOfRangeException


class ReceiptLedger(ABC):
    """
    Abstract read-only view of an append-only receipt ledger.

    Implementations must guarantee dense ids starting at 0 and a count
    that never decreases.
    """

    @abstractmethod
    def count(self) -> int:
        """Total number of receipts created so far."""

    @abstractmethod
    def receipt_at(self, receipt_id: int) -> Receipt:
        """
        Return the receipt with the given id.

        Raises:
            OutOfRangeException: If receipt_id >= count() or is negative
        """

    def receipts(self, start: int, end: int) -> list[Receipt]:
        """Receipts with ids in [start, end], inclusive."""
        return [self.receipt_at(receipt_id) for receipt_id in range(start, end + 1)]

    def _check_id(self, receipt_id: int, total: int) -> None:
        if receipt_id < 0 or receipt_id >= total:
            raise OutOfRangeException(
                f"Receipt {receipt_id} does not exist (ledger holds {total})",
                receipt_id=receipt_id,
                details={"count": total},
            )
