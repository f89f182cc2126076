"""
File-backed ledger reading receipts from a JSON-lines file.

Each non-empty line is one receipt, in id order:

    {"amount": 100000, "target": "AAAAAAAAA"}

``target`` is taken as UTF-8 text unless it starts with ``0x``, in which
case it is decoded as hex bytes. An optional ``receipt_id`` field must match
the line's position. A final line without a newline is a write still in
progress and is ignored until it is completed. The file is owned by
whatever writes receipts; this class only reads it, and re-reads it
whenever it changes on disk.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from core.crypto.hashing import from_hex
from core.receipts.models import Receipt
from core.schemas.errors import LedgerCorruptException

from .base import ReceiptLedger


logger = logging.getLogger(__name__)


class JsonlReceiptLedger(ReceiptLedger):
    """Read-only receipt ledger over a JSON-lines file."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self._stamp: tuple[int, int] | None = None
        self._receipts: list[Receipt] = []

    def count(self) -> int:
        return len(self._load())

    def receipt_at(self, receipt_id: int) -> Receipt:
        receipts = self._load()
        self._check_id(receipt_id, len(receipts))
        return receipts[receipt_id]

    def _load(self) -> list[Receipt]:
        if not self.path.exists():
            return []

        stat = self.path.stat()
        stamp = (stat.st_mtime_ns, stat.st_size)
        if stamp == self._stamp:
            return self._receipts

        try:
            text = self.path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise LedgerCorruptException(
                f"Ledger {self.path} is not valid UTF-8: {e}",
                path=str(self.path),
            ) from e

        lines = text.split("\n")
        # The last piece has no newline yet: either empty or a write in progress
        pending = lines.pop()
        if pending.strip():
            logger.debug(f"Ignoring incomplete trailing line in {self.path}")

        receipts: list[Receipt] = []
        for line_no, line in enumerate(lines, start=1):
            line = line.strip()
            if not line:
                continue
            receipts.append(self._parse(line, len(receipts), line_no))

        if len(receipts) < len(self._receipts):
            logger.warning(
                f"Ledger {self.path} shrank from {len(self._receipts)} to {len(receipts)} receipts"
            )

        logger.debug(f"Loaded {len(receipts)} receipts from {self.path}")
        self._receipts = receipts
        self._stamp = stamp
        return receipts

    def _parse(self, line: str, receipt_id: int, line_no: int) -> Receipt:
        """
        Raises:
            LedgerCorruptException: If the line is not a valid receipt record
        """
        try:
            record = json.loads(line)
            if not isinstance(record, dict):
                raise ValueError(f"expected an object, got {type(record).__name__}")

            declared = record.get("receipt_id")
            if declared is not None and declared != receipt_id:
                raise ValueError(f"declares receipt_id {declared}, expected {receipt_id}")

            target = record["target"]
            if isinstance(target, str) and target.startswith("0x"):
                target = from_hex(target)

            return Receipt(
                receipt_id=receipt_id,
                amount=int(record["amount"]),
                target=target,
            )
        except (KeyError, TypeError, ValueError) as e:
            raise LedgerCorruptException(
                f"Unreadable receipt at {self.path}:{line_no}: {e}",
                path=str(self.path),
                line=line_no,
            ) from e
