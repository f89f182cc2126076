"""
Receipt Ledger Unit Tests
Tests for core/ledger/ and core/receipts/models.py

Tests:
- Receipt validation (ids, uint256 amounts, str/bytes targets)
- InMemoryReceiptLedger id assignment and bounds
- JsonlReceiptLedger parsing, hex targets, growth on disk
- JsonlReceiptLedger partial trailing lines and corrupt records
"""
import json

import pytest
from pydantic import ValidationError

from core.crypto.hashing import UINT256_MAX, leaf_hash
from core.ledger import InMemoryReceiptLedger, JsonlReceiptLedger
from core.receipts.models import Receipt
from core.schemas.errors import ErrorCodes, LedgerCorruptException, OutOfRangeException

from fixtures.common import write_jsonl_ledger


class TestReceipt:
    """Receipt model validation."""

    def test_str_target_is_utf8(self):
        receipt = Receipt(receipt_id=0, amount=1, target="AAAAAAAAA")
        assert receipt.target == b"AAAAAAAAA"

    def test_bytes_target_kept(self):
        receipt = Receipt(receipt_id=0, amount=1, target=b"\x00\x01")
        assert receipt.target == b"\x00\x01"

    def test_leaf_hash(self):
        receipt = Receipt(receipt_id=3, amount=100000, target="AAAAAAAAA")
        assert receipt.leaf_hash() == leaf_hash(100000, b"AAAAAAAAA", 3)

    def test_negative_id_rejected(self):
        with pytest.raises(ValidationError):
            Receipt(receipt_id=-1, amount=1, target="x")

    def test_amount_bounds(self):
        Receipt(receipt_id=0, amount=UINT256_MAX, target="x")
        with pytest.raises(ValidationError):
            Receipt(receipt_id=0, amount=UINT256_MAX + 1, target="x")
        with pytest.raises(ValidationError):
            Receipt(receipt_id=0, amount=-1, target="x")

    def test_frozen(self):
        receipt = Receipt(receipt_id=0, amount=1, target="x")
        with pytest.raises(ValidationError):
            receipt.amount = 2


class TestInMemoryLedger:
    """InMemoryReceiptLedger behaviour."""

    def test_append_assigns_dense_ids(self):
        ledger = InMemoryReceiptLedger()
        first = ledger.append(10, "a")
        second = ledger.append(20, "b")

        assert (first.receipt_id, second.receipt_id) == (0, 1)
        assert ledger.count() == 2
        assert ledger.receipt_at(1).amount == 20

    def test_receipts_inclusive_range(self):
        ledger = InMemoryReceiptLedger()
        for i in range(5):
            ledger.append(i, "t")
        assert [r.receipt_id for r in ledger.receipts(1, 3)] == [1, 2, 3]

    def test_out_of_range(self):
        ledger = InMemoryReceiptLedger()
        ledger.append(1, "a")
        with pytest.raises(OutOfRangeException):
            ledger.receipt_at(1)
        with pytest.raises(OutOfRangeException):
            ledger.receipt_at(-1)


class TestJsonlLedger:
    """JsonlReceiptLedger reading a JSON-lines file."""

    def test_missing_file_is_empty(self, tmp_path):
        ledger = JsonlReceiptLedger(tmp_path / "absent.jsonl")
        assert ledger.count() == 0

    def test_reads_receipts(self, jsonl_ledger_path):
        ledger = JsonlReceiptLedger(jsonl_ledger_path)

        assert ledger.count() == 3
        receipt = ledger.receipt_at(2)
        assert receipt.receipt_id == 2
        assert receipt.amount == 100000
        assert receipt.target == b"AAAAAAAAA"

    def test_sees_appended_receipts(self, jsonl_ledger_path):
        ledger = JsonlReceiptLedger(jsonl_ledger_path)
        assert ledger.count() == 3

        write_jsonl_ledger(jsonl_ledger_path, 2)
        assert ledger.count() == 5
        assert ledger.receipt_at(4).receipt_id == 4

    def test_hex_target(self, tmp_path):
        path = tmp_path / "receipts.jsonl"
        path.write_text(json.dumps({"amount": 1, "target": "0x00ff"}) + "\n")
        assert JsonlReceiptLedger(path).receipt_at(0).target == b"\x00\xff"

    def test_blank_lines_skipped(self, tmp_path):
        path = tmp_path / "receipts.jsonl"
        path.write_text('{"amount": 1, "target": "a"}\n\n{"amount": 2, "target": "b"}\n')
        ledger = JsonlReceiptLedger(path)
        assert ledger.count() == 2
        assert ledger.receipt_at(1).amount == 2

    def test_mismatched_receipt_id(self, tmp_path):
        path = tmp_path / "receipts.jsonl"
        path.write_text(json.dumps({"amount": 1, "target": "a", "receipt_id": 5}) + "\n")
        with pytest.raises(LedgerCorruptException, match="receipt_id"):
            JsonlReceiptLedger(path).count()

    def test_out_of_range(self, jsonl_ledger_path):
        with pytest.raises(OutOfRangeException):
            JsonlReceiptLedger(jsonl_ledger_path).receipt_at(3)

    def test_incomplete_trailing_line_ignored(self, tmp_path):
        path = tmp_path / "receipts.jsonl"
        path.write_text('{"amount": 1, "target": "a"}\n{"amount": 2')
        ledger = JsonlReceiptLedger(path)
        assert ledger.count() == 1

        with open(path, "a", encoding="utf-8") as f:
            f.write(', "target": "b"}\n')
        assert ledger.count() == 2
        assert ledger.receipt_at(1).amount == 2


class TestJsonlLedgerCorruption:
    """Complete lines that are not receipts raise LedgerCorruptException."""

    def write(self, tmp_path, text):
        path = tmp_path / "receipts.jsonl"
        path.write_text(text, encoding="utf-8")
        return JsonlReceiptLedger(path)

    def test_malformed_json(self, tmp_path):
        ledger = self.write(tmp_path, '{"amount": 1, "target": "a"}\n{not json}\n')
        with pytest.raises(LedgerCorruptException) as exc_info:
            ledger.count()

        exc = exc_info.value
        assert exc.code == ErrorCodes.LEDGER_CORRUPT
        assert exc.details["line"] == 2
        assert exc.details["path"].endswith("receipts.jsonl")

    def test_non_object_line(self, tmp_path):
        ledger = self.write(tmp_path, "[1, 2]\n")
        with pytest.raises(LedgerCorruptException, match="expected an object"):
            ledger.count()

    def test_missing_field(self, tmp_path):
        ledger = self.write(tmp_path, '{"amount": 1}\n')
        with pytest.raises(LedgerCorruptException, match="target"):
            ledger.count()

    def test_invalid_amount(self, tmp_path):
        ledger = self.write(tmp_path, '{"amount": -1, "target": "a"}\n')
        with pytest.raises(LedgerCorruptException):
            ledger.count()

    def test_bad_hex_target(self, tmp_path):
        ledger = self.write(tmp_path, '{"amount": 1, "target": "0xzz"}\n')
        with pytest.raises(LedgerCorruptException):
            ledger.receipt_at(0)

    def test_invalid_utf8(self, tmp_path):
        path = tmp_path / "receipts.jsonl"
        path.write_bytes(b'{"amount": 1, "target": "\xff"}\n')
        with pytest.raises(LedgerCorruptException, match="UTF-8"):
            JsonlReceiptLedger(path).count()
