"""
Error Model Tests
Tests for core/schemas/errors.py and the API status mapping.
"""
import pytest

from api.errors import STATUS_BY_CODE, status_for
from core.schemas.errors import (
    AnchorException,
    ErrorCodes,
    InvalidRangeException,
    LedgerCorruptException,
    LimitExceededException,
    NotFoundException,
    NothingPendingException,
    OutOfRangeException,
    UnauthorizedException,
)


class TestAnchorException:
    def test_to_error_model(self):
        exc = InvalidRangeException("bad range", start=3, end=1)
        model = exc.to_error_model()

        assert model.code == ErrorCodes.INVALID_RANGE
        assert model.message == "bad range"
        assert model.details["start"] == 3
        assert model.retryable is False

    def test_unauthorized_records_caller(self):
        exc = UnauthorizedException(caller="mallory")
        assert exc.details["caller"] == "mallory"
        assert exc.message == "Caller is not the operator"

    def test_limit_exceeded_records_limit(self):
        exc = LimitExceededException("too big", path_limit=11)
        assert exc.details["path_limit"] == 11

    def test_ledger_corrupt_records_location(self):
        exc = LedgerCorruptException("bad line", path="receipts.jsonl", line=3)
        model = exc.to_error_model()

        assert model.code == ErrorCodes.LEDGER_CORRUPT
        assert model.details == {"path": "receipts.jsonl", "line": 3}


class TestStatusMapping:
    @pytest.mark.parametrize("exc,status", [
        (InvalidRangeException("x"), 400),
        (OutOfRangeException("x"), 400),
        (NotFoundException("x"), 404),
        (NothingPendingException(), 409),
        (LimitExceededException("x"), 422),
        (UnauthorizedException(), 403),
        (LedgerCorruptException("x", path="r.jsonl", line=3), 500),
    ])
    def test_status_for(self, exc, status):
        assert status_for(exc) == status

    def test_unknown_code_is_bad_request(self):
        assert status_for(AnchorException("x", code="SOMETHING_ELSE")) == 400

    def test_every_core_code_mapped(self):
        codes = {v for k, v in vars(ErrorCodes).items() if k.isupper()}
        assert codes <= set(STATUS_BY_CODE)
