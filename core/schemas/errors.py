"""
Module 01 - Schemas & Canonicalization
File: errors.py

Purpose: Standard error taxonomy for the anchoring core.
Defines both Pydantic models for structured error communication
and Python exceptions for control flow.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes used across the core."""

    # Query Errors
    INVALID_RANGE = "INVALID_RANGE"
    OUT_OF_RANGE = "OUT_OF_RANGE"
    NOT_FOUND = "NOT_FOUND"

    # Recorder Errors
    NOTHING_PENDING = "NOTHING_PENDING"
    LIMIT_EXCEEDED = "LIMIT_EXCEEDED"
    UNAUTHORIZED = "UNAUTHORIZED"

    # Merkle & Commitment Errors
    MERKLE_PROOF_INVALID = "MERKLE_PROOF_INVALID"

    # Serialization & Storage Errors
    CANONICALIZATION_ERROR = "CANONICALIZATION_ERROR"
    SNAPSHOT_STORE_CORRUPT = "SNAPSHOT_STORE_CORRUPT"
    LEDGER_CORRUPT = "LEDGER_CORRUPT"


# =============================================================================
# Pydantic Error Models (Structured Communication)
# =============================================================================

class AnchorError(BaseModel):
    """
    Base error model for structured error communication.

    Used by the API and CLI to report failures without leaking
    exception objects across the boundary.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=False,
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.INVALID_RANGE],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional structured details about the error",
    )
    retryable: bool = Field(
        default=False,
        description="Whether the operation can be retried",
    )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class AnchorException(Exception):
    """
    Base exception for all anchoring errors.

    Carries structured error information and converts to an
    AnchorError model for the API and CLI error envelopes.
    """

    def __init__(
        self,
        message: str,
        code: str = "ANCHOR_ERROR",
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
        self.retryable = retryable

    def to_error_model(self) -> AnchorError:
        """Convert this exception to an AnchorError model."""
        return AnchorError(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class InvalidRangeException(AnchorException):
    """Raised for a malformed or out-of-bounds [start, end] range."""

    def __init__(
        self,
        message: str,
        start: int | None = None,
        end: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if start is not None:
            full_details["start"] = start
        if end is not None:
            full_details["end"] = end
        super().__init__(
            message=message,
            code=ErrorCodes.INVALID_RANGE,
            details=full_details,
        )


class OutOfRangeException(AnchorException):
    """Raised when a receipt id lies beyond the ledger or the queried range."""

    def __init__(
        self,
        message: str,
        receipt_id: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if receipt_id is not None:
            full_details["receipt_id"] = receipt_id
        super().__init__(
            message=message,
            code=ErrorCodes.OUT_OF_RANGE,
            details=full_details,
        )


class NotFoundException(AnchorException):
    """Raised for an unknown snapshot or an id no snapshot covers."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.NOT_FOUND,
            details=details,
        )


class NothingPendingException(AnchorException):
    """Raised when a commit is requested with no unrecorded receipts."""

    def __init__(
        self,
        message: str = "No unrecorded receipts to commit",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.NOTHING_PENDING,
            details=details,
        )


class LimitExceededException(AnchorException):
    """Raised when a capacity change exceeds the absolute path-length ceiling."""

    def __init__(
        self,
        message: str,
        path_limit: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if path_limit is not None:
            full_details["path_limit"] = path_limit
        super().__init__(
            message=message,
            code=ErrorCodes.LIMIT_EXCEEDED,
            details=full_details,
        )


class UnauthorizedException(AnchorException):
    """Raised when a non-operator attempts a mutating call."""

    def __init__(
        self,
        message: str = "Caller is not the operator",
        caller: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if caller is not None:
            full_details["caller"] = caller
        super().__init__(
            message=message,
            code=ErrorCodes.UNAUTHORIZED,
            details=full_details,
        )


class MerkleVerificationException(AnchorException):
    """Raised when a Merkle proof is structurally unusable."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.MERKLE_PROOF_INVALID,
            details=details,
        )


class CanonicalizationException(AnchorException):
    """Exception raised when canonical serialization fails."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.CANONICALIZATION_ERROR,
            details=details,
        )


class SnapshotStoreCorruptException(AnchorException):
    """Raised when a persisted snapshot store violates its invariants."""

    def __init__(
        self,
        message: str,
        path: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if path:
            full_details["path"] = path
        super().__init__(
            message=message,
            code=ErrorCodes.SNAPSHOT_STORE_CORRUPT,
            details=full_details,
        )


class LedgerCorruptException(AnchorException):
    """Raised when a file-backed receipt ledger holds an unreadable record."""

    def __init__(
        self,
        message: str,
        path: str | None = None,
        line: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if path:
            full_details["path"] = path
        if line is not None:
            full_details["line"] = line
        super().__init__(
            message=message,
            code=ErrorCodes.LEDGER_CORRUPT,
            details=full_details,
        )
