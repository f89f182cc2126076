"""
Module 10 - API Response Models

Pydantic envelopes for API response serialization. Payloads reuse the
core views from core.schemas.anchor.
"""

from typing import Any

from pydantic import BaseModel, Field

from core.schemas.anchor import (
    CapacityView,
    CommittedProofView,
    ProofView,
    SnapshotView,
    TreeView,
)


class HealthResponse(BaseModel):
    """Response for GET /health endpoint."""

    ok: bool = True
    service: str = "receipt-anchor-api"
    version: str = "v1"


class TreeResponse(BaseModel):
    """Ad-hoc range tree."""

    ok: bool = True
    tree: TreeView


class RootResponse(BaseModel):
    """A bare Merkle root."""

    ok: bool = True
    root: str = Field(..., description="Merkle root (0x-prefixed)")


class SnapshotResponse(BaseModel):
    ok: bool = True
    snapshot: SnapshotView


class ProofResponse(BaseModel):
    ok: bool = True
    proof: ProofView


class CommittedProofResponse(BaseModel):
    ok: bool = True
    proof: CommittedProofView


class CommitResponse(BaseModel):
    """Response for POST /snapshots/commit."""

    ok: bool = True
    tree_indices: list[int] = Field(
        default_factory=list,
        description="tree_index of each snapshot created by this commit",
    )
    next_unrecorded_id: int = Field(..., ge=0)


class CapacityResponse(BaseModel):
    ok: bool = True
    capacity: CapacityView


class ErrorDetail(BaseModel):
    """Error detail information."""

    code: str = Field(..., description="Error code")
    message: str = Field(..., description="Human-readable error message")
    details: dict[str, Any] = Field(default_factory=dict)
    retryable: bool = Field(default=False, description="Whether the request can be retried")


class ErrorResponse(BaseModel):
    """Standard error response."""

    ok: bool = False
    error: ErrorDetail
