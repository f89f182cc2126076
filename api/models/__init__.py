"""API request and response models."""

from api.models.requests import CapacityRequest
from api.models.responses import (
    HealthResponse,
    TreeResponse,
    RootResponse,
    SnapshotResponse,
    ProofResponse,
    CommittedProofResponse,
    CommitResponse,
    CapacityResponse,
    ErrorDetail,
    ErrorResponse,
)

__all__ = [
    "CapacityRequest",
    "HealthResponse",
    "TreeResponse",
    "RootResponse",
    "SnapshotResponse",
    "ProofResponse",
    "CommittedProofResponse",
    "CommitResponse",
    "CapacityResponse",
    "ErrorDetail",
    "ErrorResponse",
]
