"""
Module 10 - Operator Routes

Commit pending receipts and manage batch capacity. Mutating calls require
the X-Operator header to match the configured operator.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from api.deps import get_caller, get_service
from api.models.requests import CapacityRequest
from api.models.responses import CapacityResponse, CommitResponse
from core.service import ReceiptAnchorService


router = APIRouter(tags=["operator"])


@router.post("/snapshots/commit", response_model=CommitResponse)
def commit(
    caller: str = Depends(get_caller),
    service: ReceiptAnchorService = Depends(get_service),
) -> CommitResponse:
    """
    Record every pending receipt as one or more new snapshots.

    Returns 409 when the ledger holds no unrecorded receipts.
    """
    tree_indices = service.commit(caller)
    return CommitResponse(
        tree_indices=tree_indices,
        next_unrecorded_id=service.recorder.next_unrecorded_id,
    )


@router.get("/capacity", response_model=CapacityResponse)
def get_capacity(
    service: ReceiptAnchorService = Depends(get_service),
) -> CapacityResponse:
    return CapacityResponse(capacity=service.get_capacity())


@router.put("/capacity", response_model=CapacityResponse)
def set_capacity(
    request: CapacityRequest,
    caller: str = Depends(get_caller),
    service: ReceiptAnchorService = Depends(get_service),
) -> CapacityResponse:
    """Change the batch capacity for future commits (path_limit in [0, 10])."""
    return CapacityResponse(capacity=service.set_capacity(request.path_limit, caller))
