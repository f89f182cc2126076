"""
Module 10 - Receipt Routes

Inclusion proof for a single receipt against its committed snapshot.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from api.deps import get_service
from api.models.responses import CommittedProofResponse
from core.service import ReceiptAnchorService


router = APIRouter(prefix="/receipts", tags=["receipts"])


@router.get("/{receipt_id}/proof", response_model=CommittedProofResponse)
def prove_committed(
    receipt_id: int,
    service: ReceiptAnchorService = Depends(get_service),
) -> CommittedProofResponse:
    return CommittedProofResponse(proof=service.prove_committed(receipt_id))
