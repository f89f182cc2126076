"""
Module 10 - Range Routes

Ad-hoc trees, roots and proofs over arbitrary [start, end] receipt ranges.
Nothing here is recorded; every call rebuilds from the ledger.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from api.deps import get_service
from api.models.responses import ProofResponse, RootResponse, TreeResponse
from core.service import ReceiptAnchorService


router = APIRouter(prefix="/ranges", tags=["ranges"])


@router.get("/{start}/{end}", response_model=TreeResponse)
def get_range_tree(
    start: int,
    end: int,
    service: ReceiptAnchorService = Depends(get_service),
) -> TreeResponse:
    """Full node layout of the tree over receipts [start, end]."""
    return TreeResponse(tree=service.get_range_tree(start, end))


@router.get("/{start}/{end}/root", response_model=RootResponse)
def get_range_root(
    start: int,
    end: int,
    service: ReceiptAnchorService = Depends(get_service),
) -> RootResponse:
    return RootResponse(root=service.get_range_root(start, end))


@router.get("/{start}/{end}/proof/{receipt_id}", response_model=ProofResponse)
def prove_range(
    start: int,
    end: int,
    receipt_id: int,
    service: ReceiptAnchorService = Depends(get_service),
) -> ProofResponse:
    """Inclusion proof for receipt_id in the ad-hoc tree over [start, end]."""
    return ProofResponse(proof=service.prove_range(receipt_id, start, end))
