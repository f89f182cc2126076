"""
Module 10 - Snapshot Routes

Read access to committed snapshots and to the live capacity-aligned batch
containing the n-th receipt.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from api.deps import get_service
from api.models.responses import RootResponse, SnapshotResponse
from core.service import ReceiptAnchorService


router = APIRouter(prefix="/snapshots", tags=["snapshots"])


@router.get("/by-total/{n}", response_model=SnapshotResponse)
def get_snapshot_by_total(
    n: int,
    service: ReceiptAnchorService = Depends(get_service),
) -> SnapshotResponse:
    """
    Live tree for the batch that holds receipt number n (1-based).

    The tree is rebuilt from the current ledger, so a batch that is not yet
    full reflects only the receipts present now.
    """
    return SnapshotResponse(snapshot=service.get_snapshot_by_total(n))


@router.get("/{tree_index}", response_model=SnapshotResponse)
def get_snapshot(
    tree_index: int,
    service: ReceiptAnchorService = Depends(get_service),
) -> SnapshotResponse:
    return SnapshotResponse(snapshot=service.get_snapshot(tree_index))


@router.get("/{tree_index}/root", response_model=RootResponse)
def get_snapshot_root(
    tree_index: int,
    service: ReceiptAnchorService = Depends(get_service),
) -> RootResponse:
    return RootResponse(root=service.get_snapshot_root(tree_index))
