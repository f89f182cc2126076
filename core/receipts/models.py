"""
Receipt Models

Read-only view of a ledger receipt as the anchoring core consumes it.

Receipts are created and owned by the external ledger. The core only ever
reads the two hashed fields (amount, target) together with the sequential id.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from core.crypto.hashing import UINT256_MAX, leaf_hash


class Receipt(BaseModel):
    """
    A single ledger receipt.

    Ids are dense and assigned in creation order starting at 0.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    receipt_id: int = Field(
        ...,
        ge=0,
        description="Sequential receipt id assigned by the ledger",
    )
    amount: int = Field(
        ...,
        ge=0,
        le=UINT256_MAX,
        description="Receipt amount (uint256)",
    )
    target: bytes = Field(
        ...,
        description="Opaque target bytes; str input is UTF-8 encoded",
    )

    @field_validator("target", mode="before")
    @classmethod
    def encode_target(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.encode("utf-8")
        return v

    def leaf_hash(self) -> bytes:
        """Leaf hash of this receipt's preimage (amount, target, id)."""
        return leaf_hash(self.amount, self.target, self.receipt_id)
