"""
Module 10 - API Request Models

Pydantic models for API request validation.
"""

from pydantic import BaseModel, Field


class CapacityRequest(BaseModel):
    """Request body for PUT /capacity."""

    # Range is checked by the recorder after authorization
    path_limit: int = Field(
        ...,
        description="New path length limit; batches hold 2**path_limit receipts",
    )
