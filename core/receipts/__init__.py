"""
Receipts Module

Read-only receipt model consumed by the Merkle core.
"""

from .models import Receipt

__all__ = [
    "Receipt",
]
