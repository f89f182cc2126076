"""
Ledger Module

Read-only collaborator contract plus the two shipped implementations.
"""

from .base import ReceiptLedger
from .jsonl import JsonlReceiptLedger
from .memory import InMemoryReceiptLedger

__all__ = [
    "ReceiptLedger",
    "InMemoryReceiptLedger",
    "JsonlReceiptLedger",
]
