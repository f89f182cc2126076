"""
Test fixtures package for receipt anchor tests.

This package provides factory functions for creating test objects:
- common.py: receipts, ledgers, recorders and services

Usage:
    from fixtures import make_ledger, make_service

    def test_something():
        service = make_service(make_ledger(3))
"""

from .common import (
    DEFAULT_AMOUNT,
    DEFAULT_TARGET,
    OPERATOR,
    make_ledger,
    make_receipt,
    make_recorder,
    make_service,
    write_jsonl_ledger,
)

__all__ = [
    "DEFAULT_AMOUNT",
    "DEFAULT_TARGET",
    "OPERATOR",
    "make_ledger",
    "make_receipt",
    "make_recorder",
    "make_service",
    "write_jsonl_ledger",
]
