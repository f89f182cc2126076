"""
Module 11 - Receipt Anchor CLI

Command-line interface for the receipt anchor.

Usage:
    python -m anchor_cli tree 0 15
    python -m anchor_cli commit --operator ops
    python -m anchor_cli snapshot 0
    python -m anchor_cli prove-committed 3
    python -m anchor_cli verify --proof proof.json --root 0x...
"""

__version__ = "0.1.0"
