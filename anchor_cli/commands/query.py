"""
Module 11 - CLI Query Commands

Read-only commands over ad-hoc ranges and committed snapshots.

Usage:
    receipt-anchor tree 0 15 [--json]
    receipt-anchor root 0 15
    receipt-anchor prove 3 0 15 [--json]
    receipt-anchor snapshot 0 | --by-total 17
    receipt-anchor prove-committed 3
"""

from __future__ import annotations

import logging
import sys
from argparse import Namespace

from anchor_cli.output import print_json, print_proof_human, print_tree_human
from core.service import ReceiptAnchorService


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1


def _service(args: Namespace) -> ReceiptAnchorService:
    return ReceiptAnchorService.from_config(args.runtime_config)


def tree_cmd(args: Namespace) -> int:
    """Print the tree over receipts [start, end]."""
    tree = _service(args).get_range_tree(args.start, args.end)
    if args.json:
        print_json(tree)
    else:
        print_tree_human(tree)
    return EXIT_SUCCESS


def root_cmd(args: Namespace) -> int:
    """Print only the root of [start, end]."""
    root = _service(args).get_range_root(args.start, args.end)
    if args.json:
        print_json({"start": args.start, "end": args.end, "root": root})
    else:
        print(root)
    return EXIT_SUCCESS


def prove_cmd(args: Namespace) -> int:
    """Print the proof for a receipt in the ad-hoc tree over [start, end]."""
    proof = _service(args).prove_range(args.receipt_id, args.start, args.end)
    if args.json:
        print_json(proof)
    else:
        print_proof_human(proof)
    return EXIT_SUCCESS


def snapshot_cmd(args: Namespace) -> int:
    """Print a committed snapshot, or the live batch holding the n-th receipt."""
    service = _service(args)
    if args.by_total is not None:
        snapshot = service.get_snapshot_by_total(args.by_total)
    elif args.tree_index is not None:
        snapshot = service.get_snapshot(args.tree_index)
    else:
        print("Error: give a tree index or --by-total N", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    if args.json:
        print_json(snapshot)
    else:
        print_tree_human(snapshot)
    return EXIT_SUCCESS


def prove_committed_cmd(args: Namespace) -> int:
    """Print the proof for a receipt against its committed snapshot."""
    proof = _service(args).prove_committed(args.receipt_id)
    if args.json:
        print_json(proof)
    else:
        print_proof_human(proof)
    return EXIT_SUCCESS
