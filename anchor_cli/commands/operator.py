"""
Module 11 - CLI Operator Commands

Commit pending receipts and read or change the batch capacity. Commits
only persist across invocations when storage.snapshot_dir is configured.

Usage:
    receipt-anchor commit --operator ops [--json]
    receipt-anchor capacity [--set 6 --operator ops] [--json]
"""

from __future__ import annotations

import logging
from argparse import Namespace

from anchor_cli.output import print_json
from core.service import ReceiptAnchorService


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0


def _caller(args: Namespace) -> str:
    # Same rule as the X-Operator header: an absent identity is empty and rejected
    return args.operator or ""


def commit_cmd(args: Namespace) -> int:
    """Commit every pending receipt."""
    if not args.runtime_config.storage.snapshot_dir:
        logger.warning("No snapshot_dir configured; this commit will not outlive the process")

    service = ReceiptAnchorService.from_config(args.runtime_config)
    tree_indices = service.commit(_caller(args))
    next_id = service.recorder.next_unrecorded_id

    if args.json:
        print_json({"tree_indices": tree_indices, "next_unrecorded_id": next_id})
    else:
        for tree_index in tree_indices:
            print(f"committed snapshot {tree_index}: root {service.get_snapshot_root(tree_index)}")
        print(f"next_unrecorded_id: {next_id}")
    return EXIT_SUCCESS


def capacity_cmd(args: Namespace) -> int:
    """Show the capacity, or change it with --set."""
    service = ReceiptAnchorService.from_config(args.runtime_config)

    if args.set is not None:
        if not args.runtime_config.storage.snapshot_dir:
            logger.warning("No snapshot_dir configured; the new capacity will not outlive the process")
        capacity = service.set_capacity(args.set, _caller(args))
    else:
        capacity = service.get_capacity()

    if args.json:
        print_json(capacity)
    else:
        print(f"path_limit: {capacity.path_limit}")
        print(f"max_leaves: {capacity.max_leaves}")
    return EXIT_SUCCESS
