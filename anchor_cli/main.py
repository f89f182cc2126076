"""
Module 11 - CLI Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Usage:
    python -m anchor_cli tree START END [--json]
    python -m anchor_cli root START END [--json]
    python -m anchor_cli prove ID START END [--json]
    python -m anchor_cli commit --operator NAME [--json]
    python -m anchor_cli capacity [--set N --operator NAME] [--json]
    python -m anchor_cli snapshot INDEX [--json]
    python -m anchor_cli snapshot --by-total N [--json]
    python -m anchor_cli prove-committed ID [--json]
    python -m anchor_cli verify (--leaf HEX | --amount A --target T --receipt-id I)
                                (--siblings HEX,.. --positions 0,1,.. | --proof FILE) [--root HEX]
    python -m anchor_cli config --init

Environment Variables:
    ANCHOR_OPERATOR         Operator identity (default: operator)
    ANCHOR_PATH_LIMIT       Initial path limit (default: 4)
    ANCHOR_LEDGER_PATH      JSON-lines receipts file
    ANCHOR_SNAPSHOT_DIR     Durable snapshot directory
    ANCHOR_LOG_LEVEL        Log level (default: INFO)
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import traceback
from pathlib import Path
from typing import Sequence

from anchor_cli.commands import operator, query, verify
from anchor_cli.config import (
    DEFAULT_CONFIG_FILE,
    apply_cli_overrides,
    get_default_config_template,
    load_config,
)
from core.schemas.errors import AnchorException


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def setup_logging(level: str = "INFO") -> None:
    """Configure logging for the CLI."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[logging.StreamHandler(sys.stderr)],
    )


def _add_json_flag(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="receipt-anchor",
        description="Receipt Anchor CLI - Build Merkle commitments over the receipt ledger and verify inclusion proofs.",
    )
    parser.add_argument(
        "--version", action="version", version="%(prog)s 0.1.0"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help=f"Path to a YAML or JSON configuration file (default: ./{DEFAULT_CONFIG_FILE} if present)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides config)",
    )
    parser.add_argument(
        "--ledger",
        type=str,
        default=None,
        help="JSON-lines receipts file (overrides storage.ledger_path)",
    )
    parser.add_argument(
        "--snapshot-dir",
        type=str,
        default=None,
        help="Snapshot store directory (overrides storage.snapshot_dir)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="Print tracebacks on errors",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- ad-hoc range commands ---
    tree_parser = subparsers.add_parser(
        "tree",
        help="Build the tree over receipts [START, END]",
    )
    tree_parser.add_argument("start", type=int, help="First receipt id")
    tree_parser.add_argument("end", type=int, help="Last receipt id (inclusive)")
    _add_json_flag(tree_parser)
    tree_parser.set_defaults(func=query.tree_cmd)

    root_parser = subparsers.add_parser(
        "root",
        help="Print the root of receipts [START, END]",
    )
    root_parser.add_argument("start", type=int, help="First receipt id")
    root_parser.add_argument("end", type=int, help="Last receipt id (inclusive)")
    _add_json_flag(root_parser)
    root_parser.set_defaults(func=query.root_cmd)

    prove_parser = subparsers.add_parser(
        "prove",
        help="Proof for a receipt in the tree over [START, END]",
    )
    prove_parser.add_argument("receipt_id", type=int, help="Receipt id to prove")
    prove_parser.add_argument("start", type=int, help="First receipt id")
    prove_parser.add_argument("end", type=int, help="Last receipt id (inclusive)")
    _add_json_flag(prove_parser)
    prove_parser.set_defaults(func=query.prove_cmd)

    # --- operator commands ---
    commit_parser = subparsers.add_parser(
        "commit",
        help="Commit every pending receipt as new snapshots",
        description="Record all unrecorded receipts in batches of the current capacity.",
    )
    commit_parser.add_argument(
        "--operator",
        type=str,
        default=None,
        help="Caller identity; must match the configured operator",
    )
    _add_json_flag(commit_parser)
    commit_parser.set_defaults(func=operator.commit_cmd)

    capacity_parser = subparsers.add_parser(
        "capacity",
        help="Show or change the batch capacity",
    )
    capacity_parser.add_argument(
        "--set",
        type=int,
        default=None,
        metavar="PATH_LIMIT",
        help="New path limit (0..10); batches hold 2**PATH_LIMIT receipts",
    )
    capacity_parser.add_argument(
        "--operator",
        type=str,
        default=None,
        help="Caller identity; must match the configured operator",
    )
    _add_json_flag(capacity_parser)
    capacity_parser.set_defaults(func=operator.capacity_cmd)

    # --- snapshot commands ---
    snapshot_parser = subparsers.add_parser(
        "snapshot",
        help="Show a committed snapshot, or the live batch holding the n-th receipt",
    )
    snapshot_parser.add_argument(
        "tree_index",
        type=int,
        nargs="?",
        default=None,
        help="Committed tree index",
    )
    snapshot_parser.add_argument(
        "--by-total",
        type=int,
        default=None,
        metavar="N",
        help="Show the live batch that holds receipt number N (1-based)",
    )
    _add_json_flag(snapshot_parser)
    snapshot_parser.set_defaults(func=query.snapshot_cmd)

    prove_committed_parser = subparsers.add_parser(
        "prove-committed",
        help="Proof for a receipt against its committed snapshot",
    )
    prove_committed_parser.add_argument("receipt_id", type=int, help="Receipt id to prove")
    _add_json_flag(prove_committed_parser)
    prove_committed_parser.set_defaults(func=query.prove_committed_cmd)

    # --- verify command ---
    verify_parser = subparsers.add_parser(
        "verify",
        help="Recompute a root from a leaf and a proof (offline)",
    )
    verify_parser.add_argument("--leaf", type=str, default=None, help="Leaf hash (0x hex)")
    verify_parser.add_argument("--amount", type=int, default=None, help="Receipt amount")
    verify_parser.add_argument("--target", type=str, default=None, help="Receipt target (UTF-8)")
    verify_parser.add_argument("--receipt-id", type=int, default=None, help="Receipt id")
    verify_parser.add_argument(
        "--siblings",
        type=str,
        default=None,
        help="Comma-separated sibling hashes, leaf level first",
    )
    verify_parser.add_argument(
        "--positions",
        type=str,
        default=None,
        help="Comma-separated positions; 1/true/L means the sibling is the left operand",
    )
    verify_parser.add_argument(
        "--proof",
        type=str,
        default=None,
        help="Proof JSON file (output of `prove --json`)",
    )
    verify_parser.add_argument("--root", type=str, default=None, help="Expected root (0x hex)")
    _add_json_flag(verify_parser)
    verify_parser.set_defaults(func=verify.verify_cmd)

    # --- config command ---
    config_parser = subparsers.add_parser(
        "config",
        help="Manage configuration",
        description="Initialize or display configuration.",
    )
    config_parser.add_argument(
        "--init",
        action="store_true",
        default=False,
        help="Create a template configuration file",
    )
    config_parser.add_argument(
        "--show",
        action="store_true",
        default=False,
        help="Show the effective configuration",
    )
    config_parser.add_argument(
        "--path",
        type=str,
        default=DEFAULT_CONFIG_FILE,
        help=f"Path for config file (default: {DEFAULT_CONFIG_FILE})",
    )
    config_parser.set_defaults(func=config_cmd)

    return parser


def config_cmd(args: argparse.Namespace) -> int:
    """Handle config command."""
    if args.init:
        config_path = Path(args.path)
        if config_path.exists():
            print(f"Error: Config file already exists: {config_path}", file=sys.stderr)
            return EXIT_RUNTIME_ERROR

        config_path.write_text(get_default_config_template())
        print(f"Created configuration file: {config_path}")
        print("\nEdit this file to configure your settings.")
        print("You can also use environment variables (ANCHOR_* prefix).")
        return EXIT_SUCCESS

    if args.show:
        print(json.dumps(args.runtime_config.to_dict(), indent=2))
        return EXIT_SUCCESS

    # Default: show help
    print("Usage: receipt-anchor config [--init|--show]")
    print("  --init  Create a template configuration file")
    print("  --show  Show current configuration")
    return EXIT_SUCCESS


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0=success, 1=error, 2=verification failed)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_RUNTIME_ERROR

    # Load configuration
    try:
        config = load_config(args.config)
    except Exception as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    config = apply_cli_overrides(config, args)
    setup_logging(level=config.log_level)

    # Attach config to args for commands to use
    args.runtime_config = config

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except AnchorException as e:
        if args.debug:
            traceback.print_exc()
        error = e.to_error_model()
        print(f"Error [{error.code}]: {error.message}", file=sys.stderr)
        if error.details:
            print(f"  details: {json.dumps(error.details, default=str)}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except Exception as e:
        if args.debug:
            traceback.print_exc()
        else:
            print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
