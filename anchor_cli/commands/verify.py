"""
Module 11 - CLI Verify Command

Recompute a Merkle root from a leaf and a proof, offline, and optionally
compare it to an expected root.

The leaf is given either as a digest (--leaf) or as the receipt fields
(--amount, --target, --receipt-id). The proof comes from --siblings and
--positions, or from a JSON file produced by `prove --json` (or the API's
proof response).

Usage:
    receipt-anchor verify --leaf 0x.. --siblings 0x..,0x.. --positions 0,1 --root 0x..
    receipt-anchor verify --amount 100000 --target AAAAAAAAA --receipt-id 2 \\
        --proof proof.json --root 0x..
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any

from core.crypto.hashing import digest_from_hex, leaf_hash, to_hex
from core.merkle.merkle_proofs import MerkleProof, compute_root
from core.schemas.anchor import ProofView


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2

_TRUE_WORDS = {"1", "true", "t", "l", "left"}
_FALSE_WORDS = {"0", "false", "f", "r", "right"}


@dataclass
class VerifySummary:
    """Outcome of an offline proof check."""
    leaf: str = ""
    computed_root: str = ""
    expected_root: str | None = None
    path_length: int = 0

    @property
    def ok(self) -> bool | None:
        if self.expected_root is None:
            return None
        return self.computed_root == self.expected_root.lower()

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        if self.expected_root is None:
            del d["expected_root"]
        else:
            d["ok"] = self.ok
        return d


def parse_positions(raw: str) -> tuple[bool, ...]:
    """Parse a comma-separated position list (1/0, true/false, L/R)."""
    positions: list[bool] = []
    for item in raw.split(","):
        word = item.strip().lower()
        if not word:
            continue
        if word in _TRUE_WORDS:
            positions.append(True)
        elif word in _FALSE_WORDS:
            positions.append(False)
        else:
            raise ValueError(f"Unrecognized position: {item!r}")
    return tuple(positions)


def parse_siblings(raw: str) -> tuple[bytes, ...]:
    return tuple(digest_from_hex(s.strip()) for s in raw.split(",") if s.strip())


def load_proof_file(path: Path) -> MerkleProof:
    """Read a proof from JSON, accepting a bare proof or an envelope with a "proof" key."""
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if "proof" in data:
        data = data["proof"]
    data = {k: v for k, v in data.items() if k in ProofView.model_fields}
    return ProofView.model_validate(data).to_proof()


def resolve_leaf(args: Namespace) -> bytes:
    if args.leaf:
        return digest_from_hex(args.leaf)
    if args.amount is None or args.target is None or args.receipt_id is None:
        raise ValueError("Give --leaf, or all of --amount, --target and --receipt-id")
    return leaf_hash(args.amount, args.target.encode("utf-8"), args.receipt_id)


def resolve_proof(args: Namespace) -> MerkleProof:
    if args.proof:
        return load_proof_file(Path(args.proof))
    siblings = parse_siblings(args.siblings or "")
    positions = parse_positions(args.positions or "")
    return MerkleProof(path_length=len(siblings), siblings=siblings, positions=positions)


def verify_cmd(args: Namespace) -> int:
    """
    Execute the verify command.

    Returns:
        0 when the root matches (or no --root was given), 2 on mismatch,
        1 on malformed input
    """
    try:
        leaf = resolve_leaf(args)
        proof = resolve_proof(args)
    except (ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    root = compute_root(leaf, proof.siblings, proof.positions)
    summary = VerifySummary(
        leaf=to_hex(leaf),
        computed_root=to_hex(root),
        expected_root=args.root,
        path_length=proof.path_length,
    )

    if args.json:
        print(json.dumps(summary.to_dict(), indent=2))
    else:
        print(f"leaf: {summary.leaf}")
        print(f"path_length: {summary.path_length}")
        print(f"computed_root: {summary.computed_root}")
        if summary.expected_root is not None:
            print(f"expected_root: {summary.expected_root}")
            print(f"ok: {str(summary.ok).lower()}")

    if summary.ok is False:
        logger.warning("Verification failed")
        return EXIT_VERIFICATION_FAILED
    return EXIT_SUCCESS
