"""
Output helpers shared by the CLI commands.
"""

from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel

from core.schemas.anchor import ProofView, TreeView


def print_json(data: BaseModel | dict[str, Any] | list[Any]) -> None:
    """Print a model or plain structure as indented JSON."""
    if isinstance(data, BaseModel):
        data = data.model_dump()
    print(json.dumps(data, indent=2))


def print_tree_human(tree: TreeView) -> None:
    """Print a tree (or snapshot) in human-readable format."""
    tree_index = getattr(tree, "tree_index", None)
    if tree_index is not None:
        print(f"tree_index: {tree_index}")
    print(f"root: {tree.root}")
    print(f"receipts: [{tree.first_id}, {tree.first_id + tree.count - 1}] (count={tree.count})")
    print(f"size: {tree.size}")
    print("nodes:")
    for i, node in enumerate(tree.nodes):
        print(f"  {i:>4}  {node}")


def print_proof_human(proof: ProofView) -> None:
    """Print a proof in human-readable format, leaf level first."""
    tree_index = getattr(proof, "tree_index", None)
    if tree_index is not None:
        print(f"tree_index: {tree_index}")
    print(f"path_length: {proof.path_length}")
    for level, (sibling, is_left) in enumerate(zip(proof.siblings, proof.positions)):
        side = "L" if is_left else "R"
        print(f"  {level:>2} {side} {sibling}")
