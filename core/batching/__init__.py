"""
Batching Module

Snapshot arena and the operator-driven batch recorder.
"""

from .recorder import (
    DEFAULT_PATH_LIMIT,
    MAX_PATH_LIMIT,
    BatchRecorder,
    CommitListener,
    check_path_limit,
)
from .store import FileSnapshotStore, Snapshot, SnapshotStore

__all__ = [
    "BatchRecorder",
    "CommitListener",
    "DEFAULT_PATH_LIMIT",
    "MAX_PATH_LIMIT",
    "check_path_limit",
    "Snapshot",
    "SnapshotStore",
    "FileSnapshotStore",
]
