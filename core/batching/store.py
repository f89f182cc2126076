"""
Snapshot Store

Append-only arena of committed trees, indexed by tree_index.

Two implementations:
- SnapshotStore: in-memory arena
- FileSnapshotStore: the same arena mirrored to a directory

On-disk layout of a FileSnapshotStore directory:
    meta.json          {"schema_version": "v1", "path_limit": 4}
    snapshots.jsonl    one canonical JSON record per snapshot, in tree_index order
"""

from __future__ import annotations

import bisect
import logging
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Sequence

from core.crypto.hashing import digest_from_hex
from core.merkle.merkle_tree import MerkleTree
from core.schemas.canonical import dumps_canonical, loads_canonical
from core.schemas.errors import NotFoundException, SnapshotStoreCorruptException
from core.schemas.versioning import (
    SCHEMA_VERSION,
    UnsupportedSchemaVersionError,
    assert_supported_schema_version,
)


logger = logging.getLogger(__name__)


META_FILE = "meta.json"
SNAPSHOTS_FILE = "snapshots.jsonl"


@dataclass(frozen=True)
class Snapshot:
    """A committed tree and its position in commit order."""
    tree_index: int
    tree: MerkleTree

    @property
    def root(self) -> bytes:
        return self.tree.root

    @property
    def first_id(self) -> int:
        return self.tree.first_id

    @property
    def count(self) -> int:
        return self.tree.count

    @property
    def size(self) -> int:
        return self.tree.size

    @property
    def nodes(self) -> tuple[bytes, ...]:
        return self.tree.nodes

    @property
    def last_id(self) -> int:
        return self.tree.last_id

    def covers(self, receipt_id: int) -> bool:
        return self.tree.covers(receipt_id)

    def to_record(self) -> dict[str, Any]:
        return {
            "tree_index": self.tree_index,
            "root": self.root,
            "first_id": self.first_id,
            "count": self.count,
            "size": self.size,
            "nodes": list(self.nodes),
        }

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> "Snapshot":
        tree = MerkleTree(
            root=digest_from_hex(record["root"]),
            first_id=int(record["first_id"]),
            count=int(record["count"]),
            size=int(record["size"]),
            nodes=tuple(digest_from_hex(node) for node in record["nodes"]),
        )
        return cls(tree_index=int(record["tree_index"]), tree=tree)


class SnapshotStore:
    """
    In-memory append-only snapshot arena.

    Entries are never removed or reordered. A batch of snapshots is
    validated as a whole and then appended in one step.
    """

    def __init__(self) -> None:
        self._snapshots: list[Snapshot] = []
        self._first_ids: list[int] = []
        self._path_limit: int | None = None

    def __len__(self) -> int:
        return len(self._snapshots)

    @property
    def next_unrecorded_id(self) -> int:
        """One past the last receipt id covered by the latest snapshot."""
        if not self._snapshots:
            return 0
        return self._snapshots[-1].last_id + 1

    def get(self, tree_index: int) -> Snapshot:
        """
        Raises:
            NotFoundException: If tree_index has not been committed
        """
        if tree_index < 0 or tree_index >= len(self._snapshots):
            raise NotFoundException(
                f"Snapshot {tree_index} has not been committed",
                details={"tree_index": tree_index, "committed": len(self._snapshots)},
            )
        return self._snapshots[tree_index]

    def all(self) -> tuple[Snapshot, ...]:
        return tuple(self._snapshots)

    def find_covering(self, receipt_id: int) -> Snapshot | None:
        """The snapshot whose range contains receipt_id, if any."""
        pos = bisect.bisect_right(self._first_ids, receipt_id) - 1
        if pos < 0:
            return None
        snapshot = self._snapshots[pos]
        return snapshot if snapshot.covers(receipt_id) else None

    def append_batch(self, snapshots: Sequence[Snapshot]) -> None:
        """Validate then append a commit's worth of snapshots."""
        self._validate_batch(snapshots)
        self._extend(snapshots)

    def load_path_limit(self) -> int | None:
        return self._path_limit

    def save_path_limit(self, path_limit: int) -> None:
        self._path_limit = path_limit

    def _extend(self, snapshots: Sequence[Snapshot]) -> None:
        self._snapshots.extend(snapshots)
        self._first_ids.extend(s.first_id for s in snapshots)

    def _validate_batch(self, snapshots: Sequence[Snapshot]) -> None:
        expected_index = len(self._snapshots)
        expected_id = self.next_unrecorded_id
        for snapshot in snapshots:
            if snapshot.tree_index != expected_index:
                raise ValueError(
                    f"Snapshot tree_index {snapshot.tree_index}, expected {expected_index}"
                )
            if snapshot.first_id != expected_id:
                raise ValueError(
                    f"Snapshot {snapshot.tree_index} starts at receipt {snapshot.first_id}, "
                    f"expected {expected_id}"
                )
            expected_index += 1
            expected_id = snapshot.last_id + 1


class FileSnapshotStore(SnapshotStore):
    """
    Snapshot arena persisted to a directory.

    Every commit is written to disk before it becomes visible in memory,
    so a reader never observes a snapshot that was not persisted.
    """

    def __init__(self, directory: str | Path) -> None:
        super().__init__()
        self.directory = Path(directory)
        self.directory.mkdir(parents=True, exist_ok=True)
        self._snapshots_path = self.directory / SNAPSHOTS_FILE
        self._meta_path = self.directory / META_FILE
        self._load()

    def append_batch(self, snapshots: Sequence[Snapshot]) -> None:
        self._validate_batch(snapshots)
        lines = "".join(dumps_canonical(s.to_record()) + "\n" for s in snapshots)
        with open(self._snapshots_path, "a", encoding="utf-8") as f:
            f.write(lines)
            f.flush()
            os.fsync(f.fileno())
        self._extend(snapshots)
        logger.debug(f"Persisted {len(snapshots)} snapshots to {self._snapshots_path}")

    def save_path_limit(self, path_limit: int) -> None:
        self._write_meta({"schema_version": SCHEMA_VERSION, "path_limit": path_limit})
        super().save_path_limit(path_limit)

    def _write_meta(self, meta: dict[str, Any]) -> None:
        fd, tmp_name = tempfile.mkstemp(dir=self.directory, prefix=".meta-", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(dumps_canonical(meta))
            os.replace(tmp_name, self._meta_path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def _load(self) -> None:
        if self._meta_path.exists():
            meta = self._read_meta()
            version = meta.get("schema_version", "")
            try:
                assert_supported_schema_version(version)
            except UnsupportedSchemaVersionError as e:
                raise SnapshotStoreCorruptException(
                    f"Unsupported snapshot store version '{version}'",
                    path=str(self._meta_path),
                    details={"supported": sorted(e.supported)},
                ) from e
            if meta.get("path_limit") is not None:
                self._path_limit = int(meta["path_limit"])

        if not self._snapshots_path.exists():
            return

        loaded: list[Snapshot] = []
        with open(self._snapshots_path, "r", encoding="utf-8") as f:
            for line_no, line in enumerate(f, start=1):
                line = line.strip()
                if not line:
                    continue
                try:
                    record = loads_canonical(line)
                    if not isinstance(record, dict):
                        raise ValueError(f"expected an object, got {type(record).__name__}")
                    loaded.append(Snapshot.from_record(record))
                except (AttributeError, KeyError, TypeError, ValueError) as e:
                    raise SnapshotStoreCorruptException(
                        f"Unreadable snapshot at line {line_no}: {e}",
                        path=str(self._snapshots_path),
                    ) from e

        try:
            self._validate_batch(loaded)
        except ValueError as e:
            raise SnapshotStoreCorruptException(
                str(e), path=str(self._snapshots_path)
            ) from e

        self._extend(loaded)
        logger.info(f"Loaded {len(loaded)} snapshots from {self.directory}")

    def _read_meta(self) -> dict[str, Any]:
        try:
            meta = loads_canonical(self._meta_path.read_text(encoding="utf-8"))
        except ValueError as e:
            raise SnapshotStoreCorruptException(
                f"Unreadable snapshot store metadata: {e}",
                path=str(self._meta_path),
            ) from e
        if not isinstance(meta, dict):
            raise SnapshotStoreCorruptException(
                f"Snapshot store metadata must be an object, got {type(meta).__name__}",
                path=str(self._meta_path),
            )
        return meta
