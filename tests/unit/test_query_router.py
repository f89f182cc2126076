"""
Query Router Unit Tests
Tests for core/query/router.py

Tests:
- Ad-hoc range trees, roots and proofs, with range validation
- Live capacity-aligned trees by receipt total
- Committed snapshot lookups and proofs
"""
import pytest

from core.merkle.merkle_proofs import verify_proof
from core.query.router import QueryRouter
from core.schemas.errors import (
    InvalidRangeException,
    NotFoundException,
    OutOfRangeException,
)

from fixtures.common import OPERATOR, make_ledger, make_recorder


def router_for(count: int, amount=100000, path_limit: int = 4) -> QueryRouter:
    return QueryRouter(make_recorder(make_ledger(count, amount=amount), path_limit=path_limit))


class TestRanges:
    """build_range / root_of_range / proof_in_range."""

    def test_build_range(self):
        tree = router_for(5).build_range(1, 3)
        assert (tree.first_id, tree.count, tree.size) == (1, 3, 7)

    def test_root_matches_tree(self):
        router = router_for(20)
        for start, end in [(0, 0), (0, 2), (3, 12), (0, 19)]:
            assert router.root_of_range(start, end) == router.build_range(start, end).root

    @pytest.mark.parametrize("start,end", [(2, 1), (0, 5), (-1, 2), (5, 5)])
    def test_invalid_range(self, start, end):
        router = router_for(5)
        with pytest.raises(InvalidRangeException):
            router.build_range(start, end)
        with pytest.raises(InvalidRangeException):
            router.root_of_range(start, end)

    def test_empty_ledger(self):
        with pytest.raises(InvalidRangeException):
            router_for(0).build_range(0, 0)

    def test_proof_in_range(self):
        router = router_for(6)
        tree = router.build_range(2, 5)
        proof = router.proof_in_range(4, 2, 5)

        assert proof.path_length == 2
        assert verify_proof(tree.nodes[2], proof, tree.root)

    def test_proof_outside_range(self):
        router = router_for(6)
        with pytest.raises(OutOfRangeException):
            router.proof_in_range(1, 2, 5)

    def test_proof_invalid_range_wins(self):
        with pytest.raises(InvalidRangeException):
            router_for(3).proof_in_range(1, 2, 1)


class TestSnapshotByTotal:
    """snapshot_covering_count(n): live tree of the batch holding receipt n."""

    def test_fifteen_receipts(self, batch_ledger):
        snapshot = QueryRouter(make_recorder(batch_ledger)).snapshot_covering_count(16)
        assert (snapshot.tree_index, snapshot.first_id, snapshot.count) == (0, 0, 15)
        assert snapshot.size == 31

    def test_sixteen_receipts(self):
        snapshot = router_for(16, amount=None).snapshot_covering_count(16)
        assert (snapshot.first_id, snapshot.count) == (0, 16)

    def test_next_batch_not_started(self):
        with pytest.raises(NotFoundException):
            router_for(16, amount=None).snapshot_covering_count(17)

    def test_seventeen_receipts(self):
        router = router_for(17, amount=None)
        snapshot = router.snapshot_covering_count(17)

        assert (snapshot.tree_index, snapshot.first_id, snapshot.count, snapshot.size) == (1, 16, 1, 3)

    def test_small_n_returns_whole_live_batch(self):
        snapshot = router_for(10).snapshot_covering_count(1)
        assert (snapshot.first_id, snapshot.count) == (0, 10)

    @pytest.mark.parametrize("n", [0, -3])
    def test_n_below_one(self, n):
        with pytest.raises(NotFoundException):
            router_for(5).snapshot_covering_count(n)

    def test_follows_current_capacity(self):
        router = router_for(10, path_limit=2)
        snapshot = router.snapshot_covering_count(6)
        assert (snapshot.tree_index, snapshot.first_id, snapshot.count) == (1, 4, 4)

    def test_does_not_commit(self):
        recorder = make_recorder(make_ledger(4))
        QueryRouter(recorder).snapshot_covering_count(4)
        assert len(recorder.store) == 0


class TestCommitted:
    """snapshot_by_index / proof_for_receipt."""

    def setup_method(self):
        self.ledger = make_ledger(17, amount=None)
        self.recorder = make_recorder(self.ledger)
        self.router = QueryRouter(self.recorder)

    def test_missing_snapshot(self):
        with pytest.raises(NotFoundException):
            self.router.snapshot_by_index(0)

    def test_snapshot_by_index(self):
        self.recorder.commit(OPERATOR)
        snapshot = self.router.snapshot_by_index(1)
        assert (snapshot.first_id, snapshot.count, snapshot.size) == (16, 1, 3)

    def test_uncommitted_receipt(self):
        with pytest.raises(NotFoundException):
            self.router.proof_for_receipt(0)

    def test_proof_for_receipt(self):
        self.recorder.commit(OPERATOR)
        for receipt_id in (0, 7, 15, 16):
            tree_index, proof = self.router.proof_for_receipt(receipt_id)
            snapshot = self.router.snapshot_by_index(tree_index)
            leaf = self.ledger.receipt_at(receipt_id).leaf_hash()

            assert snapshot.covers(receipt_id)
            assert verify_proof(leaf, proof, snapshot.root)

    def test_last_snapshot_proof_length(self):
        self.recorder.commit(OPERATOR)
        tree_index, proof = self.router.proof_for_receipt(16)
        assert tree_index == 1
        assert proof.path_length == 1

    def test_receipt_beyond_commits(self):
        self.recorder.commit(OPERATOR)
        self.ledger.append(1, "x")
        with pytest.raises(NotFoundException):
            self.router.proof_for_receipt(17)
