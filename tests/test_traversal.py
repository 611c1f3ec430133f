"""Unit tests for the traversal state: node arena and indexed priority queue."""

import random

import pytest

from algorithms.traversal import IndexedPriorityQueue, NodeArena, TraversalResult


class TestIndexedPriorityQueue:
    """Ordering, decrease-key and removal."""

    def test_pops_in_priority_order(self):
        pq = IndexedPriorityQueue()
        for key, priority in [("c", 3), ("a", 1), ("d", 4), ("b", 2)]:
            pq.push(key, priority)
        assert [pq.pop()[0] for _ in range(4)] == ["a", "b", "c", "d"]
        assert not pq

    def test_ties_pop_in_insertion_order(self):
        """Equal priorities behave like a stable sort."""
        pq = IndexedPriorityQueue()
        for key in ["x", "y", "z"]:
            pq.push(key, 5)
        assert [pq.pop()[0] for _ in range(3)] == ["x", "y", "z"]

    def test_decrease_reenters_tie_order_last(self):
        """A decreased key queues behind entries that already held that priority."""
        pq = IndexedPriorityQueue()
        pq.push("a", 2)
        pq.push("b", 9)
        pq.push("c", 2)
        pq.decrease("b", 2, "better")
        assert [pq.pop()[0] for _ in range(3)] == ["a", "c", "b"]

    def test_decrease_updates_priority_and_payload(self):
        pq = IndexedPriorityQueue()
        pq.push("a", 10, "old")
        pq.push("b", 5)
        pq.decrease("a", 1, "new")
        assert pq.priority_of("a") == 1
        assert pq.pop() == ("a", 1, "new")

    def test_decrease_must_improve(self):
        pq = IndexedPriorityQueue()
        pq.push("a", 3)
        with pytest.raises(ValueError):
            pq.decrease("a", 3)

    def test_push_duplicate_key(self):
        pq = IndexedPriorityQueue()
        pq.push("a", 1)
        with pytest.raises(KeyError):
            pq.push("a", 0)

    def test_remove_from_middle(self):
        pq = IndexedPriorityQueue()
        for key, priority in [("a", 1), ("b", 2), ("c", 3), ("d", 4)]:
            pq.push(key, priority, key.upper())
        assert pq.remove("b") == "B"
        assert "b" not in pq
        assert [pq.pop()[0] for _ in range(3)] == ["a", "c", "d"]

    def test_pop_empty(self):
        with pytest.raises(IndexError):
            IndexedPriorityQueue().pop()

    def test_snapshot_does_not_consume(self):
        pq = IndexedPriorityQueue()
        pq.push("b", 2)
        pq.push("a", 1)
        assert pq.snapshot() == [("a", 1), ("b", 2)]
        assert len(pq) == 2

    def test_matches_stable_sort_under_random_operations(self):
        """Pops agree with a stable sort of a reference list after pushes and decreases."""
        rng = random.Random(3)
        pq = IndexedPriorityQueue()
        reference = []          # [key, priority] in (re)insertion order
        for i in range(200):
            key = f"k{rng.randint(0, 40)}"
            priority = rng.randint(0, 20)
            if key not in pq:
                pq.push(key, priority)
                reference.append([key, priority])
            elif priority < pq.priority_of(key):
                pq.decrease(key, priority)
                reference = [r for r in reference if r[0] != key] + [[key, priority]]
        expected = [k for k, _ in sorted(reference, key=lambda r: r[1])]
        assert [pq.pop()[0] for _ in range(len(pq))] == expected


class TestNodeArena:
    """Parent links stored as indices."""

    def test_chain_walks_back_to_root(self):
        arena = NodeArena()
        a = arena.add("A", 0)
        b = arena.add("B", 1, a)
        d = arena.add("D", 3, b)
        assert [arena[i].vertex_id for i in arena.chain(d)] == ["D", "B", "A"]
        assert arena.source_of(d).vertex_id == "B"
        assert arena.source_of(a) is None

    def test_superseded_nodes_stay_addressable(self):
        """A stale node is still there; only the pending set forgets it."""
        arena = NodeArena()
        root = arena.add("A", 0)
        stale = arena.add("B", 5, root)
        fresh = arena.add("B", 2, root)
        assert arena[stale].cost == 5
        assert arena[fresh].cost == 2
        assert len(arena) == 3


def test_result_reached_follows_path():
    assert not TraversalResult().reached
    assert TraversalResult(path=["A", "B"], cost=1).to_dict()["reached"] is True
