"""Tests for the graph engine: neighbours, derived siblings, shortest paths."""

from __future__ import annotations

import pytest

from kintree.family.engine import PARENT_CHILD, SPOUSE, FamilyGraph, Person, is_elder

from conftest import make_graph


def _brute_force_shortest(graph, start, goal):
    """Shortest step count over every simple path (DFS), or None."""
    best = None

    def walk(node, seen, depth):
        nonlocal best
        if best is not None and depth >= best:
            return
        if node == goal:
            if best is None or depth < best:
                best = depth
            return
        for nxt, _ in graph.neighbors(node) + graph.siblings(node):
            if nxt not in seen:
                walk(nxt, seen | {nxt}, depth + 1)

    walk(start, {start}, 0)
    return best


class TestNeighbors:
    """One-hop relations."""

    def test_parent_sees_child_by_child_gender(self):
        g = make_graph(
            [("p", "male", None), ("s", "male", None), ("d", "female", None)],
            [(PARENT_CHILD, "p", "s"), (PARENT_CHILD, "p", "d")],
        )
        assert g.neighbors("p") == [("s", "son"), ("d", "daughter")]

    def test_child_sees_parent_by_parent_gender(self):
        g = make_graph(
            [("f", "male", None), ("m", "female", None), ("c", "male", None)],
            [(PARENT_CHILD, "f", "c"), (PARENT_CHILD, "m", "c")],
        )
        assert g.neighbors("c") == [("f", "father"), ("m", "mother")]

    def test_spouse_edge_is_symmetric(self):
        g = make_graph(
            [("h", "male", None), ("w", "female", None)],
            [(SPOUSE, "w", "h")],
        )
        assert g.neighbors("w") == [("h", "husband")]
        assert g.neighbors("h") == [("w", "wife")]

    def test_dangling_endpoint_is_skipped(self):
        g = make_graph(
            [("a", "male", None)],
            [(PARENT_CHILD, "ghost", "a"), (SPOUSE, "a", "nobody")],
        )
        assert g.neighbors("a") == []

    def test_unknown_person_has_no_neighbors(self):
        g = make_graph([("a", "male", None)], [])
        assert g.neighbors("zzz") == []


class TestSiblings:
    """Siblings derived from shared parents."""

    def test_no_parents_means_no_siblings(self):
        # b shares a spouse's child with a, but neither has a recorded parent
        g = make_graph(
            [("a", "male", 1990), ("b", "female", 1992), ("k", "male", 2015)],
            [(SPOUSE, "a", "b"), (PARENT_CHILD, "b", "k")],
        )
        assert g.siblings("a") == []

    def test_half_sibling_is_recognised(self):
        g = make_graph(
            [
                ("dad", "male", 1960), ("mom", "female", 1962), ("other", "female", 1965),
                ("me", "male", 1990), ("half", "female", 1998),
            ],
            [
                (PARENT_CHILD, "dad", "me"), (PARENT_CHILD, "mom", "me"),
                (PARENT_CHILD, "dad", "half"), (PARENT_CHILD, "other", "half"),
            ],
        )
        assert g.siblings("me") == [("half", "younger_sister")]
        assert g.siblings("half") == [("me", "elder_brother")]

    def test_sibling_through_both_parents_listed_once(self, sample):
        assert sample.siblings("me") == [("si", "younger_sister")]

    def test_elder_and_younger_from_birth_year(self):
        g = make_graph(
            [
                ("p", "female", 1950), ("me", "female", 1980),
                ("older", "male", 1975), ("younger", "male", 1985),
            ],
            [(PARENT_CHILD, "p", c) for c in ("me", "older", "younger")],
        )
        assert dict(g.siblings("me")) == {
            "older": "elder_brother",
            "younger": "younger_brother",
        }

    def test_unknown_birth_year_defaults_to_elder(self):
        g = make_graph(
            [("p", "male", None), ("me", "male", 1990), ("x", "female", None)],
            [(PARENT_CHILD, "p", "me"), (PARENT_CHILD, "p", "x")],
        )
        assert g.siblings("me") == [("x", "elder_sister")]
        assert g.siblings("x") == [("me", "elder_brother")]

    def test_equal_birth_years_follow_strict_comparison(self):
        me = Person(id="a", name="a", gender="male", birth_year=1990)
        twin = Person(id="b", name="b", gender="male", birth_year=1990)
        assert is_elder(me, twin) is False

    def test_missing_sibling_record_is_skipped(self):
        g = make_graph(
            [("p", "male", None), ("me", "male", 1990)],
            [(PARENT_CHILD, "p", "me"), (PARENT_CHILD, "p", "ghost")],
        )
        assert g.siblings("me") == []


class TestShortestPath:
    """Breadth-first kinship paths."""

    def test_self_is_empty_path(self, sample):
        for person in sample.people:
            assert sample.shortest_path(person.id, person.id) == []

    def test_grandfather(self, sample):
        assert sample.shortest_path("me", "gf") == ["father", "father"]

    def test_cousin_goes_through_derived_sibling(self, sample):
        assert sample.shortest_path("me", "co") == ["father", "younger_brother", "son"]

    def test_unreachable_returns_none(self, sample):
        loner = Person(id="loner", name="孤", gender="male")
        g = FamilyGraph(sample.people + [loner], sample.relationships, anchor_id="me")
        assert g.shortest_path("me", "loner") is None
        assert g.shortest_path("loner", "me") is None

    def test_never_longer_than_brute_force(self, sample):
        ids = [p.id for p in sample.people]
        for start in ids:
            for goal in ids:
                path = sample.shortest_path(start, goal)
                assert path is not None
                assert len(path) == _brute_force_shortest(sample, start, goal)

    @pytest.mark.parametrize(
        "edges, expected",
        [
            (
                [
                    (PARENT_CHILD, "fa", "me"), (PARENT_CHILD, "mo", "me"),
                    (PARENT_CHILD, "gp", "fa"), (PARENT_CHILD, "gp", "mo"),
                ],
                ["father", "father"],
            ),
            (
                [
                    (PARENT_CHILD, "mo", "me"), (PARENT_CHILD, "fa", "me"),
                    (PARENT_CHILD, "gp", "mo"), (PARENT_CHILD, "gp", "fa"),
                ],
                ["mother", "father"],
            ),
        ],
    )
    def test_ties_follow_relationship_order(self, edges, expected):
        g = make_graph(
            [("me", "male", None), ("fa", "male", None), ("mo", "female", None), ("gp", "male", None)],
            edges,
        )
        assert g.shortest_path("me", "gp") == expected
