"""Graph-editing conventions for "add a relative of X".

Adding one relative usually implies more than one edge: a new father is also
father of X's siblings and husband of X's mother. ``plan_add_relative``
works out those edges against a snapshot without touching any storage; the
caller creates the person and applies the planned edges in order.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from kintree.family.engine import FEMALE, MALE, PARENT_CHILD, SPOUSE, FamilyGraph

RELATIVE_KINDS = ("father", "mother", "son", "daughter", "spouse", "brother", "sister")

_KIND_GENDER = {
    "father": MALE,
    "mother": FEMALE,
    "son": MALE,
    "daughter": FEMALE,
    "brother": MALE,
    "sister": FEMALE,
}


@dataclass
class PlannedEdge:
    type: str  # parent-child, spouse
    source_id: str
    target_id: str


@dataclass
class RelativePlan:
    gender: str
    edges: list[PlannedEdge] = field(default_factory=list)


def _already_married(graph: FamilyGraph, a: str, b: str) -> bool:
    return b in graph.spouses_of(a)


def plan_add_relative(
    graph: FamilyGraph, anchor_id: str, kind: str, new_id: str
) -> RelativePlan:
    """Plan the edges that attach a new person ``new_id`` as ``kind`` of ``anchor_id``."""
    anchor = graph.get(anchor_id)
    if anchor is None:
        raise KeyError(anchor_id)
    if kind not in RELATIVE_KINDS:
        raise ValueError(f"Unknown relative kind: {kind}")

    if kind == "spouse":
        gender = FEMALE if anchor.gender == MALE else MALE
    else:
        gender = _KIND_GENDER[kind]
    plan = RelativePlan(gender=gender)
    edges = plan.edges

    if kind in ("father", "mother"):
        edges.append(PlannedEdge(PARENT_CHILD, new_id, anchor_id))

        existing_parents = [pid for pid in graph.parents_of(anchor_id) if pid != new_id]

        # Siblings through the existing parents get the new parent too
        sibling_ids: dict[str, None] = {}
        for pid in existing_parents:
            for child_id in graph.children_of(pid):
                if child_id != anchor_id:
                    sibling_ids.setdefault(child_id, None)
        for sib_id in sibling_ids:
            edges.append(PlannedEdge(PARENT_CHILD, new_id, sib_id))

        for pid in existing_parents:
            parent = graph.get(pid)
            if parent is None or parent.gender == gender:
                continue
            if not _already_married(graph, pid, new_id):
                edges.append(PlannedEdge(SPOUSE, pid, new_id))

    elif kind in ("son", "daughter"):
        edges.append(PlannedEdge(PARENT_CHILD, anchor_id, new_id))
        spouses = graph.spouses_of(anchor_id)
        if spouses:
            edges.append(PlannedEdge(PARENT_CHILD, spouses[0], new_id))

    elif kind == "spouse":
        edges.append(PlannedEdge(SPOUSE, anchor_id, new_id))
        for child_id in graph.children_of(anchor_id):
            edges.append(PlannedEdge(PARENT_CHILD, new_id, child_id))

    else:  # brother, sister
        for pid in graph.parents_of(anchor_id):
            edges.append(PlannedEdge(PARENT_CHILD, pid, new_id))

    return plan
