"""Kinship term resolution from the anchor's ("me") perspective.

Combines the graph engine's shortest paths with the term tables:
normalise the path, look it up, and fall back to a chained generic term
when the table has no row for it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from kintree.family import terms
from kintree.family.engine import FATHER, HUSBAND, MOTHER, WIFE, FamilyGraph

logger = logging.getLogger("kintree.family.kinship")

# (step, spouse step) -> single step. Only a parent's spouse is the other
# parent; a child's or sibling's spouse is an in-law with its own term.
_COLLAPSE: dict[tuple[str, str], str] = {
    (MOTHER, HUSBAND): FATHER,
    (FATHER, WIFE): MOTHER,
}


@dataclass
class KinshipResult:
    """A resolved kinship term and the (normalised) path it came from."""
    term: str
    path: list[str] = field(default_factory=list)


def normalize_path(path: list[str]) -> list[str]:
    """Collapse "mother,husband" to "father" and "father,wife" to "mother".

    Rescans from the start after every collapse, since one collapse can
    create another (father,father,wife -> father,mother).
    """
    result = list(path)
    changed = True
    while changed:
        changed = False
        for i in range(len(result) - 1):
            replacement = _COLLAPSE.get((result[i], result[i + 1]))
            if replacement is not None:
                result[i:i + 2] = [replacement]
                changed = True
                break
    return result


def _chain(steps: list[str]) -> str:
    return terms.POSSESSIVE.join(terms.generic_term(s) for s in steps)


def fallback_term(path: list[str]) -> str:
    """Compose a term for a path the table doesn't cover.

    Finds the longest suffix with a table entry and prefixes it with generic
    words for the leading steps, e.g. four fathers up is 父亲的曾祖父. With no matching
    suffix at all, every step is chained generically.
    """
    if not path:
        return terms.SELF_TERM
    for start in range(len(path)):
        suffix_term = terms.lookup(path[start:])
        if suffix_term:
            if start == 0:
                return suffix_term
            return _chain(path[:start]) + terms.POSSESSIVE + suffix_term
    return _chain(path)


def resolve_term(path: list[str]) -> str:
    """Map a kinship path to its Chinese term. Always returns a non-empty string."""
    if not path:
        return terms.SELF_TERM

    term = terms.lookup(path)
    if term:
        return term

    normalized = normalize_path(path)
    if normalized != path:
        term = terms.lookup(normalized)
        if term:
            return term

    return fallback_term(normalized)


class KinshipService:
    """Answer kinship questions against one graph snapshot."""

    def __init__(self, graph: FamilyGraph):
        self.graph = graph

    def resolve(self, anchor_id: str | None, target_id: str) -> KinshipResult | None:
        """Term for ``target_id`` as seen from ``anchor_id``, or None if unreachable."""
        if anchor_id is None:
            return None
        if anchor_id == target_id:
            return KinshipResult(term=terms.SELF_TERM, path=[])

        path = self.graph.shortest_path(anchor_id, target_id)
        if path is None:
            return None
        return KinshipResult(term=resolve_term(path), path=normalize_path(path))

    def resolve_all(self, anchor_id: str | None = None) -> dict[str, str]:
        """Terms for everyone reachable from the anchor, keyed by person id.

        Defaults to the graph's own anchor. Unreachable people are left out;
        the anchor maps to 我.
        """
        if anchor_id is None:
            anchor_id = self.graph.anchor_id
        if anchor_id is None or anchor_id not in self.graph:
            return {}

        labels: dict[str, str] = {}
        for person in self.graph.people:
            result = self.resolve(anchor_id, person.id)
            if result is not None:
                labels[person.id] = result.term

        logger.debug(
            "Resolved %d of %d people from anchor %s",
            len(labels), len(self.graph), anchor_id,
        )
        return labels
