"""Kinship graph engine: pure Python graph traversal.

Takes people + relationships and walks the graph from one person to another,
producing the sequence of relationship steps ("father", "elder_sister", ...)
that the kinship term table is keyed on.

No DB, no I/O. Pure functions on in-memory data.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass

MALE = "male"
FEMALE = "female"
GENDERS = (MALE, FEMALE)

PARENT_CHILD = "parent-child"
SPOUSE = "spouse"
RELATIONSHIP_TYPES = (PARENT_CHILD, SPOUSE)

FATHER = "father"
MOTHER = "mother"
SON = "son"
DAUGHTER = "daughter"
HUSBAND = "husband"
WIFE = "wife"
ELDER_BROTHER = "elder_brother"
YOUNGER_BROTHER = "younger_brother"
ELDER_SISTER = "elder_sister"
YOUNGER_SISTER = "younger_sister"

STEPS = (
    FATHER, MOTHER, SON, DAUGHTER, HUSBAND, WIFE,
    ELDER_BROTHER, YOUNGER_BROTHER, ELDER_SISTER, YOUNGER_SISTER,
)


@dataclass
class Person:
    id: str
    name: str
    gender: str  # male, female
    birth_year: int | None = None
    birth_place: str | None = None
    is_alive: bool = True
    notes: str | None = None


@dataclass
class Relationship:
    id: str
    type: str  # parent-child, spouse
    source_id: str  # parent, or either spouse
    target_id: str  # child, or the other spouse


def _pick(person: Person, male_step: str, female_step: str) -> str:
    return male_step if person.gender == MALE else female_step


def is_elder(person: Person, other: Person) -> bool:
    """True if ``other`` counts as the elder sibling of ``person``.

    With both birth years known, ``other`` is elder only if born strictly
    earlier, so a tie counts as younger. An unknown year on either side
    counts as elder.
    """
    if person.birth_year is not None and other.birth_year is not None:
        return other.birth_year < person.birth_year
    return True


class FamilyGraph:
    """In-memory snapshot of a family for kinship traversal.

    Neighbours are enumerated in relationship insertion order, so when two
    shortest paths exist the one through the earlier relationship wins.
    """

    def __init__(
        self,
        people: list[Person],
        relationships: list[Relationship],
        anchor_id: str | None = None,
    ):
        self._people = {p.id: p for p in people}
        self._rels = list(relationships)
        self.anchor_id = anchor_id

        # person_id -> [(other_id, kind)] in relationship order
        self._adjacent: dict[str, list[tuple[str, str]]] = {}
        self._parents: dict[str, list[str]] = {}  # child_id -> [parent_ids]
        self._children: dict[str, list[str]] = {}  # parent_id -> [child_ids]

        for r in self._rels:
            if r.type == PARENT_CHILD:
                self._adjacent.setdefault(r.source_id, []).append((r.target_id, "child"))
                self._adjacent.setdefault(r.target_id, []).append((r.source_id, "parent"))
                self._children.setdefault(r.source_id, []).append(r.target_id)
                self._parents.setdefault(r.target_id, []).append(r.source_id)
            elif r.type == SPOUSE:
                self._adjacent.setdefault(r.source_id, []).append((r.target_id, "spouse"))
                if r.target_id != r.source_id:
                    self._adjacent.setdefault(r.target_id, []).append((r.source_id, "spouse"))

    @property
    def people(self) -> list[Person]:
        return list(self._people.values())

    @property
    def relationships(self) -> list[Relationship]:
        return list(self._rels)

    def get(self, pid: str) -> Person | None:
        return self._people.get(pid)

    def __contains__(self, pid: object) -> bool:
        return pid in self._people

    def __len__(self) -> int:
        return len(self._people)

    def parents_of(self, pid: str) -> list[str]:
        return self._parents.get(pid, [])

    def children_of(self, pid: str) -> list[str]:
        return self._children.get(pid, [])

    def spouses_of(self, pid: str) -> list[str]:
        return [other for other, kind in self._adjacent.get(pid, []) if kind == "spouse"]

    # ------------------------------------------------------------------
    # One-hop relations
    # ------------------------------------------------------------------

    def neighbors(self, pid: str) -> list[tuple[str, str]]:
        """Directly connected relatives of ``pid`` as (person_id, step) pairs."""
        if pid not in self._people:
            return []
        out: list[tuple[str, str]] = []
        for other_id, kind in self._adjacent.get(pid, []):
            other = self._people.get(other_id)
            if other is None:
                continue
            if kind == "child":
                out.append((other_id, _pick(other, SON, DAUGHTER)))
            elif kind == "parent":
                out.append((other_id, _pick(other, FATHER, MOTHER)))
            else:
                out.append((other_id, _pick(other, HUSBAND, WIFE)))
        return out

    def siblings(self, pid: str) -> list[tuple[str, str]]:
        """Siblings derived from shared parents (one shared parent is enough)."""
        me = self._people.get(pid)
        if me is None:
            return []
        parent_ids = self.parents_of(pid)
        if not parent_ids:
            return []

        # dict keeps first-seen order while deduplicating
        sibling_ids: dict[str, None] = {}
        for parent_id in parent_ids:
            for child_id in self.children_of(parent_id):
                if child_id != pid:
                    sibling_ids.setdefault(child_id, None)

        out: list[tuple[str, str]] = []
        for sib_id in sibling_ids:
            sib = self._people.get(sib_id)
            if sib is None:
                continue
            elder = is_elder(me, sib)
            if sib.gender == MALE:
                out.append((sib_id, ELDER_BROTHER if elder else YOUNGER_BROTHER))
            else:
                out.append((sib_id, ELDER_SISTER if elder else YOUNGER_SISTER))
        return out

    # ------------------------------------------------------------------
    # Paths
    # ------------------------------------------------------------------

    def shortest_path(self, from_id: str, to_id: str) -> list[str] | None:
        """BFS from ``from_id`` to ``to_id`` over relations plus derived siblings.

        Returns the list of steps, ``[]`` when both ids are equal, or ``None``
        when ``to_id`` is unreachable.
        """
        if from_id == to_id:
            return []

        visited: set[str] = {from_id}
        queue: deque[tuple[str, list[str]]] = deque([(from_id, [])])

        while queue:
            current, path = queue.popleft()
            for next_id, step in self.neighbors(current) + self.siblings(current):
                if next_id in visited:
                    continue
                next_path = path + [step]
                if next_id == to_id:
                    return next_path
                visited.add(next_id)
                queue.append((next_id, next_path))

        return None
