"""Built-in three-generation sample family, anchored on 张伟."""

from __future__ import annotations

from kintree.family.engine import (
    FEMALE,
    MALE,
    PARENT_CHILD,
    SPOUSE,
    FamilyGraph,
    Person,
    Relationship,
)

SAMPLE_ANCHOR_ID = "me"

SAMPLE_PEOPLE: list[Person] = [
    Person(id="gf", name="张大山", gender=MALE, birth_year=1940),
    Person(id="gm", name="李秀英", gender=FEMALE, birth_year=1942),
    Person(id="fa", name="张建国", gender=MALE, birth_year=1965),
    Person(id="mo", name="王丽华", gender=FEMALE, birth_year=1967),
    Person(id="un", name="张建军", gender=MALE, birth_year=1968),
    Person(id="au", name="刘芳", gender=FEMALE, birth_year=1970),
    Person(id="me", name="张伟", gender=MALE, birth_year=1992),
    Person(id="si", name="张敏", gender=FEMALE, birth_year=1995),
    Person(id="co", name="张磊", gender=MALE, birth_year=1994),
    Person(id="mgf", name="王福", gender=MALE, birth_year=1938),
    Person(id="mgm", name="赵淑芬", gender=FEMALE, birth_year=1940),
]

_EDGES = [
    (SPOUSE, "gf", "gm"),
    (PARENT_CHILD, "gf", "fa"),
    (PARENT_CHILD, "gm", "fa"),
    (PARENT_CHILD, "gf", "un"),
    (PARENT_CHILD, "gm", "un"),
    (SPOUSE, "fa", "mo"),
    (SPOUSE, "un", "au"),
    (PARENT_CHILD, "fa", "me"),
    (PARENT_CHILD, "mo", "me"),
    (PARENT_CHILD, "fa", "si"),
    (PARENT_CHILD, "mo", "si"),
    (PARENT_CHILD, "un", "co"),
    (PARENT_CHILD, "au", "co"),
    (SPOUSE, "mgf", "mgm"),
    (PARENT_CHILD, "mgf", "mo"),
    (PARENT_CHILD, "mgm", "mo"),
]

SAMPLE_RELATIONSHIPS: list[Relationship] = [
    Relationship(id=f"r{i}", type=t, source_id=s, target_id=d)
    for i, (t, s, d) in enumerate(_EDGES, start=1)
]


def sample_graph() -> FamilyGraph:
    """A fresh copy of the sample family."""
    return FamilyGraph(
        [Person(**vars(p)) for p in SAMPLE_PEOPLE],
        [Relationship(**vars(r)) for r in SAMPLE_RELATIONSHIPS],
        anchor_id=SAMPLE_ANCHOR_ID,
    )
