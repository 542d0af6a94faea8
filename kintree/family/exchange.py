"""Conversions between stored rows, the engine graph and the JSON export format."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from kintree.family.engine import FamilyGraph, Person, Relationship
from kintree.family.models import ExportPerson, ExportRelationship, FamilyExport


def graph_from_rows(
    people: Iterable[Mapping],
    relationships: Iterable[Mapping],
    anchor_id: str | None = None,
) -> FamilyGraph:
    """Build an engine snapshot from ``family_people`` / ``family_relationships`` rows."""
    return FamilyGraph(
        [
            Person(
                id=str(p["id"]),
                name=p["name"],
                gender=p["gender"],
                birth_year=p["birth_year"],
                birth_place=p["birth_place"],
                is_alive=p["is_alive"] if p["is_alive"] is not None else True,
                notes=p["notes"],
            )
            for p in people
        ],
        [
            Relationship(
                id=str(r["id"]),
                type=r["type"],
                source_id=str(r["source_id"]),
                target_id=str(r["target_id"]),
            )
            for r in relationships
        ],
        anchor_id=anchor_id,
    )


def export_graph(graph: FamilyGraph) -> FamilyExport:
    return FamilyExport(
        persons={
            p.id: ExportPerson(
                id=p.id,
                name=p.name,
                gender=p.gender,
                birth_year=p.birth_year,
                birth_place=p.birth_place,
                is_alive=p.is_alive,
                notes=p.notes,
            )
            for p in graph.people
        },
        relationships=[
            ExportRelationship(
                id=r.id, type=r.type, source_id=r.source_id, target_id=r.target_id
            )
            for r in graph.relationships
        ],
        me_person_id=graph.anchor_id,
    )


def graph_from_export(data: FamilyExport) -> FamilyGraph:
    """Engine snapshot of an imported file. An anchor that isn't a person is dropped."""
    people = [
        Person(
            id=key,
            name=p.name,
            gender=p.gender,
            birth_year=p.birth_year,
            birth_place=p.birth_place,
            is_alive=p.is_alive if p.is_alive is not None else True,
            notes=p.notes,
        )
        for key, p in data.persons.items()
    ]
    rels = [
        Relationship(id=r.id, type=r.type, source_id=r.source_id, target_id=r.target_id)
        for r in data.relationships
    ]
    anchor = data.me_person_id if data.me_person_id in data.persons else None
    return FamilyGraph(people, rels, anchor_id=anchor)


def dump_export(data: FamilyExport) -> dict:
    """JSON-ready export document.

    Unset optional person fields are omitted, but ``mePersonId`` is always
    written, as null when there is no anchor.
    """
    doc = data.model_dump(by_alias=True, exclude_none=True)
    doc["mePersonId"] = data.me_person_id
    return doc
