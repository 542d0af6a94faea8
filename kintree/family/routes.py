"""Family tree + kinship API endpoints."""

from __future__ import annotations

import logging
from uuid import UUID

from fastapi import APIRouter, HTTPException

from kintree.family import db as fdb
from kintree.family.editing import plan_add_relative
from kintree.family.engine import Person
from kintree.family.exchange import dump_export, export_graph, graph_from_export, graph_from_rows
from kintree.family.kinship import KinshipService
from kintree.family.models import (
    AddRelativeIn,
    AddRelativeOut,
    CreateFamilyIn,
    CreatePersonIn,
    CreateRelationshipIn,
    FamilyExport,
    FamilyOut,
    FamilyTreeOut,
    ImportOut,
    KinshipLabelsOut,
    KinshipOut,
    PersonOut,
    RelationshipOut,
    SetAnchorIn,
    UpdatePersonIn,
)
from kintree.family.sample import sample_graph

logger = logging.getLogger("kintree.family.routes")

router = APIRouter(prefix="/api/v1/family", tags=["family"])


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _family_out(row) -> FamilyOut:
    return FamilyOut(
        id=row["id"],
        name=row["name"],
        anchor_id=row["anchor_id"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def _person_out(row) -> PersonOut:
    return PersonOut(
        id=row["id"],
        family_id=row["family_id"],
        name=row["name"],
        gender=row["gender"],
        birth_year=row["birth_year"],
        birth_place=row["birth_place"],
        is_alive=row["is_alive"],
        notes=row["notes"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def _rel_out(row) -> RelationshipOut:
    return RelationshipOut(
        id=row["id"],
        family_id=row["family_id"],
        type=row["type"],
        source_id=row["source_id"],
        target_id=row["target_id"],
        created_at=row["created_at"],
    )


async def _require_family(family_id: str):
    fam = await fdb.get_family(family_id)
    if fam is None:
        raise HTTPException(404, "Family not found")
    return fam


async def _load(family_id: str):
    """Fetch a family with its people and relationships, plus an engine snapshot."""
    fam = await _require_family(family_id)
    people = await fdb.list_people(family_id)
    rels = await fdb.list_relationships(family_id)
    graph = graph_from_rows(people, rels, anchor_id=fam["anchor_id"])
    return fam, people, rels, graph


async def _build_tree(family_id: str) -> FamilyTreeOut:
    """Build the full tree response for a family, kinship labels included."""
    fam, people, rels, graph = await _load(family_id)
    return FamilyTreeOut(
        family=_family_out(fam),
        people=[_person_out(p) for p in people],
        relationships=[_rel_out(r) for r in rels],
        labels=KinshipService(graph).resolve_all(),
    )


# ---------------------------------------------------------------------------
# Family CRUD
# ---------------------------------------------------------------------------

@router.post("", status_code=201)
async def create_family(body: CreateFamilyIn) -> FamilyOut:
    """Create a new, empty family."""
    row = await fdb.create_family(body.name)
    return _family_out(row)


@router.get("")
async def list_families() -> list[FamilyOut]:
    """List all families."""
    rows = await fdb.list_families()
    return [_family_out(r) for r in rows]


@router.get("/{family_id}")
async def get_family(family_id: UUID) -> FamilyTreeOut:
    """Get a family with full tree and kinship labels."""
    return await _build_tree(str(family_id))


@router.delete("/{family_id}")
async def delete_family(family_id: UUID) -> dict:
    """Delete a family and all its data."""
    deleted = await fdb.delete_family(str(family_id))
    if not deleted:
        raise HTTPException(404, "Family not found")
    return {"deleted": True}


@router.put("/{family_id}/anchor")
async def set_anchor(family_id: UUID, body: SetAnchorIn) -> FamilyOut:
    """Choose who "me" is. A null person_id clears the anchor."""
    fid = str(family_id)
    await _require_family(fid)
    if body.person_id is not None and await fdb.get_person(fid, body.person_id) is None:
        raise HTTPException(404, "Person not found")
    row = await fdb.set_anchor(fid, body.person_id)
    return _family_out(row)


# ---------------------------------------------------------------------------
# People CRUD
# ---------------------------------------------------------------------------

@router.post("/{family_id}/people", status_code=201)
async def create_person(family_id: UUID, body: CreatePersonIn) -> PersonOut:
    """Add a person to the family."""
    fid = str(family_id)
    await _require_family(fid)
    row = await fdb.create_person(
        family_id=fid,
        name=body.name,
        gender=body.gender,
        birth_year=body.birth_year,
        birth_place=body.birth_place,
        is_alive=body.is_alive,
        notes=body.notes,
    )
    return _person_out(row)


@router.patch("/{family_id}/people/{person_id}")
async def update_person(family_id: UUID, person_id: str, body: UpdatePersonIn) -> PersonOut:
    """Update a person's details."""
    row = await fdb.update_person(str(family_id), person_id, **body.model_dump(exclude_unset=True))
    if row is None:
        raise HTTPException(404, "Person not found")
    return _person_out(row)


@router.delete("/{family_id}/people/{person_id}")
async def delete_person(family_id: UUID, person_id: str) -> dict:
    """Delete a person along with their relationships."""
    deleted = await fdb.delete_person(str(family_id), person_id)
    if not deleted:
        raise HTTPException(404, "Person not found")
    return {"deleted": True}


@router.post("/{family_id}/people/{person_id}/relatives", status_code=201)
async def add_relative(family_id: UUID, person_id: str, body: AddRelativeIn) -> AddRelativeOut:
    """Add a new relative of a person and link them to the rest of the family."""
    fid = str(family_id)
    _, _, _, graph = await _load(fid)
    if person_id not in graph:
        raise HTTPException(404, "Person not found")

    new_id = fdb.new_id()
    plan = plan_add_relative(graph, person_id, body.kind, new_id)
    relative = Person(id=new_id, name=body.name, gender=plan.gender, birth_year=body.birth_year)

    person, rels = await fdb.add_relative(fid, relative, plan.edges)
    logger.info(
        "Added %s %s of %s with %d relationships", body.kind, new_id, person_id, len(rels)
    )
    return AddRelativeOut(
        person=_person_out(person),
        relationships=[_rel_out(r) for r in rels],
    )


# ---------------------------------------------------------------------------
# Relationships
# ---------------------------------------------------------------------------

@router.post("/{family_id}/relationships", status_code=201)
async def create_relationship(family_id: UUID, body: CreateRelationshipIn) -> RelationshipOut:
    """Add a relationship. For parent-child, source is the parent."""
    fid = str(family_id)
    await _require_family(fid)
    if body.source_id == body.target_id:
        raise HTTPException(400, "A relationship needs two different people")
    for pid in (body.source_id, body.target_id):
        if await fdb.get_person(fid, pid) is None:
            raise HTTPException(400, f"Unknown person: {pid}")
    row = await fdb.create_relationship(
        family_id=fid,
        rel_type=body.type,
        source_id=body.source_id,
        target_id=body.target_id,
    )
    return _rel_out(row)


@router.delete("/{family_id}/relationships/{rel_id}")
async def delete_relationship(family_id: UUID, rel_id: str) -> dict:
    """Delete a relationship."""
    deleted = await fdb.delete_relationship(str(family_id), rel_id)
    if not deleted:
        raise HTTPException(404, "Relationship not found")
    return {"deleted": True}


# ---------------------------------------------------------------------------
# Kinship
# ---------------------------------------------------------------------------

@router.get("/{family_id}/kinship")
async def get_kinship_labels(family_id: UUID) -> KinshipLabelsOut:
    """Kinship term for everyone reachable from the anchor."""
    _, _, _, graph = await _load(str(family_id))
    return KinshipLabelsOut(
        anchor_id=graph.anchor_id,
        labels=KinshipService(graph).resolve_all(),
    )


@router.get("/{family_id}/kinship/{person_id}")
async def get_kinship(family_id: UUID, person_id: str) -> KinshipOut:
    """Kinship term and path from the anchor to one person.

    Path and term are null when there is no anchor or no connecting path.
    """
    _, _, _, graph = await _load(str(family_id))
    if person_id not in graph:
        raise HTTPException(404, "Person not found")
    result = KinshipService(graph).resolve(graph.anchor_id, person_id)
    if result is None:
        return KinshipOut(person_id=person_id, anchor_id=graph.anchor_id)
    return KinshipOut(
        person_id=person_id,
        anchor_id=graph.anchor_id,
        path=result.path,
        term=result.term,
    )


# ---------------------------------------------------------------------------
# Export / import
# ---------------------------------------------------------------------------

@router.get("/{family_id}/export")
async def export_family(family_id: UUID) -> dict:
    """Export people, relationships and anchor in the JSON interchange format."""
    _, _, _, graph = await _load(str(family_id))
    return dump_export(export_graph(graph))


@router.post("/{family_id}/import")
async def import_family(family_id: UUID, body: FamilyExport) -> ImportOut:
    """Replace the family's contents with an exported file."""
    fid = str(family_id)
    await _require_family(fid)
    graph = graph_from_export(body)
    await fdb.replace_graph(fid, graph.people, graph.relationships, graph.anchor_id)
    logger.info(
        "Imported %d people, %d relationships into family %s",
        len(graph.people), len(graph.relationships), fid,
    )
    return ImportOut(
        people=len(graph.people),
        relationships=len(graph.relationships),
        anchor_id=graph.anchor_id,
    )


@router.post("/{family_id}/sample")
async def load_sample(family_id: UUID) -> FamilyTreeOut:
    """Replace the family's contents with the built-in sample family."""
    fid = str(family_id)
    await _require_family(fid)
    graph = sample_graph()
    await fdb.replace_graph(fid, graph.people, graph.relationships, graph.anchor_id)
    return await _build_tree(fid)


@router.post("/{family_id}/clear")
async def clear_family(family_id: UUID) -> dict:
    """Remove every person and relationship, and unset the anchor."""
    fid = str(family_id)
    await _require_family(fid)
    await fdb.clear_family(fid)
    return {"cleared": True}
