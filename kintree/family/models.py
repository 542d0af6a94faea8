"""Pydantic models for the family tree + kinship API."""

from __future__ import annotations

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, model_validator

Gender = Literal["male", "female"]
RelationshipType = Literal["parent-child", "spouse"]
RelativeKind = Literal["father", "mother", "son", "daughter", "spouse", "brother", "sister"]


# ---------------------------------------------------------------------------
# Family CRUD
# ---------------------------------------------------------------------------

class CreateFamilyIn(BaseModel):
    name: str


class FamilyOut(BaseModel):
    id: UUID
    name: str
    anchor_id: str | None = None
    created_at: datetime
    updated_at: datetime


# ---------------------------------------------------------------------------
# People CRUD
# ---------------------------------------------------------------------------

class CreatePersonIn(BaseModel):
    name: str
    gender: Gender
    birth_year: int | None = None
    birth_place: str | None = None
    is_alive: bool = True
    notes: str | None = None


class UpdatePersonIn(BaseModel):
    name: str | None = None
    gender: Gender | None = None
    birth_year: int | None = None
    birth_place: str | None = None
    is_alive: bool | None = None
    notes: str | None = None


class PersonOut(BaseModel):
    id: str
    family_id: UUID
    name: str
    gender: Gender
    birth_year: int | None = None
    birth_place: str | None = None
    is_alive: bool
    notes: str | None = None
    created_at: datetime
    updated_at: datetime


# ---------------------------------------------------------------------------
# Relationships
# ---------------------------------------------------------------------------

class CreateRelationshipIn(BaseModel):
    type: RelationshipType
    source_id: str  # parent for parent-child
    target_id: str  # child for parent-child


class RelationshipOut(BaseModel):
    id: str
    family_id: UUID
    type: RelationshipType
    source_id: str
    target_id: str
    created_at: datetime


class SetAnchorIn(BaseModel):
    person_id: str | None = None


class AddRelativeIn(BaseModel):
    kind: RelativeKind
    name: str
    birth_year: int | None = None


class AddRelativeOut(BaseModel):
    person: PersonOut
    relationships: list[RelationshipOut]


# ---------------------------------------------------------------------------
# Composite tree view
# ---------------------------------------------------------------------------

class FamilyTreeOut(BaseModel):
    family: FamilyOut
    people: list[PersonOut]
    relationships: list[RelationshipOut]
    labels: dict[str, str]  # person_id -> kinship term from the anchor


# ---------------------------------------------------------------------------
# Kinship
# ---------------------------------------------------------------------------

class KinshipOut(BaseModel):
    person_id: str
    anchor_id: str | None = None
    path: list[str] | None = None  # None when unreachable
    term: str | None = None


class KinshipLabelsOut(BaseModel):
    anchor_id: str | None = None
    labels: dict[str, str]


# ---------------------------------------------------------------------------
# Export / import (camelCase interchange format)
# ---------------------------------------------------------------------------

class ExportPerson(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    gender: Gender
    birth_year: int | None = Field(None, alias="birthYear")
    birth_place: str | None = Field(None, alias="birthPlace")
    is_alive: bool | None = Field(None, alias="isAlive")
    notes: str | None = None


class ExportRelationship(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    type: RelationshipType
    source_id: str = Field(alias="sourceId")
    target_id: str = Field(alias="targetId")


class FamilyExport(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    persons: dict[str, ExportPerson]
    relationships: list[ExportRelationship]
    me_person_id: str | None = Field(None, alias="mePersonId")

    @model_validator(mode="after")
    def check_ids(self) -> FamilyExport:
        for key, person in self.persons.items():
            if key != person.id:
                raise ValueError(f"person key {key!r} does not match its id {person.id!r}")
        seen: set[str] = set()
        for rel in self.relationships:
            if rel.id in seen:
                raise ValueError(f"duplicate relationship id {rel.id!r}")
            seen.add(rel.id)
        return self


class ImportOut(BaseModel):
    people: int
    relationships: int
    anchor_id: str | None = None
