"""Shared fixtures: small graph builders and an in-memory stand-in for the family DB."""

from __future__ import annotations

import contextlib
import itertools
import uuid
from datetime import datetime, timezone

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from kintree.family import routes
from kintree.family.engine import FamilyGraph, Person, Relationship
from kintree.family.sample import sample_graph


def make_graph(people, edges, anchor_id=None) -> FamilyGraph:
    """people: (id, gender, birth_year) tuples; edges: (type, source, target) tuples."""
    return FamilyGraph(
        [Person(id=pid, name=pid, gender=g, birth_year=y) for pid, g, y in people],
        [
            Relationship(id=f"r{i}", type=t, source_id=s, target_id=d)
            for i, (t, s, d) in enumerate(edges, start=1)
        ],
        anchor_id=anchor_id,
    )


@pytest.fixture
def sample():
    return sample_graph()


def _now() -> datetime:
    return datetime.now(timezone.utc)


class FakeFamilyDB:
    """Implements the subset of ``kintree.family.db`` the routes call, backed by dicts."""

    def __init__(self):
        self.families: dict[str, dict] = {}
        self.people: dict[tuple[str, str], dict] = {}
        self.rels: dict[tuple[str, str], dict] = {}
        self._ids = itertools.count(1)

    def new_id(self) -> str:
        return f"x{next(self._ids)}"

    # families

    async def create_family(self, name):
        fid = uuid.uuid4()
        row = {"id": fid, "name": name, "anchor_id": None, "created_at": _now(), "updated_at": _now()}
        self.families[str(fid)] = row
        return row

    async def get_family(self, family_id):
        return self.families.get(family_id)

    async def list_families(self):
        return list(self.families.values())

    async def delete_family(self, family_id):
        if self.families.pop(family_id, None) is None:
            return False
        await self._clear(family_id)
        return True

    async def set_anchor(self, family_id, person_id):
        fam = self.families.get(family_id)
        if fam is None:
            return None
        fam["anchor_id"] = person_id
        return fam

    # people

    async def create_person(self, family_id, name, gender, birth_year=None, birth_place=None,
                            is_alive=True, notes=None, person_id=None):
        pid = person_id or self.new_id()
        if (family_id, pid) in self.people:
            raise ValueError(f"duplicate person id {pid}")
        row = {
            "id": pid, "family_id": uuid.UUID(family_id), "name": name, "gender": gender,
            "birth_year": birth_year, "birth_place": birth_place, "is_alive": is_alive,
            "notes": notes, "created_at": _now(), "updated_at": _now(),
        }
        self.people[(family_id, pid)] = row
        return row

    async def get_person(self, family_id, person_id):
        return self.people.get((family_id, person_id))

    async def update_person(self, family_id, person_id, **kwargs):
        row = self.people.get((family_id, person_id))
        if row is None:
            return None
        nullable = {"birth_year", "birth_place", "notes"}
        row.update({k: v for k, v in kwargs.items() if v is not None or k in nullable})
        return row

    async def delete_person(self, family_id, person_id):
        if self.people.pop((family_id, person_id), None) is None:
            return False
        for key, r in list(self.rels.items()):
            if key[0] == family_id and person_id in (r["source_id"], r["target_id"]):
                del self.rels[key]
        fam = self.families[family_id]
        if fam["anchor_id"] == person_id:
            fam["anchor_id"] = None
        return True

    async def list_people(self, family_id):
        return [p for (fid, _), p in self.people.items() if fid == family_id]

    # relationships

    async def create_relationship(self, family_id, rel_type, source_id, target_id, rel_id=None):
        rid = rel_id or self.new_id()
        if (family_id, rid) in self.rels:
            raise ValueError(f"duplicate relationship id {rid}")
        row = {
            "id": rid, "family_id": uuid.UUID(family_id), "type": rel_type,
            "source_id": source_id, "target_id": target_id, "created_at": _now(),
        }
        self.rels[(family_id, rid)] = row
        return row

    async def delete_relationship(self, family_id, rel_id):
        return self.rels.pop((family_id, rel_id), None) is not None

    async def list_relationships(self, family_id):
        return [r for (fid, _), r in self.rels.items() if fid == family_id]

    # bulk

    @contextlib.contextmanager
    def _transaction(self):
        """Roll people and relationships back if the block raises."""
        people, rels = dict(self.people), dict(self.rels)
        try:
            yield
        except Exception:
            self.people, self.rels = people, rels
            raise

    async def _clear(self, family_id):
        for store in (self.people, self.rels):
            for key in [k for k in store if k[0] == family_id]:
                del store[key]

    async def clear_family(self, family_id):
        await self._clear(family_id)
        self.families[family_id]["anchor_id"] = None

    async def replace_graph(self, family_id, people, relationships, anchor_id):
        with self._transaction():
            await self._clear(family_id)
            for p in people:
                await self.create_person(
                    family_id, p.name, p.gender, p.birth_year, p.birth_place,
                    p.is_alive, p.notes, person_id=p.id,
                )
            for r in relationships:
                await self.create_relationship(family_id, r.type, r.source_id, r.target_id, rel_id=r.id)
        self.families[family_id]["anchor_id"] = anchor_id

    async def add_relative(self, family_id, person, edges):
        with self._transaction():
            row = await self.create_person(
                family_id, person.name, person.gender, person.birth_year, person.birth_place,
                person.is_alive, person.notes, person_id=person.id,
            )
            rels = [
                await self.create_relationship(family_id, e.type, e.source_id, e.target_id)
                for e in edges
            ]
        return row, rels


@pytest.fixture
def fake_db(monkeypatch):
    fake = FakeFamilyDB()
    monkeypatch.setattr(routes, "fdb", fake)
    return fake


@pytest.fixture
def client(fake_db):
    app = FastAPI()
    app.include_router(routes.router)
    with TestClient(app) as c:
        yield c
