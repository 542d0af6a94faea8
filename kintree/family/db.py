"""Database query helpers for family tree tables."""

from __future__ import annotations

import uuid
from collections.abc import Iterable

import asyncpg

from kintree.db import get_pool
from kintree.family.editing import PlannedEdge
from kintree.family.engine import Person, Relationship

SCHEMA = """
CREATE TABLE IF NOT EXISTS families (
    id          uuid PRIMARY KEY,
    name        text NOT NULL,
    anchor_id   text,
    created_at  timestamptz NOT NULL DEFAULT now(),
    updated_at  timestamptz NOT NULL DEFAULT now()
);

CREATE TABLE IF NOT EXISTS family_people (
    id          text NOT NULL,
    family_id   uuid NOT NULL REFERENCES families(id) ON DELETE CASCADE,
    name        text NOT NULL,
    gender      text NOT NULL CHECK (gender IN ('male', 'female')),
    birth_year  integer,
    birth_place text,
    is_alive    boolean NOT NULL DEFAULT true,
    notes       text,
    position    bigserial,
    created_at  timestamptz NOT NULL DEFAULT now(),
    updated_at  timestamptz NOT NULL DEFAULT now(),
    PRIMARY KEY (family_id, id)
);

-- source_id/target_id are not foreign keys; the kinship engine skips edges
-- whose endpoints are missing.
CREATE TABLE IF NOT EXISTS family_relationships (
    id          text NOT NULL,
    family_id   uuid NOT NULL REFERENCES families(id) ON DELETE CASCADE,
    type        text NOT NULL CHECK (type IN ('parent-child', 'spouse')),
    source_id   text NOT NULL,
    target_id   text NOT NULL,
    position    bigserial,
    created_at  timestamptz NOT NULL DEFAULT now(),
    PRIMARY KEY (family_id, id)
);
"""

_FAMILY_COLS = "id, name, anchor_id, created_at, updated_at"
_PERSON_COLS = (
    "id, family_id, name, gender, birth_year, birth_place, is_alive, notes, "
    "created_at, updated_at"
)
_REL_COLS = "id, family_id, type, source_id, target_id, created_at"


def new_id() -> str:
    return uuid.uuid4().hex[:12]


async def ensure_schema() -> None:
    """Create tables if they don't exist yet."""
    p = get_pool()
    await p.execute(SCHEMA)


# ---------------------------------------------------------------------------
# Families
# ---------------------------------------------------------------------------

async def create_family(name: str) -> asyncpg.Record:
    p = get_pool()
    fid = uuid.uuid4()
    return await p.fetchrow(
        f"INSERT INTO families (id, name) VALUES ($1, $2) RETURNING {_FAMILY_COLS}",
        fid, name,
    )


async def get_family(family_id: str) -> asyncpg.Record | None:
    p = get_pool()
    return await p.fetchrow(
        f"SELECT {_FAMILY_COLS} FROM families WHERE id = $1",
        family_id,
    )


async def list_families() -> list[asyncpg.Record]:
    p = get_pool()
    return await p.fetch(
        f"SELECT {_FAMILY_COLS} FROM families ORDER BY created_at DESC"
    )


async def delete_family(family_id: str) -> bool:
    p = get_pool()
    result = await p.execute("DELETE FROM families WHERE id = $1", family_id)
    return result == "DELETE 1"


async def set_anchor(family_id: str, person_id: str | None) -> asyncpg.Record | None:
    p = get_pool()
    return await p.fetchrow(
        f"UPDATE families SET anchor_id = $1, updated_at = now() WHERE id = $2 "
        f"RETURNING {_FAMILY_COLS}",
        person_id, family_id,
    )


# ---------------------------------------------------------------------------
# People
# ---------------------------------------------------------------------------

async def create_person(
    family_id: str,
    name: str,
    gender: str,
    birth_year: int | None = None,
    birth_place: str | None = None,
    is_alive: bool = True,
    notes: str | None = None,
    person_id: str | None = None,
) -> asyncpg.Record:
    p = get_pool()
    pid = person_id or new_id()
    return await p.fetchrow(
        "INSERT INTO family_people "
        "(id, family_id, name, gender, birth_year, birth_place, is_alive, notes) "
        "VALUES ($1, $2, $3, $4, $5, $6, $7, $8) "
        f"RETURNING {_PERSON_COLS}",
        pid, family_id, name, gender, birth_year, birth_place, is_alive, notes,
    )


async def get_person(family_id: str, person_id: str) -> asyncpg.Record | None:
    p = get_pool()
    return await p.fetchrow(
        f"SELECT {_PERSON_COLS} FROM family_people WHERE family_id = $1 AND id = $2",
        family_id, person_id,
    )


async def update_person(family_id: str, person_id: str, **kwargs) -> asyncpg.Record | None:
    """Set the given columns. Nullable columns accept None, which clears them."""
    p = get_pool()
    allowed = {"name", "gender", "birth_year", "birth_place", "is_alive", "notes"}
    nullable = {"birth_year", "birth_place", "notes"}
    sets: list[str] = []
    params: list = []
    idx = 1

    for key, val in kwargs.items():
        if key not in allowed or (val is None and key not in nullable):
            continue
        sets.append(f"{key} = ${idx}")
        params.append(val)
        idx += 1

    if not sets:
        return await get_person(family_id, person_id)

    params.extend([family_id, person_id])
    sql = (
        f"UPDATE family_people SET {', '.join(sets)}, updated_at = now() "
        f"WHERE family_id = ${idx} AND id = ${idx + 1} "
        f"RETURNING {_PERSON_COLS}"
    )
    return await p.fetchrow(sql, *params)


async def delete_person(family_id: str, person_id: str) -> bool:
    """Delete a person, every relationship touching them, and the anchor if it was them."""
    p = get_pool()
    async with p.acquire() as conn:
        async with conn.transaction():
            result = await conn.execute(
                "DELETE FROM family_people WHERE family_id = $1 AND id = $2",
                family_id, person_id,
            )
            if result != "DELETE 1":
                return False
            await conn.execute(
                "DELETE FROM family_relationships "
                "WHERE family_id = $1 AND (source_id = $2 OR target_id = $2)",
                family_id, person_id,
            )
            await conn.execute(
                "UPDATE families SET anchor_id = NULL, updated_at = now() "
                "WHERE id = $1 AND anchor_id = $2",
                family_id, person_id,
            )
    return True


async def list_people(family_id: str) -> list[asyncpg.Record]:
    p = get_pool()
    return await p.fetch(
        f"SELECT {_PERSON_COLS} FROM family_people WHERE family_id = $1 ORDER BY position",
        family_id,
    )


# ---------------------------------------------------------------------------
# Relationships
# ---------------------------------------------------------------------------

async def create_relationship(
    family_id: str,
    rel_type: str,
    source_id: str,
    target_id: str,
    rel_id: str | None = None,
) -> asyncpg.Record:
    p = get_pool()
    rid = rel_id or new_id()
    return await p.fetchrow(
        "INSERT INTO family_relationships (id, family_id, type, source_id, target_id) "
        f"VALUES ($1, $2, $3, $4, $5) RETURNING {_REL_COLS}",
        rid, family_id, rel_type, source_id, target_id,
    )


async def delete_relationship(family_id: str, rel_id: str) -> bool:
    p = get_pool()
    result = await p.execute(
        "DELETE FROM family_relationships WHERE family_id = $1 AND id = $2",
        family_id, rel_id,
    )
    return result == "DELETE 1"


async def list_relationships(family_id: str) -> list[asyncpg.Record]:
    """Relationships in insertion order, which the kinship engine uses for tie-breaks."""
    p = get_pool()
    return await p.fetch(
        f"SELECT {_REL_COLS} FROM family_relationships WHERE family_id = $1 ORDER BY position",
        family_id,
    )


# ---------------------------------------------------------------------------
# Bulk
# ---------------------------------------------------------------------------

async def clear_family(family_id: str) -> None:
    p = get_pool()
    async with p.acquire() as conn:
        async with conn.transaction():
            await _clear(conn, family_id)


async def _clear(conn: asyncpg.Connection, family_id: str) -> None:
    await conn.execute("DELETE FROM family_relationships WHERE family_id = $1", family_id)
    await conn.execute("DELETE FROM family_people WHERE family_id = $1", family_id)
    await conn.execute(
        "UPDATE families SET anchor_id = NULL, updated_at = now() WHERE id = $1",
        family_id,
    )


async def replace_graph(
    family_id: str,
    people: list[Person],
    relationships: list[Relationship],
    anchor_id: str | None,
) -> None:
    """Replace a family's people, relationships and anchor in one transaction."""
    p = get_pool()
    async with p.acquire() as conn:
        async with conn.transaction():
            await _clear(conn, family_id)
            # executemany runs in order, so position follows list order
            await conn.executemany(
                "INSERT INTO family_people "
                "(id, family_id, name, gender, birth_year, birth_place, is_alive, notes) "
                "VALUES ($1, $2, $3, $4, $5, $6, $7, $8)",
                [
                    (
                        person.id, family_id, person.name, person.gender,
                        person.birth_year, person.birth_place, person.is_alive, person.notes,
                    )
                    for person in people
                ],
            )
            await conn.executemany(
                "INSERT INTO family_relationships (id, family_id, type, source_id, target_id) "
                "VALUES ($1, $2, $3, $4, $5)",
                [(r.id, family_id, r.type, r.source_id, r.target_id) for r in relationships],
            )
            await conn.execute(
                "UPDATE families SET anchor_id = $1, updated_at = now() WHERE id = $2",
                anchor_id, family_id,
            )


async def add_relative(
    family_id: str,
    person: Person,
    edges: Iterable[PlannedEdge],
) -> tuple[asyncpg.Record, list[asyncpg.Record]]:
    """Insert a new relative and its planned relationships in one transaction."""
    p = get_pool()
    async with p.acquire() as conn:
        async with conn.transaction():
            row = await conn.fetchrow(
                "INSERT INTO family_people "
                "(id, family_id, name, gender, birth_year, birth_place, is_alive, notes) "
                "VALUES ($1, $2, $3, $4, $5, $6, $7, $8) "
                f"RETURNING {_PERSON_COLS}",
                person.id, family_id, person.name, person.gender,
                person.birth_year, person.birth_place, person.is_alive, person.notes,
            )
            rels = []
            for edge in edges:
                rels.append(await conn.fetchrow(
                    "INSERT INTO family_relationships (id, family_id, type, source_id, target_id) "
                    f"VALUES ($1, $2, $3, $4, $5) RETURNING {_REL_COLS}",
                    new_id(), family_id, edge.type, edge.source_id, edge.target_id,
                ))
    return row, rels


async def get_stats() -> dict:
    p = get_pool()
    row = await p.fetchrow(
        "SELECT (SELECT COUNT(*) FROM families) AS families, "
        "       (SELECT COUNT(*) FROM family_people) AS people, "
        "       (SELECT COUNT(*) FROM family_relationships) AS relationships"
    )
    return dict(row)
