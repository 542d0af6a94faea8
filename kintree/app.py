"""kintree: family tree backend that labels everyone with their Chinese kinship term."""

from __future__ import annotations

import logging
import os
import time
from contextlib import asynccontextmanager

import psutil
import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from kintree.db import close_pool, get_pool, init_pool
from kintree.family import db as fdb

logger = logging.getLogger("kintree")

HOST = os.environ.get("KT_HOST", "127.0.0.1")
PORT = int(os.environ.get("KT_PORT", "9820"))

_start_time: float = 0.0


# ---------------------------------------------------------------------------
# Lifespan
# ---------------------------------------------------------------------------

@asynccontextmanager
async def lifespan(app: FastAPI):
    global _start_time
    _start_time = time.time()

    await init_pool()
    logger.info("Database pool initialized")
    await fdb.ensure_schema()
    logger.info("Family schema ready")

    yield

    await close_pool()
    logger.info("Database pool closed")


# ---------------------------------------------------------------------------
# App
# ---------------------------------------------------------------------------

app = FastAPI(
    title="kintree",
    version="0.1.0",
    description="Family trees with Chinese kinship terms resolved from any member's point of view",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

from kintree.family.routes import router as family_router  # noqa: E402

app.include_router(family_router)


# ---------------------------------------------------------------------------
# Core routes
# ---------------------------------------------------------------------------

@app.get("/health")
async def health():
    """Health check. Returns DB connectivity status."""
    result: dict = {"status": "ok"}
    try:
        p = get_pool()
        db_ok = await p.fetchval("SELECT 1")
        result["database"] = "connected" if db_ok == 1 else "unexpected"
    except RuntimeError:
        result["database"] = "pool_not_initialized"
    except Exception as exc:
        result["status"] = "degraded"
        result["database"] = f"error: {exc}"
    return result


@app.get("/metrics")
async def metrics():
    """Process and content stats."""
    try:
        process = psutil.Process(os.getpid())
        mem = process.memory_info()
        uptime = time.time() - _start_time if _start_time else 0.0

        result: list[dict] = [
            {"key": "uptime", "label": "Uptime", "value": round(uptime), "unit": "seconds"},
            {
                "key": "memory_rss",
                "label": "Memory (RSS)",
                "value": round(mem.rss / 1_048_576, 1),
                "unit": "MB",
                "warn_above": 512,
            },
            {
                "key": "cpu_percent",
                "label": "CPU usage",
                "value": process.cpu_percent(interval=0),
                "unit": "%",
                "warn_above": 90,
            },
        ]

        stats = await fdb.get_stats()
        result.extend([
            {"key": "families", "label": "Families", "value": stats["families"], "unit": "families"},
            {"key": "people", "label": "People", "value": stats["people"], "unit": "people"},
            {
                "key": "relationships",
                "label": "Relationships",
                "value": stats["relationships"],
                "unit": "edges",
            },
        ])
        return {"metrics": result}

    except Exception as exc:
        logger.exception("Error fetching metrics")
        return JSONResponse(
            status_code=500,
            content={"metrics": [], "error": f"Database error: {exc}"},
        )


# ---------------------------------------------------------------------------
# Entrypoint
# ---------------------------------------------------------------------------

def run() -> None:
    logging.basicConfig(
        level=os.environ.get("KT_LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run("kintree.app:app", host=HOST, port=PORT, reload=False)


if __name__ == "__main__":
    run()
