"""System routes for health checks."""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Request
from pydantic import BaseModel
from sqlalchemy import text

from db import session as db_session


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["system"])


class HealthResponse(BaseModel):
    status: str


class WorkerState(BaseModel):
    name: str
    running: bool
    cycles: int
    failures: int


class ReadinessResponse(BaseModel):
    status: str
    database: str
    indexing: Optional[list[WorkerState]] = None


def _worker_states(request: Request) -> Optional[list[WorkerState]]:
    supervisor = getattr(request.app.state, "workers", None)
    if supervisor is None:
        return None
    return [
        WorkerState(name=worker.name, running=not worker.stopping, cycles=worker.cycles, failures=worker.failures)
        for worker in supervisor.workers
    ]


@router.get("/health", response_model=HealthResponse)
async def health_check():
    return {"status": "healthy"}


@router.get("/ready", response_model=ReadinessResponse)
def readiness_check(request: Request):
    """Database connectivity plus the state of the background indexing loops (null when disabled)."""
    indexing = _worker_states(request)
    try:
        with db_session.SessionLocal() as session:
            session.execute(text("SELECT 1"))
    except Exception as exc:
        logger.warning("Readiness probe failed: %s", exc)
        return {"status": "not_ready", "database": "disconnected", "indexing": indexing}
    return {"status": "ready", "database": "connected", "indexing": indexing}
