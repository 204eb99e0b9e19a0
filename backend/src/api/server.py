"""FastAPI application factory for the images feed API."""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from logging_config import configure_logging

# Patchable imports for testing
from db.lifecycle import ensure_schema
from indexing.config import get_indexing_settings
from indexing.worker import WorkerSupervisor, build_workers

configure_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_indexing_settings()
    supervisor = None
    if settings.enabled:
        supervisor = WorkerSupervisor(build_workers(settings=settings))
        supervisor.start()
    else:
        logger.info("Background indexing disabled")
    app.state.workers = supervisor
    try:
        yield
    finally:
        if supervisor is not None:
            await supervisor.stop()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="Images Feed API",
        description="Queues image indexing work and serves index previews",
        version="0.1.0",
        lifespan=lifespan,
    )

    try:
        ensure_schema()
    except Exception:
        logger.exception("Database bootstrap failed")
        raise

    from api.routes import images_router, system_router

    app.include_router(system_router)
    app.include_router(images_router)

    return app


def main():
    """Run the API server."""
    import uvicorn
    app = create_app()
    uvicorn.run(app, host="0.0.0.0", port=8000)


if __name__ == "__main__":
    main()
