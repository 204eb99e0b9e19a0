"""Schema bootstrap for the domain store and task queue."""

from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy.engine import Engine

from domain.schema import Base as DomainBase
from tasks.models import Base as TasksBase


logger = logging.getLogger(__name__)


def ensure_schema(engine: Optional[Engine] = None) -> None:
    """Create any missing domain and task tables."""
    if engine is None:
        from db.session import engine as default_engine

        engine = default_engine

    DomainBase.metadata.create_all(engine)
    TasksBase.metadata.create_all(engine)
    logger.info("Schema ready on %s", engine.url.render_as_string(hide_password=True))
