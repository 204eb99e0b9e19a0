"""Search backend settings."""

from __future__ import annotations

import os
from functools import lru_cache
from typing import Literal, Optional

from pydantic import BaseModel


class IndexSinkSettings(BaseModel):
    kind: Literal["elastic", "memory"] = "elastic"
    host: str = "http://localhost:9200"
    user: Optional[str] = None
    password: Optional[str] = None
    images_index: str = "images"
    timeout: float = 30.0


@lru_cache
def get_sink_settings() -> IndexSinkSettings:
    return IndexSinkSettings(
        kind=os.getenv("INDEX_SINK", "elastic").lower(),
        host=os.getenv("ELASTIC_HOST", IndexSinkSettings().host),
        user=os.getenv("ELASTIC_USER") or None,
        password=os.getenv("ELASTIC_PASSWORD") or None,
        images_index=os.getenv("IMAGES_INDEX_NAME", "images"),
        timeout=float(os.getenv("ELASTIC_TIMEOUT", "30")),
    )
