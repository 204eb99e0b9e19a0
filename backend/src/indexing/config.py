"""Settings for the background indexing loops."""

from __future__ import annotations

import os
from functools import lru_cache

from pydantic import BaseModel, Field


class IndexingSettings(BaseModel):
    enabled: bool = True
    bucket_size: int = Field(default=300, gt=0)
    removal_bucket_size: int = Field(default=300, gt=0)
    interval: float = Field(default=10.0, gt=0)
    start_delay: float = Field(default=5.0, ge=0)


@lru_cache
def get_indexing_settings() -> IndexingSettings:
    return IndexingSettings(
        enabled=os.getenv("INDEXING_ENABLED", "true").lower() == "true",
        bucket_size=int(os.getenv("INDEXING_BUCKET_SIZE", "300")),
        removal_bucket_size=int(os.getenv("REMOVAL_BUCKET_SIZE", "300")),
        interval=float(os.getenv("INDEXING_INTERVAL", "10")),
        start_delay=float(os.getenv("INDEXING_START_DELAY", "5")),
    )
