"""Schemas for image task and index routes."""

from __future__ import annotations

from pydantic import BaseModel, Field


class IndexImagesPayload(BaseModel):
    ids: list[int] = Field(min_length=1)


class TasksQueuedResponse(BaseModel):
    queued: int


class TasksStatusResponse(BaseModel):
    pending: dict[str, int]
    total: int
