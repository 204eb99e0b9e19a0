"""Image indexing routes: queue status, enqueueing and document preview."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, HTTPException, status

from api.models.images import IndexImagesPayload, TasksQueuedResponse, TasksStatusResponse
from indices.service import ImageIndexCreationService
from tasks.service import ImageTasksService


router = APIRouter(prefix="/api", tags=["images"])

image_tasks_service = ImageTasksService()
index_creation_service = ImageIndexCreationService()


@router.get("/tasks/status", response_model=TasksStatusResponse)
def tasks_status():
    pending = image_tasks_service.pending_counts()
    return {"pending": pending, "total": sum(pending.values())}


@router.post("/images/index", response_model=TasksQueuedResponse, status_code=status.HTTP_202_ACCEPTED)
def index_images(payload: IndexImagesPayload):
    """Queue several images for (re)indexing."""
    return {"queued": image_tasks_service.create_indexing_tasks(payload.ids)}


@router.post("/images/{image_id}/index", response_model=TasksQueuedResponse, status_code=status.HTTP_202_ACCEPTED)
def index_image(image_id: int):
    return {"queued": image_tasks_service.create_indexing_tasks([image_id])}


@router.get("/images/{image_id}/index")
def preview_image_index(image_id: int) -> dict[str, Any]:
    """Build the document for an image without publishing it."""
    document = index_creation_service.create_index(image_id)
    if document is None:
        raise HTTPException(status_code=404, detail=f"Image {image_id} not found")
    return document.to_document()


@router.delete("/images/{image_id}", response_model=TasksQueuedResponse, status_code=status.HTTP_202_ACCEPTED)
def remove_image(image_id: int):
    """Queue an image for removal from the store and the index."""
    return {"queued": image_tasks_service.create_removal_tasks([image_id])}
