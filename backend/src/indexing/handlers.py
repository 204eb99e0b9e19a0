"""Task handlers turning queued image tasks into index updates."""

from __future__ import annotations

import logging
from typing import Optional, Protocol

from domain.remover import ImagesDataRemover
from indices.service import ImageIndexCreationService
from indices.sink import IndexSink
from tasks.models import TaskDTO, TaskTargetType, TaskType
from tasks.service import TasksProcessingService


logger = logging.getLogger(__name__)


class QueueHandler(Protocol):
    def prepare(self) -> None:
        ...

    def handle(self, bucket_size: int) -> int:
        ...


def _unique_targets(tasks: list[TaskDTO]) -> list[str]:
    return list(dict.fromkeys(task.target for task in tasks))


class ImagesIndexingHandler:
    """Builds documents for queued image indexing tasks and submits them in bulk."""

    def __init__(
        self,
        sink: IndexSink,
        *,
        tasks_service: Optional[TasksProcessingService] = None,
        creation_service: Optional[ImageIndexCreationService] = None,
    ) -> None:
        self._sink = sink
        self._tasks_service = tasks_service or TasksProcessingService()
        self._creation_service = creation_service or ImageIndexCreationService()

    def prepare(self) -> None:
        self._sink.prepare()

    def handle(self, bucket_size: int) -> int:
        return self._tasks_service.process(TaskType.INDEXING, TaskTargetType.IMAGE, bucket_size, self._index)

    def _index(self, tasks: list[TaskDTO]) -> None:
        documents = []
        skipped = 0
        for target in _unique_targets(tasks):
            document = self._creation_service.create_index(target)
            if document is None:
                skipped += 1
                continue
            documents.append(document)

        if documents:
            self._sink.submit(documents)

        logger.info("event=images_indexed indexed=%d skipped=%d", len(documents), skipped)


class ImagesRemovalHandler:
    """Deletes images named by removal tasks from the store and the index."""

    def __init__(
        self,
        sink: IndexSink,
        *,
        tasks_service: Optional[TasksProcessingService] = None,
        remover: Optional[ImagesDataRemover] = None,
    ) -> None:
        self._sink = sink
        self._tasks_service = tasks_service or TasksProcessingService()
        self._remover = remover or ImagesDataRemover()

    def prepare(self) -> None:
        pass

    def handle(self, bucket_size: int) -> int:
        return self._tasks_service.process(TaskType.REMOVAL, TaskTargetType.IMAGE, bucket_size, self._remove)

    def _remove(self, tasks: list[TaskDTO]) -> None:
        targets = _unique_targets(tasks)
        deleted = sum(1 for target in targets if self._remover.delete(int(target)))
        self._sink.delete(targets)
        logger.info("event=images_removed requested=%d deleted=%d", len(targets), deleted)
