"""Queue services: enqueueing image work and draining task buckets."""

from __future__ import annotations

import logging
from typing import Callable, Iterable, Optional

from sqlalchemy.orm import Session

from db.session import session_scope

from . import repository
from .models import TaskDTO, TaskTargetType, TaskType


logger = logging.getLogger(__name__)

TaskHandler = Callable[[list[TaskDTO]], None]


class TasksProcessingService:
    """Drains one task class bucket by bucket."""

    def __init__(self, session_factory: Optional[Callable[[], Session]] = None) -> None:
        self._session_factory = session_factory

    def process(
        self,
        task_type: TaskType,
        target_type: TaskTargetType,
        bucket_size: int,
        handler: TaskHandler,
    ) -> int:
        """
        Feed buckets of pending tasks to ``handler`` until the class is empty.

        A bucket is deleted only after ``handler`` returns. If the handler
        raises, the bucket stays queued and the exception propagates; no
        further buckets are pulled.

        Args:
            task_type: Task type to drain
            target_type: Target type to drain
            bucket_size: Maximum number of tasks handed to ``handler`` at once
            handler: Callable receiving each bucket

        Returns:
            Number of tasks processed and removed
        """
        if bucket_size <= 0:
            raise ValueError("bucket_size must be positive")

        processed = 0
        while True:
            with session_scope(self._session_factory) as session:
                bucket = [
                    TaskDTO.model_validate(task)
                    for task in repository.get_bucket(session, task_type, target_type, bucket_size)
                ]

            if not bucket:
                return processed

            handler(bucket)

            with session_scope(self._session_factory) as session:
                repository.delete_tasks(session, [task.id for task in bucket])

            processed += len(bucket)
            logger.info(
                "event=bucket_processed task_type=%s target_type=%s bucket=%d processed=%d",
                task_type.value,
                target_type.value,
                len(bucket),
                processed,
            )


class ImageTasksService:
    """Creates indexing and removal tasks for images."""

    def __init__(self, session_factory: Optional[Callable[[], Session]] = None) -> None:
        self._session_factory = session_factory

    def _create(self, task_type: TaskType, image_ids: Iterable[int]) -> int:
        image_ids = list(dict.fromkeys(int(image_id) for image_id in image_ids))
        if not image_ids:
            return 0
        with session_scope(self._session_factory) as session:
            repository.create_tasks(
                session,
                task_type=task_type,
                target_type=TaskTargetType.IMAGE,
                targets=image_ids,
            )
        logger.info("event=tasks_created task_type=%s target_type=image count=%d", task_type.value, len(image_ids))
        return len(image_ids)

    def create_indexing_tasks(self, image_ids: Iterable[int]) -> int:
        return self._create(TaskType.INDEXING, image_ids)

    def create_removal_tasks(self, image_ids: Iterable[int]) -> int:
        return self._create(TaskType.REMOVAL, image_ids)

    def pending_counts(self) -> dict[str, int]:
        """Pending task counts keyed as ``"<type>:<target_type>"``."""
        with session_scope(self._session_factory) as session:
            counts = repository.count_tasks(session)
        return {f"{task_type.value}:{target_type.value}": count for (task_type, target_type), count in counts.items()}
