"""Data access helpers for the task queue."""

from __future__ import annotations

from typing import Iterable, Optional

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from .models import Task, TaskTargetType, TaskType


def create_tasks(
    session: Session,
    *,
    task_type: TaskType,
    target_type: TaskTargetType,
    targets: Iterable[object],
    data: Optional[dict] = None,
) -> list[Task]:
    tasks = [
        Task(type_id=task_type, target_type_id=target_type, target=str(target), data=data)
        for target in targets
    ]
    session.add_all(tasks)
    session.flush()
    return tasks


def get_bucket(session: Session, task_type: TaskType, target_type: TaskTargetType, size: int) -> list[Task]:
    """Up to ``size`` pending tasks of one class, newest first, ties in insertion order."""
    stmt = (
        select(Task)
        .where(Task.type_id == task_type, Task.target_type_id == target_type)
        .order_by(Task.date.desc(), Task.id.asc())
        .limit(size)
    )
    return list(session.scalars(stmt))


def delete_tasks(session: Session, task_ids: Iterable[int]) -> int:
    task_ids = list(task_ids)
    if not task_ids:
        return 0
    result = session.execute(delete(Task).where(Task.id.in_(task_ids)))
    return result.rowcount or 0


def count_tasks(session: Session) -> dict[tuple[TaskType, TaskTargetType], int]:
    stmt = select(Task.type_id, Task.target_type_id, func.count(Task.id)).group_by(
        Task.type_id, Task.target_type_id
    )
    return {(type_id, target_type_id): count for type_id, target_type_id, count in session.execute(stmt)}
