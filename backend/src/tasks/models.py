"""SQLAlchemy models and DTOs for queued tasks."""

from __future__ import annotations

import enum
from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel
from sqlalchemy import JSON, DateTime, Enum, Index, Integer, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


class TaskType(str, enum.Enum):
    INDEXING = "indexing"
    REMOVAL = "removal"


class TaskTargetType(str, enum.Enum):
    IMAGE = "image"


class Task(Base):
    __tablename__ = "tasks"
    __table_args__ = (Index("ix_tasks_type_target_date", "type_id", "target_type_id", "date"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    type_id: Mapped[TaskType] = mapped_column(Enum(TaskType), nullable=False)
    target_type_id: Mapped[TaskTargetType] = mapped_column(Enum(TaskTargetType), nullable=False)
    target: Mapped[str] = mapped_column(String(100), nullable=False)
    data: Mapped[Optional[dict]] = mapped_column(JSON, nullable=True)
    date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc)
    )


class TaskDTO(BaseModel):
    id: int
    type_id: TaskType
    target_type_id: TaskTargetType
    target: str
    data: Optional[dict] = None
    date: datetime

    model_config = {
        "from_attributes": True,
    }
