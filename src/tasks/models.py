from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


# Color tokens offered for categories; the store accepts any string.
CATEGORY_COLORS = (
    "blue",
    "green",
    "purple",
    "yellow",
    "red",
    "pink",
    "indigo",
    "cyan",
    "orange",
    "gray",
)


class DeleteResult(str, Enum):
    """Outcome of a category deletion."""

    DELETED = "deleted"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"  # still referenced by at least one task


@dataclass(slots=True)
class User:
    """Registered user. The password is stored as given."""

    id: int
    username: str
    password: str


@dataclass(slots=True)
class Category:
    id: int
    name: str
    color: str


@dataclass(slots=True)
class Task:
    """Stored task; ``category_id`` points into the category map."""

    id: int
    title: str
    due_date: datetime
    category_id: int
    description: Optional[str] = None
    completed: bool = False


@dataclass(slots=True)
class TaskWithCategory:
    """Read-time join of a task with its category. Never stored."""

    task: Task
    category: Category

    @property
    def id(self) -> int:
        return self.task.id
