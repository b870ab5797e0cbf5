"""In-memory task/category storage shared by the API server."""

from .exceptions import CategoryReferenceError, TaskStoreError, UsernameTakenError
from .models import (
    CATEGORY_COLORS,
    Category,
    DeleteResult,
    Task,
    TaskWithCategory,
    User,
)
from .store import DEFAULT_CATEGORIES, TaskStore

__all__ = [
    "CATEGORY_COLORS",
    "DEFAULT_CATEGORIES",
    "Category",
    "CategoryReferenceError",
    "DeleteResult",
    "Task",
    "TaskStore",
    "TaskStoreError",
    "TaskWithCategory",
    "User",
    "UsernameTakenError",
]
