from __future__ import annotations

import logging
from dataclasses import fields, replace
from datetime import datetime
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from .exceptions import CategoryReferenceError, UsernameTakenError
from .models import Category, DeleteResult, Task, TaskWithCategory, User

logger = logging.getLogger(__name__)

DEFAULT_CATEGORIES: Tuple[Tuple[str, str], ...] = (
    ("Work", "blue"),
    ("Personal", "green"),
    ("Health", "purple"),
    ("Shopping", "yellow"),
)


class TaskStore:
    """In-memory store for users, categories and tasks.

    Each entity kind has its own id counter starting at 1. Ids are never
    reused and nothing survives the process. The store expects to be driven
    from a single thread (the server's event loop), so it holds no locks.
    """

    def __init__(self) -> None:
        self._users: Dict[int, User] = {}
        self._categories: Dict[int, Category] = {}
        self._tasks: Dict[int, Task] = {}

        self._next_user_id = 1
        self._next_category_id = 1
        self._next_task_id = 1

    def seed_default_categories(
        self, categories: Iterable[Tuple[str, str]] = DEFAULT_CATEGORIES
    ) -> list[Category]:
        """Create the startup categories as (name, color) pairs."""
        created = [self.create_category(name, color) for name, color in categories]
        logger.info("Seeded %d default categories", len(created))
        return created

    # ------------------------------------------------------------------
    # users

    def get_all_users(self) -> list[User]:
        return list(self._users.values())

    def get_user(self, user_id: int) -> Optional[User]:
        return self._users.get(user_id)

    def get_user_by_username(self, username: str) -> Optional[User]:
        for user in self._users.values():
            if user.username == username:
                return user
        return None

    def create_user(self, username: str, password: str) -> User:
        if self.get_user_by_username(username) is not None:
            raise UsernameTakenError(username)
        user = User(id=self._next_user_id, username=username, password=password)
        self._next_user_id += 1
        self._users[user.id] = user
        return user

    # ------------------------------------------------------------------
    # categories

    def get_all_categories(self) -> list[Category]:
        return list(self._categories.values())

    def get_category(self, category_id: int) -> Optional[Category]:
        return self._categories.get(category_id)

    def create_category(self, name: str, color: str) -> Category:
        category = Category(id=self._next_category_id, name=name, color=color)
        self._next_category_id += 1
        self._categories[category.id] = category
        return category

    def update_category(
        self, category_id: int, changes: Mapping[str, Any]
    ) -> Optional[Category]:
        category = self._categories.get(category_id)
        if category is None:
            return None
        updated = self._merge(category, changes)
        self._categories[category_id] = updated
        return updated

    def delete_category(self, category_id: int) -> DeleteResult:
        """Delete a category unless a task still references it."""
        if category_id not in self._categories:
            return DeleteResult.NOT_FOUND
        if any(task.category_id == category_id for task in self._tasks.values()):
            return DeleteResult.CONFLICT
        del self._categories[category_id]
        return DeleteResult.DELETED

    def count_tasks_by_category(self) -> Dict[int, int]:
        counts = {category_id: 0 for category_id in self._categories}
        for task in self._tasks.values():
            if task.category_id in counts:
                counts[task.category_id] += 1
        return counts

    # ------------------------------------------------------------------
    # tasks

    def get_all_tasks(self) -> List[TaskWithCategory]:
        return self._join(self._tasks.values())

    def get_task(self, task_id: int) -> Optional[TaskWithCategory]:
        task = self._tasks.get(task_id)
        if task is None:
            return None
        return self._with_category(task)

    def get_tasks_by_category(self, category_id: int) -> List[TaskWithCategory]:
        return self._join(
            task for task in self._tasks.values() if task.category_id == category_id
        )

    def search_tasks(self, query: str) -> List[TaskWithCategory]:
        """Case-insensitive substring search over title and description."""
        needle = query.lower()
        return self._join(
            task
            for task in self._tasks.values()
            if needle in task.title.lower()
            or (task.description is not None and needle in task.description.lower())
        )

    def create_task(
        self,
        title: str,
        due_date: datetime,
        category_id: int,
        description: Optional[str] = None,
        completed: bool = False,
    ) -> TaskWithCategory:
        category = self._categories.get(category_id)
        if category is None:
            raise CategoryReferenceError(category_id)
        task = Task(
            id=self._next_task_id,
            title=title,
            due_date=due_date,
            category_id=category_id,
            description=description,
            completed=completed,
        )
        self._next_task_id += 1
        self._tasks[task.id] = task
        return TaskWithCategory(task=task, category=category)

    def update_task(
        self, task_id: int, changes: Mapping[str, Any]
    ) -> Optional[TaskWithCategory]:
        """Merge ``changes`` into a task.

        The category reference is checked on the merged value; when it does
        not resolve the stored task is left as it was.
        """
        task = self._tasks.get(task_id)
        if task is None:
            return None
        updated = self._merge(task, changes)
        category = self._categories.get(updated.category_id)
        if category is None:
            raise CategoryReferenceError(updated.category_id)
        self._tasks[task_id] = updated
        return TaskWithCategory(task=updated, category=category)

    def delete_task(self, task_id: int) -> bool:
        return self._tasks.pop(task_id, None) is not None

    # ------------------------------------------------------------------
    # helpers

    @staticmethod
    def _merge(entity, changes: Mapping[str, Any]):
        allowed = {f.name for f in fields(entity)} - {"id"}
        unknown = set(changes) - allowed
        if unknown:
            raise ValueError(f"Unknown fields: {', '.join(sorted(unknown))}")
        return replace(entity, **changes)

    def _with_category(self, task: Task) -> TaskWithCategory:
        category = self._categories.get(task.category_id)
        if category is None:
            raise CategoryReferenceError(task.category_id)
        return TaskWithCategory(task=task, category=category)

    def _join(self, tasks: Iterable[Task]) -> List[TaskWithCategory]:
        return [self._with_category(task) for task in tasks]
