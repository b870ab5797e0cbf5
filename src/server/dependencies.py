"""Dependency helpers shared across FastAPI routes."""

from __future__ import annotations

from typing import Dict, List

from fastapi import HTTPException, Request

from src.task_manager.config import Config
from src.task_manager.logger import setup_logger
from src.tasks import Category, TaskStore, TaskWithCategory, User

from .schemas import (
    CategoryResponse,
    CategoryWithCountResponse,
    TaskResponse,
    UserResponse,
)

config = Config.from_yaml()
setup_logger(log_level=config.log_level, log_file=config.log_file)


def get_store(request: Request) -> TaskStore:
    """Return the store owned by the running application."""
    return request.app.state.store


def parse_id(raw: str, kind: str) -> int:
    """Parse a path/query identifier or fail with 400 before touching the store."""
    try:
        return int(raw)
    except (TypeError, ValueError):
        raise HTTPException(status_code=400, detail=f"Invalid {kind} ID") from None


def format_validation_errors(errors: List[Dict]) -> str:
    """Render pydantic errors as one readable line, one entry per field."""
    parts = []
    for error in errors:
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        message = error.get("msg", "Invalid value")
        parts.append(f"{location}: {message}" if location else message)
    return "Validation error: " + "; ".join(parts)


def serialize_category(category: Category) -> CategoryResponse:
    return CategoryResponse(id=category.id, name=category.name, color=category.color)


def serialize_category_with_count(category: Category, count: int) -> CategoryWithCountResponse:
    return CategoryWithCountResponse(
        id=category.id,
        name=category.name,
        color=category.color,
        count=count,
    )


def serialize_task(item: TaskWithCategory) -> TaskResponse:
    """Convert a joined task to its API response."""
    task = item.task
    return TaskResponse(
        id=task.id,
        title=task.title,
        description=task.description,
        due_date=task.due_date,
        completed=task.completed,
        category_id=task.category_id,
        category=serialize_category(item.category),
    )


def serialize_user(user: User) -> UserResponse:
    return UserResponse(id=user.id, username=user.username)
