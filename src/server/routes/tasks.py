"""Task endpoints."""

from __future__ import annotations

import logging
from typing import List, Optional

from fastapi import Depends, FastAPI, HTTPException, Query, Response

from src.tasks import TaskStore

from ..dependencies import get_store, parse_id, serialize_task
from ..schemas import TaskCreateRequest, TaskResponse, TaskUpdateRequest

logger = logging.getLogger(__name__)


def register_task_routes(app: FastAPI) -> None:
    """Register task CRUD endpoints."""

    @app.get("/api/tasks", response_model=List[TaskResponse])
    async def list_tasks(
        category_id: Optional[str] = Query(None, alias="categoryId"),
        search: Optional[str] = Query(None),
        completed: Optional[str] = Query(None),
        store: TaskStore = Depends(get_store),
    ) -> List[TaskResponse]:
        """List tasks.

        ``categoryId`` takes precedence over ``search``; ``completed`` is
        applied to whichever selection was made.
        """
        try:
            if category_id:
                tasks = store.get_tasks_by_category(parse_id(category_id, "category"))
            elif search:
                tasks = store.search_tasks(search)
            else:
                tasks = store.get_all_tasks()

            if completed is not None:
                is_completed = completed == "true"
                tasks = [item for item in tasks if item.task.completed == is_completed]

            return [serialize_task(item) for item in tasks]
        except HTTPException:
            raise
        except Exception as exc:
            logger.exception("Failed to list tasks: %s", exc)
            raise HTTPException(
                status_code=500, detail=f"Error retrieving tasks: {exc}"
            ) from exc

    @app.get("/api/tasks/{task_id}", response_model=TaskResponse)
    async def get_task(
        task_id: str,
        store: TaskStore = Depends(get_store),
    ) -> TaskResponse:
        """Get a single task with its category."""
        parsed_id = parse_id(task_id, "task")
        try:
            task = store.get_task(parsed_id)
            if task is None:
                raise HTTPException(status_code=404, detail="Task not found")
            return serialize_task(task)
        except HTTPException:
            raise
        except Exception as exc:
            logger.exception("Failed to retrieve task %s: %s", parsed_id, exc)
            raise HTTPException(
                status_code=500, detail=f"Error retrieving task: {exc}"
            ) from exc

    @app.post("/api/tasks", response_model=TaskResponse, status_code=201)
    async def create_task(
        request: TaskCreateRequest,
        store: TaskStore = Depends(get_store),
    ) -> TaskResponse:
        """Create a new task in an existing category."""
        try:
            task = store.create_task(**request.model_dump())
            logger.info("Created task %s in category %s", task.id, task.category.id)
            return serialize_task(task)
        except Exception as exc:
            logger.exception("Failed to create task: %s", exc)
            raise HTTPException(
                status_code=500, detail=f"Error creating task: {exc}"
            ) from exc

    @app.put("/api/tasks/{task_id}", response_model=TaskResponse)
    async def update_task(
        task_id: str,
        request: TaskUpdateRequest,
        store: TaskStore = Depends(get_store),
    ) -> TaskResponse:
        """Merge the provided fields into an existing task."""
        parsed_id = parse_id(task_id, "task")
        try:
            task = store.update_task(parsed_id, request.changes())
            if task is None:
                raise HTTPException(status_code=404, detail="Task not found")
            return serialize_task(task)
        except HTTPException:
            raise
        except Exception as exc:
            logger.exception("Failed to update task %s: %s", parsed_id, exc)
            raise HTTPException(
                status_code=500, detail=f"Error updating task: {exc}"
            ) from exc

    @app.delete("/api/tasks/{task_id}", status_code=204, response_class=Response)
    async def delete_task(
        task_id: str,
        store: TaskStore = Depends(get_store),
    ) -> Response:
        """Delete a task."""
        parsed_id = parse_id(task_id, "task")
        try:
            deleted = store.delete_task(parsed_id)
        except Exception as exc:
            logger.exception("Failed to delete task %s: %s", parsed_id, exc)
            raise HTTPException(
                status_code=500, detail=f"Error deleting task: {exc}"
            ) from exc

        if not deleted:
            raise HTTPException(status_code=404, detail="Task not found")
        return Response(status_code=204)
