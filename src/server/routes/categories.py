"""Category endpoints."""

from __future__ import annotations

import logging
from typing import List

from fastapi import Depends, FastAPI, HTTPException, Response

from src.tasks import CATEGORY_COLORS, DeleteResult, TaskStore

from ..dependencies import (
    get_store,
    parse_id,
    serialize_category,
    serialize_category_with_count,
)
from ..schemas import (
    CategoryCreateRequest,
    CategoryResponse,
    CategoryUpdateRequest,
    CategoryWithCountResponse,
)

logger = logging.getLogger(__name__)


def register_category_routes(app: FastAPI) -> None:
    """Register category CRUD endpoints."""

    @app.get("/api/categories", response_model=List[CategoryWithCountResponse])
    async def list_categories(
        store: TaskStore = Depends(get_store),
    ) -> List[CategoryWithCountResponse]:
        """List categories with the number of tasks in each."""
        try:
            counts = store.count_tasks_by_category()
            return [
                serialize_category_with_count(category, counts.get(category.id, 0))
                for category in store.get_all_categories()
            ]
        except Exception as exc:
            logger.exception("Failed to list categories: %s", exc)
            raise HTTPException(
                status_code=500, detail=f"Error retrieving categories: {exc}"
            ) from exc

    @app.get("/api/categories/colors", response_model=List[str])
    async def list_category_colors() -> List[str]:
        """Color tokens offered when creating a category."""
        return list(CATEGORY_COLORS)

    @app.post("/api/categories", response_model=CategoryResponse, status_code=201)
    async def create_category(
        request: CategoryCreateRequest,
        store: TaskStore = Depends(get_store),
    ) -> CategoryResponse:
        """Create a new category."""
        try:
            category = store.create_category(request.name, request.color)
            logger.info("Created category %s (%s)", category.id, category.name)
            return serialize_category(category)
        except Exception as exc:
            logger.exception("Failed to create category: %s", exc)
            raise HTTPException(
                status_code=500, detail=f"Error creating category: {exc}"
            ) from exc

    @app.put("/api/categories/{category_id}", response_model=CategoryResponse)
    async def update_category(
        category_id: str,
        request: CategoryUpdateRequest,
        store: TaskStore = Depends(get_store),
    ) -> CategoryResponse:
        """Update name and/or color of a category."""
        parsed_id = parse_id(category_id, "category")
        try:
            category = store.update_category(parsed_id, request.changes())
            if category is None:
                raise HTTPException(status_code=404, detail="Category not found")
            return serialize_category(category)
        except HTTPException:
            raise
        except Exception as exc:
            logger.exception("Failed to update category %s: %s", parsed_id, exc)
            raise HTTPException(
                status_code=500, detail=f"Error updating category: {exc}"
            ) from exc

    @app.delete("/api/categories/{category_id}", status_code=204, response_class=Response)
    async def delete_category(
        category_id: str,
        store: TaskStore = Depends(get_store),
    ) -> Response:
        """Delete a category that no task references."""
        parsed_id = parse_id(category_id, "category")
        try:
            result = store.delete_category(parsed_id)
        except Exception as exc:
            logger.exception("Failed to delete category %s: %s", parsed_id, exc)
            raise HTTPException(
                status_code=500, detail=f"Error deleting category: {exc}"
            ) from exc

        if result is DeleteResult.NOT_FOUND:
            raise HTTPException(status_code=404, detail="Category not found")
        if result is DeleteResult.CONFLICT:
            raise HTTPException(status_code=409, detail="Category has associated tasks")
        logger.info("Deleted category %s", parsed_id)
        return Response(status_code=204)
