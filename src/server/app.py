"""FastAPI application bootstrap."""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from src.task_manager.config import Config
from src.tasks import TaskStore

from .dependencies import config as app_config
from .dependencies import format_validation_errors, get_store
from .routes import (
    register_category_routes,
    register_health_routes,
    register_task_routes,
    register_user_routes,
)

logger = logging.getLogger(__name__)


def build_store(config: Config) -> TaskStore:
    """Create the store for one application, seeded per config."""
    store = TaskStore()
    if config.store.seed_default_categories:
        store.seed_default_categories(config.store.default_categories)
    return store


def create_app(store: Optional[TaskStore] = None, config: Optional[Config] = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Each application owns exactly one store; pass ``store`` to share a
    prepared instance (tests do this), otherwise a fresh one is built.
    """
    config = config or app_config
    app = FastAPI(title="Task Manager API", version="1.0.0")
    app.state.store = store if store is not None else build_store(config)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.server.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        message = format_validation_errors(exc.errors())
        logger.info("Rejected %s %s: %s", request.method, request.url.path, message)
        return JSONResponse(status_code=400, content={"detail": message})

    register_health_routes(app)
    register_category_routes(app)
    register_task_routes(app)
    register_user_routes(app)

    return app


app = create_app()

__all__ = ["app", "build_store", "create_app", "get_store"]
