"""User registration endpoints. No authentication is enforced."""

from __future__ import annotations

import logging

from fastapi import Depends, FastAPI, HTTPException

from src.tasks import TaskStore, UsernameTakenError

from ..dependencies import get_store, parse_id, serialize_user
from ..schemas import UserCreateRequest, UserResponse

logger = logging.getLogger(__name__)


def register_user_routes(app: FastAPI) -> None:
    """Register user endpoints."""

    @app.post("/api/users", response_model=UserResponse, status_code=201)
    async def register_user(
        request: UserCreateRequest,
        store: TaskStore = Depends(get_store),
    ) -> UserResponse:
        try:
            user = store.create_user(request.username, request.password)
            logger.info("Registered user %s", user.id)
            return serialize_user(user)
        except UsernameTakenError as exc:
            raise HTTPException(status_code=409, detail=str(exc)) from exc
        except Exception as exc:
            logger.exception("Failed to register user: %s", exc)
            raise HTTPException(
                status_code=500, detail=f"Error creating user: {exc}"
            ) from exc

    @app.get("/api/users/{user_id}", response_model=UserResponse)
    async def get_user(
        user_id: str,
        store: TaskStore = Depends(get_store),
    ) -> UserResponse:
        parsed_id = parse_id(user_id, "user")
        try:
            user = store.get_user(parsed_id)
            if user is None:
                raise HTTPException(status_code=404, detail="User not found")
            return serialize_user(user)
        except HTTPException:
            raise
        except Exception as exc:
            logger.exception("Failed to retrieve user %s: %s", parsed_id, exc)
            raise HTTPException(
                status_code=500, detail=f"Error retrieving user: {exc}"
            ) from exc
