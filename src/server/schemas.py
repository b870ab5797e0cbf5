"""Pydantic schemas for the FastAPI server.

JSON field names are camelCase (``dueDate``, ``categoryId``); the Python
attributes stay snake_case.
"""

from __future__ import annotations

from datetime import datetime
from typing import ClassVar, FrozenSet, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictInt,
    StrictStr,
    model_validator,
)
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model exposing camelCase aliases."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PartialUpdate(CamelModel):
    """Partial update body: omitted fields are left alone, nulls are rejected."""

    nullable_fields: ClassVar[FrozenSet[str]] = frozenset()

    @model_validator(mode="after")
    def _reject_nulls(self):
        for name in self.model_fields_set:
            if getattr(self, name) is None and name not in self.nullable_fields:
                raise ValueError(f"{to_camel(name)} cannot be null")
        return self

    def changes(self) -> dict:
        """Fields the client actually sent."""
        return self.model_dump(exclude_unset=True)


class HealthResponse(BaseModel):
    """Response for health check endpoint."""

    status: str


class CategoryCreateRequest(CamelModel):
    """Request body for creating a category."""

    name: StrictStr = Field(..., min_length=1)
    color: StrictStr = Field(..., min_length=1)


class CategoryUpdateRequest(PartialUpdate):
    """Request body for updating a category."""

    name: Optional[StrictStr] = Field(default=None, min_length=1)
    color: Optional[StrictStr] = Field(default=None, min_length=1)


class CategoryResponse(CamelModel):
    """Serialized category."""

    id: int
    name: str
    color: str


class CategoryWithCountResponse(CategoryResponse):
    """Category plus the number of tasks currently referencing it."""

    count: int


class TaskCreateRequest(CamelModel):
    """Request body for creating a task."""

    title: StrictStr = Field(..., min_length=1)
    description: Optional[StrictStr] = None
    due_date: datetime
    completed: StrictBool = False
    category_id: StrictInt


class TaskUpdateRequest(PartialUpdate):
    """Request body for updating a task."""

    nullable_fields: ClassVar[FrozenSet[str]] = frozenset({"description"})

    title: Optional[StrictStr] = Field(default=None, min_length=1)
    description: Optional[StrictStr] = None
    due_date: Optional[datetime] = None
    completed: Optional[StrictBool] = None
    category_id: Optional[StrictInt] = None


class TaskResponse(CamelModel):
    """Serialized task joined with its category."""

    id: int
    title: str
    description: Optional[str] = None
    due_date: datetime
    completed: bool
    category_id: int
    category: CategoryResponse


class UserCreateRequest(CamelModel):
    """Request body for registering a user."""

    username: StrictStr = Field(..., min_length=1)
    password: StrictStr = Field(..., min_length=1)


class UserResponse(CamelModel):
    """Registered user without the password."""

    id: int
    username: str
