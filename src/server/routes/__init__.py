"""Route registration helpers."""

from .categories import register_category_routes
from .health import register_health_routes
from .tasks import register_task_routes
from .users import register_user_routes

__all__ = [
    "register_category_routes",
    "register_health_routes",
    "register_task_routes",
    "register_user_routes",
]
