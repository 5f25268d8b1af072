"""
Controllers Package - Presentation Layer

This package contains FastAPI controllers (routers) that handle
HTTP requests and responses. Controllers are responsible for
input validation, error handling, and mapping between API DTOs
and application layer use cases.
"""

from .ai_controller import router as ai_router
from .analytics_controller import router as analytics_router
from .orders_controller import router as orders_router
from .system_controller import router as system_router

__all__ = ["ai_router", "analytics_router", "orders_router", "system_router"]
