"""Parks domain API package."""

from parks.api.errors import register_error_handlers
from parks.api.routes import admin_router, park_router, review_router

__all__ = ["park_router", "review_router", "admin_router", "register_error_handlers"]
