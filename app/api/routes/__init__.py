"""API routes module."""

from app.api.routes.auth import router as auth_router
from app.api.routes.notes import router as notes_router
from app.api.routes.projects import router as projects_router
from app.api.routes.search import router as search_router

__all__ = ["auth_router", "notes_router", "projects_router", "search_router"]
