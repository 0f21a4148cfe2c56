"""Service modules for business logic."""

from app.services.embeddings import EmbeddingClient
from app.services.note_service import NoteService
from app.services.project_service import ProjectService
from app.services.search import SearchService

__all__ = [
    "EmbeddingClient",
    "NoteService",
    "ProjectService",
    "SearchService",
]
