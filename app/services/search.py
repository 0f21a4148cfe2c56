"""Similarity search over a project's notes."""

import asyncio
import logging

from sqlmodel import Session

from app.config import settings
from app.repositories.note_repository import NoteMatch, NoteRepository
from app.services.embeddings import EmbeddingClient
from app.services.project_service import ProjectService
from app.utils.exceptions import ProviderError, ValidationError

logger = logging.getLogger(__name__)


class SearchService:
    """Turns a free-text query into a ranked list of notes for one project."""

    def __init__(self, session: Session, embedding_client: EmbeddingClient):
        self.session = session
        self.embedding_client = embedding_client
        self.notes = NoteRepository(session)
        self.projects = ProjectService(session)

    async def search(
        self,
        project_id: int,
        query: str,
        limit: int | None = None,
        user_id: int | None = None,
    ) -> list[NoteMatch]:
        """
        Performs a vector search for the given query within a project.

        Input and project scope are checked before the provider is called.
        An empty result means the project has no embedded notes; provider and
        store failures are raised, never returned as an empty list.

        Raises:
            ValidationError: If the query is blank or limit is out of range
            NotFoundError: If the project does not exist
            ProviderError: If embedding the query fails
        """
        if limit is None:
            limit = settings.search_default_limit
        if not query or not query.strip():
            raise ValidationError("Search query must not be empty")
        if limit < 1 or limit > settings.search_max_limit:
            raise ValidationError(
                f"limit must be between 1 and {settings.search_max_limit}"
            )

        self.projects.get_project(project_id, user_id)

        try:
            query_vector = await self.embedding_client.embed(query)
        except ProviderError as e:
            logger.error(
                f"Search failed for project {project_id} at stage 'embed': {e.detail}"
            )
            raise

        try:
            matches = await asyncio.to_thread(
                self.notes.find_nearest, project_id, query_vector, limit
            )
        except Exception as e:
            logger.error(
                f"Search failed for project {project_id} at stage 'query': {e}"
            )
            raise

        logger.info(f"Semantic search found {len(matches)} results in project {project_id}")
        return matches
