"""Search endpoints."""

from typing import Annotated

from fastapi import APIRouter, Query

from app.api.deps import CurrentUserIdDep, EmbeddingClientDep, SessionDep
from app.schemas.note import NoteResponse
from app.schemas.search import SearchResponse, SearchResultItem
from app.services.search import SearchService
from app.utils.exceptions import NotFoundError, ProviderError, ValidationError

router = APIRouter(prefix="/api/projects", tags=["search"])


@router.get("/{project_id}/search", response_model=SearchResponse)
async def search_notes(
    project_id: int,
    query: Annotated[str, Query(min_length=1)],
    session: SessionDep,
    user_id: CurrentUserIdDep,
    embedding_client: EmbeddingClientDep,
    limit: int | None = None,
) -> SearchResponse:
    """
    Search a project's notes by semantic similarity.

    Results are ordered by ascending cosine distance. An empty list means no
    embedded note exists; a provider outage is reported as 503.
    """
    search_service = SearchService(session, embedding_client)
    try:
        matches = await search_service.search(project_id, query, limit, user_id=user_id)
    except (NotFoundError, ValidationError, ProviderError) as e:
        raise e.to_http_exception()

    return SearchResponse(
        query=query,
        results=[
            SearchResultItem(note=NoteResponse.from_note(m.note), distance=m.distance)
            for m in matches
        ],
    )
