"""Search schemas."""

from pydantic import BaseModel

from app.schemas.note import NoteResponse


class SearchResultItem(BaseModel):
    """Schema for a single search result with its vector distance."""

    note: NoteResponse
    distance: float


class SearchResponse(BaseModel):
    """Schema for search results."""

    query: str
    results: list[SearchResultItem]
