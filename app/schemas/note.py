"""Note schemas."""

from datetime import datetime

from pydantic import BaseModel


class NoteCreate(BaseModel):
    """Schema for note creation."""

    content: str


class NoteResponse(BaseModel):
    """Schema for note response."""

    id: int
    project_id: int
    content: str
    embedded: bool
    embedding_attempts: int
    embedding_error: str | None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_note(cls, note) -> "NoteResponse":
        """Build a response from a Note model (embedding bytes stay server-side)."""
        return cls(
            id=note.id,
            project_id=note.project_id,
            content=note.content,
            embedded=note.is_embedded,
            embedding_attempts=note.embedding_attempts,
            embedding_error=note.embedding_error,
            created_at=note.created_at,
            updated_at=note.updated_at,
        )


class NoteListResponse(BaseModel):
    """Schema for note list."""

    notes: list[NoteResponse]
    total: int
