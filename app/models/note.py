"""Note model."""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import Column, Index, LargeBinary
from sqlmodel import Field, Relationship, SQLModel

from app.utils.datetime import utc_now

if TYPE_CHECKING:
    from app.models.project import Project


class Note(SQLModel, table=True):  # type: ignore
    """Project note with an optional embedding for semantic search."""

    __tablename__ = "notes"  # type: ignore

    id: int | None = Field(default=None, primary_key=True)
    project_id: int = Field(foreign_key="projects.id", index=True, ondelete="CASCADE")

    # Content (immutable after create)
    content: str

    # Vector embedding (float32 BLOB). NULL until the embedding job succeeds.
    embedding: bytes | None = Field(default=None, sa_column=Column(LargeBinary))

    # Embedding job bookkeeping
    embedding_attempts: int = Field(default=0)
    embedding_error: str | None = Field(default=None)

    # Timestamps
    created_at: datetime = Field(default_factory=utc_now, index=True)
    updated_at: datetime = Field(default_factory=utc_now)

    # Relationships
    project: "Project" = Relationship(back_populates="notes")

    __table_args__ = (Index("ix_notes_project_created", "project_id", "created_at"),)

    @property
    def is_embedded(self) -> bool:
        """Whether the note is visible to similarity search."""
        return self.embedding is not None
