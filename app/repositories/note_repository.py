"""Note store: persistence and project-scoped nearest-neighbour queries."""

import logging
from dataclasses import dataclass

import numpy as np
from sqlalchemy import func, update
from sqlmodel import Session, select

from app.models.note import Note
from app.utils.datetime import utc_now
from app.utils.exceptions import NotFoundError, ValidationError
from app.utils.vector import serialize_vector

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NoteMatch:
    """A note returned from a similarity query with its cosine distance."""

    note: Note
    distance: float


class NoteRepository:
    """
    Stores notes and answers "K nearest notes to V within project P".

    Distances are cosine distances computed by sqlite-vec's
    `vec_distance_cosine`, matching the space the embedding model is trained
    for. Notes without an embedding never take part in a query.
    """

    def __init__(self, session: Session):
        self.session = session

    def create(self, project_id: int, content: str) -> Note:
        """Persist a new note with no embedding."""
        note = Note(project_id=project_id, content=content)
        self.session.add(note)
        self.session.commit()
        self.session.refresh(note)
        return note

    def get(self, note_id: int) -> Note | None:
        return self.session.get(Note, note_id)

    def list_for_project(self, project_id: int) -> list[Note]:
        statement = (
            select(Note)
            .where(Note.project_id == project_id)
            .order_by(Note.created_at.desc(), Note.id.desc())  # type: ignore
        )
        return list(self.session.exec(statement).all())

    def attach_embedding(self, note_id: int, vector: np.ndarray | list[float]) -> None:
        """
        Set a note's embedding. Overwrites any existing vector.

        The vector is written by a single-row UPDATE, so a note is either
        unembedded or holds a complete vector. Repeated calls converge.

        Raises:
            ValidationError: If the vector is empty, non-finite or all zeros
            NotFoundError: If the note does not exist
        """
        blob = serialize_vector(vector)
        statement = (
            update(Note)
            .where(Note.id == note_id)  # type: ignore[arg-type]
            .values(embedding=blob, embedding_error=None, updated_at=utc_now())
        )
        result = self.session.execute(statement)
        self.session.commit()
        if result.rowcount == 0:
            raise NotFoundError("Note")

    def record_embedding_failure(self, note_id: int, attempts: int, error: str) -> None:
        """Record a failed embedding attempt without touching the vector."""
        statement = (
            update(Note)
            .where(Note.id == note_id)  # type: ignore[arg-type]
            .values(
                embedding_attempts=attempts,
                embedding_error=error,
                updated_at=utc_now(),
            )
        )
        self.session.execute(statement)
        self.session.commit()

    def reset_embedding_failure(self, note_id: int) -> None:
        """Clear recorded failures so a new job starts from the first attempt."""
        statement = (
            update(Note)
            .where(Note.id == note_id)  # type: ignore[arg-type]
            .values(embedding_attempts=0, embedding_error=None, updated_at=utc_now())
        )
        self.session.execute(statement)
        self.session.commit()

    def find_nearest(
        self,
        project_id: int,
        query_vector: np.ndarray | list[float],
        limit: int = 5,
    ) -> list[NoteMatch]:
        """
        Find the notes in a project closest to a query vector.

        Args:
            project_id: Project to search within
            query_vector: Query embedding
            limit: Maximum number of matches

        Returns:
            Matches ordered by ascending distance, then oldest first

        Raises:
            ValidationError: If limit is below 1 or the vector is invalid
        """
        if limit < 1:
            raise ValidationError("limit must be at least 1")

        query_blob = serialize_vector(query_vector)
        cosine = func.vec_distance_cosine(Note.embedding, query_blob)
        distance = cosine.label("distance")

        statement = (
            select(Note, distance)
            .where(
                Note.project_id == project_id,
                Note.embedding.is_not(None),  # type: ignore[union-attr]
                # Vectors from a model of another width are not comparable
                func.length(Note.embedding) == len(query_blob),
                # Undefined distances (zero-norm rows) never rank
                cosine.is_not(None),
            )
            .order_by(distance, Note.created_at, Note.id)  # type: ignore[arg-type]
            .limit(limit)
        )

        rows = self.session.exec(statement).all()
        return [NoteMatch(note=note, distance=float(dist)) for note, dist in rows]
