"""Project note endpoints."""

import logging

from fastapi import APIRouter, HTTPException, status
from sqlmodel import Session

from app.api.deps import CurrentUserIdDep, EmbeddingQueueDep, SessionDep
from app.models.note import Note
from app.repositories.note_repository import NoteRepository
from app.schemas.note import NoteCreate, NoteListResponse, NoteResponse
from app.services.note_service import NoteService
from app.tasks.embedding_tasks import EmbeddingQueue
from app.utils.exceptions import NotFoundError, ValidationError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/projects/{project_id}/notes", tags=["notes"])


def _enqueue_embedding(session: Session, queue: EmbeddingQueue, note: Note) -> None:
    """
    Queue the embedding job for a stored note.

    The note is already committed, so a queue failure is recorded on the note
    instead of failing the request. The note stays unembedded and can be
    retried.
    """
    assert note.id is not None
    try:
        queue.enqueue(note.id)
    except Exception as e:
        logger.error(f"Failed to enqueue embedding job for note {note.id}: {e}")
        NoteRepository(session).record_embedding_failure(
            note.id, note.embedding_attempts, f"Failed to enqueue embedding job: {e}"
        )
        session.refresh(note)


@router.post("", response_model=NoteResponse, status_code=status.HTTP_202_ACCEPTED)
def create_note(
    project_id: int,
    data: NoteCreate,
    session: SessionDep,
    user_id: CurrentUserIdDep,
    queue: EmbeddingQueueDep,
) -> NoteResponse:
    """
    Add a note to a project.

    The note is stored immediately and embedded in the background; it shows
    up in search once its embedding has been attached. If the job cannot be
    queued the note is still returned, with `embedding_error` set.
    """
    try:
        note = NoteService(session).create_note(project_id, data.content, user_id)
    except (NotFoundError, ValidationError) as e:
        raise e.to_http_exception()

    _enqueue_embedding(session, queue, note)
    return NoteResponse.from_note(note)


@router.get("", response_model=NoteListResponse)
def list_notes(
    project_id: int, session: SessionDep, user_id: CurrentUserIdDep
) -> NoteListResponse:
    try:
        notes = NoteService(session).list_notes(project_id, user_id)
    except NotFoundError as e:
        raise e.to_http_exception()
    return NoteListResponse(
        notes=[NoteResponse.from_note(n) for n in notes], total=len(notes)
    )


@router.get("/{note_id}", response_model=NoteResponse)
def get_note(
    project_id: int, note_id: int, session: SessionDep, user_id: CurrentUserIdDep
) -> NoteResponse:
    try:
        note = NoteService(session).get_note(project_id, note_id, user_id)
    except NotFoundError as e:
        raise e.to_http_exception()
    return NoteResponse.from_note(note)


@router.post(
    "/{note_id}/retry", response_model=NoteResponse, status_code=status.HTTP_202_ACCEPTED
)
def retry_note_embedding(
    project_id: int,
    note_id: int,
    session: SessionDep,
    user_id: CurrentUserIdDep,
    queue: EmbeddingQueueDep,
) -> NoteResponse:
    """
    Queue a fresh embedding job for a note whose embedding failed.

    Attempts start again from one.
    """
    try:
        note = NoteService(session).get_note(project_id, note_id, user_id)
    except NotFoundError as e:
        raise e.to_http_exception()

    if note.is_embedded or note.embedding_error is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Only notes with a failed embedding can be retried",
        )

    assert note.id is not None
    NoteRepository(session).reset_embedding_failure(note.id)
    session.refresh(note)
    _enqueue_embedding(session, queue, note)
    return NoteResponse.from_note(note)
