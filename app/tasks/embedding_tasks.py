"""Background embedding of newly created notes."""

import asyncio
import enum
import logging
from datetime import UTC, datetime, timedelta

from apscheduler.schedulers.base import BaseScheduler
from sqlmodel import Session

from app.config import settings
from app.database import engine
from app.repositories.note_repository import NoteRepository
from app.scheduler import get_scheduler
from app.services.embeddings import EmbeddingClient, get_embedding_client
from app.utils.exceptions import NotFoundError, ProviderError, ValidationError

logger = logging.getLogger(__name__)


class EmbeddingOutcome(str, enum.Enum):
    """Result of a single embedding job run."""

    EMBEDDED = "embedded"
    SKIPPED = "skipped"  # already embedded by an earlier delivery
    DROPPED = "dropped"  # note no longer exists
    RETRY = "retry"
    FAILED = "failed"  # retries exhausted or input unusable


def retry_delay(attempt: int) -> float:
    """Exponential backoff in seconds after the given failed attempt."""
    delay = settings.embedding_retry_base_seconds * (2 ** (attempt - 1))
    return min(delay, settings.embedding_retry_max_seconds)


class EmbeddingQueue:
    """Enqueues embedding jobs on the persistent APScheduler job store."""

    def __init__(self, scheduler: BaseScheduler | None = None):
        self._scheduler = scheduler

    def enqueue(self, note_id: int, attempt: int = 1, delay_seconds: float = 0.0) -> None:
        """
        Schedule `embed_note` for a note.

        Jobs share the id `embed_note_<id>`, so a second enqueue for the same
        note replaces a pending one instead of duplicating it.
        """
        scheduler = self._scheduler or get_scheduler()
        scheduler.add_job(
            embed_note,
            "date",
            run_date=datetime.now(UTC) + timedelta(seconds=delay_seconds),
            args=[note_id, attempt],
            id=f"embed_note_{note_id}",
            replace_existing=True,
            # Jobs recovered from the store after downtime must still run
            misfire_grace_time=None,
            coalesce=True,
        )
        logger.info(f"Enqueued embedding job for note {note_id} (attempt {attempt})")


async def process_note_embedding(
    session: Session,
    embedding_client: EmbeddingClient,
    note_id: int,
    attempt: int = 1,
    max_attempts: int | None = None,
) -> EmbeddingOutcome:
    """
    Embed one note and attach the vector.

    Provider failures are recorded on the note. The caller re-enqueues on
    RETRY; FAILED leaves the note permanently unembedded. Store calls run in
    a worker thread, off the event loop.
    """
    if max_attempts is None:
        max_attempts = settings.embedding_max_attempts

    notes = NoteRepository(session)
    note = await asyncio.to_thread(notes.get, note_id)
    if not note:
        logger.error(f"Note {note_id} not found for embedding")
        return EmbeddingOutcome.DROPPED

    if note.embedding is not None:
        logger.info(f"Note {note_id} already embedded, skipping")
        return EmbeddingOutcome.SKIPPED

    try:
        vector = await embedding_client.embed(note.content)
    except ProviderError as e:
        await asyncio.to_thread(
            notes.record_embedding_failure, note_id, attempt, e.detail
        )
        if attempt < max_attempts:
            logger.warning(
                f"Embedding attempt {attempt}/{max_attempts} failed for note {note_id}: "
                f"{e.detail}; retrying in {retry_delay(attempt):.1f}s"
            )
            return EmbeddingOutcome.RETRY
        logger.error(
            f"Giving up on embedding note {note_id} after {attempt} attempts: {e.detail}"
        )
        return EmbeddingOutcome.FAILED
    except ValidationError as e:
        await asyncio.to_thread(
            notes.record_embedding_failure, note_id, attempt, e.detail
        )
        logger.error(f"Note {note_id} cannot be embedded: {e.detail}")
        return EmbeddingOutcome.FAILED

    try:
        await asyncio.to_thread(notes.attach_embedding, note_id, vector)
    except NotFoundError:
        logger.error(f"Note {note_id} was deleted before its embedding was stored")
        return EmbeddingOutcome.DROPPED

    logger.info(f"Successfully embedded note {note_id}")
    return EmbeddingOutcome.EMBEDDED


async def embed_note(note_id: int, attempt: int = 1) -> None:
    """Scheduled job entry point."""
    with Session(engine) as session:
        outcome = await process_note_embedding(
            session, get_embedding_client(), note_id, attempt
        )

    if outcome is EmbeddingOutcome.RETRY:
        EmbeddingQueue().enqueue(
            note_id, attempt=attempt + 1, delay_seconds=retry_delay(attempt)
        )
