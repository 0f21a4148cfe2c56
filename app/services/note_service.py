"""Note service: creation and listing of project notes."""

import logging

from sqlmodel import Session

from app.models.note import Note
from app.repositories.note_repository import NoteRepository
from app.services.project_service import ProjectService
from app.utils.exceptions import NotFoundError, ValidationError

logger = logging.getLogger(__name__)


class NoteService:
    """Service for note creation and reads within a project."""

    def __init__(self, session: Session):
        """
        Initialize the note service.

        Args:
            session: Database session
        """
        self.session = session
        self.notes = NoteRepository(session)
        self.projects = ProjectService(session)

    def create_note(self, project_id: int, content: str, user_id: int | None = None) -> Note:
        """
        Create a note with no embedding.

        The caller is responsible for enqueueing the embedding job.

        Args:
            project_id: Owning project ID
            content: Note body
            user_id: Optional owner check on the project

        Returns:
            Created Note instance

        Raises:
            ValidationError: If content is blank
            NotFoundError: If the project does not exist
        """
        if not content or not content.strip():
            raise ValidationError("Note content must not be empty")

        project = self.projects.get_project(project_id, user_id)
        note = self.notes.create(project_id, content)
        self.projects.touch(project)
        logger.info(f"Created note {note.id} in project {project_id}")
        return note

    def list_notes(self, project_id: int, user_id: int | None = None) -> list[Note]:
        """List a project's notes, newest first."""
        self.projects.get_project(project_id, user_id)
        return self.notes.list_for_project(project_id)

    def get_note(self, project_id: int, note_id: int, user_id: int | None = None) -> Note:
        """
        Get a single note, ensuring it belongs to the project.

        Raises:
            NotFoundError: If the project or note is missing
        """
        self.projects.get_project(project_id, user_id)
        note = self.notes.get(note_id)
        if not note or note.project_id != project_id:
            raise NotFoundError("Note")
        return note
