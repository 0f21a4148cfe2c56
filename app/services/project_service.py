"""Project service for CRUD operations."""

import logging

from sqlmodel import Session, select

from app.models.project import Project, ProjectStatus
from app.utils.datetime import utc_now
from app.utils.exceptions import NotFoundError, ValidationError

logger = logging.getLogger(__name__)


class ProjectService:
    """Service for project CRUD operations."""

    def __init__(self, session: Session):
        """
        Initialize the project service.

        Args:
            session: Database session
        """
        self.session = session

    def create_project(
        self, user_id: int, name: str, description: str | None = None
    ) -> Project:
        """
        Create a new project.

        Args:
            user_id: Owner user ID
            name: Project name
            description: Optional description

        Returns:
            Created Project instance

        Raises:
            ValidationError: If the name is blank
        """
        if not name or not name.strip():
            raise ValidationError("Project name must not be empty")

        project = Project(user_id=user_id, name=name.strip(), description=description)
        self.session.add(project)
        self.session.commit()
        self.session.refresh(project)
        return project

    def list_projects(self, user_id: int) -> list[Project]:
        """List a user's projects, most recently updated first."""
        statement = (
            select(Project)
            .where(Project.user_id == user_id)
            .order_by(Project.updated_at.desc())  # type: ignore
        )
        return list(self.session.exec(statement).all())

    def get_project(self, project_id: int, user_id: int | None = None) -> Project:
        """
        Get a project by ID, optionally ensuring user ownership.

        Raises:
            NotFoundError: If the project is missing or owned by someone else
        """
        project = self.session.get(Project, project_id)
        if not project or (user_id is not None and project.user_id != user_id):
            raise NotFoundError("Project")
        return project

    def archive_project(self, project_id: int, user_id: int) -> Project:
        """
        Archive a project. Its notes stay stored and searchable.

        Raises:
            NotFoundError: If the project is missing or owned by someone else
        """
        return self._set_status(project_id, user_id, ProjectStatus.ARCHIVED)

    def unarchive_project(self, project_id: int, user_id: int) -> Project:
        """Return an archived project to ACTIVE."""
        return self._set_status(project_id, user_id, ProjectStatus.ACTIVE)

    def _set_status(self, project_id: int, user_id: int, status: ProjectStatus) -> Project:
        project = self.get_project(project_id, user_id)
        project.status = status
        project.updated_at = utc_now()
        self.session.add(project)
        self.session.commit()
        self.session.refresh(project)
        logger.info(f"Project {project_id} is now {status.value}")
        return project

    def touch(self, project: Project) -> None:
        project.updated_at = utc_now()
        self.session.add(project)
        self.session.commit()

    def delete_project(self, project_id: int, user_id: int) -> bool:
        """
        Delete a project together with its notes.

        Raises:
            NotFoundError: If the project is missing or owned by someone else
        """
        project = self.get_project(project_id, user_id)
        self.session.delete(project)
        self.session.commit()
        logger.info(f"Deleted project {project_id}")
        return True
