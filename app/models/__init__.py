"""Database models."""

from app.models.note import Note
from app.models.project import Project, ProjectStatus
from app.models.user import User

__all__ = ["User", "Project", "ProjectStatus", "Note"]
