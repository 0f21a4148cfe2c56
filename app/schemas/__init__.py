"""Pydantic schemas for request/response validation."""

from app.schemas.auth import Token, TokenData, UserCreate, UserResponse
from app.schemas.note import NoteCreate, NoteListResponse, NoteResponse
from app.schemas.project import ProjectCreate, ProjectListResponse, ProjectResponse
from app.schemas.search import SearchResponse, SearchResultItem

__all__ = [
    "Token",
    "TokenData",
    "UserCreate",
    "UserResponse",
    "NoteCreate",
    "NoteListResponse",
    "NoteResponse",
    "ProjectCreate",
    "ProjectListResponse",
    "ProjectResponse",
    "SearchResponse",
    "SearchResultItem",
]
