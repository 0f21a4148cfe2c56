"""Project CRUD endpoints."""

from fastapi import APIRouter, status

from app.api.deps import CurrentUserIdDep, SessionDep
from app.schemas.project import ProjectCreate, ProjectListResponse, ProjectResponse
from app.services.project_service import ProjectService
from app.utils.exceptions import NotFoundError, ValidationError

router = APIRouter(prefix="/api/projects", tags=["projects"])


@router.post("", response_model=ProjectResponse, status_code=status.HTTP_201_CREATED)
def create_project(
    data: ProjectCreate, session: SessionDep, user_id: CurrentUserIdDep
) -> ProjectResponse:
    """
    Create a project for the current user.
    """
    try:
        project = ProjectService(session).create_project(
            user_id, data.name, data.description
        )
    except ValidationError as e:
        raise e.to_http_exception()
    return ProjectResponse.model_validate(project)


@router.get("", response_model=ProjectListResponse)
def list_projects(session: SessionDep, user_id: CurrentUserIdDep) -> ProjectListResponse:
    projects = ProjectService(session).list_projects(user_id)
    return ProjectListResponse(
        projects=[ProjectResponse.model_validate(p) for p in projects]
    )


@router.get("/{project_id}", response_model=ProjectResponse)
def get_project(
    project_id: int, session: SessionDep, user_id: CurrentUserIdDep
) -> ProjectResponse:
    try:
        project = ProjectService(session).get_project(project_id, user_id)
    except NotFoundError as e:
        raise e.to_http_exception()
    return ProjectResponse.model_validate(project)


@router.patch("/{project_id}/archive", response_model=ProjectResponse)
def archive_project(
    project_id: int, session: SessionDep, user_id: CurrentUserIdDep
) -> ProjectResponse:
    """
    Archive a project.
    """
    try:
        project = ProjectService(session).archive_project(project_id, user_id)
    except NotFoundError as e:
        raise e.to_http_exception()
    return ProjectResponse.model_validate(project)


@router.patch("/{project_id}/unarchive", response_model=ProjectResponse)
def unarchive_project(
    project_id: int, session: SessionDep, user_id: CurrentUserIdDep
) -> ProjectResponse:
    try:
        project = ProjectService(session).unarchive_project(project_id, user_id)
    except NotFoundError as e:
        raise e.to_http_exception()
    return ProjectResponse.model_validate(project)


@router.delete("/{project_id}")
def delete_project(project_id: int, session: SessionDep, user_id: CurrentUserIdDep) -> dict:
    """
    Delete a project and all of its notes.
    """
    try:
        ProjectService(session).delete_project(project_id, user_id)
    except NotFoundError as e:
        raise e.to_http_exception()
    return {"success": True}
