"""API dependencies for dependency injection."""

from collections.abc import Generator
from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlmodel import Session

from app.database import get_session
from app.models.user import User
from app.scheduler import get_scheduler
from app.services.auth_service import decode_access_token
from app.services.embeddings import EmbeddingClient, get_embedding_client
from app.tasks.embedding_tasks import EmbeddingQueue
from app.utils.exceptions import AuthenticationError

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login", auto_error=False)


def get_db() -> Generator[Session, None, None]:
    """Get database session dependency."""
    yield from get_session()


SessionDep = Annotated[Session, Depends(get_db)]


def get_current_user(
    session: SessionDep,
    token: Annotated[str | None, Depends(oauth2_scheme)],
) -> User:
    """
    Get the current authenticated user from a bearer JWT.

    Raises:
        HTTPException: If authentication fails
    """
    if token:
        try:
            token_data = decode_access_token(token)
        except AuthenticationError as e:
            raise e.to_http_exception()
        if token_data.user_id is not None:
            user = session.get(User, token_data.user_id)
            if user:
                return user

    raise HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Not authenticated",
        headers={"WWW-Authenticate": "Bearer"},
    )


CurrentUserDep = Annotated[User, Depends(get_current_user)]


def get_current_user_id(current_user: CurrentUserDep) -> int:
    """Get the current user's ID, asserting it's not None."""
    assert current_user.id is not None
    return current_user.id


CurrentUserIdDep = Annotated[int, Depends(get_current_user_id)]


def get_embedding_client_dep() -> EmbeddingClient:
    """Process-wide embedding client, built at startup."""
    return get_embedding_client()


EmbeddingClientDep = Annotated[EmbeddingClient, Depends(get_embedding_client_dep)]


def get_embedding_queue() -> EmbeddingQueue:
    """Queue for background embedding jobs."""
    return EmbeddingQueue(get_scheduler())


EmbeddingQueueDep = Annotated[EmbeddingQueue, Depends(get_embedding_queue)]
