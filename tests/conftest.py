"""Pytest configuration and fixtures."""

import json
from collections.abc import Generator
from typing import cast

import httpx
import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session, SQLModel, create_engine
from sqlmodel.pool import StaticPool

from app.api.deps import get_db, get_embedding_client_dep, get_embedding_queue
from app.database import register_sqlite_listeners
from app.main import app
from app.models import Project, User
from app.services.auth_service import create_access_token, get_password_hash
from app.services.embeddings import EmbeddingClient
from app.tasks.embedding_tasks import EmbeddingQueue

# Use in-memory SQLite for tests
TEST_DATABASE_URL = "sqlite://"

TEST_DIMENSIONS = 4

# Keyword -> vector table for the fake embedding provider
KEYWORD_VECTORS = {
    "revenue": [1.0, 0.0, 0.0, 0.0],
    "weather": [0.0, 1.0, 0.0, 0.0],
    "hiring": [0.0, 0.0, 1.0, 0.0],
}
DEFAULT_VECTOR = [0.0, 0.0, 0.0, 1.0]


def vector_for(text: str) -> list[float]:
    """Deterministic embedding used by the fake provider."""
    lowered = text.lower()
    for keyword, vector in KEYWORD_VECTORS.items():
        if keyword in lowered:
            return vector
    return DEFAULT_VECTOR


class FakeProvider:
    """httpx handler imitating the embeddings endpoint."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.fail_with: Exception | None = None
        self.status_code = 200
        self.override_vector: list[float] | None = None

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.fail_with is not None:
            raise self.fail_with
        if self.status_code != 200:
            return httpx.Response(
                self.status_code, json={"error": {"message": "upstream exploded"}}
            )
        body = json.loads(request.content)
        vector = self.override_vector or vector_for(body["input"])
        return httpx.Response(
            200, json={"data": [{"index": 0, "embedding": vector}]}
        )


class RecordingQueue(EmbeddingQueue):
    """Embedding queue that records jobs instead of scheduling them."""

    def __init__(self):
        super().__init__(scheduler=None)
        self.enqueued: list[tuple[int, int]] = []

    def enqueue(self, note_id: int, attempt: int = 1, delay_seconds: float = 0.0) -> None:
        self.enqueued.append((note_id, attempt))


@pytest.fixture(name="engine")
def engine_fixture():
    """Create a test database engine with sqlite-vec loaded."""
    engine = create_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    register_sqlite_listeners(engine)
    SQLModel.metadata.create_all(engine)
    yield engine


@pytest.fixture(name="session")
def session_fixture(engine) -> Generator[Session, None, None]:
    """Create a test database session."""
    with Session(engine) as session:
        yield session


@pytest.fixture(name="provider")
def provider_fixture() -> FakeProvider:
    return FakeProvider()


@pytest.fixture(name="embedding_client")
def embedding_client_fixture(provider: FakeProvider) -> EmbeddingClient:
    """Embedding client wired to the fake provider."""
    return EmbeddingClient(
        api_key="test-key",
        model="test-embedding",
        dimensions=TEST_DIMENSIONS,
        base_url="https://embeddings.test/v1",
        transport=httpx.MockTransport(provider),
    )


@pytest.fixture(name="queue")
def queue_fixture() -> RecordingQueue:
    return RecordingQueue()


@pytest.fixture(name="client")
def client_fixture(
    session: Session, embedding_client: EmbeddingClient, queue: RecordingQueue
) -> Generator[TestClient, None, None]:
    """Create a test client with database, provider and queue overrides."""

    def get_session_override() -> Generator[Session, None, None]:
        yield session

    app.dependency_overrides[get_db] = get_session_override
    app.dependency_overrides[get_embedding_client_dep] = lambda: embedding_client
    app.dependency_overrides[get_embedding_queue] = lambda: queue
    yield TestClient(app)
    app.dependency_overrides.clear()


def _make_user(session: Session, username: str) -> User:
    user = User(username=username, hashed_password=get_password_hash("testpassword"))
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


@pytest.fixture(name="test_user")
def test_user_fixture(session: Session) -> User:
    """Create a test user."""
    return _make_user(session, "testuser")


@pytest.fixture(name="other_user")
def other_user_fixture(session: Session) -> User:
    return _make_user(session, "otheruser")


@pytest.fixture(name="auth_headers")
def auth_headers_fixture(test_user: User) -> dict[str, str]:
    """Create authentication headers for test user."""
    token = create_access_token(cast(int, test_user.id))
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture(name="test_project")
def test_project_fixture(session: Session, test_user: User) -> Project:
    """Create a project owned by the test user."""
    project = Project(user_id=cast(int, test_user.id), name="Quarterly review")
    session.add(project)
    session.commit()
    session.refresh(project)
    return project


@pytest.fixture(name="other_project")
def other_project_fixture(session: Session, test_user: User) -> Project:
    """A second project owned by the test user."""
    project = Project(user_id=cast(int, test_user.id), name="Site relaunch")
    session.add(project)
    session.commit()
    session.refresh(project)
    return project
