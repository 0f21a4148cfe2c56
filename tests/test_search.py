"""Tests for similarity search."""

import httpx
import pytest
from fastapi.testclient import TestClient

from app.repositories.note_repository import NoteRepository
from app.services.search import SearchService
from app.utils.exceptions import NotFoundError, ProviderError, ValidationError
from tests.conftest import vector_for


def _add_embedded_note(session, project_id: int, content: str):
    repo = NoteRepository(session)
    note = repo.create(project_id, content)
    repo.attach_embedding(note.id, vector_for(content))
    return note


@pytest.mark.asyncio
async def test_search_returns_closest_note(session, embedding_client, test_project):
    """Revenue query finds the revenue note, not the weather note."""
    n1 = _add_embedded_note(session, test_project.id, "quarterly revenue up 12%")
    _add_embedded_note(session, test_project.id, "unrelated weather report")

    matches = await SearchService(session, embedding_client).search(
        test_project.id, "revenue growth", limit=1
    )

    assert [m.note.id for m in matches] == [n1.id]
    assert matches[0].distance == pytest.approx(0.0, abs=1e-6)


@pytest.mark.asyncio
async def test_search_without_embedded_notes_is_empty(
    session, embedding_client, test_project
):
    """A project with no embedded notes yields an empty list, not an error."""
    NoteRepository(session).create(test_project.id, "still waiting for embedding")

    matches = await SearchService(session, embedding_client).search(
        test_project.id, "anything", limit=5
    )

    assert matches == []


@pytest.mark.asyncio
async def test_search_uses_default_limit(session, embedding_client, test_project):
    for i in range(7):
        _add_embedded_note(session, test_project.id, f"revenue note {i}")

    matches = await SearchService(session, embedding_client).search(
        test_project.id, "revenue"
    )

    assert len(matches) == 5


@pytest.mark.asyncio
async def test_search_propagates_provider_timeout(
    session, embedding_client, provider, test_project
):
    """A provider outage is raised, never masked as an empty result."""
    _add_embedded_note(session, test_project.id, "quarterly revenue up 12%")
    provider.fail_with = httpx.ReadTimeout("timed out")

    with pytest.raises(ProviderError):
        await SearchService(session, embedding_client).search(
            test_project.id, "revenue growth"
        )


@pytest.mark.asyncio
async def test_search_validates_before_calling_provider(
    session, embedding_client, provider, test_project
):
    service = SearchService(session, embedding_client)

    with pytest.raises(ValidationError):
        await service.search(test_project.id, "  ")
    with pytest.raises(ValidationError):
        await service.search(test_project.id, "revenue", limit=0)
    with pytest.raises(NotFoundError):
        await service.search(99999, "revenue")

    assert provider.requests == []


@pytest.mark.asyncio
async def test_search_respects_ownership(
    session, embedding_client, provider, test_project, other_user
):
    with pytest.raises(NotFoundError):
        await SearchService(session, embedding_client).search(
            test_project.id, "revenue", user_id=other_user.id
        )
    assert provider.requests == []


def test_search_requires_auth(client: TestClient, test_project):
    """Test that search requires authentication."""
    response = client.get(
        f"/api/projects/{test_project.id}/search", params={"query": "test"}
    )
    assert response.status_code == 401


def test_search_endpoint(client: TestClient, auth_headers, session, test_project):
    """Test semantic search over HTTP."""
    n1 = _add_embedded_note(session, test_project.id, "quarterly revenue up 12%")
    n2 = _add_embedded_note(session, test_project.id, "unrelated weather report")

    response = client.get(
        f"/api/projects/{test_project.id}/search",
        headers=auth_headers,
        params={"query": "revenue growth", "limit": 2},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["query"] == "revenue growth"
    assert [r["note"]["id"] for r in data["results"]] == [n1.id, n2.id]
    assert data["results"][0]["distance"] <= data["results"][1]["distance"]
    assert data["results"][0]["note"]["embedded"] is True


def test_search_endpoint_provider_outage(
    client: TestClient, auth_headers, provider, test_project
):
    """Provider failures become a generic 503 without provider details."""
    provider.status_code = 500

    response = client.get(
        f"/api/projects/{test_project.id}/search",
        headers=auth_headers,
        params={"query": "revenue"},
    )

    assert response.status_code == 503
    assert response.json()["detail"] == "Search temporarily unavailable"
    assert "upstream" not in response.text


def test_search_endpoint_unknown_project(client: TestClient, auth_headers):
    response = client.get(
        "/api/projects/99999/search", headers=auth_headers, params={"query": "x"}
    )
    assert response.status_code == 404


def test_search_endpoint_limit_too_large(client: TestClient, auth_headers, test_project):
    response = client.get(
        f"/api/projects/{test_project.id}/search",
        headers=auth_headers,
        params={"query": "revenue", "limit": 1000},
    )
    assert response.status_code == 400
