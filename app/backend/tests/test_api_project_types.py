"""Tests for project type API endpoints."""

from uuid import uuid4

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_requires_caller_identity(client: AsyncClient):
    response = await client.get("/api/project-types")

    assert response.status_code == 401
    assert response.json()["detail"] == "Missing caller identity"


@pytest.mark.asyncio
async def test_create_project_type(client: AsyncClient, caller_headers):
    response = await client.post(
        "/api/project-types",
        json={"name": "Industrial", "description": "Warehouses"},
        headers=caller_headers,
    )

    assert response.status_code == 201
    data = response.json()
    assert data["name"] == "Industrial"
    assert "id" in data


@pytest.mark.asyncio
async def test_create_duplicate_project_type(client: AsyncClient, caller_headers, test_project_type):
    response = await client.post(
        "/api/project-types", json={"name": test_project_type.name}, headers=caller_headers
    )

    assert response.status_code == 409


@pytest.mark.asyncio
async def test_list_project_types(
    client: AsyncClient, caller_headers, test_project_type, project_type_commercial
):
    response = await client.get(
        "/api/project-types", params={"page": 1, "page_size": 1}, headers=caller_headers
    )

    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 2
    assert data["total_pages"] == 2
    assert len(data["items"]) == 1


@pytest.mark.asyncio
async def test_get_and_update_project_type(client: AsyncClient, caller_headers, test_project_type):
    response = await client.get(f"/api/project-types/{test_project_type.id}", headers=caller_headers)
    assert response.status_code == 200
    assert response.json()["name"] == "Residential"

    response = await client.patch(
        f"/api/project-types/{test_project_type.id}",
        json={"description": "Family homes"},
        headers=caller_headers,
    )
    assert response.status_code == 200
    assert response.json()["description"] == "Family homes"


@pytest.mark.asyncio
async def test_get_missing_project_type(client: AsyncClient, caller_headers):
    response = await client.get(f"/api/project-types/{uuid4()}", headers=caller_headers)

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_delete_project_type(client: AsyncClient, caller_headers, project_type_commercial):
    response = await client.delete(
        f"/api/project-types/{project_type_commercial.id}", headers=caller_headers
    )
    assert response.status_code == 204
    assert response.content == b""

    response = await client.get(
        f"/api/project-types/{project_type_commercial.id}", headers=caller_headers
    )
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_delete_project_type_in_use(client: AsyncClient, caller_headers, test_template):
    response = await client.delete(
        f"/api/project-types/{test_template.project_type_id}", headers=caller_headers
    )

    assert response.status_code == 409
