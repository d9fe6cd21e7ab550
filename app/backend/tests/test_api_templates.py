"""Tests for report template API endpoints."""

from uuid import uuid4

import pytest
from httpx import AsyncClient

TEMPLATE_SECTIONS = [
    {
        "id": "handover",
        "name": "Handover",
        "order": 1,
        "fields": [
            {
                "id": "keys",
                "label": "Keys handed over",
                "type": "boolean",
                "required": True,
                "order": 2,
                "categoryId": "handover",
            },
            {
                "id": "date",
                "label": "Handover date",
                "type": "date",
                "required": True,
                "order": 1,
                "categoryId": "handover",
            },
            {
                "id": "photo",
                "label": "Front door photo",
                "type": "image",
                "options": ["ignored"],
                "order": 3,
                "categoryId": "evidence",
            },
        ],
    }
]


@pytest.mark.asyncio
async def test_create_template(client: AsyncClient, caller_headers, test_project_type):
    response = await client.post(
        "/api/report-templates",
        json={
            "name": "Handover",
            "project_type_id": str(test_project_type.id),
            "number_of_submissions": 1,
            "sections": TEMPLATE_SECTIONS,
        },
        headers=caller_headers,
    )

    assert response.status_code == 201
    data = response.json()
    assert data["name"] == "Handover"
    assert data["number_of_submissions"] == 1

    fields = data["sections"][0]["fields"]
    assert [f["id"] for f in fields] == ["date", "keys", "photo"]
    assert "options" not in fields[2]


@pytest.mark.asyncio
async def test_create_template_invalid_dropdown(
    client: AsyncClient, caller_headers, test_project_type
):
    sections = [
        {
            "id": "s",
            "name": "S",
            "order": 1,
            "fields": [
                {"id": "f", "label": "F", "type": "dropdown", "order": 1, "categoryId": "c"}
            ],
        }
    ]
    response = await client.post(
        "/api/report-templates",
        json={"name": "Broken", "project_type_id": str(test_project_type.id), "sections": sections},
        headers=caller_headers,
    )

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_create_template_unknown_project_type(client: AsyncClient, caller_headers):
    response = await client.post(
        "/api/report-templates",
        json={"name": "Orphan", "project_type_id": str(uuid4())},
        headers=caller_headers,
    )

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_create_template_duplicate_name(client: AsyncClient, caller_headers, test_template):
    response = await client.post(
        "/api/report-templates",
        json={"name": test_template.name, "project_type_id": str(test_template.project_type_id)},
        headers=caller_headers,
    )

    assert response.status_code == 409


@pytest.mark.asyncio
async def test_list_templates_by_project_type(
    client: AsyncClient, caller_headers, test_template, project_type_commercial
):
    response = await client.get(
        "/api/report-templates",
        params={"project_type_id": str(project_type_commercial.id)},
        headers=caller_headers,
    )
    assert response.status_code == 200
    assert response.json()["total"] == 0

    response = await client.get("/api/report-templates", headers=caller_headers)
    assert response.json()["total"] == 1
    assert response.json()["items"][0]["id"] == str(test_template.id)


@pytest.mark.asyncio
async def test_list_templates_rejects_oversized_page(client: AsyncClient, caller_headers):
    response = await client.get(
        "/api/report-templates", params={"page_size": 1000}, headers=caller_headers
    )

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_get_template(client: AsyncClient, caller_headers, test_template):
    response = await client.get(f"/api/report-templates/{test_template.id}", headers=caller_headers)

    assert response.status_code == 200
    data = response.json()
    assert data["sections"][0]["fields"][1]["options"] == ["Good", "Fair", "Poor"]


@pytest.mark.asyncio
async def test_get_missing_template(client: AsyncClient, caller_headers):
    response = await client.get(f"/api/report-templates/{uuid4()}", headers=caller_headers)

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_update_template(client: AsyncClient, caller_headers, test_template):
    response = await client.patch(
        f"/api/report-templates/{test_template.id}",
        json={"name": "Site Inspection v2", "number_of_submissions": 4},
        headers=caller_headers,
    )

    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "Site Inspection v2"
    assert data["number_of_submissions"] == 4
    assert data["description"] == "Initial site inspection report"


@pytest.mark.asyncio
async def test_update_template_rejects_null_fields(
    client: AsyncClient, caller_headers, test_template
):
    response = await client.patch(
        f"/api/report-templates/{test_template.id}",
        json={"name": None, "project_type_id": None},
        headers=caller_headers,
    )

    assert response.status_code == 422

    response = await client.get(f"/api/report-templates/{test_template.id}", headers=caller_headers)
    assert response.json()["name"] == "Site Inspection"

@pytest.mark.asyncio
async def test_update_template_name_conflict(
    client: AsyncClient, caller_headers, test_template, capped_template
):
    response = await client.patch(
        f"/api/report-templates/{capped_template.id}",
        json={"name": test_template.name},
        headers=caller_headers,
    )

    assert response.status_code == 409


@pytest.mark.asyncio
async def test_delete_template(client: AsyncClient, caller_headers, test_template):
    response = await client.delete(
        f"/api/report-templates/{test_template.id}", headers=caller_headers
    )
    assert response.status_code == 204
    assert response.content == b""

    response = await client.get(f"/api/report-templates/{test_template.id}", headers=caller_headers)
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_delete_template_with_submissions(
    client: AsyncClient, caller_headers, draft_submission
):
    response = await client.delete(
        f"/api/report-templates/{draft_submission.report_template_id}", headers=caller_headers
    )

    assert response.status_code == 409
