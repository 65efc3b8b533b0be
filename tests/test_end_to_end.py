"""
Client and project lifecycle through the HTTP API.
"""

import pytest


@pytest.mark.asyncio
async def test_client_project_lifecycle(test_client, admin_headers, user_headers):
    created = await test_client.post(
        "/api/clients",
        json={"name": "Acme", "email": "a@acme.com", "phone": "1234567890", "company": "Acme"},
        headers=admin_headers,
    )
    assert created.status_code == 201
    client = created.json()["data"]["client"]
    assert client["status"] == "active"

    project_body = {
        "title": "Data Platform",
        "description": "Build the analytics data platform",
        "clientId": client["id"],
        "startDate": "2024-01-01",
        "endDate": "2024-06-30",
        "budget": 25000,
    }
    project_response = await test_client.post("/api/projects", json=project_body, headers=user_headers)
    assert project_response.status_code == 201
    project = project_response.json()["data"]["project"]
    assert project["durationDays"] == 181

    blocked = await test_client.delete(f"/api/clients/{client['id']}", headers=admin_headers)
    assert blocked.status_code == 409

    completed = await test_client.put(
        f"/api/projects/{project['id']}", json={"status": "completed"}, headers=user_headers
    )
    assert completed.status_code == 200
    updated = completed.json()["data"]["project"]
    assert updated["status"] == "completed"
    assert updated["progressPercentage"] == 100
    for field in ("title", "description", "startDate", "endDate", "budget", "clientId", "createdBy"):
        assert updated[field] == project[field]

    deactivated = await test_client.delete(f"/api/clients/{client['id']}", headers=admin_headers)
    assert deactivated.status_code == 200
    assert deactivated.json()["data"]["client"]["status"] == "inactive"

    rejected = await test_client.post("/api/projects", json=project_body, headers=user_headers)
    assert rejected.status_code == 409

    listing = await test_client.get(
        "/api/projects", params={"clientId": client["id"]}, headers=user_headers
    )
    assert listing.json()["data"]["pagination"]["totalRecords"] == 1
