"""
Tests for department endpoints
"""
from fastapi import status


def test_department_crud(client, db):
    response = client.post(
        "/api/v1/departments",
        json={"name": "Engineering", "location": "Berlin"}
    )
    assert response.status_code == status.HTTP_201_CREATED
    dept_data = response.json()
    assert dept_data["name"] == "Engineering"
    assert dept_data["location"] == "Berlin"
    dept_id = dept_data["id"]

    response = client.get("/api/v1/departments")
    assert response.status_code == status.HTTP_200_OK
    assert [d["id"] for d in response.json()] == [dept_id]

    response = client.get(f"/api/v1/departments/{dept_id}")
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["name"] == "Engineering"


def test_department_explicit_id(client, db):
    response = client.post("/api/v1/departments", json={"id": 50, "name": "Legal"})
    assert response.status_code == status.HTTP_201_CREATED
    assert response.json()["id"] == 50

    response = client.post("/api/v1/departments", json={"id": 50, "name": "Finance"})
    assert response.status_code == status.HTTP_409_CONFLICT


def test_department_name_unique(client, db):
    """Department names are unique, case-insensitively"""
    response = client.post("/api/v1/departments", json={"name": "UniqueDept"})
    assert response.status_code == status.HTTP_201_CREATED

    response = client.post("/api/v1/departments", json={"name": "uniquedept"})
    assert response.status_code == status.HTTP_409_CONFLICT
    assert response.json()["code"] == "CONFLICT"


def test_department_name_required(client, db):
    response = client.post("/api/v1/departments", json={"name": "  "})
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["code"] == "VALIDATION_ERROR"


def test_department_not_found(client, db):
    response = client.get("/api/v1/departments/77")
    assert response.status_code == status.HTTP_404_NOT_FOUND
