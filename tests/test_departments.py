"""Tests for department endpoints"""
from fastapi.testclient import TestClient

from sge.models.employee import Employee


def _create(client: TestClient, headers: dict, name: str = "Finance", code: str = "FIN"):
    return client.post(
        "/api/departments",
        json={"name": name, "code": code, "description": "Money matters"},
        headers=headers,
    )


def test_create_department(client: TestClient, admin_headers: dict):
    response = _create(client, admin_headers)
    assert response.status_code == 201

    data = response.json()
    assert data["name"] == "Finance"
    assert data["code"] == "FIN"


def test_create_department_requires_manager(client: TestClient, user_headers: dict):
    """Test that a plain User cannot create departments"""
    response = _create(client, user_headers)
    assert response.status_code == 403


def test_list_requires_authentication(client: TestClient):
    assert client.get("/api/departments").status_code == 401


def test_duplicate_name_and_code(client: TestClient, admin_headers: dict):
    _create(client, admin_headers)

    response = _create(client, admin_headers, name="finance", code="OTHER")
    assert response.status_code == 409
    assert response.json()["error"] == "DEPARTMENT_NAME_EXISTS"

    response = _create(client, admin_headers, name="Treasury", code="fin")
    assert response.status_code == 409
    assert response.json()["error"] == "DEPARTMENT_CODE_EXISTS"


def test_get_update_and_list(client: TestClient, admin_headers: dict, user_headers: dict):
    department_id = _create(client, admin_headers).json()["id"]

    response = client.put(
        f"/api/departments/{department_id}",
        json={"name": "Finance & Accounting"},
        headers=admin_headers,
    )
    assert response.status_code == 200
    assert response.json()["name"] == "Finance & Accounting"
    assert response.json()["code"] == "FIN"

    response = client.get(f"/api/departments/{department_id}", headers=user_headers)
    assert response.status_code == 200

    response = client.get("/api/departments", headers=user_headers)
    assert [d["code"] for d in response.json()] == ["FIN"]


def test_get_missing_department(client: TestClient, admin_headers: dict):
    response = client.get("/api/departments/999", headers=admin_headers)
    assert response.status_code == 404
    assert response.json()["error"] == "DEPARTMENT_NOT_FOUND"


def test_delete_department(client: TestClient, admin_headers: dict):
    department_id = _create(client, admin_headers).json()["id"]

    assert client.delete(f"/api/departments/{department_id}", headers=admin_headers).status_code == 204
    assert client.get(f"/api/departments/{department_id}", headers=admin_headers).status_code == 404


def test_delete_department_with_employees(client: TestClient, admin_headers: dict, employee: Employee):
    """Test that a department still staffed cannot be deleted"""
    response = client.delete(f"/api/departments/{employee.department_id}", headers=admin_headers)
    assert response.status_code == 400
    assert response.json()["error"] == "DEPARTMENT_HAS_EMPLOYEES"
