"""Tests for employee endpoints"""
from fastapi.testclient import TestClient

from sge.models.department import Department
from sge.models.employee import Employee


def _payload(department_id: int, **overrides) -> dict:
    data = {
        "first_name": "Marie",
        "last_name": "Curie",
        "email": "marie.curie@x.com",
        "position": "Researcher",
        "salary": 50000,
        "hire_date": "2024-03-01",
        "department_id": department_id,
    }
    data.update(overrides)
    return data


def test_create_employee(client: TestClient, admin_headers: dict, department: Department):
    response = client.post("/api/employees", json=_payload(department.id), headers=admin_headers)
    assert response.status_code == 201

    data = response.json()
    assert data["full_name"] == "Marie Curie"
    assert data["department_name"] == "Engineering"


def test_create_employee_unknown_department(client: TestClient, admin_headers: dict):
    response = client.post("/api/employees", json=_payload(999), headers=admin_headers)
    assert response.status_code == 404
    assert response.json()["error"] == "DEPARTMENT_NOT_FOUND"


def test_create_employee_duplicate_email(client: TestClient, admin_headers: dict, employee: Employee):
    response = client.post(
        "/api/employees",
        json=_payload(employee.department_id, email=employee.email),
        headers=admin_headers,
    )
    assert response.status_code == 400
    assert response.json()["error"] == "INVALID_EMPLOYEE_DATA"


def test_create_employee_requires_manager(client: TestClient, user_headers: dict, department: Department):
    response = client.post("/api/employees", json=_payload(department.id), headers=user_headers)
    assert response.status_code == 403


def test_lookup_employee(client: TestClient, user_headers: dict, employee: Employee):
    response = client.get(f"/api/employees/{employee.id}", headers=user_headers)
    assert response.status_code == 200
    assert response.json()["email"] == employee.email

    response = client.get(f"/api/employees/by-email/{employee.email}", headers=user_headers)
    assert response.status_code == 200
    assert response.json()["id"] == employee.id

    response = client.get(f"/api/employees/by-department/{employee.department_id}", headers=user_headers)
    assert [e["id"] for e in response.json()] == [employee.id]

    response = client.get("/api/employees/by-email/ghost@x.com", headers=user_headers)
    assert response.status_code == 404


def test_get_missing_employee(client: TestClient, user_headers: dict):
    response = client.get("/api/employees/999", headers=user_headers)
    assert response.status_code == 404
    assert response.json()["error"] == "EMPLOYEE_NOT_FOUND"


def test_update_employee(client: TestClient, admin_headers: dict, employee: Employee):
    response = client.put(
        f"/api/employees/{employee.id}",
        json={"position": "Lead Developer", "salary": 55000},
        headers=admin_headers,
    )
    assert response.status_code == 200
    assert response.json()["position"] == "Lead Developer"
    assert response.json()["salary"] == 55000

    response = client.put(f"/api/employees/{employee.id}", json={"department_id": 999}, headers=admin_headers)
    assert response.status_code == 404


def test_delete_employee(client: TestClient, admin_headers: dict, employee: Employee):
    employee_id = employee.id

    assert client.delete(f"/api/employees/{employee_id}", headers=admin_headers).status_code == 204
    assert client.get(f"/api/employees/{employee_id}", headers=admin_headers).status_code == 404
