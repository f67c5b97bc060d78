"""Tests for clock-in/out and worked hours"""
from datetime import date, datetime, time

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from sge.exceptions import AlreadyClockedInError, AttendanceError, EmployeeNotFoundError, NotClockedInError
from sge.models.attendance import Attendance
from sge.models.employee import Employee
from sge.repositories import AttendanceRepository, EmployeeRepository
from sge.schemas.attendance import AttendanceCreate
from sge.services.attendance_service import AttendanceService, calculate_worked_hours

DAY = date(2025, 3, 10)


@pytest.fixture
def service(db: Session) -> AttendanceService:
    return AttendanceService(db, AttendanceRepository(db), EmployeeRepository(db))


def at(hour: int, minute: int = 0) -> datetime:
    return datetime.combine(DAY, time(hour, minute))


@pytest.mark.parametrize(
    "clock_in, clock_out, break_minutes, expected",
    [
        (time(9, 0), time(17, 0), 0, (8.0, 0.0)),
        (time(9, 0), time(17, 30), 30, (8.0, 0.0)),
        (time(8, 0), time(19, 0), 60, (8.0, 2.0)),
        (time(9, 0), time(12, 20), None, (3.33, 0.0)),
        (time(9, 0), time(9, 30), 60, (0.0, 0.0)),
        (time(9, 0), None, 0, (0.0, 0.0)),
    ],
)
def test_calculate_worked_hours(clock_in, clock_out, break_minutes, expected):
    assert calculate_worked_hours(clock_in, clock_out, break_minutes) == expected


def test_clock_in_and_out(service: AttendanceService, employee: Employee):
    attendance = service.clock_in(employee.id, at(8, 30), "on site")
    assert attendance.clock_in == time(8, 30)
    assert attendance.date == DAY

    attendance = service.clock_out(employee.id, at(18, 0), "badge out")
    assert attendance.clock_out == time(18, 0)
    assert attendance.worked_hours == 8.0
    assert attendance.overtime_hours == 1.5
    assert attendance.notes == "on site; badge out"


def test_clock_in_twice(service: AttendanceService, employee: Employee):
    service.clock_in(employee.id, at(9))

    with pytest.raises(AlreadyClockedInError):
        service.clock_in(employee.id, at(10))


def test_clock_in_fills_manual_row(db: Session, service: AttendanceService, employee: Employee):
    """Test that clock-in completes a day created without a clock-in time"""
    service.create(AttendanceCreate(employee_id=employee.id, date=DAY, notes="remote"))

    attendance = service.clock_in(employee.id, at(9), "badge")
    assert attendance.clock_in == time(9, 0)
    assert attendance.notes == "remote; badge"
    assert db.query(Attendance).count() == 1


def test_clock_out_without_record(service: AttendanceService, employee: Employee):
    with pytest.raises(AttendanceError) as exc_info:
        service.clock_out(employee.id, at(17))
    assert exc_info.value.error_code == "NO_CLOCK_IN_RECORD"


def test_clock_out_without_clock_in(service: AttendanceService, employee: Employee):
    service.create(AttendanceCreate(employee_id=employee.id, date=DAY))

    with pytest.raises(NotClockedInError):
        service.clock_out(employee.id, at(17))


def test_clock_out_twice(service: AttendanceService, employee: Employee):
    service.clock_in(employee.id, at(9))
    service.clock_out(employee.id, at(17))

    with pytest.raises(AttendanceError) as exc_info:
        service.clock_out(employee.id, at(18))
    assert exc_info.value.error_code == "ALREADY_CLOCKED_OUT"


def test_clock_in_unknown_employee(service: AttendanceService, db: Session):
    with pytest.raises(EmployeeNotFoundError):
        service.clock_in(999, at(9))


def test_manual_entry(service: AttendanceService, employee: Employee):
    data = AttendanceCreate(
        employee_id=employee.id,
        date=DAY,
        clock_in=time(8, 0),
        clock_out=time(18, 0),
        break_minutes=45,
    )
    attendance = service.create(data)
    assert attendance.worked_hours == 8.0
    assert attendance.overtime_hours == 1.25

    with pytest.raises(AttendanceError) as exc_info:
        service.create(data)
    assert exc_info.value.error_code == "ATTENDANCE_ALREADY_EXISTS"


def test_monthly_worked_hours(service: AttendanceService, employee: Employee):
    for day, end in ((date(2025, 3, 3), time(17)), (date(2025, 3, 31), time(13)), (date(2025, 4, 1), time(17))):
        service.create(AttendanceCreate(employee_id=employee.id, date=day, clock_in=time(9), clock_out=end))

    assert service.monthly_worked_hours(employee.id, 2025, 3) == 12.0
    assert service.monthly_worked_hours(employee.id, 2025, 4) == 8.0
    assert service.monthly_worked_hours(employee.id, 2025, 12) == 0.0


def test_list_by_employee_and_date(service: AttendanceService, employee: Employee):
    service.create(AttendanceCreate(employee_id=employee.id, date=date(2025, 3, 3)))
    service.create(AttendanceCreate(employee_id=employee.id, date=date(2025, 3, 4)))

    assert len(service.list_by_employee(employee.id)) == 2
    assert len(service.list_by_employee(employee.id, start=date(2025, 3, 4))) == 1
    assert len(service.list_by_date(date(2025, 3, 3))) == 1


def test_attendance_endpoints(client: TestClient, user_headers: dict, employee: Employee):
    response = client.post(
        "/api/attendance/clock-in",
        json={"employee_id": employee.id, "at": "2025-03-10T09:00:00", "notes": "hello"},
        headers=user_headers,
    )
    assert response.status_code == 201
    attendance_id = response.json()["id"]
    assert response.json()["employee_name"] == "Jean Dupont"

    response = client.post(
        "/api/attendance/clock-in",
        json={"employee_id": employee.id, "at": "2025-03-10T09:05:00"},
        headers=user_headers,
    )
    assert response.status_code == 409
    assert response.json()["error"] == "ALREADY_CLOCKED_IN"

    response = client.post(
        "/api/attendance/clock-out",
        json={"employee_id": employee.id, "at": "2025-03-10T17:00:00"},
        headers=user_headers,
    )
    assert response.status_code == 200
    assert response.json()["worked_hours"] == 8.0

    response = client.get(f"/api/attendance/{attendance_id}", headers=user_headers)
    assert response.status_code == 200

    response = client.get(f"/api/attendance/employee/{employee.id}/hours/2025/3", headers=user_headers)
    assert response.json()["worked_hours"] == 8.0

    response = client.get("/api/attendance/date/2025-03-10", headers=user_headers)
    assert len(response.json()) == 1


def test_attendance_not_found(client: TestClient, user_headers: dict):
    response = client.get("/api/attendance/999", headers=user_headers)
    assert response.status_code == 404
    assert response.json()["error"] == "ATTENDANCE_NOT_FOUND"
