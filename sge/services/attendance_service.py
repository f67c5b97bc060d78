"""Attendance tracking - clock-in/out and worked hours"""
from datetime import date, datetime, time, timedelta
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from sge.database import transaction, utcnow
from sge.exceptions import AlreadyClockedInError, AttendanceError, EmployeeNotFoundError, NotClockedInError
from sge.middleware.monitoring import record_attendance_event
from sge.models.attendance import Attendance
from sge.repositories.attendance_repository import AttendanceRepository
from sge.repositories.employee_repository import EmployeeRepository
from sge.schemas.attendance import AttendanceCreate
from sge.utils.logger import logger

NORMAL_WORKING_HOURS = 8.0


def calculate_worked_hours(
    clock_in: Optional[time],
    clock_out: Optional[time],
    break_minutes: Optional[int] = None,
) -> Tuple[float, float]:
    """Split a day into (worked_hours, overtime_hours).

    Anything past ``NORMAL_WORKING_HOURS`` is overtime. A day with a missing
    clock-in or clock-out counts as zero.
    """
    if clock_in is None or clock_out is None:
        return 0.0, 0.0

    day = date.min
    worked = datetime.combine(day, clock_out) - datetime.combine(day, clock_in)
    if break_minutes:
        worked -= timedelta(minutes=break_minutes)

    hours = worked.total_seconds() / 3600
    if hours <= NORMAL_WORKING_HOURS:
        return round(max(0.0, hours), 2), 0.0
    return NORMAL_WORKING_HOURS, round(hours - NORMAL_WORKING_HOURS, 2)


def _append_note(existing: Optional[str], note: str) -> str:
    if not note:
        return existing or ""
    return f"{existing}; {note}" if existing else note


class AttendanceService:
    def __init__(self, db: Session, attendances: AttendanceRepository, employees: EmployeeRepository):
        self.db = db
        self.attendances = attendances
        self.employees = employees

    def clock_in(self, employee_id: int, at: Optional[datetime] = None, notes: str = "") -> Attendance:
        at = at or datetime.now()
        with transaction(self.db):
            self._require_employee(employee_id)

            attendance = self.attendances.get_for_day(employee_id, at.date())
            if attendance is not None and attendance.clock_in is not None:
                raise AlreadyClockedInError(employee_id)

            if attendance is None:
                attendance = Attendance(
                    employee_id=employee_id,
                    date=at.date(),
                    clock_in=at.time().replace(microsecond=0),
                    notes=notes,
                )
            else:
                attendance.clock_in = at.time().replace(microsecond=0)
                attendance.notes = _append_note(attendance.notes, notes)
                attendance.updated_at = utcnow()
            self.attendances.add(attendance)

        record_attendance_event("clock_in")
        logger.info("Clocked in", extra={"employee_id": employee_id, "action": "clock_in"})
        return attendance

    def clock_out(self, employee_id: int, at: Optional[datetime] = None, notes: str = "") -> Attendance:
        at = at or datetime.now()
        with transaction(self.db):
            self._require_employee(employee_id)

            attendance = self.attendances.get_for_day(employee_id, at.date())
            if attendance is None:
                raise AttendanceError("No attendance record found for this day.", "NO_CLOCK_IN_RECORD")
            if attendance.clock_in is None:
                raise NotClockedInError(employee_id)
            if attendance.clock_out is not None:
                raise AttendanceError("Employee has already clocked out for this day.", "ALREADY_CLOCKED_OUT")

            attendance.clock_out = at.time().replace(microsecond=0)
            attendance.notes = _append_note(attendance.notes, notes)
            attendance.worked_hours, attendance.overtime_hours = calculate_worked_hours(
                attendance.clock_in, attendance.clock_out, attendance.break_minutes
            )
            attendance.updated_at = utcnow()
            self.attendances.add(attendance)

        record_attendance_event("clock_out")
        logger.info("Clocked out", extra={"employee_id": employee_id, "action": "clock_out"})
        return attendance

    def create(self, data: AttendanceCreate) -> Attendance:
        """Record a whole day manually (back-office correction)."""
        with transaction(self.db):
            self._require_employee(data.employee_id)

            if self.attendances.get_for_day(data.employee_id, data.date) is not None:
                raise AttendanceError(
                    f"An attendance record already exists for {data.date.isoformat()}.",
                    "ATTENDANCE_ALREADY_EXISTS",
                )

            worked, overtime = calculate_worked_hours(data.clock_in, data.clock_out, data.break_minutes)
            attendance = Attendance(
                employee_id=data.employee_id,
                date=data.date,
                clock_in=data.clock_in,
                clock_out=data.clock_out,
                break_minutes=data.break_minutes,
                worked_hours=worked,
                overtime_hours=overtime,
                notes=data.notes,
            )
            self.attendances.add(attendance)

        return attendance

    def get(self, attendance_id: int) -> Attendance:
        attendance = self.attendances.get(attendance_id)
        if attendance is None:
            raise AttendanceError(
                f"Attendance record with id {attendance_id} not found.",
                "ATTENDANCE_NOT_FOUND",
                status_code=404,
            )
        return attendance

    def list_by_employee(
        self,
        employee_id: int,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> List[Attendance]:
        return self.attendances.list_by_employee(employee_id, start, end)

    def list_by_date(self, day: date) -> List[Attendance]:
        return self.attendances.list_by_date(day)

    def get_today(self, employee_id: int) -> Optional[Attendance]:
        self._require_employee(employee_id)
        return self.attendances.get_for_day(employee_id, date.today())

    def monthly_worked_hours(self, employee_id: int, year: int, month: int) -> float:
        self._require_employee(employee_id)
        start = date(year, month, 1)
        end = date(year + 1, 1, 1) if month == 12 else date(year, month + 1, 1)
        rows = self.attendances.list_by_employee(employee_id, start, end - timedelta(days=1))
        return round(sum(row.worked_hours for row in rows), 2)

    def _require_employee(self, employee_id: int) -> None:
        if not self.employees.exists(employee_id):
            raise EmployeeNotFoundError(employee_id)
