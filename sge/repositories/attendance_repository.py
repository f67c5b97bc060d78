"""Attendance queries"""
from datetime import date
from typing import List, Optional

from sqlalchemy.orm import Session

from sge.models.attendance import Attendance


class AttendanceRepository:
    def __init__(self, db: Session):
        self.db = db

    def get(self, attendance_id: int) -> Optional[Attendance]:
        return self.db.query(Attendance).filter(Attendance.id == attendance_id).first()

    def get_for_day(self, employee_id: int, day: date) -> Optional[Attendance]:
        return (
            self.db.query(Attendance)
            .filter(Attendance.employee_id == employee_id, Attendance.date == day)
            .first()
        )

    def list_by_employee(
        self,
        employee_id: int,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> List[Attendance]:
        query = self.db.query(Attendance).filter(Attendance.employee_id == employee_id)
        if start:
            query = query.filter(Attendance.date >= start)
        if end:
            query = query.filter(Attendance.date <= end)
        return query.order_by(Attendance.date).all()

    def list_by_date(self, day: date) -> List[Attendance]:
        return self.db.query(Attendance).filter(Attendance.date == day).order_by(Attendance.employee_id).all()

    def add(self, attendance: Attendance) -> Attendance:
        self.db.add(attendance)
        self.db.flush()
        return attendance
