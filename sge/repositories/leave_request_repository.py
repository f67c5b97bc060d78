"""Leave request queries"""
from datetime import date
from typing import List, Optional

from sqlalchemy.orm import Session

from sge.models.leave_request import LeaveRequest, LeaveStatus


class LeaveRequestRepository:
    def __init__(self, db: Session):
        self.db = db

    def get(self, leave_request_id: int) -> Optional[LeaveRequest]:
        return self.db.query(LeaveRequest).filter(LeaveRequest.id == leave_request_id).first()

    def list(self) -> List[LeaveRequest]:
        return self.db.query(LeaveRequest).order_by(LeaveRequest.start_date).all()

    def list_by_employee(self, employee_id: int) -> List[LeaveRequest]:
        return (
            self.db.query(LeaveRequest)
            .filter(LeaveRequest.employee_id == employee_id)
            .order_by(LeaveRequest.start_date)
            .all()
        )

    def list_by_status(self, status: LeaveStatus) -> List[LeaveRequest]:
        return (
            self.db.query(LeaveRequest)
            .filter(LeaveRequest.status == status)
            .order_by(LeaveRequest.start_date)
            .all()
        )

    def list_overlapping(
        self,
        employee_id: int,
        start: date,
        end: date,
        exclude_id: Optional[int] = None,
    ) -> List[LeaveRequest]:
        """Requests of the employee whose [start, end] range intersects the given one,
        ignoring rejected and cancelled requests."""
        query = self.db.query(LeaveRequest).filter(
            LeaveRequest.employee_id == employee_id,
            LeaveRequest.status.notin_([LeaveStatus.REJECTED, LeaveStatus.CANCELLED]),
            LeaveRequest.start_date <= end,
            LeaveRequest.end_date >= start,
        )
        if exclude_id is not None:
            query = query.filter(LeaveRequest.id != exclude_id)
        return query.all()

    def add(self, leave_request: LeaveRequest) -> LeaveRequest:
        self.db.add(leave_request)
        self.db.flush()
        return leave_request
