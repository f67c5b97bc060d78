"""Employee queries"""
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from sge.models.employee import Employee


class EmployeeRepository:
    def __init__(self, db: Session):
        self.db = db

    def list(self, skip: int = 0, limit: int = 100) -> List[Employee]:
        return self.db.query(Employee).order_by(Employee.id).offset(skip).limit(limit).all()

    def get(self, employee_id: int) -> Optional[Employee]:
        return self.db.query(Employee).filter(Employee.id == employee_id).first()

    def exists(self, employee_id: int) -> bool:
        return self.db.query(Employee.id).filter(Employee.id == employee_id).first() is not None

    def get_by_email(self, email: str) -> Optional[Employee]:
        return self.db.query(Employee).filter(func.lower(Employee.email) == email.lower()).first()

    def list_by_department(self, department_id: int) -> List[Employee]:
        return (
            self.db.query(Employee)
            .filter(Employee.department_id == department_id)
            .order_by(Employee.last_name, Employee.first_name)
            .all()
        )

    def add(self, employee: Employee) -> Employee:
        self.db.add(employee)
        self.db.flush()
        return employee

    def delete(self, employee: Employee) -> None:
        self.db.delete(employee)
        self.db.flush()
