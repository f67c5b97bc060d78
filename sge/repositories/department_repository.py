"""Department queries"""
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from sge.models.department import Department
from sge.models.employee import Employee


class DepartmentRepository:
    def __init__(self, db: Session):
        self.db = db

    def list(self) -> List[Department]:
        return self.db.query(Department).order_by(Department.name).all()

    def get(self, department_id: int) -> Optional[Department]:
        return self.db.query(Department).filter(Department.id == department_id).first()

    def get_by_name(self, name: str) -> Optional[Department]:
        return self.db.query(Department).filter(func.lower(Department.name) == name.lower()).first()

    def get_by_code(self, code: str) -> Optional[Department]:
        return self.db.query(Department).filter(func.lower(Department.code) == code.lower()).first()

    def count_employees(self, department_id: int) -> int:
        return self.db.query(Employee).filter(Employee.department_id == department_id).count()

    def add(self, department: Department) -> Department:
        self.db.add(department)
        self.db.flush()
        return department

    def delete(self, department: Department) -> None:
        self.db.delete(department)
        self.db.flush()
