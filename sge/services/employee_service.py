"""Employee management"""
from typing import List, Optional

from sqlalchemy.orm import Session

from sge.database import transaction, utcnow
from sge.exceptions import DepartmentNotFoundError, EmployeeNotFoundError, InvalidEmployeeDataError
from sge.models.employee import Employee
from sge.repositories.department_repository import DepartmentRepository
from sge.repositories.employee_repository import EmployeeRepository
from sge.schemas.employee import EmployeeCreate, EmployeeUpdate
from sge.utils.logger import logger


class EmployeeService:
    def __init__(self, db: Session, employees: EmployeeRepository, departments: DepartmentRepository):
        self.db = db
        self.employees = employees
        self.departments = departments

    def list(self, skip: int = 0, limit: int = 100) -> List[Employee]:
        return self.employees.list(skip=skip, limit=limit)

    def get(self, employee_id: int) -> Employee:
        employee = self.employees.get(employee_id)
        if employee is None:
            raise EmployeeNotFoundError(employee_id)
        return employee

    def get_by_email(self, email: str) -> Optional[Employee]:
        return self.employees.get_by_email(email)

    def list_by_department(self, department_id: int) -> List[Employee]:
        return self.employees.list_by_department(department_id)

    def create(self, data: EmployeeCreate, actor: str = "") -> Employee:
        with transaction(self.db):
            if self.departments.get(data.department_id) is None:
                raise DepartmentNotFoundError(data.department_id)
            if self.employees.get_by_email(data.email):
                raise InvalidEmployeeDataError(f"Email '{data.email}' is already used by another employee.")

            now = utcnow()
            employee = Employee(
                **data.model_dump(),
                created_at=now,
                updated_at=now,
                created_by=actor,
                updated_by=actor,
            )
            self.employees.add(employee)

        logger.info(
            f"Created employee {employee.email}",
            extra={"employee_id": employee.id, "action": "create_employee"},
        )
        return employee

    def update(self, employee_id: int, data: EmployeeUpdate, actor: str = "") -> Employee:
        with transaction(self.db):
            employee = self.get(employee_id)

            changes = data.model_dump(exclude_unset=True, exclude_none=True)
            department_id = changes.get("department_id")
            if department_id is not None and self.departments.get(department_id) is None:
                raise DepartmentNotFoundError(department_id)

            for field, value in changes.items():
                setattr(employee, field, value)
            employee.updated_at = utcnow()
            employee.updated_by = actor
            self.employees.add(employee)

        return employee

    def delete(self, employee_id: int) -> None:
        with transaction(self.db):
            employee = self.get(employee_id)
            self.employees.delete(employee)

        logger.info("Deleted employee", extra={"employee_id": employee_id, "action": "delete_employee"})
