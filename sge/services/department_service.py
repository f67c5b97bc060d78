"""Department management"""
from typing import List

from sqlalchemy.orm import Session

from sge.database import transaction, utcnow
from sge.exceptions import (
    BusinessRuleError,
    DepartmentNotFoundError,
    DuplicateDepartmentCodeError,
    DuplicateDepartmentNameError,
)
from sge.models.department import Department
from sge.repositories.department_repository import DepartmentRepository
from sge.schemas.department import DepartmentCreate, DepartmentUpdate
from sge.utils.logger import logger


class DepartmentService:
    def __init__(self, db: Session, departments: DepartmentRepository):
        self.db = db
        self.departments = departments

    def list(self) -> List[Department]:
        return self.departments.list()

    def get(self, department_id: int) -> Department:
        department = self.departments.get(department_id)
        if department is None:
            raise DepartmentNotFoundError(department_id)
        return department

    def create(self, data: DepartmentCreate, actor: str = "") -> Department:
        with transaction(self.db):
            if self.departments.get_by_name(data.name):
                raise DuplicateDepartmentNameError(data.name)
            if self.departments.get_by_code(data.code):
                raise DuplicateDepartmentCodeError(data.code)

            now = utcnow()
            department = Department(
                name=data.name,
                code=data.code,
                description=data.description,
                created_at=now,
                updated_at=now,
                created_by=actor,
                updated_by=actor,
            )
            self.departments.add(department)

        logger.info(f"Created department {department.code}", extra={"action": "create_department"})
        return department

    def update(self, department_id: int, data: DepartmentUpdate, actor: str = "") -> Department:
        with transaction(self.db):
            department = self.get(department_id)

            if data.name and data.name.lower() != department.name.lower():
                other = self.departments.get_by_name(data.name)
                if other is not None and other.id != department.id:
                    raise DuplicateDepartmentNameError(data.name)
                department.name = data.name
            if data.code and data.code.lower() != department.code.lower():
                other = self.departments.get_by_code(data.code)
                if other is not None and other.id != department.id:
                    raise DuplicateDepartmentCodeError(data.code)
                department.code = data.code
            if data.description is not None:
                department.description = data.description

            department.updated_at = utcnow()
            department.updated_by = actor
            self.departments.add(department)

        return department

    def delete(self, department_id: int) -> None:
        with transaction(self.db):
            department = self.get(department_id)
            if self.departments.count_employees(department_id):
                raise BusinessRuleError(
                    f"Department '{department.name}' still has employees and cannot be deleted.",
                    error_code="DEPARTMENT_HAS_EMPLOYEES",
                )
            self.departments.delete(department)

        logger.info(f"Deleted department {department_id}", extra={"action": "delete_department"})
