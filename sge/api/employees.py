"""Employee endpoints"""
from typing import List

from fastapi import APIRouter, Depends, Query, status

from sge.api.deps import CurrentUser, get_current_user, get_employee_service, require_manager
from sge.exceptions import SGEError
from sge.schemas.employee import EmployeeCreate, EmployeeResponse, EmployeeUpdate
from sge.services.employee_service import EmployeeService

router = APIRouter(prefix="/employees", tags=["employees"])


@router.get("", response_model=List[EmployeeResponse])
def list_employees(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    _: CurrentUser = Depends(get_current_user),
    service: EmployeeService = Depends(get_employee_service),
):
    return service.list(skip=skip, limit=limit)


@router.get("/by-email/{email}", response_model=EmployeeResponse)
def get_employee_by_email(
    email: str,
    _: CurrentUser = Depends(get_current_user),
    service: EmployeeService = Depends(get_employee_service),
):
    employee = service.get_by_email(email)
    if employee is None:
        raise SGEError(f"No employee with email '{email}'.", "EMPLOYEE_NOT_FOUND", 404)
    return employee


@router.get("/by-department/{department_id}", response_model=List[EmployeeResponse])
def list_employees_by_department(
    department_id: int,
    _: CurrentUser = Depends(get_current_user),
    service: EmployeeService = Depends(get_employee_service),
):
    return service.list_by_department(department_id)


@router.get("/{employee_id}", response_model=EmployeeResponse)
def get_employee(
    employee_id: int,
    _: CurrentUser = Depends(get_current_user),
    service: EmployeeService = Depends(get_employee_service),
):
    return service.get(employee_id)


@router.post("", response_model=EmployeeResponse, status_code=status.HTTP_201_CREATED)
def create_employee(
    data: EmployeeCreate,
    current: CurrentUser = Depends(require_manager),
    service: EmployeeService = Depends(get_employee_service),
):
    """Hire an employee into an existing department (Admin or Manager)"""
    return service.create(data, actor=current.username)


@router.put("/{employee_id}", response_model=EmployeeResponse)
def update_employee(
    employee_id: int,
    data: EmployeeUpdate,
    current: CurrentUser = Depends(require_manager),
    service: EmployeeService = Depends(get_employee_service),
):
    return service.update(employee_id, data, actor=current.username)


@router.delete("/{employee_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_employee(
    employee_id: int,
    _: CurrentUser = Depends(require_manager),
    service: EmployeeService = Depends(get_employee_service),
):
    service.delete(employee_id)
