"""Department endpoints"""
from typing import List

from fastapi import APIRouter, Depends, status

from sge.api.deps import CurrentUser, get_current_user, get_department_service, require_manager
from sge.schemas.department import DepartmentCreate, DepartmentResponse, DepartmentUpdate
from sge.services.department_service import DepartmentService

router = APIRouter(prefix="/departments", tags=["departments"])


@router.get("", response_model=List[DepartmentResponse])
def list_departments(
    _: CurrentUser = Depends(get_current_user),
    service: DepartmentService = Depends(get_department_service),
):
    return service.list()


@router.get("/{department_id}", response_model=DepartmentResponse)
def get_department(
    department_id: int,
    _: CurrentUser = Depends(get_current_user),
    service: DepartmentService = Depends(get_department_service),
):
    return service.get(department_id)


@router.post("", response_model=DepartmentResponse, status_code=status.HTTP_201_CREATED)
def create_department(
    data: DepartmentCreate,
    current: CurrentUser = Depends(require_manager),
    service: DepartmentService = Depends(get_department_service),
):
    """Create a department (Admin or Manager). Name and code must be unique."""
    return service.create(data, actor=current.username)


@router.put("/{department_id}", response_model=DepartmentResponse)
def update_department(
    department_id: int,
    data: DepartmentUpdate,
    current: CurrentUser = Depends(require_manager),
    service: DepartmentService = Depends(get_department_service),
):
    return service.update(department_id, data, actor=current.username)


@router.delete("/{department_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_department(
    department_id: int,
    _: CurrentUser = Depends(require_manager),
    service: DepartmentService = Depends(get_department_service),
):
    """Delete a department that no longer has employees (Admin or Manager)"""
    service.delete(department_id)
