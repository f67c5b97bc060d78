"""Leave request endpoints"""
from typing import List

from fastapi import APIRouter, Depends, Path, status

from sge.api.deps import CurrentUser, get_current_user, get_leave_request_service, require_manager
from sge.models.leave_request import LeaveStatus
from sge.schemas.leave_request import (
    LeaveRequestCreate,
    LeaveRequestResponse,
    LeaveStatusUpdate,
    RemainingLeaveResponse,
)
from sge.services.leave_request_service import LeaveRequestService

router = APIRouter(prefix="/leave-requests", tags=["leave-requests"])


@router.post("", response_model=LeaveRequestResponse, status_code=status.HTTP_201_CREATED)
def create_leave_request(
    data: LeaveRequestCreate,
    _: CurrentUser = Depends(get_current_user),
    service: LeaveRequestService = Depends(get_leave_request_service),
):
    """
    Submit a leave request

    Days requested are counted in business days. Overlapping requests are
    refused with 409, and annual leave beyond the remaining allowance with 400.
    """
    return service.create(data)


@router.get("", response_model=List[LeaveRequestResponse])
def list_leave_requests(
    _: CurrentUser = Depends(get_current_user),
    service: LeaveRequestService = Depends(get_leave_request_service),
):
    return service.list()


@router.get("/pending", response_model=List[LeaveRequestResponse])
def list_pending_leave_requests(
    _: CurrentUser = Depends(get_current_user),
    service: LeaveRequestService = Depends(get_leave_request_service),
):
    return service.list_pending()


@router.get("/status/{leave_status}", response_model=List[LeaveRequestResponse])
def list_leave_requests_by_status(
    leave_status: LeaveStatus,
    _: CurrentUser = Depends(get_current_user),
    service: LeaveRequestService = Depends(get_leave_request_service),
):
    return service.list_by_status(leave_status)


@router.get("/employee/{employee_id}/remaining/{year}", response_model=RemainingLeaveResponse)
def get_remaining_leave_days(
    employee_id: int,
    year: int = Path(..., ge=1900, le=9999),
    _: CurrentUser = Depends(get_current_user),
    service: LeaveRequestService = Depends(get_leave_request_service),
) -> RemainingLeaveResponse:
    return RemainingLeaveResponse(
        employee_id=employee_id,
        year=year,
        remaining_days=service.remaining_leave_days(employee_id, year),
    )


@router.get("/employee/{employee_id}", response_model=List[LeaveRequestResponse])
def list_employee_leave_requests(
    employee_id: int,
    _: CurrentUser = Depends(get_current_user),
    service: LeaveRequestService = Depends(get_leave_request_service),
):
    return service.list_by_employee(employee_id)


@router.get("/{leave_request_id}", response_model=LeaveRequestResponse)
def get_leave_request(
    leave_request_id: int,
    _: CurrentUser = Depends(get_current_user),
    service: LeaveRequestService = Depends(get_leave_request_service),
):
    return service.get(leave_request_id)


@router.put("/{leave_request_id}/status", response_model=LeaveRequestResponse)
def update_leave_status(
    leave_request_id: int,
    data: LeaveStatusUpdate,
    current: CurrentUser = Depends(require_manager),
    service: LeaveRequestService = Depends(get_leave_request_service),
):
    """Approve, reject or cancel a leave request (Admin or Manager)"""
    return service.update_status(
        leave_request_id,
        data.status,
        comments=data.manager_comments,
        reviewer=current.username,
    )
