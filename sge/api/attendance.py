"""Attendance endpoints - clock-in/out and timesheets"""
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query, status

from sge.api.deps import CurrentUser, get_attendance_service, get_current_user
from sge.schemas.attendance import AttendanceCreate, AttendanceResponse, ClockInOutRequest, MonthlyHoursResponse
from sge.services.attendance_service import AttendanceService

router = APIRouter(prefix="/attendance", tags=["attendance"])


@router.post("/clock-in", response_model=AttendanceResponse, status_code=status.HTTP_201_CREATED)
def clock_in(
    data: ClockInOutRequest,
    _: CurrentUser = Depends(get_current_user),
    service: AttendanceService = Depends(get_attendance_service),
):
    """Start the working day. Fails with 409 if already clocked in for that date."""
    return service.clock_in(data.employee_id, data.at, data.notes)


@router.post("/clock-out", response_model=AttendanceResponse)
def clock_out(
    data: ClockInOutRequest,
    _: CurrentUser = Depends(get_current_user),
    service: AttendanceService = Depends(get_attendance_service),
):
    """End the working day and compute worked and overtime hours"""
    return service.clock_out(data.employee_id, data.at, data.notes)


@router.post("", response_model=AttendanceResponse, status_code=status.HTTP_201_CREATED)
def create_attendance(
    data: AttendanceCreate,
    _: CurrentUser = Depends(get_current_user),
    service: AttendanceService = Depends(get_attendance_service),
):
    return service.create(data)


@router.get("/employee/{employee_id}/today", response_model=Optional[AttendanceResponse])
def get_today_attendance(
    employee_id: int,
    _: CurrentUser = Depends(get_current_user),
    service: AttendanceService = Depends(get_attendance_service),
):
    return service.get_today(employee_id)


@router.get("/employee/{employee_id}/hours/{year}/{month}", response_model=MonthlyHoursResponse)
def get_monthly_hours(
    employee_id: int,
    year: int = Path(..., ge=1900, le=9999),
    month: int = Path(..., ge=1, le=12),
    _: CurrentUser = Depends(get_current_user),
    service: AttendanceService = Depends(get_attendance_service),
) -> MonthlyHoursResponse:
    return MonthlyHoursResponse(
        employee_id=employee_id,
        year=year,
        month=month,
        worked_hours=service.monthly_worked_hours(employee_id, year, month),
    )


@router.get("/employee/{employee_id}", response_model=List[AttendanceResponse])
def list_employee_attendance(
    employee_id: int,
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    _: CurrentUser = Depends(get_current_user),
    service: AttendanceService = Depends(get_attendance_service),
):
    return service.list_by_employee(employee_id, start_date, end_date)


@router.get("/date/{day}", response_model=List[AttendanceResponse])
def list_attendance_by_date(
    day: date,
    _: CurrentUser = Depends(get_current_user),
    service: AttendanceService = Depends(get_attendance_service),
):
    return service.list_by_date(day)


@router.get("/{attendance_id}", response_model=AttendanceResponse)
def get_attendance(
    attendance_id: int,
    _: CurrentUser = Depends(get_current_user),
    service: AttendanceService = Depends(get_attendance_service),
):
    return service.get(attendance_id)
