"""
Doctor Router - API endpoints for doctor profile management.

This module provides endpoints for creating, updating, querying and deleting
doctor profiles, plus the doctor's appointment list and weekly schedule.
"""
from typing import List, Optional
from datetime import date, datetime
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from ..core.schemas import MessageResponse
from ..database import get_db
from ..appointments.models import AppointmentStatus
from ..appointments.schemas import AppointmentBrief
from ..schedule.schemas import WeeklyScheduleResponse
from .schemas import DoctorCreate, DoctorUpdate, DoctorResponse, DoctorDetailResponse
from .service import (
    create_doctor,
    get_doctors,
    get_doctor,
    update_doctor,
    delete_doctor,
    get_doctor_appointments,
    get_weekly_schedule,
)

router = APIRouter()

@router.post("", response_model=DoctorResponse, status_code=status.HTTP_201_CREATED)
async def create(doctor_data: DoctorCreate, db: Session = Depends(get_db)):
    """
    Create a doctor profile together with its user account
    """
    return create_doctor(db, doctor_data)

@router.get("", response_model=List[DoctorResponse])
async def list_doctors(
    specialization: Optional[str] = Query(None, description="Filter by specialization"),
    search: Optional[str] = Query(None, description="Search by doctor name or email"),
    db: Session = Depends(get_db)
):
    """
    List doctors with optional filtering
    """
    return get_doctors(db, specialization, search)

@router.get("/{doctor_id}", response_model=DoctorDetailResponse)
async def get_one(doctor_id: int, db: Session = Depends(get_db)):
    """
    Get a doctor profile with appointments and ratings
    """
    return get_doctor(db, doctor_id)

@router.patch("/{doctor_id}", response_model=DoctorDetailResponse)
@router.put("/{doctor_id}", response_model=DoctorDetailResponse, include_in_schema=False)
async def update(doctor_id: int, doctor_data: DoctorUpdate, db: Session = Depends(get_db)):
    """
    Update a doctor profile

    Only the supplied fields change. Returns 409 if the new email is taken.
    """
    return update_doctor(db, doctor_id, doctor_data)

@router.delete("/{doctor_id}", response_model=MessageResponse)
async def delete(doctor_id: int, db: Session = Depends(get_db)):
    """
    Delete a doctor profile

    Ratings, appointments with their prescriptions and tests, the profile and
    the user account are removed in one transaction.
    """
    delete_doctor(db, doctor_id)
    return MessageResponse(message="Doctor and associated records deleted successfully", deleted_id=doctor_id)

@router.get("/{doctor_id}/appointments", response_model=List[AppointmentBrief])
async def appointments(
    doctor_id: int,
    start_date: Optional[datetime] = Query(None, alias="startDate"),
    end_date: Optional[datetime] = Query(None, alias="endDate"),
    appointment_status: Optional[AppointmentStatus] = Query(None, alias="status"),
    order: str = Query("asc", pattern="^(asc|desc)$"),
    db: Session = Depends(get_db)
):
    """
    List a doctor's appointments

    The date range applies only when both ends are given.
    """
    return get_doctor_appointments(
        db, doctor_id, start_date, end_date, appointment_status, descending=order == "desc"
    )

@router.get("/{doctor_id}/schedule", response_model=WeeklyScheduleResponse)
async def weekly_schedule(
    doctor_id: int,
    start: Optional[date] = Query(None, description="First day of the window, defaults to today"),
    db: Session = Depends(get_db)
):
    """
    Get the doctor's seven-day schedule starting today

    Each day carries the working-hours template, its appointments and the
    number of NEW appointments.
    """
    return get_weekly_schedule(db, doctor_id, start)
