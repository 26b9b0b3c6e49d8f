"""
Appointment Router - API endpoints for the appointment lifecycle.
"""
from typing import List, Optional
from datetime import datetime
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from ..core.schemas import MessageResponse
from ..database import get_db
from .models import AppointmentStatus
from .schemas import (
    AppointmentCreate,
    AppointmentUpdate,
    AppointmentCommentsUpdate,
    AppointmentResponse,
    AppointmentFilters,
)
from .service import (
    get_appointment,
    create_appointment,
    list_appointments,
    update_appointment,
    update_comments,
    delete_appointment,
    unlink_related,
)

router = APIRouter()

@router.post("", response_model=AppointmentResponse, status_code=status.HTTP_201_CREATED)
async def create(
    appointment_data: AppointmentCreate,
    db: Session = Depends(get_db)
):
    """
    Create an appointment

    The patient must exist; doctor, ambulance and related appointment are
    checked when given. Status defaults to NEW.
    """
    return create_appointment(db, appointment_data)

@router.get("", response_model=List[AppointmentResponse])
async def list_all(
    patient_id: Optional[int] = Query(None, alias="patientId"),
    doctor_id: Optional[int] = Query(None, alias="doctorId"),
    ambulance_id: Optional[int] = Query(None, alias="ambulanceId"),
    appointment_status: Optional[AppointmentStatus] = Query(None, alias="status"),
    start_date: Optional[datetime] = Query(None, alias="startDate"),
    end_date: Optional[datetime] = Query(None, alias="endDate"),
    unscheduled: bool = Query(False, description="Only appointments without a date"),
    db: Session = Depends(get_db)
):
    """
    List appointments, optionally filtered
    """
    filters = AppointmentFilters(
        patient_id=patient_id,
        doctor_id=doctor_id,
        ambulance_id=ambulance_id,
        status=appointment_status,
        start_date=start_date,
        end_date=end_date,
        unscheduled=unscheduled,
    )
    return list_appointments(db, filters)

@router.get("/{appointment_id}", response_model=AppointmentResponse)
async def get_one(appointment_id: int, db: Session = Depends(get_db)):
    """
    Get an appointment with patient, doctor, ambulance, prescriptions and tests
    """
    return get_appointment(db, appointment_id)

@router.put("/{appointment_id}", response_model=AppointmentResponse)
async def update(
    appointment_id: int,
    appointment_data: AppointmentUpdate,
    db: Session = Depends(get_db)
):
    """
    Partially update an appointment

    Inline prescriptions and tests are added to the appointment's records.
    """
    return update_appointment(db, appointment_id, appointment_data)

@router.put("/{appointment_id}/comments", response_model=AppointmentResponse)
async def update_appointment_comments(
    appointment_id: int,
    comments_data: AppointmentCommentsUpdate,
    db: Session = Depends(get_db)
):
    """
    Save the doctor's notes for an appointment
    """
    return update_comments(db, appointment_id, comments_data)

@router.delete("/{appointment_id}/related/{related_id}", response_model=AppointmentResponse)
async def unlink(appointment_id: int, related_id: int, db: Session = Depends(get_db)):
    """
    Remove the follow-up link between two appointments
    """
    return unlink_related(db, appointment_id, related_id)

@router.delete("/{appointment_id}", response_model=MessageResponse)
async def delete(appointment_id: int, db: Session = Depends(get_db)):
    """
    Delete an appointment together with its prescriptions and tests
    """
    delete_appointment(db, appointment_id)
    return MessageResponse(
        message="Appointment and associated records deleted successfully",
        deleted_id=appointment_id
    )
