"""
Patient Router - API endpoints for patient profile management.
"""
from typing import List, Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from ..core.schemas import MessageResponse
from ..database import get_db
from ..appointments.schemas import AppointmentBrief
from .schemas import PatientCreate, PatientUpdate, PatientResponse, PatientDetailResponse
from .service import (
    create_patient,
    list_patients,
    get_patient,
    update_patient,
    delete_patient,
    list_patient_appointments,
)

router = APIRouter()

@router.post("", response_model=PatientResponse, status_code=status.HTTP_201_CREATED)
async def create(patient_data: PatientCreate, db: Session = Depends(get_db)):
    """
    Register a patient
    
    Returns 409 when the email is already registered.
    """
    return create_patient(db, patient_data)

@router.get("", response_model=List[PatientResponse])
async def list_all(
    search: Optional[str] = Query(None, description="Search by name or email"),
    db: Session = Depends(get_db)
):
    """List patients"""
    return list_patients(db, search)

@router.get("/{patient_id}", response_model=PatientDetailResponse)
async def get_one(patient_id: int, db: Session = Depends(get_db)):
    """Get a patient with appointment history"""
    return get_patient(db, patient_id)

@router.put("/{patient_id}", response_model=PatientDetailResponse)
async def update(patient_id: int, patient_data: PatientUpdate, db: Session = Depends(get_db)):
    """Update a patient's account and demographics"""
    return update_patient(db, patient_id, patient_data)

@router.delete("/{patient_id}", response_model=MessageResponse)
async def delete(patient_id: int, db: Session = Depends(get_db)):
    """
    Delete a patient
    
    Removes the patient's appointments with their prescriptions and tests,
    then the patient and its user account.
    """
    delete_patient(db, patient_id)
    return MessageResponse(message="Patient and associated records deleted successfully", deleted_id=patient_id)

@router.get("/{patient_id}/appointments", response_model=List[AppointmentBrief])
async def appointments(patient_id: int, db: Session = Depends(get_db)):
    """List a patient's appointments"""
    return list_patient_appointments(db, patient_id)
