"""
Medical Record Routers - API endpoints for prescriptions and medical tests.

Two routers are exported: ``prescriptions_router`` and ``tests_router``.
"""
from typing import Optional
from datetime import datetime
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from ..core.pagination import PageParams, PageResponse
from ..core.schemas import MessageResponse
from ..database import get_db
from .schemas import (
    PrescriptionCreate, PrescriptionUpdate, PrescriptionResponse,
    MedicalTestCreate, MedicalTestUpdate, MedicalTestResponse,
)
from . import service

prescriptions_router = APIRouter()
tests_router = APIRouter()

@prescriptions_router.post("", response_model=PrescriptionResponse, status_code=status.HTTP_201_CREATED)
async def create_prescription(data: PrescriptionCreate, db: Session = Depends(get_db)):
    """
    Add a prescription to an appointment

    Returns 404 naming ``appointmentId`` when the appointment does not exist.
    """
    return service.create_prescription(db, data)

@prescriptions_router.get("", response_model=PageResponse[PrescriptionResponse])
async def list_prescriptions(
    page_params: PageParams = Depends(),
    appointment_id: Optional[int] = Query(None, alias="appointmentId"),
    medication: Optional[str] = Query(None, description="Search by medication"),
    db: Session = Depends(get_db)
):
    """List prescriptions, newest first"""
    return service.list_prescriptions(db, page_params, appointment_id, medication)

@prescriptions_router.get("/{prescription_id}", response_model=PrescriptionResponse)
async def get_prescription(prescription_id: int, db: Session = Depends(get_db)):
    return service.get_prescription(db, prescription_id)

@prescriptions_router.put("/{prescription_id}", response_model=PrescriptionResponse)
async def update_prescription(prescription_id: int, data: PrescriptionUpdate, db: Session = Depends(get_db)):
    return service.update_prescription(db, prescription_id, data)

@prescriptions_router.delete("/{prescription_id}", response_model=MessageResponse)
async def delete_prescription(prescription_id: int, db: Session = Depends(get_db)):
    service.delete_prescription(db, prescription_id)
    return MessageResponse(message="Prescription deleted successfully", deleted_id=prescription_id)

@tests_router.post("", response_model=MedicalTestResponse, status_code=status.HTTP_201_CREATED)
async def create_test(data: MedicalTestCreate, db: Session = Depends(get_db)):
    """
    Record a medical test for an appointment

    Returns 404 naming ``appointmentId`` when the appointment does not exist.
    """
    return service.create_medical_test(db, data)

@tests_router.get("", response_model=PageResponse[MedicalTestResponse])
async def list_tests(
    page_params: PageParams = Depends(),
    appointment_id: Optional[int] = Query(None, alias="appointmentId"),
    test_type: Optional[str] = Query(None, alias="testType"),
    start_date: Optional[datetime] = Query(None, alias="startDate"),
    end_date: Optional[datetime] = Query(None, alias="endDate"),
    db: Session = Depends(get_db)
):
    """List medical tests, most recently performed first"""
    return service.list_medical_tests(db, page_params, appointment_id, test_type, start_date, end_date)

@tests_router.get("/{test_id}", response_model=MedicalTestResponse)
async def get_test(test_id: int, db: Session = Depends(get_db)):
    return service.get_medical_test(db, test_id)

@tests_router.put("/{test_id}", response_model=MedicalTestResponse)
async def update_test(test_id: int, data: MedicalTestUpdate, db: Session = Depends(get_db)):
    return service.update_medical_test(db, test_id, data)

@tests_router.delete("/{test_id}", response_model=MessageResponse)
async def delete_test(test_id: int, db: Session = Depends(get_db)):
    service.delete_medical_test(db, test_id)
    return MessageResponse(message="Medical test deleted successfully", deleted_id=test_id)
