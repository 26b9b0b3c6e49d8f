"""
Medical Record Service - prescriptions and medical tests managed on their own.

Records are always owned by an existing appointment; pointing one at an
unknown appointment is reported as a 404 naming ``appointmentId``.
"""
from typing import Optional, Type, Union
from datetime import datetime
from sqlalchemy.orm import Session
import logging

from ..core.pagination import PageParams, PageResponse, paginate
from ..core.schemas import ensure_utc
from ..database import transaction
from ..exceptions import NotFoundException
from ..appointments.models import Appointment
from .models import Prescription, MedicalTest
from .schemas import (
    PrescriptionCreate, PrescriptionUpdate, PrescriptionResponse,
    MedicalTestCreate, MedicalTestUpdate, MedicalTestResponse,
)

# Set up logging
logger = logging.getLogger(__name__)

Record = Union[Prescription, MedicalTest]

def _ensure_appointment(db: Session, appointment_id: int) -> None:
    if db.get(Appointment, appointment_id) is None:
        raise NotFoundException("Appointment not found", field="appointmentId")

def _get_record(db: Session, model: Type[Record], record_id: int, label: str) -> Record:
    record = db.get(model, record_id)
    if not record:
        raise NotFoundException(f"{label} not found")
    return record

def get_prescription(db: Session, prescription_id: int) -> Prescription:
    """
    Raises:
        NotFoundException: If the prescription does not exist
    """
    return _get_record(db, Prescription, prescription_id, "Prescription")

def create_prescription(db: Session, data: PrescriptionCreate) -> Prescription:
    """
    Attach a prescription to an existing appointment.

    Raises:
        NotFoundException: If the appointment does not exist
    """
    with transaction(db, "Failed to create prescription"):
        _ensure_appointment(db, data.appointment_id)
        prescription = Prescription(**data.model_dump())
        db.add(prescription)
        db.flush()
        prescription_id = prescription.id
    logger.info(f"Prescription {prescription_id} added to appointment {data.appointment_id}")
    return get_prescription(db, prescription_id)

def list_prescriptions(
    db: Session,
    page_params: PageParams,
    appointment_id: Optional[int] = None,
    medication: Optional[str] = None
) -> PageResponse:
    """
    List prescriptions page by page, newest first.

    Args:
        db: Database session
        page_params: Page number and size
        appointment_id: Only prescriptions of this appointment
        medication: Case-insensitive partial match on medication
    """
    query = db.query(Prescription)
    if appointment_id is not None:
        query = query.filter(Prescription.appointment_id == appointment_id)
    if medication:
        query = query.filter(Prescription.medication.ilike(f"%{medication}%"))
    return paginate(query.order_by(Prescription.id.desc()), page_params, PrescriptionResponse)

def update_prescription(db: Session, prescription_id: int, data: PrescriptionUpdate) -> Prescription:
    """
    Raises:
        NotFoundException: If the prescription, or a newly named appointment, does not exist
    """
    with transaction(db, "Failed to update prescription"):
        prescription = get_prescription(db, prescription_id)
        changes = data.model_dump(exclude_unset=True, exclude_none=True)
        if "appointment_id" in changes:
            _ensure_appointment(db, changes["appointment_id"])
        for field, value in changes.items():
            setattr(prescription, field, value)
    logger.info(f"Prescription {prescription_id} updated")
    return get_prescription(db, prescription_id)

def delete_prescription(db: Session, prescription_id: int) -> None:
    """
    Raises:
        NotFoundException: If the prescription does not exist
    """
    with transaction(db, "Failed to delete prescription"):
        db.delete(get_prescription(db, prescription_id))
    logger.info(f"Prescription {prescription_id} deleted")

def get_medical_test(db: Session, test_id: int) -> MedicalTest:
    """
    Raises:
        NotFoundException: If the test does not exist
    """
    return _get_record(db, MedicalTest, test_id, "Medical test")

def create_medical_test(db: Session, data: MedicalTestCreate) -> MedicalTest:
    """
    Record a medical test against an existing appointment.

    Raises:
        NotFoundException: If the appointment does not exist
    """
    with transaction(db, "Failed to create medical test"):
        _ensure_appointment(db, data.appointment_id)
        test = MedicalTest(**data.model_dump())
        db.add(test)
        db.flush()
        test_id = test.id
    logger.info(f"Medical test {test_id} added to appointment {data.appointment_id}")
    return get_medical_test(db, test_id)

def list_medical_tests(
    db: Session,
    page_params: PageParams,
    appointment_id: Optional[int] = None,
    test_type: Optional[str] = None,
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None
) -> PageResponse:
    """
    List medical tests page by page, most recently performed first.

    Args:
        db: Database session
        page_params: Page number and size
        appointment_id: Only tests of this appointment
        test_type: Case-insensitive partial match on the test type
        start_date / end_date: Bounds on when the test was performed
    """
    query = db.query(MedicalTest)
    if appointment_id is not None:
        query = query.filter(MedicalTest.appointment_id == appointment_id)
    if test_type:
        query = query.filter(MedicalTest.test_type.ilike(f"%{test_type}%"))
    if start_date is not None:
        query = query.filter(MedicalTest.date_performed >= ensure_utc(start_date))
    if end_date is not None:
        query = query.filter(MedicalTest.date_performed <= ensure_utc(end_date))
    query = query.order_by(MedicalTest.date_performed.desc(), MedicalTest.id.desc())
    return paginate(query, page_params, MedicalTestResponse)

def update_medical_test(db: Session, test_id: int, data: MedicalTestUpdate) -> MedicalTest:
    """
    Raises:
        NotFoundException: If the test, or a newly named appointment, does not exist
    """
    with transaction(db, "Failed to update medical test"):
        test = get_medical_test(db, test_id)
        changes = data.model_dump(exclude_unset=True, exclude_none=True)
        if "appointment_id" in changes:
            _ensure_appointment(db, changes["appointment_id"])
        for field, value in changes.items():
            setattr(test, field, value)
    logger.info(f"Medical test {test_id} updated")
    return get_medical_test(db, test_id)

def delete_medical_test(db: Session, test_id: int) -> None:
    """
    Raises:
        NotFoundException: If the test does not exist
    """
    with transaction(db, "Failed to delete medical test"):
        db.delete(get_medical_test(db, test_id))
    logger.info(f"Medical test {test_id} deleted")
