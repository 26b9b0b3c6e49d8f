"""
Patient Service - Business logic for patient profile management.
"""
from typing import List, Optional
from sqlalchemy import or_
from sqlalchemy.orm import Session, joinedload, selectinload
import logging

from ..database import transaction
from ..exceptions import NotFoundException
from ..users.models import User, UserRole
from ..users.service import build_user, apply_account_changes
from ..appointments.models import Appointment
from ..appointments.policies import patient_deletion
from .models import Patient
from .schemas import PatientCreate, PatientUpdate

# Set up logging
logger = logging.getLogger(__name__)

def get_patient(db: Session, patient_id: int) -> Patient:
    """
    Get a patient by ID, with user and appointments loaded.
    
    Raises:
        NotFoundException: If the patient does not exist
    """
    patient = db.query(Patient).options(
        joinedload(Patient.user),
        selectinload(Patient.appointments),
    ).filter(Patient.id == patient_id).first()
    if not patient:
        raise NotFoundException("Patient not found")
    return patient

def stage_patient(db: Session, data: PatientCreate) -> Patient:
    """
    Stage a patient and its user without committing.
    
    Raises:
        ConflictException: If the email is already registered
    """
    user = build_user(db, data.email, data.password, data.name, UserRole.PATIENT)
    patient = Patient(user_id=user.id, age=data.age, gender=data.gender)
    db.add(patient)
    db.flush()
    return patient

def create_patient(db: Session, data: PatientCreate) -> Patient:
    """
    Register a patient.
    
    Args:
        db: Database session
        data: Account and demographic fields
        
    Returns:
        Patient: The created patient
        
    Raises:
        ConflictException: If the email is already registered
    """
    with transaction(db, "Failed to create patient"):
        patient = stage_patient(db, data)
    logger.info(f"Patient {patient.id} created")
    return get_patient(db, patient.id)

def list_patients(db: Session, search: Optional[str] = None) -> List[Patient]:
    """List patients, optionally searching name and email."""
    query = db.query(Patient).join(User).options(joinedload(Patient.user))
    if search:
        query = query.filter(or_(User.name.ilike(f"%{search}%"), User.email.ilike(f"%{search}%")))
    return query.order_by(Patient.id).all()

def update_patient(db: Session, patient_id: int, data: PatientUpdate) -> Patient:
    """
    Update a patient's demographics and account fields in one transaction.
    
    Raises:
        NotFoundException: If the patient does not exist
        ConflictException: If the new email is taken
    """
    with transaction(db, "Failed to update patient"):
        patient = get_patient(db, patient_id)
        apply_account_changes(db, patient.user, email=data.email, password=data.password, name=data.name)
        changes = data.model_dump(exclude_unset=True, include={"age", "gender"})
        for field, value in changes.items():
            setattr(patient, field, value)
    logger.info(f"Patient {patient_id} updated")
    return get_patient(db, patient_id)

def delete_patient(db: Session, patient_id: int) -> None:
    """
    Delete a patient with its appointments, their records, and its user.
    
    Raises:
        NotFoundException: If the patient does not exist
    """
    with transaction(db, "Failed to delete patient"):
        patient = db.get(Patient, patient_id)
        if not patient:
            raise NotFoundException("Patient not found")
        patient_deletion.apply(db, patient)
    logger.info(f"Patient {patient_id} and associated records deleted")

def list_patient_appointments(db: Session, patient_id: int) -> List[Appointment]:
    """
    Appointments of one patient, newest first.
    
    Raises:
        NotFoundException: If the patient does not exist
    """
    if db.get(Patient, patient_id) is None:
        raise NotFoundException("Patient not found")
    return db.query(Appointment).filter(
        Appointment.patient_id == patient_id
    ).order_by(Appointment.date_time.desc(), Appointment.id.desc()).all()
