"""
Appointment Service - Business logic for the appointment lifecycle.

This module creates, updates and deletes appointments. Every referenced
patient, doctor, ambulance and related appointment is resolved before any
write, status changes go through the transition validator, and each mutation
commits exactly once.
"""
from typing import List, Optional
from sqlalchemy.orm import Session, joinedload, selectinload
import logging

from ..core.schemas import ensure_utc
from ..database import transaction
from ..exceptions import NotFoundException
from ..patients.models import Patient
from ..doctors.models import Doctor
from ..ambulances.models import Ambulance
from ..medical_records.models import Prescription, MedicalTest
from ..medical_records.schemas import PrescriptionItem, MedicalTestItem
from . import relations
from .models import Appointment, AppointmentStatus
from .policies import appointment_deletion
from .schemas import AppointmentCreate, AppointmentUpdate, AppointmentCommentsUpdate, AppointmentFilters
from .status import cancel, validate_transition

# Set up logging
logger = logging.getLogger(__name__)

# Payload field -> (model, error message, JSON field name) for each reference
_REFERENCES = {
    "patient_id": (Patient, "Patient not found", "patientId"),
    "doctor_id": (Doctor, "Doctor not found", "doctorId"),
    "ambulance_id": (Ambulance, "Ambulance not found", "ambulanceId"),
}

def _with_relations(query):
    """Eager-load everything the full appointment response renders."""
    return query.options(
        joinedload(Appointment.patient).joinedload(Patient.user),
        joinedload(Appointment.doctor).joinedload(Doctor.user),
        joinedload(Appointment.ambulance).joinedload(Ambulance.user),
        selectinload(Appointment.prescriptions),
        selectinload(Appointment.tests),
        selectinload(Appointment.related_to),
        selectinload(Appointment.related_appointments),
    )

def get_appointment(db: Session, appointment_id: int) -> Appointment:
    """
    Get an appointment by ID with all relations loaded.

    Args:
        db: Database session
        appointment_id: ID of the appointment

    Returns:
        Appointment: The appointment

    Raises:
        NotFoundException: If the appointment does not exist
    """
    appointment = _with_relations(db.query(Appointment)).filter(Appointment.id == appointment_id).first()
    if not appointment:
        raise NotFoundException("Appointment not found")
    return appointment

def resolve_references(db: Session, values: dict) -> None:
    """
    Check that every non-null reference in ``values`` points at an existing row.

    Raises:
        NotFoundException: Naming the first offending field
    """
    for field, (model, message, alias) in _REFERENCES.items():
        ref_id = values.get(field)
        if ref_id is not None and db.get(model, ref_id) is None:
            raise NotFoundException(message, field=alias)

def add_records(
    db: Session,
    appointment_id: int,
    prescriptions: Optional[List[PrescriptionItem]],
    tests: Optional[List[MedicalTestItem]]
) -> None:
    """Stage inline prescriptions and tests as rows owned by the appointment."""
    for item in prescriptions or []:
        db.add(Prescription(appointment_id=appointment_id, **item.model_dump()))
    for item in tests or []:
        db.add(MedicalTest(appointment_id=appointment_id, **item.model_dump()))

def stage_appointment(db: Session, data: AppointmentCreate) -> Appointment:
    """
    Validate references and stage a new appointment without committing.

    Used by ``create_appointment`` and by the booking flow, which commits the
    patient and the appointment together.

    Returns:
        Appointment: The flushed appointment (its id is available)
    """
    values = data.model_dump(exclude={"related_appointment_id", "prescriptions", "tests"})
    resolve_references(db, values)
    if data.related_appointment_id is not None and db.get(Appointment, data.related_appointment_id) is None:
        raise NotFoundException("Related appointment not found", field="relatedAppointmentId")

    appointment = Appointment(**values)
    db.add(appointment)
    db.flush()

    if data.related_appointment_id is not None:
        relations.connect(db, appointment.id, data.related_appointment_id)
    add_records(db, appointment.id, data.prescriptions, data.tests)
    db.flush()
    return appointment

def create_appointment(db: Session, data: AppointmentCreate) -> Appointment:
    """
    Create an appointment.

    No duplicate or overlap check is made against the doctor's other visits.

    Args:
        db: Database session
        data: Validated creation payload

    Returns:
        Appointment: The created appointment with relations

    Raises:
        NotFoundException: If a referenced entity does not exist
    """
    with transaction(db, "Failed to create appointment"):
        appointment = stage_appointment(db, data)
    logger.info(f"Appointment {appointment.id} created for patient {data.patient_id}")
    return get_appointment(db, appointment.id)

def list_appointments(db: Session, filters: AppointmentFilters) -> List[Appointment]:
    """
    List appointments matching the filters, earliest first.

    ``unscheduled`` restricts the result to appointments with no date, the
    ones the weekly view never shows.
    """
    query = _with_relations(db.query(Appointment))
    if filters.patient_id is not None:
        query = query.filter(Appointment.patient_id == filters.patient_id)
    if filters.doctor_id is not None:
        query = query.filter(Appointment.doctor_id == filters.doctor_id)
    if filters.ambulance_id is not None:
        query = query.filter(Appointment.ambulance_id == filters.ambulance_id)
    if filters.status is not None:
        query = query.filter(Appointment.status == filters.status)
    if filters.unscheduled:
        query = query.filter(Appointment.date_time.is_(None))
    if filters.start_date is not None:
        query = query.filter(Appointment.date_time >= ensure_utc(filters.start_date))
    if filters.end_date is not None:
        query = query.filter(Appointment.date_time <= ensure_utc(filters.end_date))
    return query.order_by(Appointment.date_time.asc(), Appointment.id.asc()).all()

def update_appointment(db: Session, appointment_id: int, data: AppointmentUpdate) -> Appointment:
    """
    Apply a partial update to an appointment.

    Args:
        db: Database session
        appointment_id: ID of the appointment
        data: Fields to change; absent fields are left untouched

    Returns:
        Appointment: The updated appointment with relations re-resolved

    Raises:
        NotFoundException: If the appointment or a referenced entity does not exist
        ValidationException: If the status move is rejected in strict mode
    """
    with transaction(db, "Failed to update appointment"):
        appointment = db.get(Appointment, appointment_id)
        if not appointment:
            raise NotFoundException("Appointment not found")

        changes = data.model_dump(exclude_unset=True, exclude={"related_appointment_id", "prescriptions", "tests"})
        resolve_references(db, changes)

        if "status" in changes:
            changes["status"] = validate_transition(appointment.status, changes["status"])

        for field, value in changes.items():
            setattr(appointment, field, value)
        if changes.get("status") == AppointmentStatus.CANCELED:
            cancel(appointment)

        if data.related_appointment_id is not None:
            relations.connect(db, appointment.id, data.related_appointment_id)
        add_records(db, appointment.id, data.prescriptions, data.tests)

    logger.info(f"Appointment {appointment_id} updated: {sorted(data.model_fields_set)}")
    return get_appointment(db, appointment_id)

def update_comments(db: Session, appointment_id: int, data: AppointmentCommentsUpdate) -> Appointment:
    """
    Record a doctor's notes on an appointment and optionally move its status.

    Raises:
        NotFoundException: If the appointment does not exist
    """
    with transaction(db, "Failed to update appointment comments"):
        appointment = db.get(Appointment, appointment_id)
        if not appointment:
            raise NotFoundException("Appointment not found")
        if "comments" in data.model_fields_set:
            appointment.comments = data.comments
        if data.status is not None:
            status = validate_transition(appointment.status, data.status)
            if status == AppointmentStatus.CANCELED:
                cancel(appointment)
            else:
                appointment.update_status(status)

    logger.info(f"Comments updated on appointment {appointment_id}")
    return get_appointment(db, appointment_id)

def delete_appointment(db: Session, appointment_id: int) -> None:
    """
    Delete an appointment with its prescriptions, tests and follow-up links.

    Raises:
        NotFoundException: If the appointment does not exist
    """
    with transaction(db, "Failed to delete appointment"):
        appointment = db.get(Appointment, appointment_id)
        if not appointment:
            raise NotFoundException("Appointment not found")
        appointment_deletion.apply(db, appointment)
    logger.info(f"Appointment {appointment_id} deleted")

def unlink_related(db: Session, appointment_id: int, related_id: int) -> Appointment:
    """
    Remove the follow-up link between two appointments, whichever side holds it.

    Raises:
        NotFoundException: If the appointment or the link does not exist
    """
    with transaction(db, "Failed to unlink appointments"):
        if db.get(Appointment, appointment_id) is None:
            raise NotFoundException("Appointment not found")
        if relations.disconnect(db, appointment_id, related_id) == 0:
            raise NotFoundException("Related appointment link not found", field="relatedId")
    logger.info(f"Unlinked appointments {appointment_id} and {related_id}")
    return get_appointment(db, appointment_id)
