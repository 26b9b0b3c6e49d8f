"""
Booking Service - registers a patient and books their appointment atomically.

Either both rows exist afterwards or neither does: a missing doctor or a
taken email leaves no orphan patient behind.
"""
from sqlalchemy.orm import Session
import logging

from ..database import transaction
from ..patients.service import stage_patient, get_patient
from ..appointments.service import stage_appointment, get_appointment
from ..appointments.schemas import AppointmentResponse
from ..patients.schemas import PatientResponse
from .schemas import BookingCreate, BookingResponse

# Set up logging
logger = logging.getLogger(__name__)

def book_appointment(db: Session, data: BookingCreate) -> BookingResponse:
    """
    Create the patient and the appointment in a single transaction.

    Raises:
        ConflictException: If the patient's email is already registered
        NotFoundException: If the doctor, ambulance or related appointment does not exist
    """
    with transaction(db, "Failed to book appointment"):
        patient = stage_patient(db, data.patient)
        appointment = stage_appointment(db, data.appointment.for_patient(patient.id))
        patient_id, appointment_id = patient.id, appointment.id

    logger.info(f"Booked appointment {appointment_id} for new patient {patient_id}")
    return BookingResponse(
        patient=PatientResponse.model_validate(get_patient(db, patient_id)),
        appointment=AppointmentResponse.model_validate(get_appointment(db, appointment_id)),
    )
