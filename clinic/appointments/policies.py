"""
Deletion policies - how removing each owning entity reaches its appointments.

The entities differ:

- Doctor: unconditional cascade. Ratings, the prescriptions and tests of its
  appointments, the appointments themselves, the doctor and its user go.
- Patient: unconditional cascade over its appointments, then patient and user.
- Ambulance: guarded. Refused while a future, non-canceled appointment uses
  it; otherwise its appointments are canceled and detached (kept for
  history), its ratings removed, then ambulance and user.
- Appointment: its prescriptions, tests and follow-up links, then the row.

Policies only stage statements on the session. The calling service commits
once, or rolls back, so a half-applied cascade is never visible.
"""
from typing import List
from datetime import datetime, timezone
from sqlalchemy.orm import Session
import logging

from ..exceptions import PreconditionException
from ..users.models import User
from ..patients.models import Patient
from ..doctors.models import Doctor
from ..ambulances.models import Ambulance
from ..medical_records.models import Prescription, MedicalTest
from ..ratings.models import Rating
from . import relations
from .models import Appointment, AppointmentStatus
from .status import cancel

# Set up logging
logger = logging.getLogger(__name__)


def _purge_appointments(db: Session, appointment_ids: List[int]) -> None:
    """Remove appointments together with their children and follow-up links."""
    if not appointment_ids:
        return
    relations.disconnect_all(db, appointment_ids)
    db.query(Prescription).filter(
        Prescription.appointment_id.in_(appointment_ids)
    ).delete(synchronize_session=False)
    db.query(MedicalTest).filter(
        MedicalTest.appointment_id.in_(appointment_ids)
    ).delete(synchronize_session=False)
    db.query(Appointment).filter(
        Appointment.id.in_(appointment_ids)
    ).delete(synchronize_session=False)


class AppointmentDeletionPolicy:
    """Delete one appointment and everything that exists only because of it."""

    def apply(self, db: Session, appointment: Appointment) -> None:
        _purge_appointments(db, [appointment.id])
        logger.info(f"Staged deletion of appointment {appointment.id}")


class DoctorDeletionPolicy:
    """Unconditional cascade from a doctor down to its user row."""

    def apply(self, db: Session, doctor: Doctor) -> None:
        appointment_ids = [
            row.id for row in db.query(Appointment.id).filter(Appointment.doctor_id == doctor.id)
        ]
        db.query(Rating).filter(Rating.doctor_id == doctor.id).delete(synchronize_session=False)
        _purge_appointments(db, appointment_ids)
        db.query(Doctor).filter(Doctor.id == doctor.id).delete(synchronize_session=False)
        db.query(User).filter(User.id == doctor.user_id).delete(synchronize_session=False)
        logger.info(
            f"Staged deletion of doctor {doctor.id} with {len(appointment_ids)} appointment(s)"
        )


class PatientDeletionPolicy:
    """Unconditional cascade from a patient down to its user row."""

    def apply(self, db: Session, patient: Patient) -> None:
        appointment_ids = [
            row.id for row in db.query(Appointment.id).filter(Appointment.patient_id == patient.id)
        ]
        _purge_appointments(db, appointment_ids)
        db.query(Patient).filter(Patient.id == patient.id).delete(synchronize_session=False)
        db.query(User).filter(User.id == patient.user_id).delete(synchronize_session=False)
        logger.info(
            f"Staged deletion of patient {patient.id} with {len(appointment_ids)} appointment(s)"
        )


class AmbulanceDeletionPolicy:
    """Guarded removal: future work blocks it, past work is canceled and kept."""

    def count_blocking_appointments(self, db: Session, ambulance_id: int) -> int:
        """Non-canceled appointments scheduled at or after now."""
        now = datetime.now(timezone.utc)
        return db.query(Appointment).filter(
            Appointment.ambulance_id == ambulance_id,
            Appointment.status != AppointmentStatus.CANCELED,
            Appointment.date_time.isnot(None),
            Appointment.date_time >= now,
        ).count()

    def apply(self, db: Session, ambulance: Ambulance) -> None:
        """
        Raises:
            PreconditionException: If future appointments still use the ambulance
        """
        blocking = self.count_blocking_appointments(db, ambulance.id)
        if blocking > 0:
            raise PreconditionException(
                "Cannot delete ambulance with future appointments",
                f"{blocking} future appointment{'s exist' if blocking != 1 else ' exists'}"
            )

        appointments = db.query(Appointment).filter(Appointment.ambulance_id == ambulance.id).all()
        for appointment in appointments:
            cancel(appointment)
        db.flush()

        db.query(Rating).filter(Rating.ambulance_id == ambulance.id).delete(synchronize_session=False)
        db.query(Ambulance).filter(Ambulance.id == ambulance.id).delete(synchronize_session=False)
        db.query(User).filter(User.id == ambulance.user_id).delete(synchronize_session=False)
        logger.info(
            f"Staged deletion of ambulance {ambulance.id}; canceled {len(appointments)} appointment(s)"
        )


appointment_deletion = AppointmentDeletionPolicy()
doctor_deletion = DoctorDeletionPolicy()
patient_deletion = PatientDeletionPolicy()
ambulance_deletion = AmbulanceDeletionPolicy()
