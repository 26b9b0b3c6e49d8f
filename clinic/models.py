"""
Import every model module so the SQLAlchemy registry is complete before the
first mapper is configured (tables, migrations, tests).
"""
from .database import Base
from .users.models import User, UserRole
from .patients.models import Patient
from .doctors.models import Doctor
from .ambulances.models import Ambulance, AmbulanceStatus
from .appointments.models import Appointment, AppointmentStatus, appointment_relations
from .medical_records.models import Prescription, MedicalTest
from .ratings.models import Rating

__all__ = [
    "Base",
    "User",
    "UserRole",
    "Patient",
    "Doctor",
    "Ambulance",
    "AmbulanceStatus",
    "Appointment",
    "AppointmentStatus",
    "appointment_relations",
    "Prescription",
    "MedicalTest",
    "Rating",
]
