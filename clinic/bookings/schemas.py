"""
Booking Schemas - patient registration and first appointment in one payload.
"""
from typing import List, Optional
from pydantic import Field
from ..core.schemas import CamelModel, UTCDateTime
from ..appointments.models import AppointmentStatus
from ..appointments.schemas import AppointmentCreate, AppointmentResponse
from ..medical_records.schemas import PrescriptionItem, MedicalTestItem
from ..patients.schemas import PatientCreate, PatientResponse

class BookingAppointment(CamelModel):
    """Appointment half of a booking; the patient comes from the same request"""
    doctor_id: Optional[int] = None
    ambulance_id: Optional[int] = None
    date_time: Optional[UTCDateTime] = None
    condition: Optional[str] = None
    description: Optional[str] = None
    specialization: Optional[str] = None
    status: AppointmentStatus = AppointmentStatus.NEW
    comments: Optional[str] = None
    related_appointment_id: Optional[int] = None
    prescriptions: List[PrescriptionItem] = Field(default_factory=list)
    tests: List[MedicalTestItem] = Field(default_factory=list)

    def for_patient(self, patient_id: int) -> AppointmentCreate:
        return AppointmentCreate(patient_id=patient_id, **self.model_dump())

class BookingCreate(CamelModel):
    """
    Booking Creation Schema

    Fields:
    - patient: New patient account and demographics
    - appointment: The patient's first appointment
    """
    patient: PatientCreate
    appointment: BookingAppointment

class BookingResponse(CamelModel):
    patient: PatientResponse
    appointment: AppointmentResponse
