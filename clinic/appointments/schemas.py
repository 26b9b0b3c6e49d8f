"""
Appointment Schemas - Pydantic models for appointment data validation and serialization.

Inline ``prescriptions`` and ``tests`` are always lists of objects and are
stored as rows owned by the appointment.
"""
from typing import List, Optional
from datetime import datetime
from pydantic import Field, field_validator
from ..core.schemas import CamelModel, UTCDateTime
from ..ambulances.models import AmbulanceStatus
from ..medical_records.schemas import (
    PrescriptionItem, PrescriptionResponse, MedicalTestItem, MedicalTestResponse
)
from .models import AppointmentStatus

class AppointmentCreate(CamelModel):
    """
    Appointment Creation Schema

    Fields:
    - patient_id: Owning patient (required)
    - doctor_id / ambulance_id: Assigned resources (optional)
    - date_time: ISO-8601 timestamp; leave empty for an unscheduled request
    - condition / description / specialization / comments: Free text
    - status: Initial status, NEW unless stated
    - related_appointment_id: Appointment this one follows up
    - prescriptions / tests: Records to attach on creation
    """
    patient_id: int
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

class AppointmentUpdate(CamelModel):
    """
    Appointment Update Schema - partial update

    Only fields present in the payload are applied. Optional references may
    be cleared with an explicit null; the patient and status may not.
    Inline prescriptions and tests are appended to the existing ones.
    """
    patient_id: Optional[int] = None
    doctor_id: Optional[int] = None
    ambulance_id: Optional[int] = None
    date_time: Optional[UTCDateTime] = None
    condition: Optional[str] = None
    description: Optional[str] = None
    specialization: Optional[str] = None
    status: Optional[AppointmentStatus] = None
    comments: Optional[str] = None
    related_appointment_id: Optional[int] = None
    prescriptions: Optional[List[PrescriptionItem]] = None
    tests: Optional[List[MedicalTestItem]] = None

    @field_validator("patient_id", "status")
    @classmethod
    def not_null(cls, value):
        if value is None:
            raise ValueError("Field cannot be null")
        return value

class AppointmentCommentsUpdate(CamelModel):
    """Doctor notes update, optionally moving the status along"""
    comments: Optional[str] = None
    status: Optional[AppointmentStatus] = None

class AppointmentPatient(CamelModel):
    id: int
    name: Optional[str] = None
    email: Optional[str] = None
    age: Optional[int] = None
    gender: Optional[str] = None

class AppointmentDoctor(CamelModel):
    id: int
    name: Optional[str] = None
    email: Optional[str] = None
    specialization: str

class AppointmentAmbulance(CamelModel):
    id: int
    name: Optional[str] = None
    status: AmbulanceStatus

class AppointmentBrief(CamelModel):
    """Appointment as listed under a patient, doctor or ambulance"""
    id: int
    patient_id: int
    doctor_id: Optional[int] = None
    ambulance_id: Optional[int] = None
    date_time: Optional[UTCDateTime] = None
    condition: Optional[str] = None
    specialization: Optional[str] = None
    status: AppointmentStatus

class AppointmentResponse(AppointmentBrief):
    """
    Appointment Response Schema - appointment with every relation resolved

    ``related_to_ids`` are the visits this appointment follows up;
    ``related_appointment_ids`` are the follow-ups pointing back at it.
    """
    description: Optional[str] = None
    comments: Optional[str] = None
    created_at: Optional[UTCDateTime] = None
    updated_at: Optional[UTCDateTime] = None
    patient: AppointmentPatient
    doctor: Optional[AppointmentDoctor] = None
    ambulance: Optional[AppointmentAmbulance] = None
    prescriptions: List[PrescriptionResponse] = []
    tests: List[MedicalTestResponse] = []
    related_to_ids: List[int] = []
    related_appointment_ids: List[int] = []

class AppointmentFilters(CamelModel):
    """Filters accepted by the appointment listing"""
    patient_id: Optional[int] = None
    doctor_id: Optional[int] = None
    ambulance_id: Optional[int] = None
    status: Optional[AppointmentStatus] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    unscheduled: bool = False
