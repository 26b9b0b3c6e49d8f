"""
Medical Record Schemas - Pydantic models for prescriptions and medical tests.

The ``*Item`` schemas are the inline form accepted inside appointment
payloads; the ``*Create`` schemas are the standalone form that names the
owning appointment.
"""
from typing import Optional
from pydantic import Field
from ..core.schemas import CamelModel, UTCDateTime

class PrescriptionItem(CamelModel):
    """
    Prescription fields

    Fields:
    - medication: Prescribed medication
    - dosage: Dosage description
    - instructions: Extra instructions (optional)
    """
    medication: str = Field(..., min_length=1)
    dosage: str = Field(..., min_length=1)
    instructions: Optional[str] = None

class PrescriptionCreate(PrescriptionItem):
    """Standalone prescription creation"""
    appointment_id: int

class PrescriptionUpdate(CamelModel):
    """Partial prescription update; moving to another appointment is allowed"""
    appointment_id: Optional[int] = None
    medication: Optional[str] = Field(None, min_length=1)
    dosage: Optional[str] = Field(None, min_length=1)
    instructions: Optional[str] = None

class PrescriptionResponse(PrescriptionItem):
    id: int
    appointment_id: int

class MedicalTestItem(CamelModel):
    """
    Medical test fields

    Fields:
    - test_type: Kind of test
    - results: Results text (optional)
    - date_performed: ISO-8601 timestamp of when the test was performed
    """
    test_type: str = Field(..., min_length=1)
    results: Optional[str] = None
    date_performed: UTCDateTime

class MedicalTestCreate(MedicalTestItem):
    """Standalone medical test creation"""
    appointment_id: int

class MedicalTestUpdate(CamelModel):
    appointment_id: Optional[int] = None
    test_type: Optional[str] = Field(None, min_length=1)
    results: Optional[str] = None
    date_performed: Optional[UTCDateTime] = None

class MedicalTestResponse(MedicalTestItem):
    id: int
    appointment_id: int
