"""
Patient Schemas - Pydantic models for patient data validation and serialization.
"""
from typing import List, Optional
from pydantic import Field
from ..core.schemas import CamelModel, UTCDateTime
from ..users.schemas import AccountCreate, AccountUpdate
from ..appointments.schemas import AppointmentBrief

class PatientCreate(AccountCreate):
    """
    Patient Creation Schema - account fields plus demographics
    
    Fields:
    - age: Age in years (optional)
    - gender: Gender (optional)
    """
    age: Optional[int] = Field(None, ge=0, le=150)
    gender: Optional[str] = None

class PatientUpdate(AccountUpdate):
    """Partial patient update; account fields are applied to the owning user"""
    age: Optional[int] = Field(None, ge=0, le=150)
    gender: Optional[str] = None

class PatientResponse(CamelModel):
    id: int
    user_id: int
    name: Optional[str] = None
    email: str
    age: Optional[int] = None
    gender: Optional[str] = None
    created_at: Optional[UTCDateTime] = None

class PatientDetailResponse(PatientResponse):
    """Patient with appointment history, newest first"""
    appointments: List[AppointmentBrief] = []
