"""
Doctor Schemas - Pydantic models for doctor profile data validation and serialization.
"""
from typing import List, Optional
from pydantic import Field
from ..core.schemas import CamelModel, UTCDateTime
from ..users.schemas import AccountCreate, AccountUpdate
from ..appointments.schemas import AppointmentBrief
from ..ratings.schemas import RatingResponse

class DoctorCreate(AccountCreate):
    """
    Doctor Creation Schema
    
    Fields:
    - specialization: Doctor's medical specialization
    - license: Medical license number (optional)
    - verified: Whether the license is already verified
    """
    specialization: str = Field(..., min_length=1, description="Doctor's medical specialization")
    license: Optional[str] = Field(None, description="Medical license number")
    verified: bool = False

class DoctorUpdate(AccountUpdate):
    """
    Doctor Update Schema - only supplied fields change
    """
    specialization: Optional[str] = Field(None, min_length=1)
    license: Optional[str] = None
    verified: Optional[bool] = None

class DoctorResponse(CamelModel):
    """
    Doctor Response Schema
    
    Fields:
    - id: Doctor profile ID
    - user_id: Owning user
    - name / email: From the owning user
    - specialization, license, verified: Professional details
    - average_rating: Mean stars, null when unrated
    """
    id: int
    user_id: int
    name: Optional[str] = None
    email: str
    specialization: str
    license: Optional[str] = None
    verified: bool
    average_rating: Optional[float] = None
    created_at: Optional[UTCDateTime] = None
    updated_at: Optional[UTCDateTime] = None

class DoctorDetailResponse(DoctorResponse):
    """Doctor with appointments (newest first) and ratings"""
    appointments: List[AppointmentBrief] = []
    ratings: List[RatingResponse] = []
