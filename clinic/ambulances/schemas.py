"""
Ambulance Schemas - Pydantic models for ambulance data validation and serialization.
"""
from typing import List, Optional
from pydantic import Field
from ..core.schemas import CamelModel, UTCDateTime
from ..users.schemas import AccountCreate, AccountUpdate
from ..appointments.schemas import AppointmentBrief
from ..ratings.schemas import RatingResponse
from .models import AmbulanceStatus

class AmbulanceCreate(AccountCreate):
    """
    Ambulance Creation Schema

    Fields:
    - latitude / longitude: Current position (optional)
    - status: Duty status, AVAILABLE unless given
    """
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)
    status: AmbulanceStatus = AmbulanceStatus.AVAILABLE

class AmbulanceUpdate(AccountUpdate):
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)
    status: Optional[AmbulanceStatus] = None

class AmbulanceResponse(CamelModel):
    id: int
    user_id: int
    name: Optional[str] = None
    email: str
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    status: AmbulanceStatus
    created_at: Optional[UTCDateTime] = None
    updated_at: Optional[UTCDateTime] = None

class AmbulanceDetailResponse(AmbulanceResponse):
    """Ambulance with the appointments it serves and its ratings"""
    appointments: List[AppointmentBrief] = []
    ratings: List[RatingResponse] = []
