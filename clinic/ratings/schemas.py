"""
Rating Schemas - Pydantic models for rating creation and responses.
"""
from typing import Optional
from pydantic import Field, model_validator
from ..core.schemas import CamelModel, UTCDateTime

class RatingCreate(CamelModel):
    """
    Rating Creation Schema
    
    Exactly one of ``doctor_id`` and ``ambulance_id`` must be given.
    """
    doctor_id: Optional[int] = None
    ambulance_id: Optional[int] = None
    stars: int = Field(..., ge=1, le=5)
    comment: Optional[str] = None

    @model_validator(mode="after")
    def one_target(self):
        if (self.doctor_id is None) == (self.ambulance_id is None):
            raise ValueError("Provide exactly one of doctorId or ambulanceId")
        return self

class RatingResponse(CamelModel):
    id: int
    doctor_id: Optional[int] = None
    ambulance_id: Optional[int] = None
    stars: int
    comment: Optional[str] = None
    created_at: Optional[UTCDateTime] = None
