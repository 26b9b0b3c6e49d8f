"""
Rating Router - API endpoints for rating doctors and ambulances.
"""
from typing import List, Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from ..database import get_db
from .schemas import RatingCreate, RatingResponse
from .service import create_rating, list_ratings

router = APIRouter()

@router.post("", response_model=RatingResponse, status_code=status.HTTP_201_CREATED)
async def create(rating_data: RatingCreate, db: Session = Depends(get_db)):
    """
    Rate a doctor or an ambulance

    Exactly one of ``doctorId`` and ``ambulanceId`` must be given.
    """
    return create_rating(db, rating_data)

@router.get("", response_model=List[RatingResponse])
async def list_all(
    doctor_id: Optional[int] = Query(None, alias="doctorId"),
    ambulance_id: Optional[int] = Query(None, alias="ambulanceId"),
    db: Session = Depends(get_db)
):
    """List ratings"""
    return list_ratings(db, doctor_id, ambulance_id)
