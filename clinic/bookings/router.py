"""
Booking Router - one-step patient registration and appointment booking.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ..database import get_db
from .schemas import BookingCreate, BookingResponse
from .service import book_appointment

router = APIRouter()

@router.post("", response_model=BookingResponse, status_code=status.HTTP_201_CREATED)
async def create(booking_data: BookingCreate, db: Session = Depends(get_db)):
    """
    Register a patient and book their appointment

    Nothing is saved unless both succeed.
    """
    return book_appointment(db, booking_data)
