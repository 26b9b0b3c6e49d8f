"""
Rating Service - star ratings for doctors and ambulance crews.
"""
from typing import List, Optional
from sqlalchemy.orm import Session
import logging

from ..database import transaction
from ..exceptions import NotFoundException
from ..doctors.models import Doctor
from ..ambulances.models import Ambulance
from .models import Rating
from .schemas import RatingCreate

# Set up logging
logger = logging.getLogger(__name__)

def create_rating(db: Session, data: RatingCreate) -> Rating:
    """
    Rate a doctor or an ambulance.

    Raises:
        NotFoundException: If the rated doctor or ambulance does not exist
    """
    with transaction(db, "Failed to create rating"):
        if data.doctor_id is not None and db.get(Doctor, data.doctor_id) is None:
            raise NotFoundException("Doctor not found", field="doctorId")
        if data.ambulance_id is not None and db.get(Ambulance, data.ambulance_id) is None:
            raise NotFoundException("Ambulance not found", field="ambulanceId")
        rating = Rating(**data.model_dump())
        db.add(rating)
        db.flush()
        rating_id = rating.id
    logger.info(f"Rating {rating_id} recorded")
    return db.get(Rating, rating_id)

def list_ratings(
    db: Session,
    doctor_id: Optional[int] = None,
    ambulance_id: Optional[int] = None
) -> List[Rating]:
    """Ratings, oldest first, optionally for one doctor or ambulance."""
    query = db.query(Rating)
    if doctor_id is not None:
        query = query.filter(Rating.doctor_id == doctor_id)
    if ambulance_id is not None:
        query = query.filter(Rating.ambulance_id == ambulance_id)
    return query.order_by(Rating.id).all()
