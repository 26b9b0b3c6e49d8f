"""
Rating Model - One to five stars for either a doctor or an ambulance.
"""
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, CheckConstraint, func
from sqlalchemy.orm import relationship
from ..database import Base

class Rating(Base):
    """
    Rating Model
    
    Fields:
    - id: Primary key
    - doctor_id: Rated doctor (set when ambulance_id is not)
    - ambulance_id: Rated ambulance (set when doctor_id is not)
    - stars: Score from 1 to 5
    - comment: Optional review text
    """
    __tablename__ = "ratings"
    __table_args__ = (
        CheckConstraint("stars BETWEEN 1 AND 5", name="ck_ratings_stars_range"),
    )

    id = Column(Integer, primary_key=True, index=True)
    doctor_id = Column(Integer, ForeignKey("doctors.id"), nullable=True, index=True)
    ambulance_id = Column(Integer, ForeignKey("ambulances.id"), nullable=True, index=True)
    stars = Column(Integer, nullable=False)
    comment = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    doctor = relationship("Doctor", back_populates="ratings")
    ambulance = relationship("Ambulance", back_populates="ratings")

    def __repr__(self):
        return f"<Rating(id={self.id}, doctor_id={self.doctor_id}, ambulance_id={self.ambulance_id}, stars={self.stars})>"
