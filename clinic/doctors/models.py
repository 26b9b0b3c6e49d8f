"""
Doctor Model - Stores doctor-specific information.

This model extends the base User model with doctor-specific fields and relationships.
"""
from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from datetime import datetime, timezone
from ..database import Base

class Doctor(Base):
    """
    Doctor Model - Stores doctor-specific information
    
    Fields:
    - id: Primary key for doctor profile
    - user_id: Foreign key to the owning User
    - specialization: Doctor's medical specialization
    - license: Medical license number
    - verified: Whether an admin has verified the license
    - created_at: When the doctor profile was created
    - updated_at: When the doctor profile was last updated
    """
    __tablename__ = "doctors"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), unique=True, nullable=False)
    specialization = Column(String, nullable=False)
    license = Column(String, nullable=True)
    verified = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relationships
    user = relationship("User", back_populates="doctor_profile", uselist=False)
    appointments = relationship(
        "Appointment",
        back_populates="doctor",
        order_by="[Appointment.date_time.desc(), Appointment.id.desc()]",
    )
    ratings = relationship("Rating", back_populates="doctor", order_by="Rating.id")

    def __repr__(self):
        """String representation of the Doctor model"""
        return f"<Doctor(id={self.id}, user_id={self.user_id}, specialization='{self.specialization}')>"

    @property
    def name(self) -> str:
        """Get doctor's name from associated user"""
        return self.user.name if self.user else None

    @property
    def email(self) -> str:
        """Get doctor's email from associated user"""
        return self.user.email if self.user else None

    @property
    def average_rating(self):
        """Mean of the doctor's rating stars, or None when unrated"""
        if not self.ratings:
            return None
        return round(sum(r.stars for r in self.ratings) / len(self.ratings), 2)

    def mark_verified(self, verified: bool = True) -> None:
        """
        Update the license verification flag
        
        Args:
            verified: New verification state
        """
        self.verified = verified
        self.updated_at = datetime.now(timezone.utc)
