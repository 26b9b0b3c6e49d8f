"""
Ambulance Model - Stores ambulance crews, their position and duty status.
"""
from sqlalchemy import Column, Integer, Float, DateTime, ForeignKey, Enum, func
from sqlalchemy.orm import relationship
import enum
from ..database import Base

class AmbulanceStatus(str, enum.Enum):
    """Enum for ambulance duty status"""
    AVAILABLE = "AVAILABLE"
    ON_DUTY = "ON_DUTY"
    UNAVAILABLE = "UNAVAILABLE"

class Ambulance(Base):
    """
    Ambulance Model - Stores ambulance information
    
    Fields:
    - id: Primary key for ambulance profile
    - user_id: Foreign key to the owning User
    - latitude / longitude: Last known position (optional)
    - status: Current duty status
    """
    __tablename__ = "ambulances"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), unique=True, nullable=False)
    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)
    status = Column(Enum(AmbulanceStatus, name="ambulance_status"), nullable=False, default=AmbulanceStatus.AVAILABLE)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relationships
    user = relationship("User", back_populates="ambulance_profile", uselist=False)
    appointments = relationship(
        "Appointment",
        back_populates="ambulance",
        order_by="[Appointment.date_time.desc(), Appointment.id.desc()]",
    )
    ratings = relationship("Rating", back_populates="ambulance", order_by="Rating.id")

    def __repr__(self):
        """String representation of the Ambulance model"""
        return f"<Ambulance(id={self.id}, user_id={self.user_id}, status='{self.status}')>"

    @property
    def name(self) -> str:
        """Get the crew name from associated user"""
        return self.user.name if self.user else None

    @property
    def email(self) -> str:
        """Get the crew email from associated user"""
        return self.user.email if self.user else None
