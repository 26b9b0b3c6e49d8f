"""
Patient Model - Stores patient-specific information.

This model extends the base User model with patient-specific fields and relationships.
"""
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from ..database import Base

class Patient(Base):
    """
    Patient Model - Stores patient-specific information
    
    Fields:
    - id: Primary key for patient profile
    - user_id: Foreign key to the owning User
    - age: Patient's age in years (optional)
    - gender: Patient's gender (optional)
    - created_at: When the patient profile was created
    - updated_at: When the patient profile was last updated
    """
    __tablename__ = "patients"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), unique=True, nullable=False)
    age = Column(Integer, nullable=True)
    gender = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relationships
    user = relationship("User", back_populates="patient_profile", uselist=False)
    appointments = relationship(
        "Appointment",
        back_populates="patient",
        order_by="[Appointment.date_time.desc(), Appointment.id.desc()]",
    )

    def __repr__(self):
        """String representation of the Patient model"""
        return f"<Patient(id={self.id}, user_id={self.user_id})>"

    @property
    def name(self) -> str:
        """Get patient's name from associated user"""
        return self.user.name if self.user else None

    @property
    def email(self) -> str:
        """Get patient's email from associated user"""
        return self.user.email if self.user else None
