"""
User Model - Stores the account shared by every role in the system.

Each User is owned by exactly one Patient, Doctor or Ambulance profile and is
removed together with that profile.
"""
from sqlalchemy import Column, Integer, String, DateTime, Enum, func
from sqlalchemy.orm import relationship
import enum
from ..database import Base

class UserRole(str, enum.Enum):
    """
    Enumeration for user roles in the clinic system.
    
    Roles:
    - PATIENT: Patients who book appointments
    - DOCTOR: Medical practitioners who provide consultations
    - AMBULANCE: Ambulance crews dispatched to appointments
    - ADMIN: Administrators with full CRUD access
    """
    PATIENT = "PATIENT"
    DOCTOR = "DOCTOR"
    AMBULANCE = "AMBULANCE"
    ADMIN = "ADMIN"

class User(Base):
    """
    User Model - Stores account information
    
    Fields:
    - id: Primary key for user identification
    - email: Unique email address
    - password: bcrypt hash of the user's password (never the raw value)
    - name: Display name
    - role: Which profile owns this account
    - created_at: When the account was created
    """
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, unique=True, index=True, nullable=False)
    password = Column(String, nullable=False)
    name = Column(String, nullable=True)
    role = Column(Enum(UserRole, name="user_role"), nullable=False, default=UserRole.PATIENT)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    patient_profile = relationship("Patient", back_populates="user", uselist=False)
    doctor_profile = relationship("Doctor", back_populates="user", uselist=False)
    ambulance_profile = relationship("Ambulance", back_populates="user", uselist=False)

    def __repr__(self):
        """String representation of the User model"""
        return f"<User(id={self.id}, email='{self.email}', role='{self.role}')>"
