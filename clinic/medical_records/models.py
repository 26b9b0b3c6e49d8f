"""
Medical Record Models - Prescriptions and medical tests.

Both are owned by an Appointment and never outlive it.
"""
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Text, func
from sqlalchemy.orm import relationship
from ..database import Base

class Prescription(Base):
    """
    Prescription Model - Medication prescribed during an appointment
    
    Fields:
    - id: Primary key
    - appointment_id: Foreign key to the owning Appointment
    - medication: Prescribed medication
    - dosage: Dosage description
    - instructions: Extra instructions (optional)
    """
    __tablename__ = "prescriptions"

    id = Column(Integer, primary_key=True, index=True)
    appointment_id = Column(Integer, ForeignKey("appointments.id"), nullable=False, index=True)
    medication = Column(String, nullable=False)
    dosage = Column(String, nullable=False)
    instructions = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    appointment = relationship("Appointment", back_populates="prescriptions")

    def __repr__(self):
        return f"<Prescription(id={self.id}, appointment_id={self.appointment_id}, medication='{self.medication}')>"

class MedicalTest(Base):
    """
    Medical Test Model - A test ordered or performed for an appointment
    
    Fields:
    - id: Primary key
    - appointment_id: Foreign key to the owning Appointment
    - test_type: Kind of test
    - results: Results text (optional until available)
    - date_performed: When the test was performed
    """
    __tablename__ = "medical_tests"

    id = Column(Integer, primary_key=True, index=True)
    appointment_id = Column(Integer, ForeignKey("appointments.id"), nullable=False, index=True)
    test_type = Column(String, nullable=False)
    results = Column(Text, nullable=True)
    date_performed = Column(DateTime(timezone=True), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    appointment = relationship("Appointment", back_populates="tests")

    def __repr__(self):
        return f"<MedicalTest(id={self.id}, appointment_id={self.appointment_id}, test_type='{self.test_type}')>"
