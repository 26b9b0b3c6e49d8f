"""
Appointment Model - Stores appointment information and follow-up links.

Follow-up links live in the ``appointment_relations`` table as (from_id, to_id)
pairs: ``from`` is the follow-up, ``to`` is the visit it refers back to.
"""
from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, Enum, Table, func
from sqlalchemy.orm import relationship
from datetime import datetime, timezone
import enum
from ..database import Base

class AppointmentStatus(str, enum.Enum):
    """Enum for appointment status"""
    NEW = "NEW"
    PENDING = "PENDING"
    COMPLETED = "COMPLETED"
    CANCELED = "CANCELED"
    EMERGENCY = "EMERGENCY"

appointment_relations = Table(
    "appointment_relations",
    Base.metadata,
    Column("from_id", Integer, ForeignKey("appointments.id"), primary_key=True),
    Column("to_id", Integer, ForeignKey("appointments.id"), primary_key=True, index=True),
)

class Appointment(Base):
    """
    Appointment Model - Stores appointment information
    
    Fields:
    - id: Primary key for appointment
    - patient_id: Foreign key to the owning Patient (required)
    - doctor_id: Foreign key to the assigned Doctor (optional)
    - ambulance_id: Foreign key to the assigned Ambulance (optional)
    - date_time: Scheduled time in UTC (optional; unscheduled when empty)
    - condition: Reported condition
    - description: Free text description from the patient
    - specialization: Requested specialization
    - status: Current lifecycle status
    - comments: Doctor's notes
    - created_at: When the appointment was created
    - updated_at: When the appointment was last updated
    """
    __tablename__ = "appointments"

    id = Column(Integer, primary_key=True, index=True)
    patient_id = Column(Integer, ForeignKey("patients.id"), nullable=False, index=True)
    doctor_id = Column(Integer, ForeignKey("doctors.id"), nullable=True, index=True)
    ambulance_id = Column(Integer, ForeignKey("ambulances.id"), nullable=True, index=True)
    date_time = Column(DateTime(timezone=True), nullable=True, index=True)
    condition = Column(String, nullable=True)
    description = Column(Text, nullable=True)
    specialization = Column(String, nullable=True)
    status = Column(Enum(AppointmentStatus, name="appointment_status"), nullable=False, default=AppointmentStatus.NEW)
    comments = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relationships
    patient = relationship("Patient", back_populates="appointments")
    doctor = relationship("Doctor", back_populates="appointments")
    ambulance = relationship("Ambulance", back_populates="appointments")
    prescriptions = relationship("Prescription", back_populates="appointment", order_by="Prescription.id")
    tests = relationship("MedicalTest", back_populates="appointment", order_by="MedicalTest.id")
    related_to = relationship(
        "Appointment",
        secondary=appointment_relations,
        primaryjoin=lambda: Appointment.id == appointment_relations.c.from_id,
        secondaryjoin=lambda: Appointment.id == appointment_relations.c.to_id,
        order_by=lambda: Appointment.id,
        viewonly=True,
    )
    related_appointments = relationship(
        "Appointment",
        secondary=appointment_relations,
        primaryjoin=lambda: Appointment.id == appointment_relations.c.to_id,
        secondaryjoin=lambda: Appointment.id == appointment_relations.c.from_id,
        order_by=lambda: Appointment.id,
        viewonly=True,
    )

    def __repr__(self):
        """String representation of the Appointment model"""
        return f"<Appointment(id={self.id}, patient_id={self.patient_id}, doctor_id={self.doctor_id}, status='{self.status}')>"

    @property
    def related_to_ids(self):
        """Ids of the appointments this one follows up"""
        return [a.id for a in self.related_to]

    @property
    def related_appointment_ids(self):
        """Ids of the appointments that follow this one up"""
        return [a.id for a in self.related_appointments]

    def update_status(self, status: AppointmentStatus) -> None:
        """
        Update appointment status
        
        Args:
            status: New appointment status
        """
        self.status = status
        self.updated_at = datetime.now(timezone.utc)
