"""
Doctor Service - Business logic for doctor profile management.

This module provides service functions for doctor profile CRUD operations,
the doctor's appointment listing and the weekly schedule view.
"""
from typing import List, Optional
from datetime import date, datetime
from sqlalchemy import or_
from sqlalchemy.orm import Session, joinedload, selectinload
import logging

from ..config import settings
from ..core.schemas import ensure_utc
from ..database import transaction
from ..exceptions import NotFoundException
from ..users.models import User, UserRole
from ..users.service import build_user, apply_account_changes
from ..patients.models import Patient
from ..appointments.models import Appointment, AppointmentStatus
from ..appointments.policies import doctor_deletion
from ..schedule.aggregator import build_weekly_schedule, clinic_zone, window_bounds
from ..schedule.schemas import WeeklyScheduleResponse
from .models import Doctor
from .schemas import DoctorCreate, DoctorUpdate

# Set up logging
logger = logging.getLogger(__name__)

def get_doctor(db: Session, doctor_id: int) -> Doctor:
    """
    Get a doctor profile by ID.

    Args:
        db: Database session
        doctor_id: ID of the doctor profile

    Returns:
        Doctor: Doctor profile with user, appointments and ratings loaded

    Raises:
        NotFoundException: If doctor profile not found
    """
    doctor = db.query(Doctor).options(
        joinedload(Doctor.user),
        selectinload(Doctor.appointments),
        selectinload(Doctor.ratings),
    ).filter(Doctor.id == doctor_id).first()
    if not doctor:
        raise NotFoundException("Doctor not found")
    return doctor

def create_doctor(db: Session, data: DoctorCreate) -> Doctor:
    """
    Create a doctor profile and its user account.

    Raises:
        ConflictException: If the email is already registered
    """
    with transaction(db, "Failed to create doctor"):
        user = build_user(db, data.email, data.password, data.name, UserRole.DOCTOR)
        doctor = Doctor(
            user_id=user.id,
            specialization=data.specialization,
            license=data.license,
            verified=data.verified,
        )
        db.add(doctor)
        db.flush()
        doctor_id = doctor.id
    logger.info(f"Doctor {doctor_id} created")
    return get_doctor(db, doctor_id)

def get_doctors(
    db: Session,
    specialization: Optional[str] = None,
    search: Optional[str] = None
) -> List[Doctor]:
    """
    Get doctors with optional filtering.

    Args:
        db: Database session
        specialization: Case-insensitive partial match on specialization
        search: Case-insensitive partial match on name or email

    Returns:
        List of doctor profiles ordered by id
    """
    query = db.query(Doctor).join(User).options(joinedload(Doctor.user), selectinload(Doctor.ratings))

    if specialization:
        query = query.filter(Doctor.specialization.ilike(f"%{specialization}%"))

    if search:
        query = query.filter(
            or_(
                User.name.ilike(f"%{search}%"),
                User.email.ilike(f"%{search}%")
            )
        )

    return query.order_by(Doctor.id).all()

def update_doctor(db: Session, doctor_id: int, data: DoctorUpdate) -> Doctor:
    """
    Update a doctor profile.

    Account fields (name, email, password) are written to the owning user in
    the same transaction as the professional fields.

    Raises:
        NotFoundException: If doctor profile not found
        ConflictException: If the new email is taken
    """
    with transaction(db, "Failed to update doctor"):
        doctor = get_doctor(db, doctor_id)
        apply_account_changes(db, doctor.user, email=data.email, password=data.password, name=data.name)
        if data.specialization:
            doctor.specialization = data.specialization
        if data.license:
            doctor.license = data.license
        if data.verified is not None:
            doctor.mark_verified(data.verified)
    logger.info(f"Doctor profile {doctor_id} updated")
    return get_doctor(db, doctor_id)

def delete_doctor(db: Session, doctor_id: int) -> None:
    """
    Delete a doctor and everything hanging off it.

    Future appointments do not block the deletion.

    Raises:
        NotFoundException: If doctor profile not found
    """
    with transaction(db, "Failed to delete doctor"):
        doctor = db.get(Doctor, doctor_id)
        if not doctor:
            raise NotFoundException("Doctor not found")
        doctor_deletion.apply(db, doctor)
    logger.info(f"Doctor {doctor_id} and associated records deleted")

def get_doctor_appointments(
    db: Session,
    doctor_id: int,
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
    appointment_status: Optional[AppointmentStatus] = None,
    descending: bool = False
) -> List[Appointment]:
    """
    List a doctor's appointments with optional date range and status filters.

    Raises:
        NotFoundException: If doctor profile not found
    """
    if db.get(Doctor, doctor_id) is None:
        raise NotFoundException("Doctor not found")

    query = db.query(Appointment).filter(Appointment.doctor_id == doctor_id)
    if start_date is not None and end_date is not None:
        query = query.filter(
            Appointment.date_time >= ensure_utc(start_date),
            Appointment.date_time <= ensure_utc(end_date),
        )
    if appointment_status is not None:
        query = query.filter(Appointment.status == appointment_status)

    if descending:
        return query.order_by(Appointment.date_time.desc(), Appointment.id.desc()).all()
    return query.order_by(Appointment.date_time.asc(), Appointment.id.asc()).all()

def get_weekly_schedule(db: Session, doctor_id: int, today: Optional[date] = None) -> WeeklyScheduleResponse:
    """
    Build the doctor's view of the seven days starting today.

    Args:
        db: Database session
        doctor_id: ID of the doctor profile
        today: First day of the window (defaults to today in the clinic timezone)

    Returns:
        WeeklyScheduleResponse: Days keyed by weekday name

    Raises:
        NotFoundException: If doctor profile not found
    """
    if db.get(Doctor, doctor_id) is None:
        raise NotFoundException("Doctor not found")

    tz = clinic_zone(settings.clinic_timezone)
    today = today or datetime.now(tz).date()
    start, end = window_bounds(today, tz)

    appointments = db.query(Appointment).options(
        joinedload(Appointment.patient).joinedload(Patient.user),
        selectinload(Appointment.prescriptions),
        selectinload(Appointment.tests),
    ).filter(
        Appointment.doctor_id == doctor_id,
        Appointment.date_time >= start,
        Appointment.date_time < end,
    ).order_by(Appointment.date_time.asc()).all()

    days = build_weekly_schedule(appointments, today, tz)
    return WeeklyScheduleResponse(
        doctor_id=doctor_id,
        timezone=settings.clinic_timezone,
        start_date=today,
        end_date=list(days.values())[-1].date,
        days=days,
    )
