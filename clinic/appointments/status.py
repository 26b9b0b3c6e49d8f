"""
Appointment status transitions.

Clinical staff routinely override statuses, so by default every transition is
accepted and moves outside the expected table are only logged. Setting
``STATUS_TRANSITION_MODE=strict`` turns those moves into validation errors.
"""
from typing import Dict, FrozenSet, Optional
from datetime import datetime, timezone
import enum
import logging

from ..config import settings
from ..exceptions import ValidationException
from .models import Appointment, AppointmentStatus

# Set up logging
logger = logging.getLogger(__name__)

class TransitionMode(str, enum.Enum):
    """How unexpected status transitions are handled"""
    PERMISSIVE = "permissive"
    STRICT = "strict"

ALLOWED_TRANSITIONS: Dict[AppointmentStatus, FrozenSet[AppointmentStatus]] = {
    AppointmentStatus.NEW: frozenset({
        AppointmentStatus.PENDING,
        AppointmentStatus.COMPLETED,
        AppointmentStatus.CANCELED,
        AppointmentStatus.EMERGENCY,
    }),
    AppointmentStatus.PENDING: frozenset({
        AppointmentStatus.COMPLETED,
        AppointmentStatus.CANCELED,
        AppointmentStatus.EMERGENCY,
    }),
    AppointmentStatus.EMERGENCY: frozenset({
        AppointmentStatus.PENDING,
        AppointmentStatus.COMPLETED,
        AppointmentStatus.CANCELED,
    }),
    # Terminal; a canceled visit is rebooked as a new appointment
    AppointmentStatus.CANCELED: frozenset(),
    AppointmentStatus.COMPLETED: frozenset(),
}

def current_mode() -> TransitionMode:
    """Transition mode configured for this process"""
    return TransitionMode(settings.status_transition_mode)

def is_expected_transition(current: AppointmentStatus, requested: AppointmentStatus) -> bool:
    """
    Check a transition against the expected transition table.

    Args:
        current: Status the appointment has now
        requested: Status being requested

    Returns:
        bool: True for same-state updates and moves listed in the table
    """
    if current == requested:
        return True
    return requested in ALLOWED_TRANSITIONS.get(current, frozenset())

def validate_transition(
    current: AppointmentStatus,
    requested: AppointmentStatus,
    mode: Optional[TransitionMode] = None
) -> AppointmentStatus:
    """
    Accept or reject a requested status change.

    Args:
        current: Status the appointment has now
        requested: Status being requested
        mode: Enforcement mode (defaults to the configured one)

    Returns:
        AppointmentStatus: The status to store

    Raises:
        ValidationException: In strict mode, for moves outside the table
    """
    mode = mode or current_mode()
    if is_expected_transition(current, requested):
        return requested

    if mode == TransitionMode.STRICT:
        raise ValidationException(
            "Invalid status transition",
            [{"path": "status", "message": f"Cannot move appointment from {current.value} to {requested.value}"}]
        )

    logger.warning(f"Unenforced status transition {current.value} -> {requested.value}")
    return requested

def cancel(appointment: Appointment) -> None:
    """
    Cancel an appointment and release its ambulance.

    The record is kept so the visit history survives. Every path that ends
    in CANCELED goes through here; the transition check, if any, is the
    caller's job (ambulance retirement skips it).
    """
    appointment.status = AppointmentStatus.CANCELED
    appointment.ambulance_id = None
    appointment.updated_at = datetime.now(timezone.utc)
