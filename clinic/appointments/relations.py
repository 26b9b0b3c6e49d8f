"""
Follow-up links between appointments.

Links are rows of ``appointment_relations``; connecting and disconnecting are
plain inserts and deletes on that table, so removing an appointment never
walks a graph. Nothing here commits.
"""
from typing import Iterable, List
from sqlalchemy import or_, select
from sqlalchemy.orm import Session
import logging

from ..exceptions import NotFoundException, ValidationException
from .models import Appointment, appointment_relations

# Set up logging
logger = logging.getLogger(__name__)

def connect(db: Session, from_id: int, to_id: int) -> None:
    """
    Record that appointment ``from_id`` follows up appointment ``to_id``.

    Connecting an existing pair is a no-op.

    Raises:
        ValidationException: If an appointment would be linked to itself
        NotFoundException: If the target appointment does not exist
    """
    if from_id == to_id:
        raise ValidationException(
            "Validation failed",
            [{"path": "relatedAppointmentId", "message": "An appointment cannot be related to itself"}]
        )
    if db.get(Appointment, to_id) is None:
        raise NotFoundException("Related appointment not found", field="relatedAppointmentId")

    exists = db.execute(
        select(appointment_relations.c.from_id).where(
            appointment_relations.c.from_id == from_id,
            appointment_relations.c.to_id == to_id,
        )
    ).first()
    if exists:
        return
    db.execute(appointment_relations.insert().values(from_id=from_id, to_id=to_id))
    logger.info(f"Linked appointment {from_id} -> {to_id}")

def disconnect(db: Session, from_id: int, to_id: int) -> int:
    """
    Remove a single link in either direction.

    Returns:
        int: Number of link rows removed
    """
    result = db.execute(
        appointment_relations.delete().where(
            or_(
                (appointment_relations.c.from_id == from_id) & (appointment_relations.c.to_id == to_id),
                (appointment_relations.c.from_id == to_id) & (appointment_relations.c.to_id == from_id),
            )
        )
    )
    return result.rowcount

def disconnect_all(db: Session, appointment_ids: Iterable[int]) -> int:
    """
    Drop every link touching the given appointments, on both sides.

    Args:
        db: Database session
        appointment_ids: Appointments about to be removed

    Returns:
        int: Number of link rows removed
    """
    ids: List[int] = list(appointment_ids)
    if not ids:
        return 0
    result = db.execute(
        appointment_relations.delete().where(
            or_(
                appointment_relations.c.from_id.in_(ids),
                appointment_relations.c.to_id.in_(ids),
            )
        )
    )
    if result.rowcount:
        logger.info(f"Disconnected {result.rowcount} follow-up link(s) for appointments {ids}")
    return result.rowcount
