"""
Ambulance Service - Business logic for ambulance management.

Deleting an ambulance is guarded: it is refused while a future, non-canceled
appointment still depends on it.
"""
from typing import Optional
from sqlalchemy import or_
from sqlalchemy.orm import Session, joinedload, selectinload
import logging

from ..core.pagination import PageParams, PageResponse, paginate
from ..database import transaction
from ..exceptions import NotFoundException
from ..users.models import User, UserRole
from ..users.service import build_user, apply_account_changes
from ..appointments.policies import ambulance_deletion
from .models import Ambulance, AmbulanceStatus
from .schemas import AmbulanceCreate, AmbulanceUpdate, AmbulanceResponse

# Set up logging
logger = logging.getLogger(__name__)

def get_ambulance(db: Session, ambulance_id: int) -> Ambulance:
    """
    Get an ambulance by ID.

    Raises:
        NotFoundException: If the ambulance does not exist
    """
    ambulance = db.query(Ambulance).options(
        joinedload(Ambulance.user),
        selectinload(Ambulance.appointments),
        selectinload(Ambulance.ratings),
    ).filter(Ambulance.id == ambulance_id).first()
    if not ambulance:
        raise NotFoundException("Ambulance not found")
    return ambulance

def create_ambulance(db: Session, data: AmbulanceCreate) -> Ambulance:
    """
    Register an ambulance crew and its user account.

    Raises:
        ConflictException: If the email is already registered
    """
    with transaction(db, "Failed to create ambulance"):
        user = build_user(db, data.email, data.password, data.name, UserRole.AMBULANCE)
        ambulance = Ambulance(
            user_id=user.id,
            latitude=data.latitude,
            longitude=data.longitude,
            status=data.status,
        )
        db.add(ambulance)
        db.flush()
        ambulance_id = ambulance.id
    logger.info(f"Ambulance {ambulance_id} created")
    return get_ambulance(db, ambulance_id)

def list_ambulances(
    db: Session,
    page_params: PageParams,
    search: Optional[str] = None,
    ambulance_status: Optional[AmbulanceStatus] = None
) -> PageResponse:
    """
    List ambulances page by page.

    Args:
        db: Database session
        page_params: Page number and size
        search: Case-insensitive partial match on name or email
        ambulance_status: Only ambulances in this status

    Returns:
        PageResponse: ``{"items": [...], "pagination": {...}}``
    """
    query = db.query(Ambulance).join(User).options(joinedload(Ambulance.user))
    if search:
        query = query.filter(or_(User.name.ilike(f"%{search}%"), User.email.ilike(f"%{search}%")))
    if ambulance_status is not None:
        query = query.filter(Ambulance.status == ambulance_status)
    return paginate(query.order_by(Ambulance.id), page_params, AmbulanceResponse)

def update_ambulance(db: Session, ambulance_id: int, data: AmbulanceUpdate) -> Ambulance:
    """
    Update position, status or account fields of an ambulance.

    Raises:
        NotFoundException: If the ambulance does not exist
        ConflictException: If the new email is taken
    """
    with transaction(db, "Failed to update ambulance"):
        ambulance = get_ambulance(db, ambulance_id)
        apply_account_changes(db, ambulance.user, email=data.email, password=data.password, name=data.name)
        changes = data.model_dump(exclude_unset=True, include={"latitude", "longitude", "status"})
        for field, value in changes.items():
            if field == "status" and value is None:
                continue
            setattr(ambulance, field, value)
    logger.info(f"Ambulance {ambulance_id} updated")
    return get_ambulance(db, ambulance_id)

def delete_ambulance(db: Session, ambulance_id: int) -> None:
    """
    Delete an ambulance when nothing in the future depends on it.

    Its past and canceled appointments are kept, canceled and detached.

    Raises:
        NotFoundException: If the ambulance does not exist
        PreconditionException: If future appointments still use it
    """
    with transaction(db, "Failed to delete ambulance"):
        ambulance = db.get(Ambulance, ambulance_id)
        if not ambulance:
            raise NotFoundException("Ambulance not found")
        ambulance_deletion.apply(db, ambulance)
    logger.info(f"Ambulance {ambulance_id} deleted")
