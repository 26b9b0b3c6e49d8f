"""
Ambulance Router - API endpoints for ambulance management.
"""
from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from ..core.pagination import PageParams, PageResponse
from ..core.schemas import MessageResponse
from ..database import get_db
from .models import AmbulanceStatus
from .schemas import AmbulanceCreate, AmbulanceUpdate, AmbulanceResponse, AmbulanceDetailResponse
from .service import (
    create_ambulance,
    list_ambulances,
    get_ambulance,
    update_ambulance,
    delete_ambulance,
)

router = APIRouter()

@router.post("", response_model=AmbulanceResponse, status_code=status.HTTP_201_CREATED)
async def create(ambulance_data: AmbulanceCreate, db: Session = Depends(get_db)):
    """Register an ambulance crew"""
    return create_ambulance(db, ambulance_data)

@router.get("", response_model=PageResponse[AmbulanceResponse])
async def list_all(
    page_params: PageParams = Depends(),
    search: Optional[str] = Query(None, description="Search by name or email"),
    ambulance_status: Optional[AmbulanceStatus] = Query(None, alias="status"),
    db: Session = Depends(get_db)
):
    """
    List ambulances

    Paginated with ``page`` and ``limit``.
    """
    return list_ambulances(db, page_params, search, ambulance_status)

@router.get("/{ambulance_id}", response_model=AmbulanceDetailResponse)
async def get_one(ambulance_id: int, db: Session = Depends(get_db)):
    """Get an ambulance with its appointments and ratings"""
    return get_ambulance(db, ambulance_id)

@router.put("/{ambulance_id}", response_model=AmbulanceDetailResponse)
async def update(ambulance_id: int, ambulance_data: AmbulanceUpdate, db: Session = Depends(get_db)):
    """Update an ambulance's position, status or account"""
    return update_ambulance(db, ambulance_id, ambulance_data)

@router.delete("/{ambulance_id}", response_model=MessageResponse)
async def delete(ambulance_id: int, db: Session = Depends(get_db)):
    """
    Delete an ambulance

    Refused with 400 while a future, non-canceled appointment uses it.
    Otherwise its appointments are canceled and detached, and the ambulance,
    its ratings and its user account are removed.
    """
    delete_ambulance(db, ambulance_id)
    return MessageResponse(message="Ambulance deleted successfully", deleted_id=ambulance_id)
