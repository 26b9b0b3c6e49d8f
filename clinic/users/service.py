"""
User Service - account creation and updates shared by the profile services.

Nothing here commits; callers own the transaction.
"""
from typing import Optional
from sqlalchemy.orm import Session
import logging

from ..core.security import hash_password
from ..exceptions import ConflictException
from .models import User, UserRole

# Set up logging
logger = logging.getLogger(__name__)

def ensure_email_available(db: Session, email: str, exclude_user_id: Optional[int] = None) -> None:
    """
    Reject an email that already belongs to another user.
    
    Args:
        db: Database session
        email: Email to check
        exclude_user_id: User allowed to keep this email (the one being updated)
        
    Raises:
        ConflictException: If another user already uses the email
    """
    query = db.query(User.id).filter(User.email == email)
    if exclude_user_id is not None:
        query = query.filter(User.id != exclude_user_id)
    if query.first() is not None:
        raise ConflictException("Email already in use", f"{email} is registered to another account")

def build_user(db: Session, email: str, password: str, name: Optional[str], role: UserRole) -> User:
    """
    Stage a new user in the session after checking the email is free.
    
    Returns:
        User: The pending user (flushed, so its id is available)
    """
    ensure_email_available(db, email)
    user = User(email=email, password=hash_password(password), name=name, role=role)
    db.add(user)
    db.flush()
    return user

def apply_account_changes(
    db: Session,
    user: User,
    email: Optional[str] = None,
    password: Optional[str] = None,
    name: Optional[str] = None
) -> None:
    """
    Apply the account part of a profile update.
    
    Raises:
        ConflictException: If the new email belongs to another user
    """
    if email and email != user.email:
        ensure_email_available(db, email, exclude_user_id=user.id)
        user.email = email
    if password:
        user.password = hash_password(password)
    if name:
        user.name = name
