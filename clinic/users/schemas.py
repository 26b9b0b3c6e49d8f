"""
User Schemas - fields shared by every profile that owns an account.
"""
from typing import Optional
from pydantic import EmailStr, Field
from ..core.schemas import CamelModel

class AccountCreate(CamelModel):
    """
    Account fields required when a profile is created
    
    Fields:
    - email: Login email, unique across all users
    - password: Plain text password (hashed before storage)
    - name: Display name (optional)
    """
    email: EmailStr
    password: str = Field(..., min_length=6)
    name: Optional[str] = None

class AccountUpdate(CamelModel):
    """Account fields that may be changed through a profile update"""
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(None, min_length=6)
    name: Optional[str] = Field(None, min_length=2)
