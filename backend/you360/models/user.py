"""
User Model - Defines the user data structure.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, EmailStr, Field


class UserBase(BaseModel):
    """Base user model with common fields."""
    name: str = Field(..., min_length=1, max_length=80)
    email: EmailStr


class UserCreate(UserBase):
    """Signup payload."""
    password: str = Field(..., min_length=6)


class UserLogin(BaseModel):
    """Login payload."""
    email: EmailStr
    password: str


class User(UserBase):
    """User model with all public fields."""
    user_id: str
    created_at: datetime
    updated_at: datetime
    is_active: bool = True

    class Config:
        from_attributes = True


class UserInDB(User):
    """User model as stored with hashed password."""
    hashed_password: str


class AuthResponse(BaseModel):
    """Issued token plus the user it belongs to."""
    token: str
    user: User


class TokenData(BaseModel):
    """Token payload data."""
    user_id: Optional[str] = None
    email: Optional[str] = None
