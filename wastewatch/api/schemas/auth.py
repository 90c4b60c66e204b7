"""
Auth schemas - pydantic models for signup, login and profile updates.
"""

from typing import Optional
from pydantic import BaseModel, EmailStr, Field, field_validator


class SignupRequest(BaseModel):
    """All fields are required."""
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=1, max_length=100)
    confirm_password: str = Field(..., min_length=1, max_length=100)
    state: str = Field(..., min_length=1, max_length=50)
    city: str = Field(..., min_length=1, max_length=50)

    @field_validator('name', 'state', 'city')
    @classmethod
    def not_blank(cls, v):
        if not v.strip():
            raise ValueError('must not be blank')
        return v.strip()


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class ProfileUpdate(BaseModel):
    """Only the fields sent are changed."""
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    bio: Optional[str] = Field(None, max_length=2000)
    state: Optional[str] = Field(None, min_length=1, max_length=50)
    city: Optional[str] = Field(None, min_length=1, max_length=50)
    profile_picture: Optional[str] = Field(None, max_length=255)

    @field_validator('name', 'state', 'city')
    @classmethod
    def not_blank(cls, v):
        if v is None:
            return v
        if not v.strip():
            raise ValueError('must not be blank')
        return v.strip()
