# ============================================================================
# FILE: music_api/schemas/user.py
# ============================================================================
from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import List, Optional
from datetime import datetime
from music_api.schemas.common import clean_text


class UserCreate(BaseModel):
    """Schema for user registration"""
    username: str = Field(..., min_length=3, max_length=30)
    email: EmailStr
    password: str = Field(..., min_length=6)

    @field_validator("username", mode="before")
    @classmethod
    def strip_username(cls, value):
        return clean_text(value) if isinstance(value, str) else value

    @field_validator("email")
    @classmethod
    def lower_email(cls, value: str) -> str:
        return value.lower()


class UserLogin(BaseModel):
    """Schema for user login; ``login`` is an email or a username"""
    login: Optional[str] = None
    password: Optional[str] = None


class PlaylistSummary(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    cover_image_url: Optional[str] = None

    class Config:
        from_attributes = True


class UserResponse(BaseModel):
    """Schema for user response (never carries the password hash)"""
    id: int
    username: str
    email: str
    created_at: datetime

    class Config:
        from_attributes = True


class UserProfile(UserResponse):
    playlists: List[PlaylistSummary] = []


class AuthData(BaseModel):
    user: UserResponse
    token: str


class TokenData(BaseModel):
    token: str


class UserData(BaseModel):
    user: UserProfile
