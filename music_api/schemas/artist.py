# ============================================================================
# FILE: music_api/schemas/artist.py
# ============================================================================
from pydantic import BaseModel, Field, field_validator
from typing import List, Optional
from datetime import datetime
from music_api.schemas.common import clean_text


class ArtistCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    bio: Optional[str] = Field(None, max_length=1000)
    image_url: Optional[str] = None

    @field_validator("name", "bio", mode="before")
    @classmethod
    def strip_text(cls, value):
        return clean_text(value) if isinstance(value, str) else value


class ArtistUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    bio: Optional[str] = Field(None, max_length=1000)
    image_url: Optional[str] = None

    @field_validator("name", "bio", mode="before")
    @classmethod
    def strip_text(cls, value):
        return clean_text(value) if isinstance(value, str) else value


class ArtistRef(BaseModel):
    """Artist as embedded in a song"""
    id: int
    name: str
    image_url: Optional[str] = None

    class Config:
        from_attributes = True


class ArtistResponse(BaseModel):
    id: int
    name: str
    bio: Optional[str] = None
    image_url: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class ArtistData(BaseModel):
    artist: ArtistResponse


class ArtistListData(BaseModel):
    artists: List[ArtistResponse]
    total: int
