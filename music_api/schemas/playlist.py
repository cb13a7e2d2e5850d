# ============================================================================
# FILE: music_api/schemas/playlist.py
# ============================================================================
from pydantic import BaseModel, Field, field_validator
from typing import Optional, List
from datetime import datetime
from music_api.schemas.common import clean_text
from music_api.schemas.song import SongResponse


class PlaylistCreate(BaseModel):
    """Schema for creating a playlist"""
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=500)

    @field_validator("name", "description", mode="before")
    @classmethod
    def strip_text(cls, value):
        return clean_text(value) if isinstance(value, str) else value


class PlaylistUpdate(BaseModel):
    """Schema for updating a playlist; membership is never changed here"""
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    cover_image_url: Optional[str] = None

    @field_validator("name", "description", mode="before")
    @classmethod
    def strip_text(cls, value):
        return clean_text(value) if isinstance(value, str) else value


class PlaylistSongAdd(BaseModel):
    """Schema for adding a song to playlist"""
    song_id: int


class PlaylistOwner(BaseModel):
    id: int
    username: str

    class Config:
        from_attributes = True


class PlaylistResponse(BaseModel):
    """Schema for playlist response, songs in membership order"""
    id: int
    name: str
    description: Optional[str] = None
    cover_image_url: Optional[str] = None
    owner: PlaylistOwner
    songs: List[SongResponse] = []
    total_duration: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class PlaylistData(BaseModel):
    playlist: PlaylistResponse


class PlaylistListData(BaseModel):
    playlists: List[PlaylistResponse]
    total: int
