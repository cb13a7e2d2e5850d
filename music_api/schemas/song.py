# ============================================================================
# FILE: music_api/schemas/song.py
# ============================================================================
from enum import Enum
from pydantic import BaseModel, Field, field_validator
from typing import List, Optional
from datetime import datetime
from music_api.schemas.artist import ArtistRef, ArtistResponse
from music_api.schemas.common import clean_text


class Genre(str, Enum):
    ROCK = "Rock"
    POP = "Pop"
    HIP_HOP = "Hip Hop"
    RNB = "R&B"
    COUNTRY = "Country"
    ELECTRONIC = "Electronic"
    CLASSICAL = "Classical"
    JAZZ = "Jazz"
    BLUES = "Blues"
    FOLK = "Folk"
    REGGAE = "Reggae"
    PUNK = "Punk"
    METAL = "Metal"
    ALTERNATIVE = "Alternative"
    INDIE = "Indie"
    DANCE = "Dance"
    LATIN = "Latin"
    WORLD = "World"
    SOUNDTRACK = "Soundtrack"
    OTHER = "Other"


class SongCreate(BaseModel):
    """Schema for uploading a song"""
    title: str = Field(..., min_length=1, max_length=100)
    artist_id: int
    duration: int = Field(..., ge=1, description="Duration in seconds")
    genre: Genre
    file_url: str = Field(..., min_length=1)
    thumbnail_url: Optional[str] = None
    lyrics: Optional[str] = None
    is_public: bool = True

    @field_validator("title", mode="before")
    @classmethod
    def strip_title(cls, value):
        return clean_text(value) if isinstance(value, str) else value


class SongFilter(BaseModel):
    """Filters understood by the catalog song query"""
    is_public: Optional[bool] = True
    genre: Optional[str] = None
    artist: Optional[int] = None
    search: Optional[str] = None


class SongResponse(BaseModel):
    """Schema for song information"""
    id: int
    title: str
    artist: Optional[ArtistRef] = None
    duration: int
    genre: str
    file_url: str
    thumbnail_url: Optional[str] = None
    lyrics: Optional[str] = None
    is_public: bool
    play_count: int
    uploaded_by: Optional[int] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class SongData(BaseModel):
    song: SongResponse


class SongListData(BaseModel):
    songs: List[SongResponse]
    total: int


class PopularSongsData(BaseModel):
    songs: List[SongResponse]


class ArtistDetailData(BaseModel):
    artist: ArtistResponse
    songs: List[SongResponse]
