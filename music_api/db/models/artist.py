# ============================================================================
# FILE: music_api/db/models/artist.py
# ============================================================================
from sqlalchemy import Column, Integer, String, DateTime, Text
from sqlalchemy.orm import relationship
from music_api.db.base import Base, utcnow


class Artist(Base):
    """Artist referenced by songs; its lifetime is independent of them"""
    __tablename__ = "artists"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), unique=True, index=True, nullable=False)
    bio = Column(Text, nullable=True)
    image_url = Column(String, nullable=True)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    songs = relationship("Song", back_populates="artist")
