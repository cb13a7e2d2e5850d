# ============================================================================
# FILE: music_api/db/models/song.py
# ============================================================================
from sqlalchemy import Boolean, CheckConstraint, Column, DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import relationship
from music_api.db.base import Base, utcnow


class Song(Base):
    """Uploaded song in the catalog"""
    __tablename__ = "songs"
    __table_args__ = (
        CheckConstraint("duration >= 1", name="ck_songs_duration_positive"),
        CheckConstraint("play_count >= 0", name="ck_songs_play_count_non_negative"),
        Index("ix_songs_public_created", "is_public", "created_at"),
    )

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(100), index=True, nullable=False)
    artist_id = Column(Integer, ForeignKey("artists.id"), index=True, nullable=False)
    duration = Column(Integer, nullable=False)  # seconds
    genre = Column(String(50), index=True, nullable=False)
    file_url = Column(String, nullable=False)
    thumbnail_url = Column(String, nullable=True)
    lyrics = Column(Text, nullable=True)
    is_public = Column(Boolean, default=True, nullable=False)
    play_count = Column(Integer, default=0, nullable=False)
    uploaded_by = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    # Relationships
    artist = relationship("Artist", back_populates="songs")
