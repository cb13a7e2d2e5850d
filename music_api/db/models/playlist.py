# ============================================================================
# FILE: music_api/db/models/playlist.py
# ============================================================================
from sqlalchemy import CheckConstraint, Column, Integer, String, DateTime, ForeignKey, Text, UniqueConstraint
from sqlalchemy.orm import relationship
from music_api.db.base import Base, utcnow


class Playlist(Base):
    """Playlist model for user-created playlists"""
    __tablename__ = "playlists"
    __table_args__ = (
        CheckConstraint("total_duration >= 0", name="ck_playlists_total_duration_non_negative"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False)
    name = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)
    cover_image_url = Column(String, nullable=True)
    # Sum of member song durations, maintained on every membership change
    total_duration = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    # Relationships
    owner = relationship("User", back_populates="playlists")
    entries = relationship(
        "PlaylistSong",
        back_populates="playlist",
        cascade="all, delete-orphan",
        order_by="PlaylistSong.id",
    )

    @property
    def songs(self):
        return [entry.song for entry in self.entries]

    @property
    def song_ids(self):
        return [entry.song_id for entry in self.entries]


class PlaylistSong(Base):
    """Membership row; a song appears at most once per playlist, ordered by id"""
    __tablename__ = "playlist_songs"
    __table_args__ = (
        UniqueConstraint("playlist_id", "song_id", name="uq_playlist_songs_playlist_song"),
    )

    id = Column(Integer, primary_key=True, index=True)
    playlist_id = Column(Integer, ForeignKey("playlists.id", ondelete="CASCADE"), index=True, nullable=False)
    song_id = Column(Integer, ForeignKey("songs.id"), nullable=False)
    added_at = Column(DateTime, default=utcnow)

    # Relationships
    playlist = relationship("Playlist", back_populates="entries")
    song = relationship("Song")
