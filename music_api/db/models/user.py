# ============================================================================
# FILE: music_api/db/models/user.py
# ============================================================================
from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship
from music_api.db.base import Base, utcnow


class User(Base):
    """User model for authentication and playlist ownership"""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(30), unique=True, index=True, nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)  # stored lower-cased
    hashed_password = Column(String, nullable=False)
    created_at = Column(DateTime, default=utcnow)

    # Back-references to owned playlists; deleting a user deletes them too
    playlists = relationship(
        "Playlist",
        back_populates="owner",
        cascade="all, delete-orphan",
        order_by="Playlist.created_at.desc()",
    )

    @property
    def playlist_ids(self):
        return [playlist.id for playlist in self.playlists]
