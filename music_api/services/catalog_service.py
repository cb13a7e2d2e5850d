# ============================================================================
# FILE: music_api/services/catalog_service.py
# ============================================================================
from typing import List, Optional, Tuple
from sqlalchemy import func, update
from sqlalchemy.orm import Session, selectinload
from music_api.db.models.artist import Artist
from music_api.db.models.song import Song
from music_api.schemas.artist import ArtistCreate, ArtistUpdate
from music_api.schemas.song import SongCreate, SongFilter
from music_api.core.errors import (
    ArtistNotFoundError,
    DuplicateKeyError,
    EntityInUseError,
    SongNotFoundError,
)
import logging

logger = logging.getLogger(__name__)

NEWEST_FIRST = (Song.created_at.desc(), Song.id.desc())
MOST_PLAYED = (Song.play_count.desc(), Song.created_at.desc(), Song.id.desc())


def _contains(text: str) -> str:
    """LIKE pattern matching ``text`` literally anywhere, escaped with a backslash"""
    escaped = text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class CatalogService:
    """Catalog store: songs and artists"""

    # ------------------------------------------------------------------ songs

    def find_songs(self, db: Session, filters: SongFilter, order_by=NEWEST_FIRST) -> Tuple[List[Song], int]:
        """
        Filtered song listing, newest first by default.

        ``genre`` is a case-insensitive substring match, ``artist`` an exact
        artist id and ``search`` uses the database's text matching on titles.
        Returns the songs and the total matching count.
        """
        query = db.query(Song)
        if filters.is_public is not None:
            query = query.filter(Song.is_public == filters.is_public)
        if filters.genre:
            query = query.filter(Song.genre.ilike(_contains(filters.genre), escape="\\"))
        if filters.artist is not None:
            query = query.filter(Song.artist_id == filters.artist)
        if filters.search:
            query = query.filter(Song.title.ilike(_contains(filters.search), escape="\\"))

        total = query.count()
        songs = query.options(selectinload(Song.artist)).order_by(*order_by).all()
        return songs, total

    def popular_songs(self, db: Session, limit: int = 10) -> List[Song]:
        """Most played public songs"""
        return (
            db.query(Song)
            .options(selectinload(Song.artist))
            .filter(Song.is_public.is_(True))
            .order_by(*MOST_PLAYED)
            .limit(limit)
            .all()
        )

    def get_song(self, db: Session, song_id: int) -> Song:
        song = db.query(Song).options(selectinload(Song.artist)).filter(Song.id == song_id).first()
        if song is None:
            raise SongNotFoundError()
        return song

    def increment_play_count(self, db: Session, song_id: int) -> None:
        """Bump the play counter with a single UPDATE; the caller's copy is not refreshed"""
        try:
            db.execute(
                update(Song)
                .where(Song.id == song_id)
                .values(play_count=Song.play_count + 1)
                .execution_options(synchronize_session=False)
            )
            db.commit()
        except Exception as e:
            db.rollback()
            logger.error(f"Error incrementing play count for song {song_id}: {e}")
            raise

    def create_song(self, db: Session, uploader_id: int, song_data: SongCreate) -> Song:
        """Create a song uploaded by ``uploader_id``; the artist must exist"""
        self.get_artist(db, song_data.artist_id)
        try:
            song = Song(
                title=song_data.title,
                artist_id=song_data.artist_id,
                duration=song_data.duration,
                genre=song_data.genre.value,
                file_url=song_data.file_url,
                thumbnail_url=song_data.thumbnail_url,
                lyrics=song_data.lyrics,
                is_public=song_data.is_public,
                uploaded_by=uploader_id,
            )
            db.add(song)
            db.commit()
            db.refresh(song)
            logger.info(f"Song created: {song.id} by user {uploader_id}")
            return song
        except Exception as e:
            db.rollback()
            logger.error(f"Error creating song: {e}")
            raise

    # ---------------------------------------------------------------- artists

    def find_artists(self, db: Session, search: Optional[str] = None) -> Tuple[List[Artist], int]:
        """Artists sorted by name ascending, optionally matched on name"""
        query = db.query(Artist)
        if search:
            query = query.filter(Artist.name.ilike(_contains(search), escape="\\"))
        total = query.count()
        return query.order_by(Artist.name.asc()).all(), total

    def get_artist(self, db: Session, artist_id: int) -> Artist:
        artist = db.get(Artist, artist_id)
        if artist is None:
            raise ArtistNotFoundError()
        return artist

    def get_artist_songs(self, db: Session, artist_id: int) -> List[Song]:
        songs, _ = self.find_songs(db, SongFilter(is_public=True, artist=artist_id))
        return songs

    def _ensure_artist_name_free(self, db: Session, name: str, exclude_id: Optional[int] = None) -> None:
        query = db.query(Artist.id).filter(Artist.name == name)
        if exclude_id is not None:
            query = query.filter(Artist.id != exclude_id)
        if query.first() is not None:
            raise DuplicateKeyError("name")

    def create_artist(self, db: Session, artist_data: ArtistCreate) -> Artist:
        self._ensure_artist_name_free(db, artist_data.name)
        try:
            artist = Artist(name=artist_data.name, bio=artist_data.bio, image_url=artist_data.image_url)
            db.add(artist)
            db.commit()
            db.refresh(artist)
            logger.info(f"Artist created: {artist.id} ({artist.name})")
            return artist
        except Exception as e:
            db.rollback()
            logger.error(f"Error creating artist: {e}")
            raise

    def update_artist(self, db: Session, artist_id: int, update_data: ArtistUpdate) -> Artist:
        artist = self.get_artist(db, artist_id)
        if update_data.name is not None and update_data.name != artist.name:
            self._ensure_artist_name_free(db, update_data.name, exclude_id=artist.id)

        try:
            if update_data.name is not None:
                artist.name = update_data.name
            if update_data.bio is not None:
                artist.bio = update_data.bio
            if update_data.image_url is not None:
                artist.image_url = update_data.image_url

            db.commit()
            db.refresh(artist)
            logger.info(f"Artist updated: {artist_id}")
            return artist
        except Exception as e:
            db.rollback()
            logger.error(f"Error updating artist: {e}")
            raise

    def delete_artist(self, db: Session, artist_id: int) -> None:
        """Delete an artist that no song references any more"""
        artist = self.get_artist(db, artist_id)
        song_count = db.query(func.count(Song.id)).filter(Song.artist_id == artist_id).scalar()
        if song_count:
            raise EntityInUseError(
                f"Artist is referenced by {song_count} song(s) and cannot be deleted"
            )

        try:
            db.delete(artist)
            db.commit()
            logger.info(f"Artist deleted: {artist_id}")
        except Exception as e:
            db.rollback()
            logger.error(f"Error deleting artist: {e}")
            raise


# Create singleton instance
catalog_service = CatalogService()
