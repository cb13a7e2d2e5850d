# ============================================================================
# FILE: music_api/services/playlist_service.py
# ============================================================================
from typing import List
from sqlalchemy import case, delete, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload
from music_api.db.models.playlist import Playlist, PlaylistSong
from music_api.db.models.song import Song
from music_api.schemas.playlist import PlaylistCreate, PlaylistUpdate
from music_api.services.catalog_service import catalog_service
from music_api.core.errors import ForbiddenError, PlaylistNotFoundError
import logging

logger = logging.getLogger(__name__)

# Loads members in order with their artists for populated responses
POPULATED = (
    selectinload(Playlist.entries).selectinload(PlaylistSong.song).selectinload(Song.artist),
    selectinload(Playlist.owner),
)


class PlaylistService:
    """
    Service layer for playlist operations.

    ``total_duration`` is kept equal to the sum of member song durations by
    adjusting it in the same transaction as each membership change, using SQL
    arithmetic on the stored value so concurrent requests cannot lose updates.
    """

    def create_playlist(self, db: Session, owner_id: int, playlist_data: PlaylistCreate) -> Playlist:
        """Create an empty playlist owned by ``owner_id``"""
        try:
            playlist = Playlist(
                user_id=owner_id,
                name=playlist_data.name,
                description=playlist_data.description,
                total_duration=0,
            )
            db.add(playlist)
            db.commit()
            logger.info(f"Playlist created: {playlist.id} for user {owner_id}")
        except Exception as e:
            db.rollback()
            logger.error(f"Error creating playlist: {e}")
            raise
        return self.get_playlist(db, playlist.id)

    def get_user_playlists(self, db: Session, owner_id: int) -> List[Playlist]:
        """Get all playlists for a user, newest first"""
        return (
            db.query(Playlist)
            .options(*POPULATED)
            .filter(Playlist.user_id == owner_id)
            .order_by(Playlist.created_at.desc(), Playlist.id.desc())
            .all()
        )

    def get_playlist(self, db: Session, playlist_id: int) -> Playlist:
        """Get a playlist with songs and artists populated"""
        playlist = (
            db.query(Playlist)
            .options(*POPULATED)
            .filter(Playlist.id == playlist_id)
            .populate_existing()
            .first()
        )
        if playlist is None:
            raise PlaylistNotFoundError()
        return playlist

    def get_owned_playlist(self, db: Session, playlist_id: int, user_id: int) -> Playlist:
        """Get a playlist and verify ``user_id`` owns it"""
        playlist = self.get_playlist(db, playlist_id)
        if playlist.user_id != user_id:
            raise ForbiddenError("Not authorized to modify this playlist")
        return playlist

    def update_playlist(self, db: Session, playlist_id: int, update_data: PlaylistUpdate) -> Playlist:
        """Update name, description and cover image; membership is left alone"""
        playlist = self.get_playlist(db, playlist_id)

        try:
            if update_data.name is not None:
                playlist.name = update_data.name
            if update_data.description is not None:
                playlist.description = update_data.description
            if update_data.cover_image_url is not None:
                playlist.cover_image_url = update_data.cover_image_url

            db.commit()
            logger.info(f"Playlist updated: {playlist_id}")
        except Exception as e:
            db.rollback()
            logger.error(f"Error updating playlist: {e}")
            raise
        return self.get_playlist(db, playlist_id)

    def delete_playlist(self, db: Session, playlist_id: int) -> None:
        """
        Delete a playlist and its membership rows.

        The owner's playlist list is the inverse of ``Playlist.user_id``, so
        the back-reference goes away in the same transaction as the record.
        """
        playlist = self.get_playlist(db, playlist_id)

        try:
            db.delete(playlist)
            db.commit()
            logger.info(f"Playlist deleted: {playlist_id}")
        except Exception as e:
            db.rollback()
            logger.error(f"Error deleting playlist: {e}")
            raise

    def add_song(self, db: Session, playlist_id: int, song_id: int) -> Playlist:
        """
        Append a song and grow ``total_duration`` by its duration.

        Adding a song that is already a member changes nothing. The unique
        (playlist_id, song_id) constraint settles concurrent adds of the same
        song: the losing insert is rolled back before the duration moves.
        """
        playlist = self.get_playlist(db, playlist_id)
        song = catalog_service.get_song(db, song_id)

        if song.id in playlist.song_ids:
            logger.info(f"Song already in playlist {playlist_id}: {song_id}")
            return playlist

        try:
            db.add(PlaylistSong(playlist_id=playlist.id, song_id=song.id))
            db.flush()
            db.execute(
                update(Playlist)
                .where(Playlist.id == playlist.id)
                .values(total_duration=Playlist.total_duration + song.duration)
                .execution_options(synchronize_session=False)
            )
            db.commit()
            logger.info(f"Song added to playlist {playlist_id}: {song_id}")
        except IntegrityError:
            db.rollback()
            logger.info(f"Song already in playlist {playlist_id}: {song_id}")
        except Exception as e:
            db.rollback()
            logger.error(f"Error adding song to playlist: {e}")
            raise
        return self.get_playlist(db, playlist_id)

    def remove_song(self, db: Session, playlist_id: int, song_id: int) -> Playlist:
        """
        Remove a song and shrink ``total_duration`` by its duration.

        Unknown songs and songs that are not members are ignored. The decrement
        is ``min(total_duration, duration)`` so the total never goes negative,
        and it only happens when this call actually deleted the membership row.
        """
        playlist = self.get_playlist(db, playlist_id)
        song = db.get(Song, song_id)

        if song is None or song.id not in playlist.song_ids:
            return playlist

        try:
            removed = db.execute(
                delete(PlaylistSong)
                .where(PlaylistSong.playlist_id == playlist.id, PlaylistSong.song_id == song.id)
                .execution_options(synchronize_session=False)
            ).rowcount
            if removed:
                db.execute(
                    update(Playlist)
                    .where(Playlist.id == playlist.id)
                    .values(
                        total_duration=case(
                            (Playlist.total_duration > song.duration, Playlist.total_duration - song.duration),
                            else_=0,
                        )
                    )
                    .execution_options(synchronize_session=False)
                )
            db.commit()
            logger.info(f"Song removed from playlist {playlist_id}: {song_id}")
        except Exception as e:
            db.rollback()
            logger.error(f"Error removing song from playlist: {e}")
            raise
        return self.get_playlist(db, playlist_id)


# Create singleton instance
playlist_service = PlaylistService()
