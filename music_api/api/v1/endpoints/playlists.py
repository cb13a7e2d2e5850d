# ============================================================================
# FILE: music_api/api/v1/endpoints/playlists.py
# ============================================================================
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from music_api.api.dependencies import get_db, require_current_user
from music_api.db.models.user import User
from music_api.schemas.common import APIResponse
from music_api.schemas.playlist import (
    PlaylistCreate,
    PlaylistData,
    PlaylistListData,
    PlaylistResponse,
    PlaylistSongAdd,
    PlaylistUpdate,
)
from music_api.services.playlist_service import playlist_service

# Every playlist route needs an authenticated user
router = APIRouter(dependencies=[Depends(require_current_user)])


def _playlist_data(playlist) -> PlaylistData:
    return PlaylistData(playlist=PlaylistResponse.model_validate(playlist))


@router.get("", response_model=APIResponse[PlaylistListData])
def get_my_playlists(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user),
):
    """Get all playlists for the current user, newest first"""
    playlists = playlist_service.get_user_playlists(db, current_user.id)
    return APIResponse(
        data=PlaylistListData(
            playlists=[PlaylistResponse.model_validate(p) for p in playlists],
            total=len(playlists),
        )
    )


@router.get("/{playlist_id}", response_model=APIResponse[PlaylistData])
def get_playlist(playlist_id: int, db: Session = Depends(get_db)):
    """Get a playlist with its owner and songs"""
    playlist = playlist_service.get_playlist(db, playlist_id)
    return APIResponse(data=_playlist_data(playlist))


@router.post("", response_model=APIResponse[PlaylistData], status_code=status.HTTP_201_CREATED)
def create_playlist(
    playlist_data: PlaylistCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user),
):
    """Create an empty playlist owned by the current user"""
    playlist = playlist_service.create_playlist(db, current_user.id, playlist_data)
    return APIResponse(message="Playlist created successfully", data=_playlist_data(playlist))


@router.put("/{playlist_id}", response_model=APIResponse[PlaylistData])
def update_playlist(
    playlist_id: int,
    update_data: PlaylistUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user),
):
    """
    Update playlist details (name, description, cover image)
    Requires ownership
    """
    playlist_service.get_owned_playlist(db, playlist_id, current_user.id)
    playlist = playlist_service.update_playlist(db, playlist_id, update_data)
    return APIResponse(message="Playlist updated successfully", data=_playlist_data(playlist))


@router.post("/{playlist_id}/songs", response_model=APIResponse[PlaylistData])
def add_song_to_playlist(
    playlist_id: int,
    song_data: PlaylistSongAdd,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user),
):
    """
    Add a song to a playlist (no-op if it is already there)
    Requires ownership
    """
    playlist_service.get_owned_playlist(db, playlist_id, current_user.id)
    playlist = playlist_service.add_song(db, playlist_id, song_data.song_id)
    return APIResponse(message="Song added to playlist successfully", data=_playlist_data(playlist))


@router.delete("/{playlist_id}/songs/{song_id}", response_model=APIResponse[PlaylistData])
def remove_song_from_playlist(
    playlist_id: int,
    song_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user),
):
    """
    Remove a song from a playlist
    Requires ownership
    """
    playlist_service.get_owned_playlist(db, playlist_id, current_user.id)
    playlist = playlist_service.remove_song(db, playlist_id, song_id)
    return APIResponse(message="Song removed from playlist successfully", data=_playlist_data(playlist))


@router.delete("/{playlist_id}", response_model=APIResponse)
def delete_playlist(
    playlist_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user),
):
    """
    Delete a playlist
    Requires ownership
    """
    playlist_service.get_owned_playlist(db, playlist_id, current_user.id)
    playlist_service.delete_playlist(db, playlist_id)
    return APIResponse(message="Playlist deleted successfully")
