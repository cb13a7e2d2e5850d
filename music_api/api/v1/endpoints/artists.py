# ============================================================================
# FILE: music_api/api/v1/endpoints/artists.py
# ============================================================================
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import Optional
from music_api.api.dependencies import get_db, require_current_user
from music_api.db.models.user import User
from music_api.schemas.artist import ArtistCreate, ArtistData, ArtistListData, ArtistResponse, ArtistUpdate
from music_api.schemas.common import APIResponse
from music_api.schemas.song import ArtistDetailData, SongResponse
from music_api.services.catalog_service import catalog_service

router = APIRouter()


@router.get("", response_model=APIResponse[ArtistListData])
def list_artists(
    search: Optional[str] = Query(None, description="Match on artist name"),
    db: Session = Depends(get_db),
):
    """List artists sorted by name"""
    artists, total = catalog_service.find_artists(db, search)
    return APIResponse(
        data=ArtistListData(artists=[ArtistResponse.model_validate(a) for a in artists], total=total)
    )


@router.get("/{artist_id}", response_model=APIResponse[ArtistDetailData])
def get_artist(artist_id: int, db: Session = Depends(get_db)):
    """Get an artist with their public songs, newest first"""
    artist = catalog_service.get_artist(db, artist_id)
    songs = catalog_service.get_artist_songs(db, artist_id)
    return APIResponse(
        data=ArtistDetailData(
            artist=ArtistResponse.model_validate(artist),
            songs=[SongResponse.model_validate(song) for song in songs],
        )
    )


@router.post("", response_model=APIResponse[ArtistData], status_code=status.HTTP_201_CREATED)
def create_artist(
    artist_data: ArtistCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user),
):
    """
    Create an artist
    Requires authentication
    """
    artist = catalog_service.create_artist(db, artist_data)
    return APIResponse(
        message="Artist created successfully",
        data=ArtistData(artist=ArtistResponse.model_validate(artist)),
    )


@router.put("/{artist_id}", response_model=APIResponse[ArtistData])
def update_artist(
    artist_id: int,
    update_data: ArtistUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user),
):
    """
    Update artist details
    Requires authentication
    """
    artist = catalog_service.update_artist(db, artist_id, update_data)
    return APIResponse(
        message="Artist updated successfully",
        data=ArtistData(artist=ArtistResponse.model_validate(artist)),
    )


@router.delete("/{artist_id}", response_model=APIResponse)
def delete_artist(
    artist_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user),
):
    """
    Delete an artist no song refers to
    Requires authentication
    """
    catalog_service.delete_artist(db, artist_id)
    return APIResponse(message="Artist deleted successfully")
