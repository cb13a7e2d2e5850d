# ============================================================================
# FILE: music_api/api/v1/endpoints/songs.py
# ============================================================================
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import Optional
from music_api.api.dependencies import get_cache, get_current_user, get_db, get_settings, require_current_user
from music_api.config import Settings
from music_api.core.cache import RedisCache
from music_api.core.errors import SongNotFoundError
from music_api.db.models.user import User
from music_api.schemas.common import APIResponse
from music_api.schemas.song import PopularSongsData, SongCreate, SongData, SongFilter, SongListData, SongResponse
from music_api.services.catalog_service import catalog_service
import logging

logger = logging.getLogger(__name__)
router = APIRouter()

POPULAR_CACHE_KEY = "songs:popular:top"


@router.get("", response_model=APIResponse[SongListData])
def list_songs(
    genre: Optional[str] = Query(None, description="Case-insensitive genre match"),
    artist: Optional[int] = Query(None, description="Artist id"),
    search: Optional[str] = Query(None, description="Text search on titles"),
    db: Session = Depends(get_db),
):
    """
    List public songs, newest first
    Available to all users (authenticated and anonymous)
    """
    filters = SongFilter(is_public=True, genre=genre, artist=artist, search=search)
    songs, total = catalog_service.find_songs(db, filters)
    return APIResponse(
        data=SongListData(songs=[SongResponse.model_validate(song) for song in songs], total=total)
    )


@router.get("/popular/top", response_model=APIResponse[PopularSongsData])
def popular_songs(
    db: Session = Depends(get_db),
    cache: RedisCache = Depends(get_cache),
    settings: Settings = Depends(get_settings),
):
    """
    Top ten public songs by play count
    Results are cached in Redis for a short time
    """
    cached = cache.get(POPULAR_CACHE_KEY)
    if cached is not None:
        logger.info("Cache hit for popular songs")
        return APIResponse(data=PopularSongsData(songs=cached))

    songs = [SongResponse.model_validate(song) for song in catalog_service.popular_songs(db)]
    cache.set(
        POPULAR_CACHE_KEY,
        [song.model_dump(mode="json") for song in songs],
        settings.POPULAR_CACHE_SECONDS,
    )
    return APIResponse(data=PopularSongsData(songs=songs))


@router.get("/{song_id}", response_model=APIResponse[SongData])
def get_song(
    song_id: int,
    db: Session = Depends(get_db),
    current_user: Optional[User] = Depends(get_current_user),
):
    """
    Get a song and count the play
    Private songs are only visible to the user who uploaded them
    """
    song = catalog_service.get_song(db, song_id)
    if not song.is_public and (current_user is None or song.uploaded_by != current_user.id):
        raise SongNotFoundError()

    payload = SongResponse.model_validate(song)
    catalog_service.increment_play_count(db, song.id)
    return APIResponse(data=SongData(song=payload))


@router.post("", response_model=APIResponse[SongData], status_code=status.HTTP_201_CREATED)
def create_song(
    song_data: SongCreate,
    db: Session = Depends(get_db),
    cache: RedisCache = Depends(get_cache),
    current_user: User = Depends(require_current_user),
):
    """
    Upload a song for an existing artist
    Requires authentication
    """
    song = catalog_service.create_song(db, current_user.id, song_data)
    if song.is_public:
        cache.delete(POPULAR_CACHE_KEY)
    return APIResponse(
        message="Song created successfully",
        data=SongData(song=SongResponse.model_validate(song)),
    )
