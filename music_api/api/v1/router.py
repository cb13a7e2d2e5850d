# ============================================================================
# FILE: music_api/api/v1/router.py
# ============================================================================
from fastapi import APIRouter
from music_api.api.v1.endpoints import artists, auth, playlists, songs

api_router = APIRouter()

# Include all endpoint routers
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(songs.router, prefix="/songs", tags=["songs"])
api_router.include_router(artists.router, prefix="/artists", tags=["artists"])
api_router.include_router(playlists.router, prefix="/playlists", tags=["playlists"])
