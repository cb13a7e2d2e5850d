from music_api.db.models.artist import Artist
from music_api.db.models.playlist import Playlist, PlaylistSong
from music_api.db.models.song import Song
from music_api.db.models.user import User

__all__ = ["Artist", "Playlist", "PlaylistSong", "Song", "User"]
