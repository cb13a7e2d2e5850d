# ============================================================================
# FILE: music_api/core/errors.py
# Typed error variants consumed by the exception handlers in api/errors.py
# ============================================================================
from typing import Any, Iterable, Optional


class AppError(Exception):
    """Base class for every error the API turns into a response envelope"""

    status_code: int = 500
    default_message: str = "Internal Server Error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


# --- 400 -------------------------------------------------------------------

class InvalidInputError(AppError):
    status_code = 400
    default_message = "Validation Error"

    @classmethod
    def from_messages(cls, messages: Iterable[str]) -> "InvalidInputError":
        return cls(f"Validation Error: {', '.join(messages)}")


class DuplicateKeyError(AppError):
    status_code = 400

    def __init__(self, field: str, message: Optional[str] = None):
        self.field = field
        super().__init__(message or f"Duplicate value for field: {field}")


class MalformedIdError(AppError):
    status_code = 400

    def __init__(self, field: str, value: Any):
        self.field = field
        self.value = value
        super().__init__(f"Invalid {field}: {value}")


class EntityInUseError(AppError):
    """Raised when deleting a record that other records still reference"""

    status_code = 400


# --- 401 / 403 -------------------------------------------------------------

class TokenError(AppError):
    status_code = 401


class InvalidTokenError(TokenError):
    default_message = "Invalid token"


class ExpiredTokenError(TokenError):
    default_message = "Token expired"


class MissingTokenError(AppError):
    status_code = 401
    default_message = "Access token required"


class InvalidOrExpiredTokenError(AppError):
    status_code = 403
    default_message = "Invalid or expired token"


class UserNotFoundError(AppError):
    status_code = 401
    default_message = "Invalid token - user not found"


class InvalidCredentialsError(AppError):
    status_code = 401
    default_message = "Invalid credentials"


class ForbiddenError(AppError):
    status_code = 403
    default_message = "Not authorized to perform this action"


# --- 404 / 503 -------------------------------------------------------------

class NotFoundError(AppError):
    status_code = 404
    entity = "Resource"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or f"{self.entity} not found")


class PlaylistNotFoundError(NotFoundError):
    entity = "Playlist"


class SongNotFoundError(NotFoundError):
    entity = "Song"


class ArtistNotFoundError(NotFoundError):
    entity = "Artist"


class StoreUnavailableError(AppError):
    status_code = 503
    default_message = "Database service temporarily unavailable"
