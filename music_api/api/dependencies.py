# ============================================================================
# FILE: music_api/api/dependencies.py
# ============================================================================
from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session
from typing import Iterator, Optional
from music_api.config import Settings
from music_api.core.cache import RedisCache
from music_api.core.errors import (
    AppError,
    InvalidOrExpiredTokenError,
    MissingTokenError,
    TokenError,
    UserNotFoundError,
)
from music_api.core.security import TokenService
from music_api.db.models.user import User
from music_api.services.user_service import user_service
import logging

logger = logging.getLogger(__name__)

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/login", auto_error=False)


def get_db(request: Request) -> Iterator[Session]:
    """Session from the application's connection pool, closed after the request"""
    yield from request.app.state.database.session()


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def get_cache(request: Request) -> RedisCache:
    return request.app.state.cache


def _resolve_user(token: Optional[str], db: Session, token_service: TokenService) -> User:
    if not token:
        raise MissingTokenError()

    try:
        user_id = token_service.verify(token)
    except TokenError as e:
        logger.info(f"Rejected bearer token: {e.message}")
        raise InvalidOrExpiredTokenError()

    user = user_service.get_user_by_id(db, user_id)
    if user is None:
        raise UserNotFoundError()
    return user


def require_current_user(
    request: Request,
    token: Optional[str] = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
    token_service: TokenService = Depends(get_token_service),
) -> User:
    """
    Resolve the bearer token to a user or reject the request.
    Use this dependency for protected endpoints
    """
    user = _resolve_user(token, db, token_service)
    request.state.user = user
    return user


def get_current_user(
    request: Request,
    token: Optional[str] = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
    token_service: TokenService = Depends(get_token_service),
) -> Optional[User]:
    """
    Get current authenticated user from the bearer token
    Returns None on any failure (allows anonymous access)
    """
    try:
        user = _resolve_user(token, db, token_service)
    except AppError:
        request.state.user = None
        return None
    request.state.user = user
    return user
