# ============================================================================
# FILE: music_api/api/v1/endpoints/auth.py
# ============================================================================
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from music_api.api.dependencies import get_db, get_token_service, require_current_user
from music_api.core.errors import InvalidInputError
from music_api.core.security import TokenService
from music_api.db.models.user import User
from music_api.schemas.common import APIResponse
from music_api.schemas.user import AuthData, TokenData, UserCreate, UserData, UserLogin, UserProfile, UserResponse
from music_api.services.user_service import user_service
import logging

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/register", response_model=APIResponse[AuthData], status_code=status.HTTP_201_CREATED)
def register(
    user_data: UserCreate,
    db: Session = Depends(get_db),
    token_service: TokenService = Depends(get_token_service),
):
    """
    Register a new user account
    Returns the user and a bearer token
    """
    user = user_service.create_user(db, user_data)
    token = token_service.issue(user.id)
    return APIResponse(
        message="User registered successfully",
        data=AuthData(user=UserResponse.model_validate(user), token=token),
    )


@router.post("/login", response_model=APIResponse[AuthData])
def login(
    credentials: UserLogin,
    db: Session = Depends(get_db),
    token_service: TokenService = Depends(get_token_service),
):
    """
    Login with email or username and password
    Returns a bearer token valid for seven days
    """
    if not credentials.login or not credentials.password:
        raise InvalidInputError("Email/username and password are required")

    user = user_service.authenticate_user(db, credentials.login, credentials.password)
    token = token_service.issue(user.id)
    logger.info(f"User logged in: {user.id}")
    return APIResponse(
        message="Login successful",
        data=AuthData(user=UserResponse.model_validate(user), token=token),
    )


@router.get("/me", response_model=APIResponse[UserData])
def get_current_user_info(current_user: User = Depends(require_current_user)):
    """
    Get current user information with playlist summaries
    Requires authentication
    """
    return APIResponse(data=UserData(user=UserProfile.model_validate(current_user)))


@router.post("/refresh", response_model=APIResponse[TokenData])
def refresh_token(
    current_user: User = Depends(require_current_user),
    token_service: TokenService = Depends(get_token_service),
):
    """
    Issue a fresh token for the authenticated user
    Requires authentication
    """
    return APIResponse(
        message="Token refreshed successfully",
        data=TokenData(token=token_service.issue(current_user.id)),
    )


@router.delete("/me", response_model=APIResponse)
def delete_account(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user),
):
    """
    Delete the current account and every playlist it owns
    Requires authentication
    """
    user_service.delete_user(db, current_user)
    return APIResponse(message="Account deleted successfully")
