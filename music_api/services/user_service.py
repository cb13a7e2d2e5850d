# ============================================================================
# FILE: music_api/services/user_service.py
# ============================================================================
from typing import Optional
from sqlalchemy import or_
from sqlalchemy.orm import Session, defer
from music_api.db.models.user import User
from music_api.schemas.user import UserCreate
from music_api.core.errors import DuplicateKeyError, InvalidCredentialsError
from music_api.core.security import get_password_hash, verify_password
import logging

logger = logging.getLogger(__name__)


class UserService:
    """Identity store: user records, lookups and password checks"""

    def create_user(self, db: Session, user_data: UserCreate) -> User:
        """Create a new user account, rejecting a taken email or username"""
        email = user_data.email.lower()
        existing = self.find_by_email_or_username(db, email, user_data.username)
        if existing:
            if existing.email == email:
                raise DuplicateKeyError("email", "Email already registered")
            raise DuplicateKeyError("username", "Username already taken")

        try:
            user = User(
                username=user_data.username,
                email=email,
                hashed_password=get_password_hash(user_data.password),
            )
            db.add(user)
            db.commit()
            db.refresh(user)
            logger.info(f"User created: {user.username}")
            return user
        except Exception as e:
            db.rollback()
            logger.error(f"Error creating user: {e}")
            raise

    def find_by_email_or_username(self, db: Session, email: str, username: Optional[str] = None) -> Optional[User]:
        """
        Look a user up by email or username.

        With one argument the same string is tried as an email (lower-cased)
        and as a username, which is what login accepts.
        """
        if username is None:
            username = email
        return db.query(User).filter(
            or_(User.email == email.lower(), User.username == username)
        ).first()

    def get_user_by_id(self, db: Session, user_id: int) -> Optional[User]:
        """Get user by id without loading the password hash"""
        return db.query(User).options(
            defer(User.hashed_password, raiseload=True)
        ).filter(User.id == user_id).first()

    def authenticate_user(self, db: Session, login: str, password: str) -> User:
        """Authenticate with email-or-username and password"""
        user = self.find_by_email_or_username(db, login)
        if not user or not verify_password(password, user.hashed_password):
            logger.info("Failed login attempt")
            raise InvalidCredentialsError()
        return user

    def delete_user(self, db: Session, user: User) -> None:
        """Delete an account together with the playlists it owns"""
        user_id = user.id
        try:
            db.delete(user)
            db.commit()
            logger.info(f"User deleted: {user_id}")
        except Exception as e:
            db.rollback()
            logger.error(f"Error deleting user {user_id}: {e}")
            raise


# Create singleton instance
user_service = UserService()
