# ============================================================================
# FILE: music_api/core/security.py
# ============================================================================
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import ExpiredSignatureError, JWTError, jwt
from passlib.context import CryptContext

from music_api.config import Settings
from music_api.core.errors import ExpiredTokenError, InvalidTokenError
import logging

logger = logging.getLogger(__name__)

# Password hashing configuration
pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def get_password_hash(password: str) -> str:
    """Hash a plaintext password"""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Check a plaintext password against its stored hash"""
    if not hashed_password:
        return False
    return pwd_context.verify(plain_password, hashed_password)


class TokenService:
    """
    Issues and verifies stateless bearer tokens.

    A token carries the user id as ``sub`` plus ``iat`` and ``exp``. Validity
    depends only on the signature and the expiry; nothing is stored server side
    and the user record is not consulted here.
    """

    def __init__(self, secret: str, algorithm: str = "HS256", expires_delta: Optional[timedelta] = None):
        self.secret = secret
        self.algorithm = algorithm
        self.expires_delta = expires_delta if expires_delta is not None else timedelta(days=7)

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenService":
        if settings.uses_default_secret:
            logger.warning("JWT_SECRET not configured, falling back to the built-in default secret")
        return cls(
            secret=settings.JWT_SECRET,
            algorithm=settings.JWT_ALGORITHM,
            expires_delta=timedelta(days=settings.JWT_EXPIRE_DAYS),
        )

    def issue(self, user_id: int, now: Optional[datetime] = None) -> str:
        """Create a signed token for ``user_id``"""
        issued_at = now or datetime.now(timezone.utc)
        payload = {
            "sub": str(user_id),
            "iat": int(issued_at.timestamp()),
            "exp": int((issued_at + self.expires_delta).timestamp()),
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def verify(self, token: str) -> int:
        """Return the user id embedded in ``token``"""
        try:
            payload = jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except ExpiredSignatureError:
            raise ExpiredTokenError()
        except JWTError:
            raise InvalidTokenError()

        subject = payload.get("sub")
        if subject is None:
            raise InvalidTokenError()
        try:
            return int(subject)
        except (TypeError, ValueError):
            raise InvalidTokenError()
