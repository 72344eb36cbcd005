"""User registration and bearer-token authentication."""

from dataclasses import dataclass
from datetime import datetime, timedelta, UTC
from typing import Optional

import bcrypt
import jwt

from cashcount.database.base import Database
from cashcount.domain.entities import User as UserEntity
from cashcount.domain.errors import (
    AuthenticationError,
    NotFoundError,
    ValidationError,
    user_not_found,
)
from cashcount.logging_config import get_logger

logger = get_logger("domain.user")

TOKEN_ALGORITHM = "HS256"
# bcrypt ignores (newer releases reject) anything past 72 bytes
MAX_PASSWORD_BYTES = 72


@dataclass(frozen=True)
class Profile:
    """Public view of a user."""

    id: int
    email: str


class UserService:
    """Service for registering users and issuing/verifying tokens."""

    def __init__(
        self,
        db: Database,
        secret: str,
        token_ttl: timedelta = timedelta(hours=1),
        bcrypt_rounds: int = 10,
    ):
        """Initialize user service.

        Args:
            db: Database instance
            secret: Key used to sign tokens
            token_ttl: Lifetime of issued tokens
            bcrypt_rounds: bcrypt cost factor
        """
        self.db = db
        self.secret = secret
        self.token_ttl = token_ttl
        self.bcrypt_rounds = bcrypt_rounds

    def register(self, email: str, password: str) -> Profile:
        """Register a new user.

        Raises:
            ValidationError: If email or password is empty or the password is too long
            ConflictError: If the email is already registered
        """
        email = email.strip()
        if not email:
            raise ValidationError("Email is required")
        password_hash = self._hash_password(password)
        user_id = self.db.create_user(email=email, password_hash=password_hash)
        logger.info("Registered user %s", user_id)
        return Profile(id=user_id, email=email)

    def login(self, email: str, password: str) -> str:
        """Check credentials and return a signed token.

        Raises:
            ValidationError: If no user has this email
            AuthenticationError: If the password is wrong
        """
        user = self.db.get_user_by_email(email.strip())
        if user is None:
            logger.warning("Login for unknown email")
            raise ValidationError("User not found")
        if not _password_matches(password, user.password_hash):
            logger.warning("Invalid password for user %s", user.id)
            raise AuthenticationError("Invalid password")
        return self.issue_token(user)

    def issue_token(self, user: UserEntity) -> str:
        """Sign a token carrying the user's id and email."""
        if not self.secret:
            raise ValueError("Token secret is not configured")
        payload = {
            "id": user.id,
            "email": user.email,
            "exp": datetime.now(UTC) + self.token_ttl,
        }
        return jwt.encode(payload, self.secret, algorithm=TOKEN_ALGORITHM)

    def authenticate(self, token: Optional[str]) -> int:
        """Verify a token and return the user id it was issued for.

        Raises:
            AuthenticationError: If the token is missing, malformed, expired or forged
        """
        if not token:
            raise AuthenticationError("Missing token")
        try:
            payload = jwt.decode(token, self.secret, algorithms=[TOKEN_ALGORITHM])
        except jwt.InvalidTokenError as e:
            raise AuthenticationError("Invalid token") from e
        user_id = payload.get("id")
        if not isinstance(user_id, int):
            raise AuthenticationError("Invalid token")
        return user_id

    def get_profile(self, user_id: int) -> Profile:
        """Get the public profile of a user.

        Raises:
            NotFoundError: If the user doesn't exist
        """
        user = self.db.get_user(user_id)
        if user is None:
            raise NotFoundError(user_not_found(user_id))
        return Profile(id=user.id, email=user.email)

    def _hash_password(self, password: str) -> str:
        if not password:
            raise ValidationError("Password is required")
        encoded = password.encode("utf-8")
        if len(encoded) > MAX_PASSWORD_BYTES:
            raise ValidationError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
        return bcrypt.hashpw(encoded, bcrypt.gensalt(rounds=self.bcrypt_rounds)).decode("ascii")


def _password_matches(password: str, password_hash: str) -> bool:
    encoded = password.encode("utf-8")
    if len(encoded) > MAX_PASSWORD_BYTES:
        return False
    return bcrypt.checkpw(encoded, password_hash.encode("ascii"))
