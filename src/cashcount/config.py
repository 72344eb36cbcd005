"""Runtime settings read from the environment."""

import os
from dataclasses import dataclass

from cashcount.database.factories import default_database_url

_TRUE_VALUES = {"1", "true", "yes", "on"}


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUE_VALUES


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got '{raw}'")


@dataclass(frozen=True)
class Settings:
    """Service configuration.

    Attributes:
        database_url: SQLAlchemy database URL
        jwt_secret: Secret used to sign and verify bearer tokens
        token_ttl_minutes: Lifetime of issued tokens
        bcrypt_rounds: bcrypt cost factor for password hashes
        host: Interface the HTTP server binds to
        port: Port the HTTP server listens on
        enforce_ownership: If True, listing and deleting statements also
            require a bearer token and only touch the caller's statements
        log_level: Level name for the ``cashcount`` logger
    """

    database_url: str
    jwt_secret: str = ""
    token_ttl_minutes: int = 60
    bcrypt_rounds: int = 10
    host: str = "0.0.0.0"
    port: int = 4000
    enforce_ownership: bool = False
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from CASHCOUNT_* environment variables."""
        return cls(
            database_url=default_database_url(),
            jwt_secret=os.environ.get("CASHCOUNT_JWT_SECRET", ""),
            token_ttl_minutes=_env_int("CASHCOUNT_TOKEN_TTL_MINUTES", 60),
            bcrypt_rounds=_env_int("CASHCOUNT_BCRYPT_ROUNDS", 10),
            host=os.environ.get("CASHCOUNT_HOST", "0.0.0.0"),
            port=_env_int("CASHCOUNT_PORT", 4000),
            enforce_ownership=_env_bool("CASHCOUNT_ENFORCE_OWNERSHIP"),
            log_level=os.environ.get("CASHCOUNT_LOG_LEVEL", "INFO"),
        )
