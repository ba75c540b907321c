"""
Environment-based configuration for the Rider Backend.

Configuration:
- DATABASE_URL: database connection string (required)
- JWT_SECRET_KEY: secret used to sign access tokens (required)
- JWT_ALGORITHM: optional (default HS256)
- ACCESS_TOKEN_EXPIRE_MINUTES: optional (default 60)
- LOG_LEVEL: optional (default INFO)
"""

import os
from dataclasses import dataclass
from functools import lru_cache


def _require_env(name: str) -> str:
    """Read a required environment variable or raise a clear error."""
    value = os.getenv(name)
    if not value:
        raise RuntimeError(
            f"Missing required environment variable: {name}. "
            "Please set it in the rider_backend container .env."
        )
    return value


def _normalize_database_url(url: str) -> str:
    """
    Normalize DATABASE_URL to a SQLAlchemy-compatible URL.

    Notes:
    - Some platforms provide 'postgres://...' which SQLAlchemy expects as
      'postgresql://...'.
    """
    if url.startswith("postgres://"):
        return url.replace("postgres://", "postgresql://", 1)
    return url


@dataclass(frozen=True)
class Settings:
    database_url: str
    jwt_secret_key: str
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 60
    log_level: str = "INFO"


def load_settings() -> Settings:
    """Build Settings from the process environment."""
    return Settings(
        database_url=_normalize_database_url(_require_env("DATABASE_URL")),
        jwt_secret_key=_require_env("JWT_SECRET_KEY"),
        jwt_algorithm=os.getenv("JWT_ALGORITHM", "HS256"),
        access_token_expire_minutes=int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "60")),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )


# PUBLIC_INTERFACE
@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return process-wide settings, loaded once on first use."""
    return load_settings()
