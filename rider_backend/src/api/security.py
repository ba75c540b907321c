import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict
from uuid import UUID

import jwt
from passlib.context import CryptContext
from starlette.concurrency import run_in_threadpool

from src.api.errors import CredentialHashingError
from src.api.settings import Settings

logger = logging.getLogger(__name__)

# bcrypt cost: 2^12 rounds. Verification pays the same cost as storage, so this
# stays a constant rather than a setting.
BCRYPT_ROUNDS = 12

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=BCRYPT_ROUNDS)


class CredentialHasher:
    """
    Salted bcrypt hashing for stored rider credentials.

    Both operations run in the thread pool. Faults from the primitive raise
    CredentialHashingError; they are never reported as a mismatch.
    """

    def __init__(self, context: CryptContext = pwd_context):
        self._context = context

    async def hash(self, plaintext: str) -> str:
        """Hash a plaintext password using bcrypt."""
        return await run_in_threadpool(self._guard, self._context.hash, plaintext)

    async def verify(self, plaintext: str, digest: str) -> bool:
        """Verify a plaintext password against a stored hash (constant-time compare)."""
        return await run_in_threadpool(self._guard, self._context.verify, plaintext, digest)

    async def dummy_verify(self) -> None:
        """Spend one verification's worth of time when there is no stored hash."""
        await run_in_threadpool(self._guard, self._context.dummy_verify)

    @staticmethod
    def _guard(func: Callable[..., Any], *args: Any) -> Any:
        try:
            return func(*args)
        except (ValueError, TypeError) as exc:
            logger.exception("Password hashing primitive failed")
            raise CredentialHashingError(str(exc)) from exc


@dataclass(frozen=True)
class AccessToken:
    subject: UUID
    issued_at: datetime
    expires_at: datetime
    token: str


class TokenIssuer:
    """
    Issue signed JWT access tokens.

    Payload fields:
    - sub: rider id (UUID string)
    - exp: expiration (UTC, unix seconds)

    A verifier holding the secret checks a token with
    jwt.decode(token, secret, algorithms=[algorithm]).
    """

    def __init__(
        self,
        *,
        secret_key: str,
        ttl: timedelta,
        algorithm: str = "HS256",
        clock: Callable[[], datetime] | None = None,
    ):
        if not secret_key:
            raise RuntimeError("Token signing secret must not be empty.")
        self._secret_key = secret_key
        self._algorithm = algorithm
        self.ttl = ttl
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenIssuer":
        return cls(
            secret_key=settings.jwt_secret_key,
            ttl=timedelta(minutes=settings.access_token_expire_minutes),
            algorithm=settings.jwt_algorithm,
        )

    def issue(self, subject: UUID) -> AccessToken:
        """Create a signed access token for a rider id."""
        issued_at = self._clock().replace(microsecond=0)
        expires_at = issued_at + self.ttl
        payload: Dict[str, Any] = {
            "sub": str(subject),
            "exp": int(expires_at.timestamp()),
        }
        token = jwt.encode(payload, self._secret_key, algorithm=self._algorithm)
        return AccessToken(subject=subject, issued_at=issued_at, expires_at=expires_at, token=token)
