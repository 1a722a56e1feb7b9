"""Password hashing and the token service (JWT issuance and verification)."""

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import bcrypt
import jwt

from app.core.config import Settings
from app.core.errors import (
    InvalidCredentials,
    InvalidSignature,
    MalformedToken,
    TokenExpired,
)

if TYPE_CHECKING:
    from app.services.credentials import CredentialStore

logger = logging.getLogger(__name__)

# Bcrypt cost (rounds); 12 is a good default for security vs speed.
BCRYPT_ROUNDS = 12

# Min/max lengths for username and password validation (BSIMM / input validation).
USERNAME_MIN_LEN = 1
USERNAME_MAX_LEN = 255
PASSWORD_MIN_LEN = 8
PASSWORD_MAX_LEN = 128

ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_TYPE = "refresh"
_REQUIRED_CLAIMS = ["sub", "role", "typ", "iat", "exp"]


def hash_password(plain_password: str, rounds: int = BCRYPT_ROUNDS) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    # bcrypt has a 72-byte limit; truncate to avoid errors (validation already limits length).
    pw_bytes = plain_password.encode("utf-8")[:72]
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash."""
    pw_bytes = plain_password.encode("utf-8")[:72]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


@dataclass(frozen=True)
class AuthenticatedIdentity:
    """Verified claims attached to one request: who is calling and with which role."""

    subject: str
    role: str


@dataclass(frozen=True)
class IssuedToken:
    token: str
    expires_in: int
    refresh_token: str
    refresh_expires_in: int


class TokenService:
    """
    Issues and verifies signed bearer tokens.

    Tokens are JWTs carrying sub (user id), role, typ, iat and exp, signed with a
    shared secret (HMAC). verify() is a pure function of the token, the secret and
    the clock: it never consults the credential store, so a user removed after
    issuance keeps access until the token expires.

    Expiry is exclusive: a token is expired at or after its exp instant.
    """

    def __init__(
        self,
        secret: str,
        credentials: "CredentialStore",
        ttl_seconds: int = 3600,
        refresh_ttl_seconds: int = 7 * 24 * 3600,
        algorithm: str = "HS256",
        clock: Callable[[], float] = time.time,
    ) -> None:
        if not secret or not secret.strip():
            raise ValueError("Token signing secret must be set and non-empty")
        self._secret = secret
        self._credentials = credentials
        self._algorithm = algorithm
        self._clock = clock
        self.ttl_seconds = ttl_seconds
        self.refresh_ttl_seconds = refresh_ttl_seconds

    @classmethod
    def from_settings(cls, settings: Settings, credentials: "CredentialStore") -> "TokenService":
        return cls(
            secret=settings.JWT_SECRET.get_secret_value(),
            credentials=credentials,
            ttl_seconds=settings.TOKEN_TTL_SECONDS,
            refresh_ttl_seconds=settings.REFRESH_TOKEN_TTL_SECONDS,
            algorithm=settings.JWT_ALGORITHM,
        )

    def issue(self, username: str, password: str) -> IssuedToken:
        """Authenticate against the credential store and issue an access/refresh pair."""
        user = self._credentials.authenticate(username, password)
        if user is None:
            raise InvalidCredentials()
        logger.info("Issued token for user_id=%s role=%s", user.id, user.role)
        return self.issue_for(user.id, user.role)

    def issue_for(self, user_id: int | str, role: str, now: float | None = None) -> IssuedToken:
        """Sign tokens for an already-authenticated user."""
        issued_at = int(self._clock() if now is None else now)
        return IssuedToken(
            token=self._encode(user_id, role, ACCESS_TOKEN_TYPE, issued_at, self.ttl_seconds),
            expires_in=self.ttl_seconds,
            refresh_token=self._encode(
                user_id, role, REFRESH_TOKEN_TYPE, issued_at, self.refresh_ttl_seconds
            ),
            refresh_expires_in=self.refresh_ttl_seconds,
        )

    def verify(self, token: str, now: float | None = None) -> AuthenticatedIdentity:
        """
        Verify an access token and return its identity.

        Raises MalformedToken, InvalidSignature or TokenExpired.
        """
        claims = self._decode(token, ACCESS_TOKEN_TYPE, now)
        return AuthenticatedIdentity(subject=claims["sub"], role=claims["role"])

    def refresh(self, refresh_token: str, now: float | None = None) -> IssuedToken:
        """Exchange a valid refresh token for a new pair, re-reading the user's role."""
        claims = self._decode(refresh_token, REFRESH_TOKEN_TYPE, now)
        try:
            user_id = int(claims["sub"])
        except ValueError as e:
            raise MalformedToken("Invalid token subject") from e
        user = self._credentials.get_by_id(user_id)
        if user is None:
            raise InvalidCredentials("User no longer exists.")
        logger.info("Refreshed token for user_id=%s role=%s", user.id, user.role)
        return self.issue_for(user.id, user.role, now=now)

    def _encode(self, sub: int | str, role: str, typ: str, issued_at: int, ttl: int) -> str:
        payload: dict[str, Any] = {
            "sub": str(sub),
            "role": role,
            "typ": typ,
            "iat": issued_at,
            "exp": issued_at + ttl,
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def _decode(self, token: str, expected_type: str, now: float | None) -> dict[str, Any]:
        try:
            # Time-based claims are checked below against the injected clock.
            claims = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={
                    "verify_exp": False,
                    "verify_iat": False,
                    "verify_nbf": False,
                    "require": _REQUIRED_CLAIMS,
                },
            )
        except (jwt.InvalidSignatureError, jwt.InvalidAlgorithmError) as e:
            raise InvalidSignature() from e
        except jwt.PyJWTError as e:
            raise MalformedToken() from e

        if not isinstance(claims["sub"], str) or not claims["sub"]:
            raise MalformedToken("Invalid token subject")
        if not isinstance(claims["role"], str):
            raise MalformedToken("Invalid token role")
        for name in ("iat", "exp"):
            if isinstance(claims[name], bool) or not isinstance(claims[name], int):
                raise MalformedToken(f"Invalid token claim: {name}")
        if claims["typ"] != expected_type:
            raise MalformedToken("Wrong token type")

        current = self._clock() if now is None else now
        if current >= claims["exp"]:
            raise TokenExpired()
        return claims
