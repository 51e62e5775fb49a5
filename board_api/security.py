"""Password hashing and bearer token primitives.

Both are leaf components with no IO. The signing secret is handed to
``TokenIssuer`` at construction time; nothing here reads settings directly.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt
from passlib.context import CryptContext

logger = logging.getLogger(__name__)

DEFAULT_ALGORITHM = "HS256"
DEFAULT_TOKEN_LIFETIME = timedelta(days=7)


class PasswordHasher:
    """Salted one-way password hashing (bcrypt through passlib)."""

    def __init__(self, rounds: int = 12):
        self._context = CryptContext(
            schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds,
        )

    def hash(self, plain_password: str) -> str:
        return self._context.hash(plain_password)

    def verify(self, plain_password: str, hashed_password: str) -> bool:
        """True iff the password matches. Malformed hashes verify as False."""
        if not plain_password or not hashed_password:
            return False
        try:
            return self._context.verify(plain_password, hashed_password)
        except (ValueError, TypeError):
            logger.warning("Stored password hash could not be parsed")
            return False


@dataclass(frozen=True)
class Identity:
    """Caller identity decoded from a verified bearer token."""
    user_id: int
    name: str
    email: str


class TokenIssuer:
    """Issues and verifies signed, self-contained bearer tokens (JWT).

    Tokens cannot be revoked: a token stays valid until ``exp`` passes.
    """

    def __init__(
        self,
        secret_key: str,
        algorithm: str = DEFAULT_ALGORITHM,
        expires_in: timedelta = DEFAULT_TOKEN_LIFETIME,
    ):
        if not secret_key:
            raise ValueError("secret_key is required")
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._expires_in = expires_in

    def issue(self, user_id: int, name: str, email: str) -> str:
        now = datetime.now(timezone.utc)
        claims = {
            "sub": str(user_id),
            "name": name,
            "email": email,
            "iat": now,
            "exp": now + self._expires_in,
        }
        return jwt.encode(claims, self._secret_key, algorithm=self._algorithm)

    def verify(self, token: str) -> Optional[Identity]:
        """Decode a token; None when the signature, expiry or claims are bad."""
        if not token:
            return None
        try:
            claims = jwt.decode(token, self._secret_key, algorithms=[self._algorithm])
            return Identity(
                user_id=int(claims["sub"]),
                name=str(claims.get("name") or ""),
                email=str(claims.get("email") or ""),
            )
        except (JWTError, KeyError, ValueError, TypeError):
            return None
