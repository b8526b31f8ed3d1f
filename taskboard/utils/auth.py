"""
Authentication utilities with JWT tokens and bcrypt password hashing.

- bcrypt with a fresh salt per hash and a fixed work factor
- HS256-signed JWTs with a mandatory expiry claim
- UTC timezone consistency
"""

from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
from jose import JWTError, jwt

from taskboard.exceptions import AuthenticationError

# Changing this only affects hashes created afterwards; existing hashes carry their own cost.
BCRYPT_ROUNDS = 10

# bcrypt ignores (or rejects, depending on version) anything past 72 bytes.
MAX_PASSWORD_BYTES = 72


class PasswordHasher:
    """One-way salted password hashing backed by bcrypt."""

    def __init__(self, rounds: int = BCRYPT_ROUNDS):
        self.rounds = rounds
        # Built up front: dummy_verify runs in worker threads
        self._dummy_hash = self.hash("taskboard-dummy-password")

    def hash(self, password: str) -> str:
        """Hash a plain text password using bcrypt."""
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")

    def verify(self, password: str, hashed_password: str | None) -> bool:
        """Verify a plain text password against a stored hash.

        Anything that is not a usable bcrypt hash counts as a mismatch.
        """
        if not password or not hashed_password:
            return False
        try:
            return bcrypt.checkpw(
                password.encode("utf-8"), hashed_password.encode("utf-8")
            )
        except (ValueError, TypeError):
            return False

    def dummy_verify(self, password: str) -> bool:
        """Spend the same work as a real check for usernames that do not exist."""
        self.verify(password, self._dummy_hash)
        return False


class TokenService:
    """Issues and verifies signed bearer tokens.

    Built once at startup with the process-wide secret. Verification is
    stateless, so a token stays valid until its ``exp`` passes.
    """

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        ttl: timedelta = timedelta(minutes=60),
    ):
        if not secret_key:
            raise ValueError("A non-empty secret key is required to sign tokens")
        self._secret_key = secret_key
        self.algorithm = algorithm
        self.ttl = ttl

    def issue(self, claims: dict[str, Any], ttl: timedelta | None = None) -> str:
        """Create a signed token carrying ``claims`` and an expiry."""
        to_encode = claims.copy()
        lifetime = self.ttl if ttl is None else ttl
        to_encode["exp"] = datetime.now(UTC) + lifetime
        return jwt.encode(to_encode, self._secret_key, algorithm=self.algorithm)

    def verify(self, token: str) -> dict[str, Any]:
        """Decode ``token`` and return its claims.

        Raises AuthenticationError when the signature does not match, the token
        is malformed, or its expiry has been reached.
        """
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self.algorithm],
                options={"require_exp": True, "require_sub": True, "leeway": 0},
            )
        except JWTError as e:
            raise AuthenticationError() from e

        # jose only rejects exp strictly in the past; a token is dead once exp is reached.
        if payload["exp"] <= datetime.now(UTC).timestamp():
            raise AuthenticationError()

        return payload
