from datetime import datetime, timedelta, timezone
from typing import Any, Dict

import jwt
from passlib.context import CryptContext

from sweet_shop.core.exceptions import TokenVerificationError
from sweet_shop.domain.interfaces import IPasswordHasher, ITokenSigner

JWT_ALGORITHM = "HS256"
DEFAULT_BCRYPT_ROUNDS = 12


class BcryptPasswordHasher(IPasswordHasher):
    """Password hashing backed by a passlib bcrypt context."""

    def __init__(self, rounds: int = DEFAULT_BCRYPT_ROUNDS) -> None:
        self._context = CryptContext(
            schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds
        )

    def hash(self, password: str) -> str:
        """Hash a password using bcrypt.

        Args:
            password: Plain text password to hash

        Returns:
            Salted hash string
        """
        return self._context.hash(password)

    def verify(self, password: str, password_hash: str) -> bool:
        """Verify a password against its hash.

        Args:
            password: Plain text password to verify
            password_hash: Hashed password to verify against

        Returns:
            True if password matches, False otherwise (including malformed hashes)
        """
        try:
            return self._context.verify(password, password_hash)
        except (ValueError, TypeError):
            return False


class JWTTokenSigner(ITokenSigner):
    """HS256 JSON Web Tokens with a mandatory expiration."""

    def __init__(self, secret_key: str, algorithm: str = JWT_ALGORITHM) -> None:
        if not secret_key:
            raise ValueError("A JWT secret key must be provided")
        self._secret_key = secret_key
        self._algorithm = algorithm

    def sign(self, claims: Dict[str, Any], ttl: timedelta) -> str:
        """Create a signed token embedding ``claims`` that expires after ``ttl``."""
        issued_at = datetime.now(timezone.utc)
        to_encode = dict(claims)
        to_encode.update({"iat": issued_at, "exp": issued_at + ttl})
        return jwt.encode(to_encode, self._secret_key, algorithm=self._algorithm)

    def verify(self, token: str) -> Dict[str, Any]:
        """Decode and validate a token.

        Raises:
            TokenVerificationError: malformed, expired or bad signature
        """
        if not isinstance(token, str) or not token:
            raise TokenVerificationError("Token must be a non-empty string")
        try:
            return jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
                options={"require": ["exp", "iat"]},
            )
        except jwt.PyJWTError as exc:
            raise TokenVerificationError(str(exc)) from exc
