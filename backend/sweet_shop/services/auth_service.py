import logging
from datetime import timedelta

from sweet_shop.core.exceptions import (
    ConflictError,
    TokenVerificationError,
    UnauthorizedError,
    ValidationError,
)
from sweet_shop.domain.entities import User, validate_email
from sweet_shop.domain.interfaces import IPasswordHasher, ITokenSigner, IUserRepository
from sweet_shop.schemas.dtos import AuthResult, TokenClaims

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6
DEFAULT_TOKEN_TTL = timedelta(hours=24)
INVALID_CREDENTIALS = "Invalid email or password"


class AccessService:
    """Application service for registration, login and token verification.

    This service:
    - Depends on abstractions for storage, hashing and signing
    - Holds no session state; every token is re-verified on use
    - Answers unknown email and wrong password with the same error
    """

    def __init__(
        self,
        repo: IUserRepository,
        hasher: IPasswordHasher,
        signer: ITokenSigner,
        token_ttl: timedelta = DEFAULT_TOKEN_TTL,
    ) -> None:
        self.repo = repo
        self.hasher = hasher
        self.signer = signer
        self.token_ttl = token_ttl

    def register(self, email: str, password: str) -> AuthResult:
        """Create an account and issue its first token.

        Business Rules:
        - Password must be at least 6 characters
        - Email must be well formed (checked before any lookup)
        - Email must not already be registered
        """
        if len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters",
                "password",
            )
        validate_email(email)

        if self.repo.get_by_email(email) is not None:
            raise ConflictError("User already exists")

        user = self.repo.create(email, self.hasher.hash(password))
        logger.info(
            "User registered",
            extra={"context": {"user_id": user.id}},
        )
        return AuthResult(user=user, token=self._issue_token(user))

    def login(self, email: str, password: str) -> AuthResult:
        user = self.repo.get_by_email(email)
        if user is None or not self.hasher.verify(password, user.password_hash):
            logger.info("Login rejected", extra={"context": {"reason": "credentials"}})
            raise UnauthorizedError(INVALID_CREDENTIALS)

        logger.info("User logged in", extra={"context": {"user_id": user.id}})
        return AuthResult(user=user, token=self._issue_token(user))

    def verify_token(self, token: str) -> TokenClaims:
        try:
            payload = self.signer.verify(token)
        except TokenVerificationError as exc:
            logger.debug(
                "Token verification failed",
                extra={"context": {"error": str(exc)}},
            )
            raise UnauthorizedError("Invalid token") from exc

        user_id = payload.get("userId")
        email = payload.get("email")
        if (
            isinstance(user_id, bool)
            or not isinstance(user_id, int)
            or not isinstance(email, str)
            or not email
        ):
            raise UnauthorizedError("Invalid token")
        return TokenClaims(user_id=user_id, email=email)

    def _issue_token(self, user: User) -> str:
        claims = TokenClaims(user_id=user.id, email=user.email)
        return self.signer.sign(claims.to_dict(), self.token_ttl)
