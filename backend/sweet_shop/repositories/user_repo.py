import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from sweet_shop.core.exceptions import ConflictError, StorageFailure
from sweet_shop.db.base import User as DbUser
from sweet_shop.domain.entities import User as DomainUser
from sweet_shop.domain.interfaces import IUserRepository

logger = logging.getLogger(__name__)


class UserRepository(IUserRepository):
    """Repository for User persistence operations.

    Maps between domain entities and database models; the unique index on
    ``email`` is the final arbiter of duplicate registrations.
    """

    def __init__(self, db_session) -> None:
        self.db = db_session

    def get_by_email(self, email: str) -> Optional[DomainUser]:
        """Get user by email, returning domain entity."""
        try:
            db_user = self.db.query(DbUser).filter_by(email=email).first()
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise StorageFailure(f"Failed to fetch user by email: {exc}") from exc
        return self._to_domain(db_user) if db_user else None

    def create(self, email: str, password_hash: str) -> DomainUser:
        """Persist a new user.

        Raises:
            ConflictError: the email is already registered
            StorageFailure: any other database error
        """
        db_user = DbUser(email=email, password_hash=password_hash)
        try:
            self.db.add(db_user)
            self.db.commit()
            self.db.refresh(db_user)
        except IntegrityError as exc:
            self.db.rollback()
            logger.info(
                "Duplicate registration rejected by unique constraint",
                extra={"context": {"error": str(exc.orig)}},
            )
            raise ConflictError("User already exists") from exc
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error(
                "Failed to create user",
                extra={"context": {"error": str(exc)}},
                exc_info=True,
            )
            raise StorageFailure(f"Failed to create user: {exc}") from exc
        return self._to_domain(db_user)

    def _to_domain(self, db_user: DbUser) -> DomainUser:
        return DomainUser(
            id=db_user.id,
            email=db_user.email,
            password_hash=db_user.password_hash,
            created_at=db_user.created_at,
        )
