"""
Abstract interfaces for repositories and credential collaborators.

These interfaces define contracts without implementation details,
enabling dependency injection and easier testing.
"""

from abc import ABC, abstractmethod
from datetime import timedelta
from decimal import Decimal
from typing import Any, Dict, List, Optional

from .entities import Sweet, SweetFields, User


class ISweetReader(ABC):
    """Interface for inventory read operations."""

    @abstractmethod
    def list_all(self) -> List[Sweet]:
        """Get all sweets ordered by id."""
        pass

    @abstractmethod
    def get_by_id(self, sweet_id: int) -> Optional[Sweet]:
        """Get sweet by ID, None when absent."""
        pass

    @abstractmethod
    def find_by_category(self, category: str) -> List[Sweet]:
        """Exact category match, ordered by name."""
        pass

    @abstractmethod
    def find_by_name_contains(self, fragment: str) -> List[Sweet]:
        """Case-insensitive substring match on name, ordered by name."""
        pass

    @abstractmethod
    def find_by_price_range(
        self, min_price: Decimal, max_price: Optional[Decimal]
    ) -> List[Sweet]:
        """Inclusive price range, ordered by price. ``max_price=None`` is unbounded."""
        pass


class ISweetWriter(ABC):
    """Interface for inventory write operations."""

    @abstractmethod
    def insert(self, fields: SweetFields) -> Sweet:
        """Persist a new sweet and return it with its assigned id."""
        pass

    @abstractmethod
    def replace(self, sweet_id: int, fields: SweetFields) -> Optional[Sweet]:
        """Overwrite name/category/price/quantity. None when absent."""
        pass

    @abstractmethod
    def remove(self, sweet_id: int) -> bool:
        """Delete a sweet. True if a row was removed."""
        pass

    @abstractmethod
    def set_quantity(self, sweet_id: int, new_quantity: int) -> Optional[Sweet]:
        """Overwrite quantity only. None when absent."""
        pass

    @abstractmethod
    def decrement_quantity(self, sweet_id: int, amount: int) -> Optional[Sweet]:
        """Atomically subtract ``amount`` if at least that much is in stock.

        Returns None when no row matched (absent or not enough stock).
        """
        pass

    @abstractmethod
    def increment_quantity(self, sweet_id: int, amount: int) -> Optional[Sweet]:
        """Atomically add ``amount``. None when absent or when the result
        would exceed ``MAX_QUANTITY``."""
        pass


class ISweetRepository(ISweetReader, ISweetWriter):
    """Complete inventory repository interface."""

    pass


class IUserReader(ABC):
    """Interface for user read operations."""

    @abstractmethod
    def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email."""
        pass


class IUserWriter(ABC):
    """Interface for user write operations."""

    @abstractmethod
    def create(self, email: str, password_hash: str) -> User:
        """Create a new user. Raises ConflictError on a duplicate email."""
        pass


class IUserRepository(IUserReader, IUserWriter):
    """Complete user repository interface combining read/write operations."""

    pass


class IPasswordHasher(ABC):
    """One-way, salted password hashing."""

    @abstractmethod
    def hash(self, password: str) -> str:
        pass

    @abstractmethod
    def verify(self, password: str, password_hash: str) -> bool:
        pass


class ITokenSigner(ABC):
    """Signed, expiring token issuance."""

    @abstractmethod
    def sign(self, claims: Dict[str, Any], ttl: timedelta) -> str:
        pass

    @abstractmethod
    def verify(self, token: str) -> Dict[str, Any]:
        """Return the claims or raise TokenVerificationError."""
        pass
