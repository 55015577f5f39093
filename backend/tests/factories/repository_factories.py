"""
Repository and collaborator test factories.

Mocks are built with ``spec=`` the narrowest interface a test needs, so a
call to an operation the interface does not declare fails loudly.
"""

from decimal import Decimal
from unittest.mock import Mock

from sweet_shop.domain.entities import Sweet, User
from sweet_shop.domain.interfaces import (
    IPasswordHasher,
    ISweetReader,
    ISweetRepository,
    ITokenSigner,
    IUserRepository,
)


def make_sweet(
    sweet_id: int = 1,
    name: str = "Chocolate Bar",
    category: str = "chocolate",
    price: str = "2.50",
    quantity: int = 10,
) -> Sweet:
    return Sweet(
        id=sweet_id,
        name=name,
        category=category,
        price=Decimal(price),
        quantity=quantity,
    )


def make_user(
    user_id: int = 1,
    email: str = "buyer@example.com",
    password_hash: str = "hashed-password",
) -> User:
    return User(id=user_id, email=email, password_hash=password_hash)


class SweetRepositoryFactory:
    """Factory for creating sweet repository mocks."""

    @staticmethod
    def create_mock_reader() -> Mock:
        """Create mock that only implements ISweetReader operations."""
        mock_reader = Mock(spec=ISweetReader)
        mock_reader.list_all.return_value = []
        mock_reader.get_by_id.return_value = None
        mock_reader.find_by_category.return_value = []
        mock_reader.find_by_name_contains.return_value = []
        mock_reader.find_by_price_range.return_value = []
        return mock_reader

    @staticmethod
    def create_mock_full() -> Mock:
        """Create full repository mock implementing ISweetRepository."""
        mock_repo = Mock(spec=ISweetRepository)

        # Set up default return values for read operations
        mock_repo.list_all.return_value = []
        mock_repo.get_by_id.return_value = None
        mock_repo.find_by_category.return_value = []
        mock_repo.find_by_name_contains.return_value = []
        mock_repo.find_by_price_range.return_value = []

        # Set up default return values for write operations
        mock_repo.insert.return_value = None
        mock_repo.replace.return_value = None
        mock_repo.remove.return_value = False
        mock_repo.set_quantity.return_value = None
        mock_repo.decrement_quantity.return_value = None
        mock_repo.increment_quantity.return_value = None

        return mock_repo


class UserRepositoryFactory:
    """Factory for creating user repository mocks."""

    @staticmethod
    def create_mock_full() -> Mock:
        mock_repo = Mock(spec=IUserRepository)
        mock_repo.get_by_email.return_value = None
        mock_repo.create.return_value = None
        return mock_repo


class CredentialFactory:
    """Factory for password hasher and token signer mocks."""

    @staticmethod
    def create_mock_hasher() -> Mock:
        hasher = Mock(spec=IPasswordHasher)
        hasher.hash.return_value = "hashed-password"
        hasher.verify.return_value = True
        return hasher

    @staticmethod
    def create_mock_signer() -> Mock:
        signer = Mock(spec=ITokenSigner)
        signer.sign.return_value = "signed-token"
        signer.verify.return_value = {"userId": 1, "email": "buyer@example.com"}
        return signer
