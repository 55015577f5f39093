"""
Domain package - Pure business logic layer.

This package contains:
- entities.py: Domain entities with business logic
- interfaces.py: Repository and collaborator contracts
"""

from .entities import Sweet, SweetFields, User
from .interfaces import (
    IPasswordHasher,
    ISweetReader,
    ISweetRepository,
    ISweetWriter,
    ITokenSigner,
    IUserReader,
    IUserRepository,
    IUserWriter,
)

__all__ = [
    # Domain entities
    "Sweet",
    "User",
    "SweetFields",
    # Repository interfaces
    "ISweetRepository",
    "IUserRepository",
    # Segregated interfaces
    "ISweetReader",
    "ISweetWriter",
    "IUserReader",
    "IUserWriter",
    # Credential collaborators
    "IPasswordHasher",
    "ITokenSigner",
]
