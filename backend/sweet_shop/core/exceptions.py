"""
Custom exceptions for the application.
Centralized error taxonomy shared by services, repositories and controllers.

Each error carries the HTTP status code the boundary answers with.
"""

from typing import Optional


class SweetShopError(Exception):
    """Base class for every domain-level failure."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(SweetShopError, ValueError):
    """Input shape or range violation. Raised before any storage call."""

    status_code = 400

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class NotFoundError(SweetShopError):
    """Requested entity does not exist."""

    status_code = 404


class ConflictError(SweetShopError):
    """Duplicate unique key (e.g. an email already registered)."""

    status_code = 400


class UnauthorizedError(SweetShopError):
    """Authentication or token failure."""

    status_code = 401


class InsufficientStockError(SweetShopError):
    """Purchase requested more units than are available."""

    status_code = 400

    def __init__(self, available: int, requested: int):
        super().__init__(
            f"Insufficient stock. Available: {available}, Requested: {requested}"
        )
        self.available = available
        self.requested = requested


class StorageFailure(SweetShopError):
    """Opaque persistence fault. Never retried, surfaced unchanged."""

    status_code = 500


class TokenVerificationError(Exception):
    """
    Raised by token signers when a token is malformed, expired or tampered.
    The access service translates it into UnauthorizedError.
    """

    pass
