"""
Data Transfer Objects (DTOs) for the HTTP boundary.

Request DTOs turn a loosely-typed JSON body or query string into typed
values once, at the edge; result DTOs carry what services hand back.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, Mapping, Optional

from sweet_shop.core.exceptions import ValidationError
from sweet_shop.core.validation import BaseValidator
from sweet_shop.domain.entities import MAX_QUANTITY, SweetFields, User


def parse_sweet_fields(data: Optional[Mapping[str, Any]]) -> SweetFields:
    """Build :class:`SweetFields` from a create/update request body."""
    data = data or {}
    return SweetFields(
        name=BaseValidator.validate_string(data.get("name"), "name"),
        category=BaseValidator.validate_string(data.get("category"), "category"),
        price=BaseValidator.validate_decimal(
            data.get("price"), "price", "Price must be a positive number"
        ),
        quantity=BaseValidator.validate_integer(
            data.get("quantity"), "quantity", "Quantity must be a non-negative number"
        ),
    )


@dataclass(frozen=True)
class StockAdjustmentRequest:
    """DTO for purchase/restock request bodies."""

    quantity: int

    @classmethod
    def from_json(cls, data: Optional[Mapping[str, Any]]) -> "StockAdjustmentRequest":
        quantity = BaseValidator.validate_integer(
            (data or {}).get("quantity"), "quantity", "Quantity must be an integer"
        )
        if quantity is None:
            raise ValidationError("Quantity is required", "quantity")
        if quantity > MAX_QUANTITY:
            raise ValidationError(f"Quantity cannot exceed {MAX_QUANTITY}", "quantity")
        return cls(quantity=quantity)


@dataclass(frozen=True)
class CredentialsRequest:
    """DTO for register/login request bodies."""

    email: str
    password: str

    @classmethod
    def from_json(cls, data: Optional[Mapping[str, Any]]) -> "CredentialsRequest":
        data = data or {}
        email = data.get("email")
        password = data.get("password")
        if not email or not password:
            raise ValidationError("Email and password are required")
        if not isinstance(email, str) or not isinstance(password, str):
            raise ValidationError("Email and password must be strings")
        return cls(email=email.strip(), password=password)


@dataclass(frozen=True)
class PriceRangeQuery:
    """DTO for the price search query string. Defaults: min=0, max unbounded."""

    min_price: Decimal
    max_price: Optional[Decimal]

    @classmethod
    def from_args(cls, args: Mapping[str, Any]) -> "PriceRangeQuery":
        min_price = BaseValidator.validate_decimal(
            args.get("min"), "min", "Prices must be valid numbers"
        )
        max_price = BaseValidator.validate_decimal(
            args.get("max"), "max", "Prices must be valid numbers"
        )
        return cls(
            min_price=min_price if min_price is not None else Decimal("0"),
            max_price=max_price,
        )


@dataclass(frozen=True)
class TokenClaims:
    """Claims embedded in an access token."""

    user_id: int
    email: str

    def to_dict(self) -> Dict[str, Any]:
        return {"userId": self.user_id, "email": self.email}


@dataclass(frozen=True)
class AuthResult:
    """Outcome of a successful register/login."""

    user: User
    token: str

    def to_dict(self) -> Dict[str, Any]:
        return {"user": self.user.to_dict(), "token": self.token}
