"""
Domain entities - Pure business logic, no framework dependencies.

Invariants are enforced in ``__post_init__`` so an invalid aggregate can
never be constructed, whether it comes from a request or from a database row.
"""

import re
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, Optional

from sweet_shop.core.exceptions import ValidationError

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

# Limits of the NUMERIC(10,2) price and INTEGER quantity columns
MAX_PRICE = Decimal("99999999.99")
PRICE_STEP = Decimal("0.01")
MAX_QUANTITY = 2**31 - 1


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _isoformat(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


@dataclass(frozen=True)
class SweetFields:
    """The four mutable fields of a sweet, as received from a caller.

    Values are typed but not yet validated; building a :class:`Sweet` from
    them enforces the invariants.
    """

    name: Optional[str]
    category: Optional[str]
    price: Optional[Decimal]
    quantity: Optional[int]


@dataclass
class Sweet:
    """Domain entity for an item of the shop inventory."""

    name: str = ""
    category: str = ""
    price: Optional[Decimal] = None
    quantity: Optional[int] = None
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        """Validate business rules."""
        if _is_blank(self.name):
            raise ValidationError("Name is required", "name")
        if _is_blank(self.category):
            raise ValidationError("Category is required", "category")
        if self.price is None:
            raise ValidationError("Price is required", "price")
        if self.quantity is None:
            raise ValidationError("Quantity is required", "quantity")

        # bool is an int subclass; True is not a price
        if isinstance(self.price, bool) or not isinstance(
            self.price, (int, float, Decimal)
        ):
            raise ValidationError("Price must be a positive number", "price")
        price = Decimal(str(self.price))
        if not price.is_finite() or price < 0:
            raise ValidationError("Price must be a positive number", "price")
        if price > MAX_PRICE:
            raise ValidationError(f"Price cannot exceed {MAX_PRICE}", "price")
        if price != price.quantize(PRICE_STEP):
            raise ValidationError(
                "Price cannot have more than 2 decimal places", "price"
            )
        self.price = price

        if (
            isinstance(self.quantity, bool)
            or not isinstance(self.quantity, int)
            or self.quantity < 0
        ):
            raise ValidationError("Quantity must be a non-negative number", "quantity")
        if self.quantity > MAX_QUANTITY:
            raise ValidationError(
                f"Quantity cannot exceed {MAX_QUANTITY}", "quantity"
            )

    @classmethod
    def from_fields(
        cls, fields: SweetFields, sweet_id: Optional[int] = None
    ) -> "Sweet":
        return cls(
            id=sweet_id,
            name=fields.name,
            category=fields.category,
            price=fields.price,
            quantity=fields.quantity,
        )

    def fields(self) -> SweetFields:
        return SweetFields(
            name=self.name,
            category=self.category,
            price=self.price,
            quantity=self.quantity,
        )

    @property
    def in_stock(self) -> bool:
        return self.quantity > 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category,
            "price": float(self.price),
            "quantity": self.quantity,
            "createdAt": _isoformat(self.created_at),
            "updatedAt": _isoformat(self.updated_at),
        }


@dataclass
class User:
    """Domain entity representing an account holder.

    The password hash lives on the entity so the access service can verify
    credentials, but it is never part of the public representation.
    """

    email: str = ""
    password_hash: str = ""
    id: Optional[int] = None
    created_at: Optional[datetime] = None

    def __post_init__(self):
        """Validate domain rules."""
        validate_email(self.email)
        if not self.password_hash:
            raise ValidationError("Password hash is required", "password_hash")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "email": self.email,
            "createdAt": _isoformat(self.created_at),
        }


def validate_email(email: Optional[str]) -> None:
    """Raise ValidationError unless ``email`` looks like ``local@domain.tld``."""
    if not email:
        raise ValidationError("Email is required", "email")
    if not EMAIL_PATTERN.match(email):
        raise ValidationError("Invalid email format", "email")
