import logging
from decimal import Decimal
from typing import List, Optional

from sweet_shop.core.exceptions import (
    ConflictError,
    InsufficientStockError,
    NotFoundError,
    ValidationError,
)
from sweet_shop.domain.entities import MAX_QUANTITY, Sweet, SweetFields
from sweet_shop.domain.interfaces import ISweetRepository

logger = logging.getLogger(__name__)

PURCHASE_ATTEMPTS = 3


def _check_capacity(sweet: Sweet, amount: int) -> None:
    if sweet.quantity + amount > MAX_QUANTITY:
        raise ValidationError(
            f"Restock would exceed the maximum stock of {MAX_QUANTITY}", "quantity"
        )


class InventoryService:
    """Application service for the sweets inventory.

    Business Rules:
    - Every write is validated by building a ``Sweet`` before storage is touched
    - Purchases never drive stock below zero, even under concurrent requests
    - Purchase and restock amounts must be strictly positive
    """

    def __init__(self, repository: ISweetRepository):
        self.repository = repository

    def list_all(self) -> List[Sweet]:
        return self.repository.list_all()

    def get_by_id(self, sweet_id: int) -> Sweet:
        sweet = self.repository.get_by_id(sweet_id)
        if sweet is None:
            raise NotFoundError(f"Sweet with ID {sweet_id} not found")
        return sweet

    def add(self, fields: SweetFields) -> Sweet:
        candidate = Sweet.from_fields(fields)
        created = self.repository.insert(candidate.fields())
        logger.info(
            "Sweet created",
            extra={"context": {"sweet_id": created.id, "sweet_name": created.name}},
        )
        return created

    def update(self, sweet_id: int, fields: SweetFields) -> Sweet:
        self.get_by_id(sweet_id)
        candidate = Sweet.from_fields(fields, sweet_id=sweet_id)
        updated = self.repository.replace(sweet_id, candidate.fields())
        if updated is None:
            # Deleted between the existence check and the write
            raise NotFoundError(f"Sweet with ID {sweet_id} not found")
        return updated

    def delete(self, sweet_id: int) -> bool:
        if not self.repository.remove(sweet_id):
            raise NotFoundError(f"Sweet with ID {sweet_id} not found")
        logger.info("Sweet deleted", extra={"context": {"sweet_id": sweet_id}})
        return True

    def search_by_category(self, category: str) -> List[Sweet]:
        return self.repository.find_by_category(category)

    def search_by_name(self, fragment: str) -> List[Sweet]:
        return self.repository.find_by_name_contains(fragment)

    def search_by_price_range(
        self, min_price: Decimal, max_price: Optional[Decimal] = None
    ) -> List[Sweet]:
        if max_price is not None and min_price > max_price:
            raise ValidationError(
                "Minimum price cannot be greater than maximum price", "min"
            )
        if min_price < 0 or (max_price is not None and max_price < 0):
            raise ValidationError("Prices must be positive numbers", "min")
        return self.repository.find_by_price_range(min_price, max_price)

    def purchase(self, sweet_id: int, amount: int) -> Sweet:
        """Remove ``amount`` units from stock.

        The decrement is a conditional UPDATE. When another request changes
        the stock between the read and the UPDATE, the read is repeated up to
        ``PURCHASE_ATTEMPTS`` times.

        Raises:
            ValidationError: amount is not positive
            NotFoundError: no such sweet
            InsufficientStockError: fewer than ``amount`` units available
            ConflictError: stock kept changing on every attempt
        """
        if amount <= 0:
            raise ValidationError(
                "Purchase quantity must be greater than zero", "quantity"
            )

        for attempt in range(1, PURCHASE_ATTEMPTS + 1):
            sweet = self.get_by_id(sweet_id)
            if amount > sweet.quantity:
                raise InsufficientStockError(sweet.quantity, amount)

            updated = self.repository.decrement_quantity(sweet_id, amount)
            if updated is not None:
                break
            logger.warning(
                "Purchase lost a stock race",
                extra={
                    "context": {
                        "sweet_id": sweet_id,
                        "requested": amount,
                        "attempt": attempt,
                    }
                },
            )
        else:
            raise ConflictError("Stock changed during purchase, please retry")

        logger.info(
            "Sweet purchased",
            extra={
                "context": {
                    "sweet_id": sweet_id,
                    "amount": amount,
                    "remaining": updated.quantity,
                }
            },
        )
        return updated

    def restock(self, sweet_id: int, amount: int) -> Sweet:
        if amount <= 0:
            raise ValidationError(
                "Restock quantity must be greater than zero", "quantity"
            )

        sweet = self.get_by_id(sweet_id)
        _check_capacity(sweet, amount)
        updated = self.repository.increment_quantity(sweet_id, amount)
        if updated is None:
            # Deleted or restocked by another request since the read
            _check_capacity(self.get_by_id(sweet_id), amount)
            raise ConflictError("Stock changed during restock, please retry")
        logger.info(
            "Sweet restocked",
            extra={
                "context": {
                    "sweet_id": sweet_id,
                    "amount": amount,
                    "quantity": updated.quantity,
                }
            },
        )
        return updated

    def check_stock(self, sweet_id: int) -> bool:
        return self.get_by_id(sweet_id).in_stock
