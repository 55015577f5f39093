import logging
from contextlib import contextmanager
from decimal import Decimal
from typing import Iterator, List, Optional

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError

from sweet_shop.core.exceptions import StorageFailure
from sweet_shop.db.base import Sweet as DbSweet
from sweet_shop.domain.entities import MAX_QUANTITY, Sweet, SweetFields
from sweet_shop.domain.interfaces import ISweetRepository

logger = logging.getLogger(__name__)


def escape_like(fragment: str) -> str:
    """Escape LIKE wildcards so ``fragment`` is matched literally."""
    return (
        fragment.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    )


class SweetRepository(ISweetRepository):
    """SQLAlchemy persistence for the sweets inventory.

    Every write commits immediately. Any SQLAlchemy error rolls the session
    back and surfaces as :class:`StorageFailure`.
    """

    def __init__(self, db_session) -> None:
        self.db = db_session

    @contextmanager
    def _storage_guard(self, operation: str) -> Iterator[None]:
        try:
            yield
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error(
                f"Failed to {operation}",
                extra={"context": {"operation": operation, "error": str(exc)}},
                exc_info=True,
            )
            raise StorageFailure(f"Failed to {operation}: {exc}") from exc

    def list_all(self) -> List[Sweet]:
        with self._storage_guard("fetch sweets"):
            db_items = self.db.query(DbSweet).order_by(DbSweet.id.asc()).all()
            return [self._to_domain(i) for i in db_items]

    def get_by_id(self, sweet_id: int) -> Optional[Sweet]:
        with self._storage_guard("fetch sweet by ID"):
            db_item = self._load(sweet_id)
            return self._to_domain(db_item) if db_item else None

    def insert(self, fields: SweetFields) -> Sweet:
        with self._storage_guard("create sweet"):
            db_item = DbSweet(
                name=fields.name,
                category=fields.category,
                price=fields.price,
                quantity=fields.quantity,
            )
            self.db.add(db_item)
            self.db.commit()
            self.db.refresh(db_item)
            return self._to_domain(db_item)

    def replace(self, sweet_id: int, fields: SweetFields) -> Optional[Sweet]:
        with self._storage_guard("update sweet"):
            db_item = self._load(sweet_id)
            if not db_item:
                return None
            db_item.name = fields.name
            db_item.category = fields.category
            db_item.price = fields.price
            db_item.quantity = fields.quantity
            db_item.updated_at = func.now()
            self.db.commit()
            self.db.refresh(db_item)
            return self._to_domain(db_item)

    def remove(self, sweet_id: int) -> bool:
        with self._storage_guard("delete sweet"):
            deleted = (
                self.db.query(DbSweet)
                .filter(DbSweet.id == sweet_id)
                .delete(synchronize_session=False)
            )
            self.db.commit()
            return deleted > 0

    def find_by_category(self, category: str) -> List[Sweet]:
        with self._storage_guard("search by category"):
            db_items = (
                self.db.query(DbSweet)
                .filter(DbSweet.category == category)
                .order_by(DbSweet.name.asc(), DbSweet.id.asc())
                .all()
            )
            return [self._to_domain(i) for i in db_items]

    def find_by_name_contains(self, fragment: str) -> List[Sweet]:
        pattern = f"%{escape_like(fragment)}%"
        with self._storage_guard("search by name"):
            db_items = (
                self.db.query(DbSweet)
                .filter(DbSweet.name.ilike(pattern, escape="\\"))
                .order_by(DbSweet.name.asc(), DbSweet.id.asc())
                .all()
            )
            return [self._to_domain(i) for i in db_items]

    def find_by_price_range(
        self, min_price: Decimal, max_price: Optional[Decimal]
    ) -> List[Sweet]:
        with self._storage_guard("search by price range"):
            query = self.db.query(DbSweet).filter(DbSweet.price >= min_price)
            if max_price is not None:
                query = query.filter(DbSweet.price <= max_price)
            db_items = query.order_by(DbSweet.price.asc(), DbSweet.id.asc()).all()
            return [self._to_domain(i) for i in db_items]

    def set_quantity(self, sweet_id: int, new_quantity: int) -> Optional[Sweet]:
        with self._storage_guard("update quantity"):
            updated = (
                self.db.query(DbSweet)
                .filter(DbSweet.id == sweet_id)
                .update(
                    {DbSweet.quantity: new_quantity, DbSweet.updated_at: func.now()},
                    synchronize_session=False,
                )
            )
            self.db.commit()
            return self._reload(sweet_id) if updated else None

    def decrement_quantity(self, sweet_id: int, amount: int) -> Optional[Sweet]:
        with self._storage_guard("update quantity"):
            # Guarded UPDATE: matches nothing when stock is short
            updated = (
                self.db.query(DbSweet)
                .filter(DbSweet.id == sweet_id, DbSweet.quantity >= amount)
                .update(
                    {
                        DbSweet.quantity: DbSweet.quantity - amount,
                        DbSweet.updated_at: func.now(),
                    },
                    synchronize_session=False,
                )
            )
            self.db.commit()
            return self._reload(sweet_id) if updated else None

    def increment_quantity(self, sweet_id: int, amount: int) -> Optional[Sweet]:
        with self._storage_guard("update quantity"):
            # Guarded UPDATE: matches nothing when the column would overflow
            updated = (
                self.db.query(DbSweet)
                .filter(
                    DbSweet.id == sweet_id,
                    DbSweet.quantity <= MAX_QUANTITY - amount,
                )
                .update(
                    {
                        DbSweet.quantity: DbSweet.quantity + amount,
                        DbSweet.updated_at: func.now(),
                    },
                    synchronize_session=False,
                )
            )
            self.db.commit()
            return self._reload(sweet_id) if updated else None

    def _load(self, sweet_id: int) -> Optional[DbSweet]:
        return self.db.query(DbSweet).filter_by(id=sweet_id).first()

    def _reload(self, sweet_id: int) -> Optional[Sweet]:
        db_item = self._load(sweet_id)
        return self._to_domain(db_item) if db_item else None

    def _to_domain(self, db_item: DbSweet) -> Sweet:
        return Sweet(
            id=db_item.id,
            name=db_item.name,
            category=db_item.category,
            price=Decimal(str(db_item.price)),
            quantity=db_item.quantity,
            created_at=db_item.created_at,
            updated_at=db_item.updated_at,
        )
