"""
Database seeding functions.

Populates an empty inventory with a small sample catalogue so a fresh
development database has something to browse.
"""

import logging
from decimal import Decimal

from sqlalchemy.orm import Session

from sweet_shop.db.base import Sweet

logger = logging.getLogger(__name__)

SAMPLE_SWEETS = (
    ("Milk Chocolate Bar", "chocolate", Decimal("2.50"), 100),
    ("Dark Chocolate Truffle", "chocolate", Decimal("5.00"), 40),
    ("Gummy Bears", "candy", Decimal("1.99"), 150),
    ("Sour Worms", "candy", Decimal("1.50"), 80),
    ("Strawberry Lollipop", "candy", Decimal("0.75"), 200),
    ("Glazed Donut", "pastry", Decimal("1.25"), 30),
    ("Butter Croissant", "pastry", Decimal("3.50"), 25),
    ("Vanilla Fudge", "fudge", Decimal("3.00"), 0),
)


def seed_sample_sweets(db: Session) -> int:
    """
    Insert the sample catalogue when the sweets table is empty.

    This function is idempotent: a table that already holds rows is left
    untouched.

    Returns:
        Number of rows inserted
    """
    existing = db.query(Sweet.id).first()
    if existing is not None:
        logger.info("Sweets table already populated, skipping seed")
        return 0

    for name, category, price, quantity in SAMPLE_SWEETS:
        db.add(Sweet(name=name, category=category, price=price, quantity=quantity))
    db.commit()

    logger.info(
        "Sample sweets inserted",
        extra={"context": {"count": len(SAMPLE_SWEETS)}},
    )
    return len(SAMPLE_SWEETS)
