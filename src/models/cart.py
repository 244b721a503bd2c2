# src/models/cart.py

"""Cart line, totals and order summary models."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass
class CartEntry:
    """A product id and how many of it are in the cart."""

    product_id: int
    quantity: int = 1


@dataclass(frozen=True)
class CartTotals:
    """Derived cart totals.

    ``total_local`` is rounded to whole units for display.
    """

    total_reference: float = 0.0
    total_local: float = 0.0
    item_count: int = 0


@dataclass(frozen=True)
class CartLine:
    """A priced cart line for display and receipts."""

    product_id: int
    name: str
    icon: str
    unit_price: float
    quantity: int
    line_reference: float
    unit_local: float
    line_local: float


@dataclass(frozen=True)
class OrderSummary:
    """Snapshot of a checked-out cart."""

    lines: list[CartLine]
    totals: CartTotals
    currency_code: str
    currency_symbol: str
    placed_at: datetime = field(default_factory=datetime.now)
