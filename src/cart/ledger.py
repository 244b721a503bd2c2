# src/cart/ledger.py

"""Session-local shopping cart with reference and local-currency totals."""

import logging
from typing import Iterable

from src.errors import EmptyCartError
from src.models.cart import CartEntry, CartLine, CartTotals, OrderSummary
from src.models.currency import CurrencyContext
from src.models.product import Product
from src.pricing.rounding import round_half_up

logger = logging.getLogger("weather_store.cart")


def to_local(amount: float, currency: CurrencyContext) -> float:
    """Convert a reference amount and round to whole local units."""
    return round_half_up(amount * currency.rate)


class CartLedger:
    """Ordered cart entries for one storefront session.

    Products are looked up in the catalog the ledger was built with, so
    an entry can only ever reference a known product.  Quantities stay
    positive: any change that would drop one to zero removes the entry.
    """

    def __init__(self, catalog: Iterable[Product]) -> None:
        self._catalog: dict[int, Product] = {p.id: p for p in catalog}
        self._entries: list[CartEntry] = []

    # ── Queries ──────────────────────────────────────────

    @property
    def entries(self) -> list[CartEntry]:
        """A copy of the current entries, in insertion order."""
        return [CartEntry(e.product_id, e.quantity) for e in self._entries]

    @property
    def is_empty(self) -> bool:
        return not self._entries

    @property
    def item_count(self) -> int:
        return sum(e.quantity for e in self._entries)

    def _find(self, product_id: int) -> CartEntry | None:
        for entry in self._entries:
            if entry.product_id == product_id:
                return entry
        return None

    def quantity_of(self, product_id: int) -> int:
        entry = self._find(product_id)
        return entry.quantity if entry else 0

    # ── Mutations ────────────────────────────────────────

    def add(self, product_id: int) -> CartEntry | None:
        """Add one unit of a product.

        Unknown products are ignored and ``None`` is returned.
        """
        product = self._catalog.get(product_id)
        if product is None:
            logger.debug("Ignored add for unknown product %s", product_id)
            return None

        entry = self._find(product_id)
        if entry is not None:
            entry.quantity += 1
        else:
            entry = CartEntry(product_id=product_id, quantity=1)
            self._entries.append(entry)

        logger.info(
            "Added %s to cart (qty=%d)", product.name, entry.quantity
        )
        return CartEntry(entry.product_id, entry.quantity)

    def remove(self, product_id: int) -> bool:
        """Delete a product's entry. Returns whether anything was removed."""
        before = len(self._entries)
        self._entries = [
            e for e in self._entries if e.product_id != product_id
        ]
        removed = len(self._entries) < before
        if removed:
            logger.info("Removed product %s from cart", product_id)
        return removed

    def set_quantity_delta(self, product_id: int, delta: int) -> int:
        """Shift a product's quantity by ``delta``.

        Dropping to zero or below removes the entry.  Absent products
        are left alone.  Returns the resulting quantity (0 if gone).
        """
        entry = self._find(product_id)
        if entry is None:
            return 0

        entry.quantity += delta
        if entry.quantity <= 0:
            self.remove(product_id)
            return 0
        return entry.quantity

    def clear(self) -> None:
        """Empty the cart. Confirmation is the caller's job."""
        count = len(self._entries)
        self._entries.clear()
        logger.info("Cart cleared (%d entries dropped)", count)

    # ── Pricing ──────────────────────────────────────────

    def lines(self, currency: CurrencyContext) -> list[CartLine]:
        """Price each entry in both currencies."""
        priced: list[CartLine] = []
        for entry in self._entries:
            product = self._catalog[entry.product_id]
            line_reference = product.price * entry.quantity
            priced.append(
                CartLine(
                    product_id=product.id,
                    name=product.name,
                    icon=product.icon,
                    unit_price=product.price,
                    quantity=entry.quantity,
                    line_reference=round_half_up(line_reference, 2),
                    unit_local=to_local(product.price, currency),
                    line_local=to_local(line_reference, currency),
                )
            )
        return priced

    def totals(self, currency: CurrencyContext) -> CartTotals:
        """Sum the cart in the reference and the local currency."""
        total_reference = sum(
            self._catalog[e.product_id].price * e.quantity
            for e in self._entries
        )
        return CartTotals(
            total_reference=round_half_up(total_reference, 2),
            total_local=to_local(total_reference, currency),
            item_count=self.item_count,
        )

    def checkout(self, currency: CurrencyContext) -> OrderSummary:
        """Snapshot the cart as an order and empty it."""
        if self.is_empty:
            raise EmptyCartError()

        summary = OrderSummary(
            lines=self.lines(currency),
            totals=self.totals(currency),
            currency_code=currency.code,
            currency_symbol=currency.symbol,
        )
        logger.info(
            "Order placed: %d items, %.2f reference, %.0f %s",
            summary.totals.item_count,
            summary.totals.total_reference,
            summary.totals.total_local,
            currency.code,
        )
        self._entries.clear()
        return summary
