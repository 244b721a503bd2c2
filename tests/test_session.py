# tests/test_session.py

"""Tests for the per-user StorefrontSession."""

import unittest

from src.catalog.default_catalog import DEFAULT_CATALOG
from src.models.currency import CurrencyContext
from src.models.product import Product
from src.services.session import StorefrontSession


class TestStorefrontSession(unittest.TestCase):
    """StorefrontSession construction and lookups."""

    def test_defaults(self) -> None:
        session = StorefrontSession()
        self.assertEqual(len(session.catalog), len(DEFAULT_CATALOG))
        self.assertEqual(session.currency, CurrencyContext.identity())
        self.assertIsNone(session.weather)
        self.assertTrue(session.cart.is_empty)

    def test_sessions_are_independent(self) -> None:
        first = StorefrontSession()
        second = StorefrontSession()
        first.cart.add(1)
        self.assertTrue(second.cart.is_empty)

    def test_cart_uses_session_catalog(self) -> None:
        session = StorefrontSession(
            catalog=[Product(id=42, name="Gadget", price=5.0)]
        )
        self.assertIsNotNone(session.cart.add(42))
        self.assertIsNone(session.cart.add(1))

    def test_find_product(self) -> None:
        session = StorefrontSession()
        product = session.find_product(4)
        self.assertIsNotNone(product)
        assert product is not None
        self.assertEqual(product.id, 4)
        self.assertIsNone(session.find_product(999))


if __name__ == "__main__":
    unittest.main()
