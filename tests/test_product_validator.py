# tests/test_product_validator.py

"""Tests for ProductValidator product and review checks."""

import unittest
from typing import Any

from src.filters.product_validator import ProductValidator


def _product(**overrides: Any) -> dict[str, Any]:
    fields: dict[str, Any] = {
        "name": "Portable USB Fan",
        "description": "Keeps you cool on hot days.",
        "price": 29.0,
        "category": "accessory",
        "weather": "hot",
        "stock": 10,
    }
    fields.update(overrides)
    return fields


def _review(**overrides: Any) -> dict[str, Any]:
    fields: dict[str, Any] = {
        "title": "Great fan",
        "comment": "Quiet and strong enough.",
        "reviewer_name": "Sam",
        "rating": 5,
        "reviewer_email": "sam.lee@example.com",
    }
    fields.update(overrides)
    return fields


class TestValidateProduct(unittest.TestCase):
    """ProductValidator.validate_product unit tests."""

    def test_valid_product(self) -> None:
        self.assertEqual(ProductValidator.validate_product(_product()), [])

    def test_short_name(self) -> None:
        errors = ProductValidator.validate_product(_product(name="ab"))
        self.assertIn("Product name must be at least 3 characters", errors)

    def test_missing_name(self) -> None:
        errors = ProductValidator.validate_product(_product(name=""))
        self.assertIn("Product name is required", errors)

    def test_long_description(self) -> None:
        errors = ProductValidator.validate_product(
            _product(description="x" * 1001)
        )
        self.assertIn("Description cannot exceed 1000 characters", errors)

    def test_negative_price(self) -> None:
        errors = ProductValidator.validate_product(_product(price=-1))
        self.assertIn("Price must be a valid positive number", errors)

    def test_nan_price(self) -> None:
        errors = ProductValidator.validate_product(
            _product(price=float("nan"))
        )
        self.assertIn("Price must be a valid positive number", errors)

    def test_zero_price_allowed(self) -> None:
        self.assertEqual(
            ProductValidator.validate_product(_product(price=0)), []
        )

    def test_bad_category(self) -> None:
        errors = ProductValidator.validate_product(_product(category="food"))
        self.assertIn("food is not a valid category", errors)

    def test_bad_weather(self) -> None:
        errors = ProductValidator.validate_product(_product(weather="snow"))
        self.assertIn("snow is not a valid weather tag", errors)

    def test_negative_stock(self) -> None:
        errors = ProductValidator.validate_product(_product(stock=-3))
        self.assertIn("Stock cannot be negative", errors)

    def test_collects_every_error(self) -> None:
        errors = ProductValidator.validate_product(
            _product(name="", price=-1, stock=-1)
        )
        self.assertEqual(len(errors), 3)


class TestValidateReview(unittest.TestCase):
    """ProductValidator.validate_review unit tests."""

    def test_valid_review(self) -> None:
        self.assertEqual(ProductValidator.validate_review(_review()), [])

    def test_rating_out_of_range(self) -> None:
        for rating in (0, 6):
            errors = ProductValidator.validate_review(_review(rating=rating))
            self.assertIn("Rating must be between 1 and 5", errors)

    def test_rating_not_integer(self) -> None:
        errors = ProductValidator.validate_review(_review(rating=4.5))
        self.assertIn("Rating must be a whole number", errors)

    def test_bad_email(self) -> None:
        errors = ProductValidator.validate_review(
            _review(reviewer_email="not-an-email")
        )
        self.assertIn("Please provide a valid email", errors)

    def test_short_comment(self) -> None:
        errors = ProductValidator.validate_review(_review(comment="meh"))
        self.assertIn("Comment must be at least 10 characters", errors)


if __name__ == "__main__":
    unittest.main()
