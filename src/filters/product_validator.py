# src/filters/product_validator.py

"""Field validation for products and reviews before they are stored."""

import logging
import math
import re
from typing import Any

from src.models.product import Category, WeatherAffinity

logger = logging.getLogger("weather_store.filters")

_EMAIL_RE = re.compile(r"^\w+([.-]?\w+)*@\w+([.-]?\w+)*(\.\w{2,3})+$")


def _check_length(
    errors: list[str],
    value: Any,
    label: str,
    min_len: int,
    max_len: int,
) -> None:
    if not isinstance(value, str) or not value.strip():
        errors.append(f"{label} is required")
        return
    length = len(value.strip())
    if length < min_len:
        errors.append(f"{label} must be at least {min_len} characters")
    elif length > max_len:
        errors.append(f"{label} cannot exceed {max_len} characters")


class ProductValidator:
    """Collect every validation problem instead of stopping at the first."""

    @staticmethod
    def validate_product(fields: dict[str, Any]) -> list[str]:
        """Return the validation errors for a product record."""
        errors: list[str] = []
        _check_length(errors, fields.get("name"), "Product name", 3, 100)
        _check_length(
            errors, fields.get("description"), "Description", 10, 1000
        )

        price = fields.get("price")
        if price is None:
            errors.append("Product price is required")
        elif (
            isinstance(price, bool)
            or not isinstance(price, (int, float))
            or not math.isfinite(price)
            or price < 0
        ):
            errors.append("Price must be a valid positive number")

        category = fields.get("category")
        if category is None:
            errors.append("Product category is required")
        elif category not in {c.value for c in Category}:
            errors.append(f"{category} is not a valid category")

        weather = fields.get("weather", WeatherAffinity.UNIVERSAL.value)
        if weather not in {w.value for w in WeatherAffinity}:
            errors.append(f"{weather} is not a valid weather tag")

        stock = fields.get("stock", 0)
        if isinstance(stock, bool) or not isinstance(stock, int):
            errors.append("Stock must be a whole number")
        elif stock < 0:
            errors.append("Stock cannot be negative")

        if errors:
            logger.debug("Product rejected: %s", errors)
        return errors

    @staticmethod
    def validate_review(fields: dict[str, Any]) -> list[str]:
        """Return the validation errors for a review record."""
        errors: list[str] = []
        _check_length(errors, fields.get("title"), "Title", 3, 100)
        _check_length(errors, fields.get("comment"), "Comment", 10, 500)
        _check_length(
            errors, fields.get("reviewer_name"), "Reviewer name", 2, 50
        )

        rating = fields.get("rating")
        if rating is None:
            errors.append("Rating is required")
        elif isinstance(rating, bool) or not isinstance(rating, int):
            errors.append("Rating must be a whole number")
        elif not 1 <= rating <= 5:
            errors.append("Rating must be between 1 and 5")

        email = fields.get("reviewer_email")
        if not isinstance(email, str) or not email.strip():
            errors.append("Reviewer email is required")
        elif not _EMAIL_RE.match(email.strip().lower()):
            errors.append("Please provide a valid email")

        if errors:
            logger.debug("Review rejected: %s", errors)
        return errors
