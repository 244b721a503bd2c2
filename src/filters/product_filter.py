# src/filters/product_filter.py

"""In-memory catalog filtering by category, weather and price band."""

import logging

from src.models.product import Category, Product, WeatherAffinity

logger = logging.getLogger("weather_store.filters")


class ProductFilter:
    """Narrow a product list the way the catalog listing does."""

    @staticmethod
    def filter_catalog(
        products: list[Product],
        category: Category | None = None,
        weather: WeatherAffinity | None = None,
        min_price: float | None = None,
        max_price: float | None = None,
        active: bool | None = None,
    ) -> tuple[list[Product], int]:
        """Keep products matching every given criterion.

        A weather filter also matches universal products.
        Returns the kept list and the count of excluded products.
        """
        kept: list[Product] = []
        excluded = 0
        for product in products:
            if category is not None and product.category != category:
                excluded += 1
            elif weather is not None and product.weather not in (
                weather,
                WeatherAffinity.UNIVERSAL,
            ):
                excluded += 1
            elif min_price is not None and product.price < min_price:
                excluded += 1
            elif max_price is not None and product.price > max_price:
                excluded += 1
            elif active is not None and product.is_active != active:
                excluded += 1
            else:
                kept.append(product)

        if excluded:
            logger.debug(
                "Catalog filter excluded %d products", excluded
            )

        return kept, excluded
