# src/filters/deduplicator.py

"""Product deduplication for merged recommendation tiers."""

import logging

from src.models.product import Product

logger = logging.getLogger("weather_store.filters")


class ProductDeduplicator:
    """Remove repeated products by catalog id."""

    @staticmethod
    def deduplicate(
        products: list[Product],
    ) -> tuple[list[Product], int]:
        """Drop products whose id was already seen.

        The first occurrence wins, so the input order is preserved.
        Returns the deduplicated list and the count of removed dupes.
        """
        if not products:
            return [], 0

        seen_ids: set[int] = set()
        kept: list[Product] = []
        removed = 0

        for product in products:
            if product.id in seen_ids:
                removed += 1
                continue
            seen_ids.add(product.id)
            kept.append(product)

        if removed:
            logger.debug(
                "Deduplication removed %d repeated products",
                removed,
            )

        return kept, removed
