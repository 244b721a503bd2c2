# src/filters/recommendation_filter.py

"""Weather-driven product recommendations."""

import logging
from dataclasses import dataclass
from typing import Iterable

from src.config.settings import Settings
from src.filters.deduplicator import ProductDeduplicator
from src.models.product import Product, WeatherAffinity
from src.models.weather import WeatherObservation

logger = logging.getLogger("weather_store.filters")


@dataclass(frozen=True)
class Recommendation:
    """A product picked for display.

    ``weather_recommended`` marks picks driven by the current weather
    rather than the always-shown universal tier.
    """

    product: Product
    weather_recommended: bool


class RecommendationFilter:
    """Select a bounded, deduplicated product subset for the weather."""

    @staticmethod
    def _with_affinity(
        catalog: Iterable[Product], affinity: WeatherAffinity,
    ) -> list[Product]:
        return [p for p in catalog if p.weather == affinity]

    @staticmethod
    def recommend(
        catalog: list[Product],
        weather: WeatherObservation,
        limit: int | None = None,
    ) -> list[Recommendation]:
        """Pick products for the given weather.

        Universal products come first, followed by the hot tier when
        the temperature is strictly above the hot threshold (or the
        cold tier when strictly below the cold threshold), followed
        by the rainy tier when any rain fell.  Exactly 30°C or 10°C
        adds neither temperature tier.
        """
        max_items = (
            Settings.RECOMMENDATION_LIMIT if limit is None else limit
        )
        picked = RecommendationFilter._with_affinity(
            catalog, WeatherAffinity.UNIVERSAL
        )

        if weather.temperature > Settings.HOT_THRESHOLD_C:
            picked += RecommendationFilter._with_affinity(
                catalog, WeatherAffinity.HOT
            )
        elif weather.temperature < Settings.COLD_THRESHOLD_C:
            picked += RecommendationFilter._with_affinity(
                catalog, WeatherAffinity.COLD
            )

        if weather.rain > 0:
            picked += RecommendationFilter._with_affinity(
                catalog, WeatherAffinity.RAINY
            )

        unique, _removed = ProductDeduplicator.deduplicate(picked)
        shown = unique[:max_items]

        logger.info(
            "Recommended %d of %d products "
            "(temp=%.1f°C, rain=%.1fmm)",
            len(shown),
            len(catalog),
            weather.temperature,
            weather.rain,
        )
        return [
            Recommendation(
                product=p,
                weather_recommended=(
                    p.weather != WeatherAffinity.UNIVERSAL
                ),
            )
            for p in shown
        ]
