# src/services/storefront_orchestrator.py

"""Orchestrates a city query: weather, currency, recommendations, news."""

import asyncio
import logging
from dataclasses import dataclass, field

from src.config.settings import Settings
from src.errors import InvalidQueryError, ProviderError
from src.filters.recommendation_filter import (
    Recommendation,
    RecommendationFilter,
)
from src.models.currency import CurrencyContext
from src.models.news import NewsArticle
from src.models.weather import WeatherObservation
from src.pricing.currency_resolver import CurrencyResolver
from src.providers.exchange_rate_provider import ExchangeRateProvider
from src.providers.news_provider import NewsProvider
from src.providers.weather_provider import WeatherProvider
from src.services.session import StorefrontSession

logger = logging.getLogger("weather_store.orchestrator")


@dataclass
class StorefrontResult:
    """Everything one city query produced.

    ``warnings`` lists the degraded sources that were substituted
    with a safe default.
    """

    city: str
    weather: WeatherObservation
    currency: CurrencyContext
    recommendations: list[Recommendation] = field(
        default_factory=lambda: list[Recommendation]()
    )
    news: list[NewsArticle] = field(
        default_factory=lambda: list[NewsArticle]()
    )
    warnings: list[str] = field(
        default_factory=lambda: list[str]()
    )


class StorefrontOrchestrator:
    """Sequences the upstream providers for a single city query.

    Only the weather fetch is load-bearing.  The exchange rate and the
    news are best-effort and fall back to rate 1 and no articles.
    """

    def __init__(
        self,
        weather_provider: WeatherProvider | None = None,
        rate_provider: ExchangeRateProvider | None = None,
        news_provider: NewsProvider | None = None,
    ) -> None:
        self.settings = Settings()
        self.weather_provider = weather_provider or WeatherProvider()
        self.rate_provider = rate_provider or ExchangeRateProvider()
        self.news_provider = news_provider or NewsProvider()

    # ── Private helpers ──────────────────────────────────

    async def _resolve_currency(
        self, country_code: str, warnings: list[str],
    ) -> CurrencyContext:
        """Build the display currency for a country, degrading to identity."""
        code = CurrencyResolver.currency_for_country(country_code)
        reference = self.settings.REFERENCE_CURRENCY
        if code == reference:
            return CurrencyContext.identity()

        try:
            rate: float = await asyncio.to_thread(
                self.rate_provider.pair_rate, reference, code
            )
        except ProviderError as exc:
            logger.warning(
                "Currency lookup %s/%s failed, using rate 1: %s",
                reference,
                code,
                exc.message,
            )
            warnings.append(f"Currency: {exc.message}")
            return CurrencyContext.identity()

        return CurrencyContext(
            rate=rate,
            symbol=CurrencyResolver.symbol_for_currency(code),
            code=code,
        )

    async def _fetch_news(
        self, warnings: list[str],
    ) -> list[NewsArticle]:
        """Fetch headlines, degrading to an empty list."""
        try:
            articles: list[NewsArticle] = await asyncio.to_thread(
                self.news_provider.top_headlines,
                self.settings.NEWS_CATEGORY,
                self.settings.NEWS_COUNTRY,
                self.settings.NEWS_PAGE_SIZE,
            )
        except ProviderError as exc:
            logger.warning("News fetch failed, showing none: %s", exc.message)
            warnings.append(f"News: {exc.message}")
            return []
        return articles

    # ── Query entry point ────────────────────────────────

    async def query_city(
        self,
        session: StorefrontSession,
        city: str,
    ) -> StorefrontResult:
        """Run a full storefront query for ``city``.

        Raises ``InvalidQueryError`` for a blank city and lets weather
        errors propagate.  The session is only updated once the whole
        query has succeeded.
        """
        city = city.strip()
        if not city:
            raise InvalidQueryError("Please enter a city name")

        try:
            weather: WeatherObservation = await asyncio.to_thread(
                self.weather_provider.fetch, city
            )
        except ProviderError as exc:
            logger.error(
                "Weather fetch failed for '%s': %s",
                city,
                exc.message,
                exc_info=True,
            )
            raise

        warnings: list[str] = []
        currency = await self._resolve_currency(
            weather.country_code, warnings
        )
        recommendations = RecommendationFilter.recommend(
            session.catalog, weather
        )
        news = await self._fetch_news(warnings)

        result = StorefrontResult(
            city=city,
            weather=weather,
            currency=currency,
            recommendations=recommendations,
            news=news,
            warnings=warnings,
        )

        session.weather = weather
        session.currency = currency
        session.recommendations = recommendations
        session.news = news

        logger.info(
            "Query '%s' done: %d products, %d articles, currency %s "
            "(%d degraded)",
            city,
            len(recommendations),
            len(news),
            currency.code,
            len(warnings),
        )
        return result
