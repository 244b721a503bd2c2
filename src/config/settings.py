# src/config/settings.py

"""Central configuration for the weather_store storefront."""

import os
from pathlib import Path

from curl_cffi.requests import BrowserTypeLiteral
from dotenv import load_dotenv

load_dotenv()


class Settings:
    """Central configuration for the weather_store storefront."""

    # --- API keys (from .env / environment) ---
    OPENWEATHER_API_KEY: str = os.getenv("OPENWEATHER_API_KEY", "")
    NEWS_API_KEY: str = os.getenv("NEWS_API_KEY", "")
    EXCHANGERATE_API_KEY: str = os.getenv("EXCHANGERATE_API_KEY", "")

    # --- Endpoints ---
    OPENWEATHER_URL: str = "https://api.openweathermap.org/data/2.5/weather"
    NEWS_HEADLINES_URL: str = "https://newsapi.org/v2/top-headlines"
    NEWS_SEARCH_URL: str = "https://newsapi.org/v2/everything"
    EXCHANGERATE_URL: str = "https://v6.exchangerate-api.com/v6"

    # --- HTTP ---
    REQUEST_DELAY: float = 1.0          # Base backoff between retries (secs)
    REQUEST_TIMEOUT: int = 10           # Seconds before a request times out
    MAX_RETRIES: int = 2                # Attempts on transient failures

    # --- Resilience ---
    CIRCUIT_BREAKER_THRESHOLD: int = 3  # Consecutive failures to trip
    CIRCUIT_BREAKER_COOLDOWN: float = 60.0

    # --- Browser Impersonation ---
    IMPERSONATE_BROWSER: BrowserTypeLiteral = "chrome131"
    DEFAULT_HEADERS: dict[str, str] = {
        "Accept": "application/json",
        "Accept-Language": "en-US,en;q=0.9",
    }

    # --- Storefront ---
    REFERENCE_CURRENCY: str = "USD"
    HOT_THRESHOLD_C: float = 30.0       # Strictly above → hot products
    COLD_THRESHOLD_C: float = 10.0      # Strictly below → cold products
    RECOMMENDATION_LIMIT: int = 6

    # --- News ---
    NEWS_CATEGORY: str = "technology"
    NEWS_COUNTRY: str = "us"
    NEWS_PAGE_SIZE: int = 5

    # --- Logging ---
    # Console threshold; degraded currency/news fetches log at WARNING
    CONSOLE_LOG_LEVEL: str = os.getenv(
        "WEATHER_STORE_CONSOLE_LEVEL", "WARNING"
    ).upper()

    # --- Paths ---
    BASE_DIR: Path = Path(__file__).resolve().parent.parent.parent
    RESULTS_DIR: Path = BASE_DIR / "results"
    LOGS_DIR: Path = BASE_DIR / "logs"
    STORE_DB_PATH: Path = BASE_DIR / "data" / "store.db"

    # --- Providers (registry for the health checker; key_setting names
    #     the attribute holding that provider's API key) ---
    AVAILABLE_PROVIDERS: list[dict[str, str]] = [
        {
            "id": "weather",
            "label": "OpenWeather",
            "key_setting": "OPENWEATHER_API_KEY",
            "provider": "src.providers.weather_provider.WeatherProvider",
        },
        {
            "id": "currency",
            "label": "ExchangeRate-API",
            "key_setting": "EXCHANGERATE_API_KEY",
            "provider": (
                "src.providers.exchange_rate_provider.ExchangeRateProvider"
            ),
        },
        {
            "id": "news",
            "label": "NewsAPI",
            "key_setting": "NEWS_API_KEY",
            "provider": "src.providers.news_provider.NewsProvider",
        },
    ]
