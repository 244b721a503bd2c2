# src/pricing/currency_resolver.py

"""Static country → currency → symbol lookups."""

import logging

from src.config.settings import Settings

logger = logging.getLogger("weather_store.pricing")

_COUNTRY_CURRENCY: dict[str, str] = {
    "US": "USD", "GB": "GBP", "KZ": "KZT", "RU": "RUB",
    "CN": "CNY", "JP": "JPY", "IN": "INR", "CA": "CAD",
    "AU": "AUD", "EU": "EUR", "DE": "EUR", "FR": "EUR",
    "IT": "EUR", "ES": "EUR", "BR": "BRL", "MX": "MXN",
    "KR": "KRW", "TR": "TRY", "PL": "PLN", "SE": "SEK",
    "NO": "NOK", "DK": "DKK", "CH": "CHF", "NZ": "NZD",
}

_CURRENCY_SYMBOL: dict[str, str] = {
    "USD": "$", "EUR": "€", "GBP": "£", "KZT": "₸",
    "RUB": "₽", "CNY": "¥", "JPY": "¥", "INR": "₹",
    "CAD": "C$", "AUD": "A$", "BRL": "R$", "MXN": "Mex$",
    "KRW": "₩", "TRY": "₺", "PLN": "zł", "SEK": "kr",
    "NOK": "kr", "DKK": "kr", "CHF": "Fr", "NZD": "NZ$",
}


class CurrencyResolver:
    """Resolve display currencies. Unknown inputs fail open, never raise."""

    @staticmethod
    def currency_for_country(country_code: str) -> str:
        """Map an ISO country code to its currency code.

        Unmapped countries fall back to the reference currency.
        """
        code = _COUNTRY_CURRENCY.get((country_code or "").upper())
        if code is None:
            logger.debug(
                "No currency mapped for country '%s', using %s",
                country_code,
                Settings.REFERENCE_CURRENCY,
            )
            return Settings.REFERENCE_CURRENCY
        return code

    @staticmethod
    def symbol_for_currency(currency_code: str) -> str:
        """Map a currency code to its display symbol.

        Unmapped codes are their own symbol.
        """
        return _CURRENCY_SYMBOL.get(
            (currency_code or "").upper(), currency_code
        )
