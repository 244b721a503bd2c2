# src/providers/exchange_rate_provider.py

"""ExchangeRate-API provider for currency conversion rates."""

from typing import Any

from src.errors import InvalidQueryError, ProviderError
from src.providers.base_provider import BaseProvider

_NUMBER = (int, float)


class ExchangeRateProvider(BaseProvider):
    """Look up conversion rates between currency codes."""

    def __init__(self) -> None:
        super().__init__("currency")

    def health_url(self) -> str:
        return "https://v6.exchangerate-api.com"

    def _base_url(self) -> str:
        return (
            f"{self.settings.EXCHANGERATE_URL}/"
            f"{self.settings.EXCHANGERATE_API_KEY}"
        )

    def _check_result(self, payload: dict[str, Any]) -> None:
        """ExchangeRate-API reports errors inside a 200 body."""
        if payload.get("result") != "success":
            error_type = payload.get("error-type") or "Invalid currency pair"
            raise ProviderError(
                f"Invalid currency code: {error_type}",
                provider=self.provider_name,
                status_code=400,
            )

    def pair_rate(self, from_code: str, to_code: str) -> float:
        """Return how many ``to_code`` units one ``from_code`` buys."""
        if not from_code or not to_code:
            raise InvalidQueryError(
                "Both source and target currency codes are required"
            )
        source = from_code.upper()
        target = to_code.upper()

        payload = self._fetch_json(
            f"{self._base_url()}/pair/{source}/{target}",
            context=f"{source}/{target}",
        )
        self._check_result(payload)
        rate = float(
            self._require(payload, "conversion_rate", _NUMBER)
        )
        if rate < 0:
            raise ProviderError(
                f"Negative rate for {source}/{target}",
                provider=self.provider_name,
            )
        self.logger.info(
            "Currency rate fetched: %s to %s = %s", source, target, rate
        )
        return rate

    def latest_rates(self, base: str) -> dict[str, float]:
        """Return every conversion rate for ``base``."""
        base_code = base.upper()
        payload = self._fetch_json(
            f"{self._base_url()}/latest/{base_code}",
            context=base_code,
        )
        self._check_result(payload)
        raw = self._require(payload, "conversion_rates", dict)
        rates = {
            str(code): float(value)
            for code, value in raw.items()
            if isinstance(value, _NUMBER) and not isinstance(value, bool)
        }
        self.logger.info(
            "Fetched %d rates for base %s", len(rates), base_code
        )
        return rates
