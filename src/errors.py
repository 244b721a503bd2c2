# src/errors.py

"""Exception types shared across the storefront.

Every error carries a human-readable ``message`` (shown to the user as-is),
an HTTP-like ``status_code`` mirroring the upstream failure, and optional
``details`` for the log.
"""

from typing import Any


class WeatherStoreError(Exception):
    """Base exception for weather_store errors."""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = details or {}


class InvalidQueryError(WeatherStoreError):
    """Raised for user input rejected before any network call."""

    def __init__(self, message: str) -> None:
        super().__init__(message, status_code=400)


# ── Upstream providers ───────────────────────────────────


class ProviderError(WeatherStoreError):
    """An upstream API call failed."""

    def __init__(
        self,
        message: str,
        provider: str = "",
        status_code: int = 502,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message,
            status_code=status_code,
            details={"provider": provider, **(details or {})},
        )
        self.provider = provider


class CityNotFoundError(ProviderError):
    """The weather provider does not know the requested city."""

    def __init__(self, city: str) -> None:
        super().__init__(
            "City not found",
            provider="weather",
            status_code=404,
            details={"city": city},
        )
        self.city = city


class ProviderAuthError(ProviderError):
    """The upstream API rejected our key."""

    def __init__(self, provider: str) -> None:
        super().__init__(
            "Invalid API key", provider=provider, status_code=401
        )


class RateLimitError(ProviderError):
    """The upstream API is throttling us."""

    def __init__(self, provider: str) -> None:
        super().__init__(
            "Rate limit exceeded", provider=provider, status_code=429
        )


class ProviderResponseError(ProviderError):
    """The upstream payload is missing a field or has the wrong shape."""

    def __init__(self, provider: str, field: str) -> None:
        super().__init__(
            f"Malformed {provider} response: bad or missing '{field}'",
            provider=provider,
            details={"field": field},
        )
        self.field = field


# ── Store / cart ─────────────────────────────────────────


class ValidationError(WeatherStoreError):
    """A record failed validation; ``messages`` lists every problem."""

    def __init__(self, messages: list[str]) -> None:
        super().__init__(
            "Validation failed",
            status_code=400,
            details={"messages": messages},
        )
        self.messages = messages


class NotFoundError(WeatherStoreError):
    """A stored record does not exist."""

    def __init__(self, kind: str, record_id: int) -> None:
        super().__init__(
            f"{kind} not found",
            status_code=404,
            details={"id": record_id},
        )
        self.kind = kind
        self.record_id = record_id


class EmptyCartError(WeatherStoreError):
    """Checkout was requested on an empty cart."""

    def __init__(self) -> None:
        super().__init__("Your cart is empty!", status_code=400)
