# src/providers/base_provider.py

"""Abstract base class for all upstream JSON API providers."""

import logging
import time
from abc import ABC, abstractmethod
from typing import Any

from curl_cffi import requests as curl_requests

from src.config.settings import Settings
from src.errors import (
    ProviderAuthError,
    ProviderError,
    ProviderResponseError,
    RateLimitError,
)

# Statuses worth another attempt; anything else is a definitive answer
_TRANSIENT_STATUSES: frozenset[int] = frozenset({429, 500, 502, 503, 504})


class BaseProvider(ABC):
    """Abstract base class for all upstream JSON API providers."""

    def __init__(self, provider_name: str) -> None:
        self.provider_name = provider_name
        self.logger = logging.getLogger(
            f"weather_store.{provider_name}"
        )
        self.settings = Settings()
        self.session = curl_requests.Session(
            impersonate=self.settings.IMPERSONATE_BROWSER
        )
        self._current_delay: float = (
            self.settings.REQUEST_DELAY
        )
        self._consecutive_failures: int = 0
        self._circuit_open: bool = False
        self._circuit_opened_at: float = 0.0
        self._request_timeout: int = (
            self.settings.REQUEST_TIMEOUT
        )

    def _check_circuit(self) -> bool:
        """Return True if the circuit breaker blocks this request.

        After CIRCUIT_BREAKER_COOLDOWN seconds the breaker enters
        a half-open state, allowing a single trial request through.
        """
        if not self._circuit_open:
            return False
        elapsed = time.time() - self._circuit_opened_at
        if elapsed >= self.settings.CIRCUIT_BREAKER_COOLDOWN:
            self.logger.info(
                "[%s] Circuit breaker half-open after %.0fs",
                self.provider_name,
                elapsed,
            )
            self._circuit_open = False
            return False
        return True

    def _record_success(self) -> None:
        """Reset failure counters after a successful fetch."""
        self._consecutive_failures = 0
        self._circuit_open = False
        self._circuit_opened_at = 0.0
        self._current_delay = self.settings.REQUEST_DELAY

    def _record_failure(self) -> None:
        """Track failure and open circuit breaker if needed."""
        self._consecutive_failures += 1
        threshold = (
            self.settings.CIRCUIT_BREAKER_THRESHOLD
        )
        if self._consecutive_failures >= threshold:
            self._circuit_open = True
            self._circuit_opened_at = time.time()
            self.logger.error(
                "[%s] Circuit breaker opened after %d "
                "consecutive failures",
                self.provider_name,
                self._consecutive_failures,
            )

    def _escalate_delay(self) -> None:
        """Double the current delay, capped at four times the base."""
        max_delay = self.settings.REQUEST_DELAY * 4
        self._current_delay = min(
            self._current_delay * 2, max_delay
        )
        self.logger.warning(
            "[%s] Rate-limited, delay escalated to %.1fs",
            self.provider_name,
            self._current_delay,
        )

    @staticmethod
    def _upstream_message(resp: curl_requests.Response) -> str:
        """Best-effort extraction of the provider's own error text."""
        try:
            body = resp.json()
        except ValueError:
            return ""
        if isinstance(body, dict):
            for key in ("message", "error-type", "error"):
                value = body.get(key)
                if isinstance(value, str) and value:
                    return value
        return ""

    def _error_for_status(
        self, resp: curl_requests.Response, context: str,
    ) -> ProviderError:
        """Map a non-200 response onto the error taxonomy.

        Subclasses refine this for statuses with a domain meaning.
        """
        status = resp.status_code
        if status in (401, 403):
            return ProviderAuthError(self.provider_name)
        if status == 429:
            return RateLimitError(self.provider_name)
        detail = self._upstream_message(resp) or f"HTTP {status}"
        return ProviderError(
            f"Failed to fetch {self.provider_name} data: {detail}",
            provider=self.provider_name,
            details={"status": status, "context": context},
        )

    def _fetch_json(
        self,
        url: str,
        params: dict[str, Any] | None = None,
        context: str = "",
    ) -> dict[str, Any]:
        """GET a JSON object with retries, adaptive delay, and circuit breaker.

        Raises a :class:`ProviderError` subclass when the provider
        answers with an error or stays unreachable.
        """
        if self._check_circuit():
            raise ProviderError(
                f"{self.provider_name} is temporarily unavailable",
                provider=self.provider_name,
                status_code=503,
            )

        last_error = ProviderError(
            f"Failed to fetch {self.provider_name} data: no attempts made",
            provider=self.provider_name,
        )
        for attempt in range(self.settings.MAX_RETRIES):
            try:
                resp = self.session.get(
                    url,
                    params=params,
                    headers=self.settings.DEFAULT_HEADERS,
                    timeout=self._request_timeout,
                )
            except Exception as exc:
                self.logger.warning(
                    "[%s] Request error on attempt %d: %s",
                    self.provider_name,
                    attempt + 1,
                    exc,
                    exc_info=True,
                )
                last_error = ProviderError(
                    f"Failed to fetch {self.provider_name} data: {exc}",
                    provider=self.provider_name,
                )
                time.sleep(
                    self._current_delay * (attempt + 1)
                )
                continue

            if resp.status_code == 200:
                try:
                    body = resp.json()
                except ValueError as exc:
                    raise ProviderResponseError(
                        self.provider_name, "body"
                    ) from exc
                if not isinstance(body, dict):
                    raise ProviderResponseError(
                        self.provider_name, "body"
                    )
                self._record_success()
                return body

            self.logger.warning(
                "[%s] HTTP %d on attempt %d",
                self.provider_name,
                resp.status_code,
                attempt + 1,
            )
            last_error = self._error_for_status(resp, context)
            if resp.status_code not in _TRANSIENT_STATUSES:
                raise last_error
            if resp.status_code == 429:
                self._escalate_delay()
            time.sleep(self._current_delay)

        self._record_failure()
        raise last_error

    def _require(
        self,
        payload: dict[str, Any],
        path: str,
        kind: type | tuple[type, ...],
    ) -> Any:
        """Walk a dotted ``path`` into ``payload`` and type-check the leaf."""
        node: Any = payload
        for key in path.split("."):
            if not isinstance(node, dict) or key not in node:
                raise ProviderResponseError(self.provider_name, path)
            node = node[key]
        if isinstance(node, bool) or not isinstance(node, kind):
            raise ProviderResponseError(self.provider_name, path)
        return node

    def ping(self) -> float:
        """Hit :meth:`health_url` once and return the latency in ms.

        Any HTTP answer below 500 counts as reachable, since the
        request carries no API key.  Raises :class:`ProviderError`
        otherwise.
        """
        start = time.monotonic()
        try:
            resp = self.session.get(
                self.health_url(),
                headers=self.settings.DEFAULT_HEADERS,
                timeout=self._request_timeout,
            )
        except Exception as exc:
            raise ProviderError(
                f"{self.provider_name} is unreachable: {exc}",
                provider=self.provider_name,
                status_code=503,
            ) from exc
        latency_ms = (time.monotonic() - start) * 1000
        if resp.status_code >= 500:
            raise ProviderError(
                f"{self.provider_name} answered HTTP {resp.status_code}",
                provider=self.provider_name,
                status_code=resp.status_code,
            )
        return latency_ms

    @abstractmethod
    def health_url(self) -> str:
        """Return a cheap URL used to check the provider's reachability."""
        ...
