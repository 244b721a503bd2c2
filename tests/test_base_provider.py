# tests/test_base_provider.py

"""Tests for BaseProvider resilience and payload checking."""

import time
import unittest
from typing import Any
from unittest.mock import MagicMock, patch

from src.config.settings import Settings
from src.errors import (
    ProviderAuthError,
    ProviderError,
    ProviderResponseError,
    RateLimitError,
)
from src.providers.base_provider import BaseProvider


class _StubProvider(BaseProvider):
    """Concrete provider exposing protected members for testing."""

    def health_url(self) -> str:
        return "https://example.com"

    @property
    def circuit_open(self) -> bool:
        return self._circuit_open

    @circuit_open.setter
    def circuit_open(self, value: bool) -> None:
        self._circuit_open = value

    @property
    def circuit_opened_at(self) -> float:
        return self._circuit_opened_at

    @circuit_opened_at.setter
    def circuit_opened_at(self, value: float) -> None:
        self._circuit_opened_at = value

    @property
    def consecutive_failures(self) -> int:
        return self._consecutive_failures

    @property
    def current_delay(self) -> float:
        return self._current_delay

    def fetch_json(self, url: str) -> dict[str, Any]:
        """Public wrapper for _fetch_json."""
        return self._fetch_json(url, context="ctx")

    def require(
        self, payload: dict[str, Any], path: str, kind: Any,
    ) -> Any:
        """Public wrapper for _require."""
        return self._require(payload, path, kind)

    def escalate_delay(self) -> None:
        self._escalate_delay()


def _resp(status: int, body: Any = None) -> MagicMock:
    """Build a fake response with a JSON body."""
    resp = MagicMock()
    resp.status_code = status
    if isinstance(body, Exception):
        resp.json.side_effect = body
    else:
        resp.json.return_value = body if body is not None else {}
    return resp


@patch("src.providers.base_provider.curl_requests.Session")
class TestFetchJson(unittest.TestCase):
    """Status handling in _fetch_json."""

    def _provider(
        self, mock_session_cls: MagicMock, *responses: Any,
    ) -> tuple[_StubProvider, MagicMock]:
        mock_session = MagicMock()
        mock_session_cls.return_value = mock_session
        mock_session.get.side_effect = list(responses)
        return _StubProvider("stub"), mock_session

    def test_ok_returns_body(self, mock_session_cls: MagicMock) -> None:
        provider, _ = self._provider(
            mock_session_cls, _resp(200, {"a": 1})
        )
        self.assertEqual(provider.fetch_json("https://x"), {"a": 1})

    def test_auth_error_not_retried(
        self, mock_session_cls: MagicMock,
    ) -> None:
        provider, session = self._provider(mock_session_cls, _resp(401))
        with self.assertRaises(ProviderAuthError) as ctx:
            provider.fetch_json("https://x")
        self.assertEqual(ctx.exception.message, "Invalid API key")
        self.assertEqual(ctx.exception.provider, "stub")
        self.assertEqual(session.get.call_count, 1)

    def test_server_error_retried_then_succeeds(
        self, mock_session_cls: MagicMock,
    ) -> None:
        provider, session = self._provider(
            mock_session_cls, _resp(503), _resp(200, {"ok": True})
        )
        self.assertEqual(provider.fetch_json("https://x"), {"ok": True})
        self.assertEqual(session.get.call_count, 2)

    def test_rate_limit_escalates_and_raises(
        self, mock_session_cls: MagicMock,
    ) -> None:
        provider, _ = self._provider(
            mock_session_cls, _resp(429), _resp(429)
        )
        with self.assertRaises(RateLimitError):
            provider.fetch_json("https://x")
        self.assertGreater(
            provider.current_delay, provider.settings.REQUEST_DELAY
        )

    def test_connection_error_wrapped(
        self, mock_session_cls: MagicMock,
    ) -> None:
        provider, _ = self._provider(
            mock_session_cls,
            ConnectionError("reset"),
            ConnectionError("reset"),
        )
        with self.assertRaises(ProviderError) as ctx:
            provider.fetch_json("https://x")
        self.assertIn("reset", ctx.exception.message)

    def test_non_object_body_rejected(
        self, mock_session_cls: MagicMock,
    ) -> None:
        provider, _ = self._provider(mock_session_cls, _resp(200, [1, 2]))
        with self.assertRaises(ProviderResponseError):
            provider.fetch_json("https://x")

    def test_invalid_json_rejected(
        self, mock_session_cls: MagicMock,
    ) -> None:
        provider, _ = self._provider(
            mock_session_cls, _resp(200, ValueError("bad json"))
        )
        with self.assertRaises(ProviderResponseError):
            provider.fetch_json("https://x")

    def test_upstream_message_used(
        self, mock_session_cls: MagicMock,
    ) -> None:
        provider, _ = self._provider(
            mock_session_cls, _resp(400, {"message": "bad param"})
        )
        with self.assertRaises(ProviderError) as ctx:
            provider.fetch_json("https://x")
        self.assertIn("bad param", ctx.exception.message)
        self.assertEqual(ctx.exception.details["status"], 400)


@patch("src.providers.base_provider.curl_requests.Session")
class TestCircuitBreaker(unittest.TestCase):
    """Circuit breaker opens after consecutive failures."""

    def test_circuit_opens_after_threshold(
        self, mock_session_cls: MagicMock,
    ) -> None:
        mock_session = MagicMock()
        mock_session_cls.return_value = mock_session
        mock_session.get.return_value = _resp(500)

        provider = _StubProvider("stub")
        threshold = provider.settings.CIRCUIT_BREAKER_THRESHOLD
        for _ in range(threshold):
            with self.assertRaises(ProviderError):
                provider.fetch_json("https://x")

        self.assertTrue(provider.circuit_open)

        # Subsequent calls short-circuit immediately
        mock_session.get.reset_mock()
        with self.assertRaises(ProviderError) as ctx:
            provider.fetch_json("https://x")
        self.assertEqual(ctx.exception.status_code, 503)
        mock_session.get.assert_not_called()

    def test_success_resets_counter(
        self, mock_session_cls: MagicMock,
    ) -> None:
        mock_session = MagicMock()
        mock_session_cls.return_value = mock_session
        retries = 2
        mock_session.get.side_effect = (
            [_resp(500)] * retries + [_resp(200, {"ok": True})]
        )

        provider = _StubProvider("stub")
        with self.assertRaises(ProviderError):
            provider.fetch_json("https://x")
        self.assertEqual(provider.consecutive_failures, 1)

        provider.fetch_json("https://x")
        self.assertEqual(provider.consecutive_failures, 0)

    @patch.object(Settings, "MAX_RETRIES", 0)
    def test_zero_retries_raises_provider_error(
        self, mock_session_cls: MagicMock,
    ) -> None:
        """With no attempts allowed the caller still gets a ProviderError."""
        mock_session = MagicMock()
        mock_session_cls.return_value = mock_session

        provider = _StubProvider("stub")
        with self.assertRaises(ProviderError):
            provider.fetch_json("https://x")
        mock_session.get.assert_not_called()

    def test_half_open_after_cooldown(
        self, mock_session_cls: MagicMock,
    ) -> None:
        mock_session = MagicMock()
        mock_session_cls.return_value = mock_session
        mock_session.get.return_value = _resp(200, {"ok": True})

        provider = _StubProvider("stub")
        provider.circuit_open = True
        provider.circuit_opened_at = (
            time.time() - provider.settings.CIRCUIT_BREAKER_COOLDOWN - 1
        )
        self.assertEqual(provider.fetch_json("https://x"), {"ok": True})
        self.assertFalse(provider.circuit_open)


@patch("src.providers.base_provider.curl_requests.Session")
class TestPing(unittest.TestCase):
    """Reachability check used by the health checker."""

    def _provider(
        self, mock_session_cls: MagicMock, outcome: Any,
    ) -> _StubProvider:
        mock_session = MagicMock()
        mock_session_cls.return_value = mock_session
        if isinstance(outcome, Exception):
            mock_session.get.side_effect = outcome
        else:
            mock_session.get.return_value = outcome
        return _StubProvider("stub")

    def test_client_error_is_reachable(
        self, mock_session_cls: MagicMock,
    ) -> None:
        """A 401 without a key still proves the host answers."""
        provider = self._provider(mock_session_cls, _resp(401))
        self.assertGreaterEqual(provider.ping(), 0.0)

    def test_server_error_raises(self, mock_session_cls: MagicMock) -> None:
        provider = self._provider(mock_session_cls, _resp(502))
        with self.assertRaises(ProviderError) as ctx:
            provider.ping()
        self.assertEqual(ctx.exception.status_code, 502)

    def test_connection_error_raises(
        self, mock_session_cls: MagicMock,
    ) -> None:
        provider = self._provider(
            mock_session_cls, ConnectionError("no route")
        )
        with self.assertRaises(ProviderError) as ctx:
            provider.ping()
        self.assertIn("no route", ctx.exception.message)


@patch("src.providers.base_provider.curl_requests.Session")
class TestRequireAndDelay(unittest.TestCase):
    """Payload walking and delay escalation."""

    def test_require_nested(self, _mock: MagicMock) -> None:
        provider = _StubProvider("stub")
        payload = {"main": {"temp": 21.5}}
        self.assertEqual(
            provider.require(payload, "main.temp", (int, float)), 21.5
        )

    def test_require_missing(self, _mock: MagicMock) -> None:
        provider = _StubProvider("stub")
        with self.assertRaises(ProviderResponseError) as ctx:
            provider.require({"main": {}}, "main.temp", (int, float))
        self.assertEqual(ctx.exception.field, "main.temp")

    def test_require_wrong_type(self, _mock: MagicMock) -> None:
        provider = _StubProvider("stub")
        with self.assertRaises(ProviderResponseError):
            provider.require({"temp": "hot"}, "temp", (int, float))

    def test_require_rejects_bool(self, _mock: MagicMock) -> None:
        provider = _StubProvider("stub")
        with self.assertRaises(ProviderResponseError):
            provider.require({"temp": True}, "temp", (int, float))

    def test_escalate_delay_capped(self, _mock: MagicMock) -> None:
        provider = _StubProvider("stub")
        for _ in range(10):
            provider.escalate_delay()
        self.assertEqual(
            provider.current_delay, provider.settings.REQUEST_DELAY * 4
        )


if __name__ == "__main__":
    unittest.main()
