# tests/test_health_checker.py

"""Tests for the storefront health checker service."""

import tempfile
import unittest
from pathlib import Path
from unittest.mock import MagicMock, patch

from src.catalog.default_catalog import DEFAULT_CATALOG
from src.config.settings import Settings
from src.errors import ProviderError
from src.services.health_checker import (
    ComponentHealth,
    HealthChecker,
    StorefrontHealth,
    check_provider,
    check_store,
)
from src.storage.catalog_store import CatalogStore


def _entry() -> dict[str, str]:
    return {
        "id": "weather",
        "label": "OpenWeather",
        "key_setting": "OPENWEATHER_API_KEY",
        "provider": "src.providers.weather_provider.WeatherProvider",
    }


def _provider_cls(ping: float | Exception) -> MagicMock:
    """A provider class whose instances answer ``ping`` with ``ping``."""
    instance = MagicMock()
    if isinstance(ping, Exception):
        instance.ping.side_effect = ping
    else:
        instance.ping.return_value = ping
    return MagicMock(return_value=instance)


@patch.object(Settings, "OPENWEATHER_API_KEY", "test-key")
class TestCheckProvider(unittest.TestCase):
    """Tests for the per-provider check."""

    @patch("src.services.health_checker._provider_class")
    def test_ok(self, mock_cls: MagicMock) -> None:
        mock_cls.return_value = _provider_cls(120.0)
        result = check_provider(_entry())
        self.assertEqual(result.state, "ok")
        self.assertEqual(result.latency_ms, 120.0)

    @patch("src.services.health_checker._provider_class")
    def test_slow(self, mock_cls: MagicMock) -> None:
        mock_cls.return_value = _provider_cls(4500.0)
        self.assertEqual(check_provider(_entry()).state, "slow")

    @patch("src.services.health_checker._provider_class")
    def test_down_on_provider_error(self, mock_cls: MagicMock) -> None:
        mock_cls.return_value = _provider_cls(
            ProviderError("weather answered HTTP 503", provider="weather")
        )
        result = check_provider(_entry())
        self.assertEqual(result.state, "down")
        self.assertIn("HTTP 503", result.detail)

    def test_unloadable_class(self) -> None:
        entry = _entry()
        entry["provider"] = "src.providers.nowhere.Missing"
        result = check_provider(entry)
        self.assertEqual(result.state, "down")
        self.assertTrue(result.detail.startswith("Failed to load provider"))


class TestMissingKey(unittest.TestCase):
    """Providers without a key are flagged, not contacted."""

    @patch.object(Settings, "OPENWEATHER_API_KEY", "")
    @patch("src.services.health_checker._provider_class")
    def test_no_key(self, mock_cls: MagicMock) -> None:
        result = check_provider(_entry())
        self.assertEqual(result.state, "no-key")
        self.assertIn("OPENWEATHER_API_KEY", result.detail)
        self.assertFalse(result.usable)
        mock_cls.assert_not_called()


class TestCheckStore(unittest.TestCase):
    """Tests for the catalog store check."""

    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.db_path = Path(self._tmp.name) / "store.db"

    def test_empty_store(self) -> None:
        result = check_store(self.db_path)
        self.assertEqual(result.state, "ok")
        self.assertIn("built-in catalog", result.detail)

    def test_seeded_store_reports_count(self) -> None:
        store = CatalogStore(self.db_path)
        store.seed_products()
        store.close()
        result = check_store(self.db_path)
        self.assertEqual(result.detail, f"{len(DEFAULT_CATALOG)} products")

    @patch("src.services.health_checker.CatalogStore")
    def test_unopenable_store(self, mock_store: MagicMock) -> None:
        mock_store.side_effect = OSError("read-only file system")
        result = check_store(self.db_path)
        self.assertEqual(result.state, "down")
        self.assertIn("read-only", result.detail)


class TestStorefrontHealth(unittest.TestCase):
    """Aggregate health."""

    def test_healthy_only_when_all_usable(self) -> None:
        self.assertTrue(
            StorefrontHealth(
                [ComponentHealth("store", "ok"), ComponentHealth("news", "slow")]
            ).healthy
        )
        self.assertFalse(
            StorefrontHealth(
                [ComponentHealth("store", "ok"), ComponentHealth("news", "no-key")]
            ).healthy
        )


class TestHealthChecker(unittest.IsolatedAsyncioTestCase):
    """Tests for the concurrent checker."""

    @patch("src.services.health_checker.check_store")
    @patch("src.services.health_checker.check_provider")
    async def test_store_first_then_every_provider(
        self, mock_provider: MagicMock, mock_store: MagicMock,
    ) -> None:
        mock_store.return_value = ComponentHealth("store", "ok")
        mock_provider.side_effect = lambda e: ComponentHealth(e["id"], "ok")
        report = await HealthChecker().run()
        self.assertEqual(
            [c.name for c in report.components],
            ["store", "weather", "currency", "news"],
        )
        self.assertTrue(report.healthy)


if __name__ == "__main__":
    unittest.main()
