# src/services/health_checker.py

"""Storefront health: catalog store, API keys and upstream reachability."""

import asyncio
import importlib
import logging
import sqlite3
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from src.config.settings import Settings
from src.errors import ProviderError
from src.providers.base_provider import BaseProvider
from src.storage.catalog_store import CatalogStore

logger = logging.getLogger("weather_store.health")

_SLOW_MS = 3000


@dataclass(frozen=True)
class ComponentHealth:
    """State of one part of the storefront.

    ``state`` is ``ok``, ``slow``, ``down`` or ``no-key``.
    """

    name: str
    state: str
    latency_ms: float = 0.0
    detail: str = ""

    @property
    def usable(self) -> bool:
        return self.state in ("ok", "slow")


@dataclass
class StorefrontHealth:
    """Every component checked in one run."""

    components: list[ComponentHealth]
    checked_at: datetime = field(default_factory=datetime.now)

    @property
    def healthy(self) -> bool:
        return all(c.usable for c in self.components)


def _provider_class(dotted_path: str) -> type[BaseProvider]:
    module_path, class_name = dotted_path.rsplit(".", 1)
    return getattr(importlib.import_module(module_path), class_name)


def check_store(db_path: Path | None = None) -> ComponentHealth:
    """Open the catalog store and count its products."""
    try:
        store = CatalogStore(db_path)
        try:
            count = store.count_products()
        finally:
            store.close()
    except (sqlite3.Error, OSError) as exc:
        return ComponentHealth("store", "down", detail=str(exc)[:80])

    detail = (
        f"{count} products"
        if count
        else "empty, built-in catalog in use"
    )
    return ComponentHealth("store", "ok", detail=detail)


def check_provider(entry: dict[str, str]) -> ComponentHealth:
    """Check one registry entry: key configured first, then reachability.

    A provider without its API key is reported as ``no-key`` and not
    contacted at all.
    """
    name = entry["id"]
    key_setting = entry["key_setting"]
    if not getattr(Settings, key_setting, ""):
        return ComponentHealth(
            name, "no-key", detail=f"{key_setting} is not set"
        )

    try:
        provider = _provider_class(entry["provider"])()
    except (ImportError, AttributeError) as exc:
        return ComponentHealth(
            name, "down", detail=f"Failed to load provider: {exc}"
        )

    try:
        latency_ms = provider.ping()
    except ProviderError as exc:
        return ComponentHealth(name, "down", detail=exc.message[:80])

    if latency_ms > _SLOW_MS:
        return ComponentHealth(name, "slow", latency_ms, "High latency")
    return ComponentHealth(name, "ok", latency_ms)


class HealthChecker:
    """Checks the store and every registered provider concurrently."""

    def __init__(
        self,
        providers: list[dict[str, str]] | None = None,
        db_path: Path | None = None,
    ) -> None:
        self.providers = (
            Settings.AVAILABLE_PROVIDERS if providers is None else providers
        )
        self.db_path = db_path

    async def run(self) -> StorefrontHealth:
        """Return the health of the store followed by each provider."""
        components: list[ComponentHealth] = list(
            await asyncio.gather(
                asyncio.to_thread(check_store, self.db_path),
                *(
                    asyncio.to_thread(check_provider, entry)
                    for entry in self.providers
                ),
            )
        )
        report = StorefrontHealth(components=components)
        for c in components:
            log = logger.info if c.usable else logger.warning
            log("Health %s: %s %s", c.name, c.state, c.detail)
        return report
