# src/cli/runner.py

"""Headless CLI runner, reusing the async storefront orchestrator."""

import json
import logging
import sys

from rich.console import Console
from rich.table import Table

from src.cart.ledger import to_local
from src.errors import WeatherStoreError
from src.filters.product_filter import ProductFilter
from src.models.product import Category, WeatherAffinity
from src.pricing.currency_resolver import CurrencyResolver
from src.providers.exchange_rate_provider import ExchangeRateProvider
from src.providers.news_provider import NewsProvider
from src.services.session import StorefrontSession
from src.services.storefront_orchestrator import (
    StorefrontOrchestrator,
    StorefrontResult,
)
from src.storage.catalog_store import CatalogStore, load_catalog_or_default

logger = logging.getLogger("weather_store.cli")

# Stderr console for status messages so stdout stays clean for JSON
_err = Console(stderr=True)


def _result_to_dict(
    result: StorefrontResult, session: StorefrontSession,
) -> dict[str, object]:
    """Serialise a query result plus cart totals for JSON output."""
    weather = result.weather
    currency = result.currency
    totals = session.cart.totals(currency)
    return {
        "city": result.city,
        "weather": {
            "temperature": weather.temperature,
            "feels_like": weather.feels_like,
            "wind_speed": weather.wind_speed,
            "rain": weather.rain,
            "country_code": weather.country_code,
            "description": weather.description,
            "coordinates": {
                "lat": weather.coordinates.lat,
                "lon": weather.coordinates.lon,
            },
        },
        "currency": {
            "code": currency.code,
            "symbol": currency.symbol,
            "rate": currency.rate,
        },
        "recommendations": [
            {
                "id": r.product.id,
                "name": r.product.name,
                "price": r.product.price,
                "local_price": to_local(r.product.price, currency),
                "weather_recommended": r.weather_recommended,
            }
            for r in result.recommendations
        ],
        "news": [
            {
                "title": a.title,
                "source": a.source,
                "url": a.url,
                "published_at": a.published_at,
            }
            for a in result.news
        ],
        "cart": {
            "items": [
                {"product_id": e.product_id, "quantity": e.quantity}
                for e in session.cart.entries
            ],
            "total_reference": totals.total_reference,
            "total_local": totals.total_local,
            "item_count": totals.item_count,
        },
        "warnings": result.warnings,
    }


def _print_tables(
    result: StorefrontResult, session: StorefrontSession,
) -> None:
    """Render weather, recommendations, news and cart as Rich tables."""
    console = Console()
    weather = result.weather
    currency = result.currency

    console.print(
        f"[bold cyan]{weather.city_name or result.city}"
        f" ({weather.country_code})[/bold cyan]  "
        f"{weather.temperature:.1f}°C, feels like "
        f"{weather.feels_like:.1f}°C, {weather.description}  "
        f"[dim]wind {weather.wind_speed} m/s, "
        f"rain(3h) {weather.rain} mm[/dim]"
    )

    table = Table(
        title="Recommended Products",
        show_lines=True,
        title_style="bold cyan",
    )
    table.add_column("ID", style="dim", width=4)
    table.add_column("Product", max_width=40)
    table.add_column("Price", justify="right", style="green")
    table.add_column(f"≈ {currency.code}", justify="right")
    table.add_column("Pick", justify="center")

    for rec in result.recommendations:
        p = rec.product
        table.add_row(
            str(p.id),
            f"{p.icon} {p.name}",
            f"${p.price:,.2f}",
            f"{to_local(p.price, currency):,.0f} {currency.symbol}",
            "⭐" if rec.weather_recommended else "",
        )
    console.print(table)

    if result.news:
        news_table = Table(title="Tech News", title_style="bold cyan")
        news_table.add_column("Title", max_width=70)
        news_table.add_column("Source", style="magenta")
        news_table.add_column("URL", overflow="fold", style="dim")
        for article in result.news:
            news_table.add_row(article.title, article.source, article.url)
        console.print(news_table)

    if not session.cart.is_empty:
        totals = session.cart.totals(currency)
        cart_table = Table(title="Cart", title_style="bold cyan")
        cart_table.add_column("Product")
        cart_table.add_column("Qty", justify="right")
        cart_table.add_column("Line", justify="right", style="green")
        for line in session.cart.lines(currency):
            cart_table.add_row(
                f"{line.icon} {line.name}",
                str(line.quantity),
                f"${line.line_reference:,.2f}",
            )
        console.print(cart_table)
        console.print(
            f"[bold]Total:[/bold] ${totals.total_reference:,.2f} "
            f"(≈ {totals.total_local:,.0f} {currency.symbol}), "
            f"{totals.item_count} items"
        )


async def cli_query(
    city: str,
    output_format: str,
    add_ids: list[int] | None = None,
) -> int:
    """Run a headless city query and return an exit code (0=ok, 1=fail)."""
    session = StorefrontSession(catalog=load_catalog_or_default())
    orchestrator = StorefrontOrchestrator()

    _err.print(f"[bold]Fetching storefront for:[/bold] {city}")

    try:
        result = await orchestrator.query_city(session, city)
    except WeatherStoreError as exc:
        _err.print(f"[red]❌ Error: {exc.message}[/red]")
        return 1

    for warning in result.warnings:
        _err.print(f"[yellow]Degraded: {warning}[/yellow]")

    for product_id in add_ids or []:
        if session.cart.add(product_id) is None:
            _err.print(
                f"[yellow]Unknown product id {product_id}, skipped[/yellow]"
            )

    _err.print(
        f"[green]✓ {len(result.recommendations)} products, "
        f"{len(result.news)} articles, prices in "
        f"{result.currency.code}[/green]"
    )

    if output_format == "table":
        _print_tables(result, session)
    else:
        json.dump(
            _result_to_dict(result, session),
            sys.stdout,
            ensure_ascii=False,
            indent=2,
        )
        sys.stdout.write("\n")

    return 0


def run_seed() -> int:
    """Reset the catalog store to the built-in products."""
    _err.print("[bold]Seeding the catalog store...[/bold]")
    store = CatalogStore()
    try:
        count = store.seed_products()
    except WeatherStoreError as exc:
        logger.error("Seeding failed: %s", exc.message, exc_info=True)
        _err.print(f"[red]Seeding failed: {exc.message}[/red]")
        return 1
    finally:
        store.close()
    _err.print(f"[green]✓ Seeded {count} products[/green]")
    return 0


async def run_health_check() -> int:
    """Report store, API-key and provider health; 1 if anything is unusable."""
    from src.services.health_checker import HealthChecker

    _err.print("[bold]Running storefront health check...[/bold]")
    report = await HealthChecker().run()

    table = Table(
        title="Storefront Health",
        show_lines=True,
        title_style="bold cyan",
    )
    table.add_column("Component", style="bold")
    table.add_column("State", justify="center")
    table.add_column("Latency", justify="right")
    table.add_column("Notes", style="dim")

    labels = {
        "ok": "[green]✅ OK[/green]",
        "slow": "[yellow]⚠️  SLOW[/yellow]",
        "no-key": "[yellow]🔑 NO KEY[/yellow]",
    }
    for c in report.components:
        table.add_row(
            c.name,
            labels.get(c.state, "[red]❌ DOWN[/red]"),
            f"{c.latency_ms:.0f}ms" if c.latency_ms > 0 else "—",
            c.detail,
        )

    Console().print(table)
    return 0 if report.healthy else 1


def run_list_products(
    category: str | None = None,
    weather: str | None = None,
    min_price: float | None = None,
    max_price: float | None = None,
) -> int:
    """Print the catalog, narrowed by the given filters."""
    try:
        category_filter = Category(category) if category else None
        weather_filter = WeatherAffinity(weather) if weather else None
    except ValueError as exc:
        _err.print(f"[red]{exc}[/red]")
        return 1

    products, excluded = ProductFilter.filter_catalog(
        load_catalog_or_default(),
        category=category_filter,
        weather=weather_filter,
        min_price=min_price,
        max_price=max_price,
    )

    table = Table(
        title="Catalog",
        show_lines=True,
        title_style="bold cyan",
    )
    table.add_column("ID", style="dim", width=4)
    table.add_column("Product", max_width=40)
    table.add_column("Category", style="magenta")
    table.add_column("Weather")
    table.add_column("Price", justify="right", style="green")
    table.add_column("Rating", justify="center")

    for p in products:
        table.add_row(
            str(p.id),
            f"{p.icon} {p.name}",
            p.category.value,
            p.weather.value,
            f"${p.price:,.2f}",
            f"⭐ {p.average_rating:.1f} ({p.total_reviews})"
            if p.total_reviews
            else "—",
        )

    Console().print(table)
    _err.print(
        f"[dim]{len(products)} shown, {excluded} filtered out[/dim]"
    )
    return 0


def run_news_search(query: str) -> int:
    """Search tech news for ``query`` and print the newest articles."""
    _err.print(f"[bold]Searching news for:[/bold] {query}")
    try:
        articles = NewsProvider().search(query)
    except WeatherStoreError as exc:
        _err.print(f"[red]❌ Error: {exc.message}[/red]")
        return 1

    table = Table(title=f"News: {query}", title_style="bold cyan")
    table.add_column("Date", style="dim", width=10)
    table.add_column("Title", max_width=70)
    table.add_column("Source", style="magenta")
    table.add_column("URL", overflow="fold", style="dim")
    for article in articles:
        table.add_row(
            article.published_at[:10],
            article.title,
            article.source,
            article.url,
        )

    Console().print(table)
    _err.print(f"[dim]{len(articles)} articles[/dim]")
    return 0


def run_rates(base: str, codes: list[str] | None = None) -> int:
    """Print every conversion rate for ``base``, or only ``codes``."""
    try:
        rates = ExchangeRateProvider().latest_rates(base)
    except WeatherStoreError as exc:
        _err.print(f"[red]❌ Error: {exc.message}[/red]")
        return 1

    wanted = {c.upper() for c in codes} if codes else None
    table = Table(
        title=f"Rates for 1 {base.upper()}",
        title_style="bold cyan",
    )
    table.add_column("Currency", style="bold")
    table.add_column("Symbol", justify="center")
    table.add_column("Rate", justify="right", style="green")
    for code in sorted(rates):
        if wanted is not None and code not in wanted:
            continue
        table.add_row(
            code,
            CurrencyResolver.symbol_for_currency(code),
            f"{rates[code]:,.4f}",
        )

    Console().print(table)
    return 0
