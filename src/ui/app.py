# src/ui/app.py

"""Terminal UI for the weather_store storefront."""

import logging
from typing import cast

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container, Horizontal
from textual.widgets import (
    Button,
    DataTable,
    Footer,
    Header,
    Input,
    Static,
)

from src.cart.ledger import to_local
from src.errors import WeatherStoreError
from src.models.product import Product
from src.services.session import StorefrontSession
from src.services.storefront_orchestrator import StorefrontOrchestrator
from src.storage.catalog_store import load_catalog_or_default
from src.storage.file_manager import FileManager

logger = logging.getLogger("weather_store.ui")


class WeatherStoreApp(App[object]):
    """Terminal UI for the weather_store storefront."""

    CSS_PATH = "styles.css"

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("a", "add_to_cart", "Add"),
        Binding("plus", "increase", "+1"),
        Binding("minus", "decrease", "-1"),
        Binding("d", "remove", "Remove"),
        Binding("x", "clear_cart", "Clear"),
        Binding("c", "checkout", "Checkout"),
        Binding("e", "export", "Export CSV"),
        Binding("escape", "dismiss_error", "Dismiss", show=False),
    ]

    def __init__(
        self,
        catalog: list[Product] | None = None,
        orchestrator: StorefrontOrchestrator | None = None,
    ) -> None:
        super().__init__()
        self.session = StorefrontSession(
            catalog=(
                catalog if catalog is not None else load_catalog_or_default()
            )
        )
        self.orchestrator = orchestrator or StorefrontOrchestrator()
        self.file_manager = FileManager()
        self._clear_armed = False

    def compose(self) -> ComposeResult:
        """Build the widget tree for the TUI."""
        yield Header()
        yield Container(
            Static("🌦️ Tech Weather Store", id="title"),

            # City search bar
            Horizontal(
                Input(placeholder="Enter city name...", id="city_input"),
                Button("Search", variant="primary", id="search_btn"),
                id="search_bar",
            ),

            Static("", id="error_banner"),
            Static("Ready", id="status"),
            Static("", id="weather_panel"),
            cast(
                DataTable[str | Text],
                DataTable(
                    id="products_table",
                    zebra_stripes=True,
                    cursor_type="row",
                ),
            ),
            cast(
                DataTable[str | Text],
                DataTable(id="news_table", cursor_type="row"),
            ),
            cast(
                DataTable[str | Text],
                DataTable(id="cart_table", cursor_type="row"),
            ),
            Static("Cart is empty", id="cart_total"),
            id="main_container",
        )
        yield Footer()

    def on_mount(self) -> None:
        """Configure table columns on startup."""
        self._table("#products_table").add_columns(
            "", "Product", "Price", "Local"
        )
        self._table("#news_table").add_columns("Title", "Source", "Date")
        self._table("#cart_table").add_columns(
            "Product", "Qty", "Line", "Local"
        )
        self.query_one("#error_banner", Static).display = False

    def _table(self, selector: str) -> DataTable[str | Text]:
        return cast(
            DataTable[str | Text],
            self.query_one(selector, DataTable),
        )

    # ── Error banner ─────────────────────────────────────

    def show_error(self, message: str) -> None:
        """Show the dismissible error banner."""
        banner = self.query_one("#error_banner", Static)
        banner.update(f"❌ Error: {message}  [dim](Esc to dismiss)[/dim]")
        banner.display = True

    def action_dismiss_error(self) -> None:
        self.query_one("#error_banner", Static).display = False

    # ── Query ────────────────────────────────────────────

    async def on_button_pressed(self, event: Button.Pressed) -> None:
        """Handle button click events."""
        if event.button.id == "search_btn":
            await self.perform_query()

    async def on_input_submitted(self, event: Input.Submitted) -> None:
        """Handle Enter key in the city input."""
        if event.input.id == "city_input":
            await self.perform_query()

    async def perform_query(self) -> None:
        """Fetch weather, currency and news for the entered city."""
        city = self.query_one("#city_input", Input).value.strip()
        if not city:
            self.show_error("Please enter a city name")
            return

        status = self.query_one("#status", Static)
        self.action_dismiss_error()
        status.update(f"🔍 Loading data for '{city}'...")

        try:
            result = await self.orchestrator.query_city(self.session, city)
        except WeatherStoreError as exc:
            logger.error("Query for '%s' failed: %s", city, exc.message)
            self.show_error(exc.message)
            status.update("Ready")
            return

        self.render_weather()
        self.populate_products()
        self.populate_news()
        self.populate_cart()
        status.update(
            f"✅ {len(result.recommendations)} products for "
            f"{result.weather.city_name or city}, prices in "
            f"{result.currency.code}"
        )

    # ── Rendering ────────────────────────────────────────

    def render_weather(self) -> None:
        """Show the session's current weather."""
        weather = self.session.weather
        panel = self.query_one("#weather_panel", Static)
        if weather is None:
            panel.update("")
            return
        rain = "Rainy conditions" if weather.rain > 0 else "No rain"
        panel.update(
            f"🌡️ {weather.temperature:.1f}°C ({weather.description})  "
            f"🤔 Feels like {weather.feels_like:.1f}°C, "
            f"wind {weather.wind_speed} m/s  "
            f"📍 {weather.country_code} "
            f"({weather.coordinates.lat:.2f}, "
            f"{weather.coordinates.lon:.2f})  "
            f"💧 {weather.rain} mm, {rain}"
        )

    def populate_products(self) -> None:
        """Fill the products table with the current recommendations."""
        table = self._table("#products_table")
        table.clear()
        currency = self.session.currency
        for rec in self.session.recommendations:
            p = rec.product
            local = to_local(p.price, currency)
            table.add_row(
                "⭐" if rec.weather_recommended else "",
                f"{p.icon} {p.name}",
                f"${p.price:,.0f}",
                Text(
                    f"≈ {local:,.0f} {currency.symbol}",
                    style="bold green" if rec.weather_recommended else "",
                ),
                key=str(p.id),
            )

    def populate_news(self) -> None:
        """Fill the news table; hidden when there is nothing to show."""
        table = self._table("#news_table")
        table.clear()
        table.display = bool(self.session.news)
        for article in self.session.news:
            table.add_row(
                article.title[:70],
                article.source,
                article.published_at[:10],
            )

    def populate_cart(self) -> None:
        """Fill the cart table and totals line."""
        table = self._table("#cart_table")
        table.clear()
        currency = self.session.currency
        for line in self.session.cart.lines(currency):
            table.add_row(
                f"{line.icon} {line.name}",
                str(line.quantity),
                f"${line.line_reference:,.2f}",
                f"≈ {line.line_local:,.0f} {currency.symbol}",
                key=str(line.product_id),
            )

        total_label = self.query_one("#cart_total", Static)
        if self.session.cart.is_empty:
            total_label.update("Cart is empty")
            return
        totals = self.session.cart.totals(currency)
        total_label.update(
            f"🛒 {totals.item_count} items  "
            f"Total: ${totals.total_reference:,.2f} "
            f"(≈ {totals.total_local:,.0f} {currency.symbol})"
        )

    # ── Cart actions ─────────────────────────────────────

    def _selected_id(self, selector: str) -> int | None:
        """Product id of the highlighted row, if any."""
        table = self._table(selector)
        if table.row_count == 0:
            return None
        row_key, _ = table.coordinate_to_cell_key(table.cursor_coordinate)
        if row_key.value is None:
            return None
        return int(row_key.value)

    def action_add_to_cart(self) -> None:
        """Add the highlighted recommendation to the cart."""
        product_id = self._selected_id("#products_table")
        if product_id is None:
            return
        entry = self.session.cart.add(product_id)
        product = self.session.find_product(product_id)
        if entry is None or product is None:
            return
        self._clear_armed = False
        self.populate_cart()
        self.notify(f"✅ {product.name} added to cart!", timeout=3)

    def _shift_selected(self, delta: int) -> None:
        product_id = self._selected_id("#cart_table")
        if product_id is None:
            return
        remaining = self.session.cart.set_quantity_delta(product_id, delta)
        if remaining == 0:
            self.notify("🗑️ Item removed from cart", timeout=3)
        self.populate_cart()

    def action_increase(self) -> None:
        self._shift_selected(1)

    def action_decrease(self) -> None:
        self._shift_selected(-1)

    def action_remove(self) -> None:
        """Remove the highlighted cart line."""
        product_id = self._selected_id("#cart_table")
        if product_id is None:
            return
        if self.session.cart.remove(product_id):
            self.notify("🗑️ Item removed from cart", timeout=3)
        self.populate_cart()

    def action_clear_cart(self) -> None:
        """Clear the cart; the first press only asks for confirmation."""
        if self.session.cart.is_empty:
            return
        if not self._clear_armed:
            self._clear_armed = True
            self.notify(
                "Press x again to clear your cart",
                severity="warning",
                timeout=3,
            )
            return
        self._clear_armed = False
        self.session.cart.clear()
        self.populate_cart()
        self.notify("🗑️ Cart cleared", timeout=3)

    def action_checkout(self) -> None:
        """Place the order, save a receipt and empty the cart."""
        try:
            order = self.session.cart.checkout(self.session.currency)
        except WeatherStoreError as exc:
            self.notify(exc.message, severity="warning")
            return

        try:
            path = self.file_manager.save_order(order)
            logger.info("Order receipt saved to %s", path)
        except OSError as e:
            logger.error("Failed to save order receipt", exc_info=True)
            self.notify(f"Receipt save failed: {e}", severity="error")

        self.populate_cart()
        self.notify(
            f"✅ Order placed: {order.totals.item_count} items, "
            f"${order.totals.total_reference:,.2f} "
            f"(≈ {order.totals.total_local:,.0f} {order.currency_symbol})",
            timeout=5,
        )

    def action_export(self) -> None:
        """Export the cart to a CSV file."""
        if self.session.cart.is_empty:
            self.notify("Cart is empty", severity="warning")
            return
        try:
            path = self.file_manager.export_cart_csv(
                self.session.cart.lines(self.session.currency),
                self.session.currency.code,
            )
            logger.info("Exported cart to %s", path)
            self.notify(f"Exported to {path}")
        except OSError as e:
            logger.error("Failed to export cart", exc_info=True)
            self.notify(f"Export failed: {e}", severity="error")
