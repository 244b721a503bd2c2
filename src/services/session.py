# src/services/session.py

"""Per-user storefront state: catalog, cart and the last query's results."""

from dataclasses import dataclass, field

from src.cart.ledger import CartLedger
from src.catalog.default_catalog import DEFAULT_CATALOG
from src.filters.recommendation_filter import Recommendation
from src.models.currency import CurrencyContext
from src.models.news import NewsArticle
from src.models.product import Product
from src.models.weather import WeatherObservation


@dataclass
class StorefrontSession:
    """State owned by one user; passed explicitly to every operation."""

    catalog: list[Product] = field(
        default_factory=lambda: list(DEFAULT_CATALOG)
    )
    currency: CurrencyContext = field(
        default_factory=CurrencyContext.identity
    )
    weather: WeatherObservation | None = None
    recommendations: list[Recommendation] = field(
        default_factory=lambda: list[Recommendation]()
    )
    news: list[NewsArticle] = field(
        default_factory=lambda: list[NewsArticle]()
    )
    cart: CartLedger = field(init=False)

    def __post_init__(self) -> None:
        self.cart = CartLedger(self.catalog)

    def find_product(self, product_id: int) -> Product | None:
        for product in self.catalog:
            if product.id == product_id:
                return product
        return None
