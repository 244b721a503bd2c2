# src/models/product.py

"""Catalog product model shared by the recommender, cart and store."""

from dataclasses import dataclass
from enum import Enum


class Category(str, Enum):
    """Product categories accepted by the catalog store."""

    LAPTOP = "laptop"
    PHONE = "phone"
    TABLET = "tablet"
    ACCESSORY = "accessory"
    WEARABLE = "wearable"
    OTHER = "other"


class WeatherAffinity(str, Enum):
    """Which weather makes a product worth recommending."""

    UNIVERSAL = "all"
    HOT = "hot"
    COLD = "cold"
    RAINY = "rain"


@dataclass(frozen=True)
class Product:
    """A single catalog entry. Prices are in the reference currency."""

    id: int
    name: str
    price: float
    category: Category = Category.OTHER
    icon: str = "📦"
    weather: WeatherAffinity = WeatherAffinity.UNIVERSAL
    description: str = ""
    stock: int = 0
    image_url: str = ""
    is_active: bool = True
    average_rating: float = 0.0
    total_reviews: int = 0

    @property
    def is_available(self) -> bool:
        """Active and in stock."""
        return self.is_active and self.stock > 0
