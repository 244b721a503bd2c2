# src/catalog/default_catalog.py

"""Built-in product catalog used when the store has not been seeded."""

from src.models.product import Category, Product, WeatherAffinity

DEFAULT_CATALOG: tuple[Product, ...] = (
    Product(
        id=1,
        name='MacBook Pro 14"',
        price=1999.0,
        category=Category.LAPTOP,
        icon="💻",
        description=(
            "Powerful laptop with M3 chip, 14-inch Liquid Retina XDR "
            "display, and exceptional battery life."
        ),
        stock=15,
    ),
    Product(
        id=2,
        name="iPad Air",
        price=599.0,
        category=Category.TABLET,
        icon="📱",
        description=(
            "Versatile tablet with M1 chip, 10.9-inch display, and "
            "Apple Pencil support."
        ),
        stock=30,
    ),
    Product(
        id=3,
        name="iPhone 15 Pro",
        price=999.0,
        category=Category.PHONE,
        icon="📱",
        description=(
            "Flagship phone with A17 Pro chip, advanced camera system, "
            "and titanium design."
        ),
        stock=25,
    ),
    Product(
        id=4,
        name="Portable USB Fan",
        price=29.0,
        category=Category.ACCESSORY,
        icon="🌀",
        weather=WeatherAffinity.HOT,
        description="Compact rechargeable fan for hot days on the go.",
        stock=50,
    ),
    Product(
        id=5,
        name="Wireless Noise-Cancelling Headphones",
        price=199.0,
        category=Category.ACCESSORY,
        icon="🎧",
        weather=WeatherAffinity.COLD,
        description=(
            "Over-ear headphones with active noise cancelling that "
            "double as ear warmers."
        ),
        stock=40,
    ),
    Product(
        id=6,
        name="Waterproof Phone Case",
        price=39.0,
        category=Category.ACCESSORY,
        icon="🛡️",
        weather=WeatherAffinity.RAINY,
        description="IP68 phone case that keeps your device dry in the rain.",
        stock=60,
    ),
    Product(
        id=7,
        name="Power Bank 20000mAh",
        price=49.0,
        category=Category.ACCESSORY,
        icon="🔋",
        description="High-capacity power bank with fast charging support.",
        stock=45,
    ),
    Product(
        id=8,
        name="Apple Watch Series 9",
        price=399.0,
        category=Category.WEARABLE,
        icon="⌚",
        description="Smartwatch with health tracking and always-on display.",
        stock=20,
    ),
    Product(
        id=9,
        name="Gaming Laptop ROG",
        price=1499.0,
        category=Category.LAPTOP,
        icon="🎮",
        description=(
            "High-performance gaming laptop with RTX 4070, 16GB RAM, "
            "and 144Hz display."
        ),
        stock=12,
    ),
    Product(
        id=10,
        name="Wireless Mouse MX Master",
        price=49.0,
        category=Category.ACCESSORY,
        icon="🖱️",
        description="Ergonomic wireless mouse with multi-device support.",
        stock=80,
    ),
)
