# src/storage/catalog_store.py

"""SQLite-backed product catalog and review store."""

import logging
import sqlite3
from datetime import datetime
from pathlib import Path
from typing import Any, Iterable

from src.catalog.default_catalog import DEFAULT_CATALOG
from src.config.settings import Settings
from src.errors import NotFoundError, ValidationError, WeatherStoreError
from src.filters.product_validator import ProductValidator
from src.models.product import Category, Product, WeatherAffinity
from src.models.review import Review
from src.pricing.rounding import round_half_up

logger = logging.getLogger("weather_store.store")

_SCHEMA = """\
CREATE TABLE IF NOT EXISTS products (
    id             INTEGER PRIMARY KEY AUTOINCREMENT,
    name           TEXT    NOT NULL,
    price          REAL    NOT NULL,
    description    TEXT    NOT NULL,
    category       TEXT    NOT NULL,
    icon           TEXT    NOT NULL DEFAULT '📦',
    weather        TEXT    NOT NULL DEFAULT 'all',
    stock          INTEGER NOT NULL DEFAULT 0,
    image_url      TEXT    NOT NULL DEFAULT '',
    is_active      INTEGER NOT NULL DEFAULT 1,
    average_rating REAL    NOT NULL DEFAULT 0,
    total_reviews  INTEGER NOT NULL DEFAULT 0,
    created_at     TEXT    NOT NULL,
    updated_at     TEXT    NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_products_name_category
    ON products(name, category);
CREATE INDEX IF NOT EXISTS idx_products_price ON products(price);
CREATE INDEX IF NOT EXISTS idx_products_weather ON products(weather);

CREATE TABLE IF NOT EXISTS reviews (
    id             INTEGER PRIMARY KEY AUTOINCREMENT,
    product_id     INTEGER NOT NULL
                   REFERENCES products(id) ON DELETE CASCADE,
    title          TEXT    NOT NULL,
    rating         INTEGER NOT NULL,
    comment        TEXT    NOT NULL,
    reviewer_name  TEXT    NOT NULL,
    reviewer_email TEXT    NOT NULL,
    verified       INTEGER NOT NULL DEFAULT 0,
    helpful        INTEGER NOT NULL DEFAULT 0,
    is_active      INTEGER NOT NULL DEFAULT 1,
    created_at     TEXT    NOT NULL,
    updated_at     TEXT    NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_reviews_product_date
    ON reviews(product_id, created_at);
CREATE INDEX IF NOT EXISTS idx_reviews_rating ON reviews(rating);
"""

_PRODUCT_FIELDS: tuple[str, ...] = (
    "name", "price", "description", "category", "icon",
    "weather", "stock", "image_url", "is_active",
)

_REVIEW_UPDATE_FIELDS: tuple[str, ...] = (
    "title", "rating", "comment", "helpful", "is_active",
)


def title_case(name: str) -> str:
    """Capitalise each space-separated word, lowercasing the rest."""
    return " ".join(
        word[:1].upper() + word[1:].lower()
        for word in name.split(" ")
    )


def _enum_value(value: Any) -> Any:
    """Store enum members by their plain value."""
    return value.value if isinstance(value, (Category, WeatherAffinity)) else value


def _row_to_product(row: sqlite3.Row) -> Product:
    return Product(
        id=row["id"],
        name=row["name"],
        price=row["price"],
        category=Category(row["category"]),
        icon=row["icon"],
        weather=WeatherAffinity(row["weather"]),
        description=row["description"],
        stock=row["stock"],
        image_url=row["image_url"],
        is_active=bool(row["is_active"]),
        average_rating=row["average_rating"],
        total_reviews=row["total_reviews"],
    )


def _row_to_review(row: sqlite3.Row) -> Review:
    return Review(
        id=row["id"],
        product_id=row["product_id"],
        title=row["title"],
        rating=row["rating"],
        comment=row["comment"],
        reviewer_name=row["reviewer_name"],
        reviewer_email=row["reviewer_email"],
        verified=bool(row["verified"]),
        helpful=row["helpful"],
        is_active=bool(row["is_active"]),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


class CatalogStore:
    """SQLite-backed store for products and their reviews."""

    def __init__(
        self, db_path: Path | None = None,
    ) -> None:
        path = db_path or Settings.STORE_DB_PATH
        path.parent.mkdir(parents=True, exist_ok=True)
        self._conn = sqlite3.connect(
            str(path), check_same_thread=False,
        )
        self._conn.row_factory = sqlite3.Row
        self._conn.execute("PRAGMA journal_mode=WAL")
        self._conn.execute("PRAGMA foreign_keys=ON")
        self._conn.executescript(_SCHEMA)
        logger.debug("CatalogStore opened at %s", path)

    def close(self) -> None:
        """Close the database connection."""
        self._conn.close()

    # ── Products ─────────────────────────────────────────

    def create_product(self, **fields: Any) -> Product:
        """Validate and insert a product. Its name is title-cased."""
        record: dict[str, Any] = {
            "icon": "📦",
            "weather": WeatherAffinity.UNIVERSAL.value,
            "stock": 0,
            "image_url": "",
            "is_active": True,
        }
        record.update(
            {k: _enum_value(v) for k, v in fields.items() if v is not None}
        )
        unknown = set(record) - set(_PRODUCT_FIELDS)
        if unknown:
            raise ValidationError(
                [f"Unknown product field: {k}" for k in sorted(unknown)]
            )

        errors = ProductValidator.validate_product(record)
        if errors:
            raise ValidationError(errors)

        record["name"] = title_case(record["name"].strip())
        record["description"] = record["description"].strip()
        product_id = self._insert_product(record)
        self._conn.commit()

        product = self.get_product(product_id)
        logger.info(
            "Product created: %s (ID: %d)", product.name, product.id
        )
        return product

    def _insert_product(
        self, record: dict[str, Any], product_id: int | None = None,
    ) -> int:
        now = datetime.now().isoformat()
        cur = self._conn.execute(
            "INSERT INTO products "
            "(id, name, price, description, category, icon, weather, "
            " stock, image_url, is_active, created_at, updated_at) "
            "VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)",
            (
                product_id,
                record["name"],
                float(record["price"]),
                record["description"],
                record["category"],
                record["icon"],
                record["weather"],
                record["stock"],
                record["image_url"] or "",
                int(bool(record["is_active"])),
                now,
                now,
            ),
        )
        if cur.lastrowid is None:
            raise WeatherStoreError("Product insert returned no id")
        return cur.lastrowid

    def get_product(self, product_id: int) -> Product:
        """Return a product or raise :class:`NotFoundError`."""
        row = self._conn.execute(
            "SELECT * FROM products WHERE id = ?", (product_id,),
        ).fetchone()
        if row is None:
            raise NotFoundError("Product", product_id)
        return _row_to_product(row)

    def list_products(
        self,
        category: Category | str | None = None,
        weather: WeatherAffinity | str | None = None,
        min_price: float | None = None,
        max_price: float | None = None,
        active: bool | None = None,
    ) -> list[Product]:
        """List products, newest first.

        A weather filter also matches universal products.
        """
        clauses: list[str] = []
        params: list[Any] = []
        if category is not None:
            clauses.append("category = ?")
            params.append(_enum_value(category))
        if weather is not None:
            clauses.append("(weather = ? OR weather = ?)")
            params.extend(
                [_enum_value(weather), WeatherAffinity.UNIVERSAL.value]
            )
        if min_price is not None:
            clauses.append("price >= ?")
            params.append(min_price)
        if max_price is not None:
            clauses.append("price <= ?")
            params.append(max_price)
        if active is not None:
            clauses.append("is_active = ?")
            params.append(int(active))

        where = f"WHERE {' AND '.join(clauses)} " if clauses else ""
        rows = self._conn.execute(
            f"SELECT * FROM products {where}"
            "ORDER BY created_at DESC, id DESC",
            params,
        ).fetchall()
        logger.debug("Retrieved %d products", len(rows))
        return [_row_to_product(r) for r in rows]

    def find_by_category(
        self, category: Category | str,
    ) -> list[Product]:
        """Active products in a category."""
        return self.list_products(category=category, active=True)

    def find_by_weather(
        self, weather: WeatherAffinity | str,
    ) -> list[Product]:
        """Active products for a weather tag, universal ones included."""
        return self.list_products(weather=weather, active=True)

    def is_available(self, product_id: int) -> bool:
        """Active and in stock."""
        return self.get_product(product_id).is_available

    def update_product(
        self, product_id: int, **fields: Any,
    ) -> Product:
        """Apply the given fields and re-validate the whole record."""
        current = self.get_product(product_id)
        unknown = set(fields) - set(_PRODUCT_FIELDS)
        if unknown:
            raise ValidationError(
                [f"Unknown product field: {k}" for k in sorted(unknown)]
            )

        record: dict[str, Any] = {
            "name": current.name,
            "price": current.price,
            "description": current.description,
            "category": current.category.value,
            "icon": current.icon,
            "weather": current.weather.value,
            "stock": current.stock,
            "image_url": current.image_url,
            "is_active": current.is_active,
        }
        record.update(
            {k: _enum_value(v) for k, v in fields.items() if v is not None}
        )
        errors = ProductValidator.validate_product(record)
        if errors:
            raise ValidationError(errors)

        if "name" in fields:
            record["name"] = title_case(record["name"].strip())

        self._conn.execute(
            "UPDATE products SET name = ?, price = ?, description = ?, "
            "category = ?, icon = ?, weather = ?, stock = ?, "
            "image_url = ?, is_active = ?, updated_at = ? "
            "WHERE id = ?",
            (
                record["name"],
                float(record["price"]),
                record["description"],
                record["category"],
                record["icon"],
                record["weather"],
                record["stock"],
                record["image_url"] or "",
                int(bool(record["is_active"])),
                datetime.now().isoformat(),
                product_id,
            ),
        )
        self._conn.commit()
        product = self.get_product(product_id)
        logger.info(
            "Product updated: %s (ID: %d)", product.name, product.id
        )
        return product

    def delete_product(self, product_id: int) -> Product:
        """Delete a product and, by cascade, its reviews."""
        product = self.get_product(product_id)
        self._conn.execute(
            "DELETE FROM products WHERE id = ?", (product_id,),
        )
        self._conn.commit()
        logger.info(
            "Product deleted: %s (ID: %d)", product.name, product.id
        )
        return product

    def seed_products(
        self, products: Iterable[Product] = DEFAULT_CATALOG,
    ) -> int:
        """Replace every product with ``products``, keeping their ids."""
        self._conn.execute("DELETE FROM products")
        count = 0
        for p in products:
            self._insert_product(
                {
                    "name": p.name,
                    "price": p.price,
                    "description": p.description,
                    "category": p.category.value,
                    "icon": p.icon,
                    "weather": p.weather.value,
                    "stock": p.stock,
                    "image_url": p.image_url,
                    "is_active": p.is_active,
                },
                product_id=p.id,
            )
            count += 1
        self._conn.commit()
        logger.info("Seeded %d products", count)
        return count

    def count_products(self) -> int:
        """Number of stored products, active or not."""
        row = self._conn.execute("SELECT COUNT(*) FROM products").fetchone()
        return int(row[0])

    def load_catalog(self) -> list[Product]:
        """Active products in id order, for the storefront session."""
        rows = self._conn.execute(
            "SELECT * FROM products WHERE is_active = 1 ORDER BY id",
        ).fetchall()
        return [_row_to_product(r) for r in rows]

    # ── Reviews ──────────────────────────────────────────

    def create_review(
        self,
        product_id: int,
        title: str,
        rating: int,
        comment: str,
        reviewer_name: str,
        reviewer_email: str,
    ) -> Review:
        """Insert a review and refresh the product's rating stats."""
        product = self.get_product(product_id)
        fields: dict[str, Any] = {
            "title": title,
            "rating": rating,
            "comment": comment,
            "reviewer_name": reviewer_name,
            "reviewer_email": reviewer_email,
        }
        errors = ProductValidator.validate_review(fields)
        if errors:
            raise ValidationError(errors)

        now = datetime.now().isoformat()
        cur = self._conn.execute(
            "INSERT INTO reviews "
            "(product_id, title, rating, comment, reviewer_name, "
            " reviewer_email, created_at, updated_at) "
            "VALUES (?, ?, ?, ?, ?, ?, ?, ?)",
            (
                product_id,
                title.strip(),
                rating,
                comment.strip(),
                reviewer_name.strip(),
                reviewer_email.strip().lower(),
                now,
                now,
            ),
        )
        review_id = cur.lastrowid
        if review_id is None:
            raise WeatherStoreError("Review insert returned no id")
        self._recalculate_rating(product_id)
        self._conn.commit()
        logger.info("Review created for product: %s", product.name)
        return self.get_review(review_id)

    def get_review(self, review_id: int) -> Review:
        """Return a review or raise :class:`NotFoundError`."""
        row = self._conn.execute(
            "SELECT * FROM reviews WHERE id = ?", (review_id,),
        ).fetchone()
        if row is None:
            raise NotFoundError("Review", review_id)
        return _row_to_review(row)

    def list_reviews(
        self,
        product_id: int | None = None,
        rating: int | None = None,
        min_rating: int | None = None,
    ) -> list[Review]:
        """Active reviews, newest first.

        ``min_rating`` takes precedence over an exact ``rating``.
        """
        clauses = ["is_active = 1"]
        params: list[Any] = []
        if product_id is not None:
            clauses.append("product_id = ?")
            params.append(product_id)
        if min_rating is not None:
            clauses.append("rating >= ?")
            params.append(min_rating)
        elif rating is not None:
            clauses.append("rating = ?")
            params.append(rating)

        rows = self._conn.execute(
            f"SELECT * FROM reviews WHERE {' AND '.join(clauses)} "
            "ORDER BY created_at DESC, id DESC",
            params,
        ).fetchall()
        logger.debug("Retrieved %d reviews", len(rows))
        return [_row_to_review(r) for r in rows]

    def update_review(self, review_id: int, **fields: Any) -> Review:
        """Update a review's editable fields and refresh rating stats."""
        current = self.get_review(review_id)
        unknown = set(fields) - set(_REVIEW_UPDATE_FIELDS)
        if unknown:
            raise ValidationError(
                [f"Unknown review field: {k}" for k in sorted(unknown)]
            )

        merged: dict[str, Any] = {
            "title": current.title,
            "rating": current.rating,
            "comment": current.comment,
            "reviewer_name": current.reviewer_name,
            "reviewer_email": current.reviewer_email,
        }
        merged.update(
            {
                k: v for k, v in fields.items()
                if k in merged and v is not None
            }
        )
        errors = ProductValidator.validate_review(merged)
        helpful = fields.get("helpful", current.helpful)
        if not isinstance(helpful, int) or helpful < 0:
            errors.append("Helpful count cannot be negative")
        if errors:
            raise ValidationError(errors)

        is_active = fields.get("is_active")
        self._conn.execute(
            "UPDATE reviews SET title = ?, rating = ?, comment = ?, "
            "helpful = ?, is_active = ?, updated_at = ? WHERE id = ?",
            (
                merged["title"].strip(),
                merged["rating"],
                merged["comment"].strip(),
                helpful,
                int(current.is_active if is_active is None else is_active),
                datetime.now().isoformat(),
                review_id,
            ),
        )
        self._recalculate_rating(current.product_id)
        self._conn.commit()
        logger.info("Review updated: %s", merged["title"])
        return self.get_review(review_id)

    def delete_review(self, review_id: int) -> Review:
        """Delete a review and refresh the product's rating stats."""
        review = self.get_review(review_id)
        self._conn.execute(
            "DELETE FROM reviews WHERE id = ?", (review_id,),
        )
        self._recalculate_rating(review.product_id)
        self._conn.commit()
        logger.info("Review deleted: %s", review.title)
        return review

    def _recalculate_rating(self, product_id: int) -> None:
        """Recompute average rating and review count over active reviews."""
        row = self._conn.execute(
            "SELECT AVG(rating), COUNT(id) FROM reviews "
            "WHERE product_id = ? AND is_active = 1",
            (product_id,),
        ).fetchone()
        count: int = row[1] if row else 0
        average = round_half_up(row[0], 1) if count else 0.0
        self._conn.execute(
            "UPDATE products SET average_rating = ?, total_reviews = ? "
            "WHERE id = ?",
            (average, count, product_id),
        )
        logger.debug(
            "Product %d rating recalculated: %.1f over %d reviews",
            product_id,
            average,
            count,
        )


def load_catalog_or_default(db_path: Path | None = None) -> list[Product]:
    """Active products from the store, or the built-in catalog if unseeded."""
    store = CatalogStore(db_path)
    try:
        catalog = store.load_catalog()
    finally:
        store.close()
    if not catalog:
        logger.info("Store is empty, using the built-in catalog")
        return list(DEFAULT_CATALOG)
    return catalog
