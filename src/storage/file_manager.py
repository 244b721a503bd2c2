# src/storage/file_manager.py

"""Handles saving order receipts and cart exports to disk."""

import csv
import json
import logging
from datetime import datetime
from pathlib import Path

from src.config.settings import Settings
from src.models.cart import CartLine, OrderSummary

logger = logging.getLogger("weather_store.storage")


def order_to_dict(order: OrderSummary) -> dict[str, object]:
    """Serialise an order summary to plain JSON-ready data."""
    return {
        "placed_at": order.placed_at.isoformat(),
        "currency": order.currency_code,
        "symbol": order.currency_symbol,
        "item_count": order.totals.item_count,
        "total_reference": order.totals.total_reference,
        "total_local": order.totals.total_local,
        "lines": [
            {
                "product_id": line.product_id,
                "name": line.name,
                "unit_price": line.unit_price,
                "quantity": line.quantity,
                "line_reference": line.line_reference,
                "line_local": line.line_local,
            }
            for line in order.lines
        ],
    }


class FileManager:
    """Handles saving order receipts and cart exports to disk."""

    def __init__(self) -> None:
        self.results_dir: Path = Settings.RESULTS_DIR
        self.results_dir.mkdir(parents=True, exist_ok=True)
        logger.debug("FileManager initialised, results_dir=%s", self.results_dir)

    def save_order(self, order: OrderSummary) -> Path:
        """Save an order receipt to a timestamped JSON file."""
        timestamp = order.placed_at.strftime("%Y%m%d_%H%M%S_%f")
        filepath = self.results_dir / f"order_{timestamp}.json"

        with open(filepath, "w", encoding="utf-8") as f:
            json.dump(
                order_to_dict(order), f, ensure_ascii=False, indent=2
            )

        logger.info(
            "Saved order of %d items to %s",
            order.totals.item_count,
            filepath,
        )
        return filepath

    def export_cart_csv(
        self, lines: list[CartLine], currency_code: str,
    ) -> Path:
        """Export priced cart lines to a CSV file, most expensive first."""
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
        filepath = self.results_dir / f"cart_{timestamp}.csv"

        sorted_lines = sorted(
            lines, key=lambda line: line.line_reference, reverse=True
        )

        with open(filepath, "w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f)
            writer.writerow(
                [
                    "Product",
                    "Unit Price",
                    "Quantity",
                    "Line Total",
                    f"Line Total ({currency_code})",
                ]
            )
            for line in sorted_lines:
                writer.writerow(
                    [
                        line.name,
                        line.unit_price,
                        line.quantity,
                        line.line_reference,
                        line.line_local,
                    ]
                )

        logger.info(
            "Exported %d cart lines to %s", len(lines), filepath
        )
        return filepath
