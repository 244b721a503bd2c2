# src/models/currency.py

"""Active display currency for a storefront session."""

from dataclasses import dataclass

from src.config.settings import Settings


@dataclass(frozen=True)
class CurrencyContext:
    """Conversion from the reference currency to the local one."""

    rate: float
    symbol: str
    code: str

    @classmethod
    def identity(cls) -> "CurrencyContext":
        """Rate 1 in the reference currency."""
        return cls(rate=1.0, symbol="$", code=Settings.REFERENCE_CURRENCY)

    @property
    def is_reference(self) -> bool:
        return self.code == Settings.REFERENCE_CURRENCY
