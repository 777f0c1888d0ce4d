from dataclasses import dataclass
from typing import FrozenSet

from config import Settings


@dataclass(frozen=True)
class TransactionPolicy:
    """Business constants shared by the validator, builder and orchestrator."""

    accepted_brands: FrozenSet[str] = frozenset({"MSCD", "VISA", "AMEX", "DINE"})
    supported_currencies: FrozenSet[str] = frozenset({"USD", "EUR", "GBP"})
    default_currency: str = "USD"
    country_code: str = "EC"
    accepted_marker: str = "aceptada"
    rejected_marker: str = "rechazada"
    max_brand_length: int = 4

    @classmethod
    def from_settings(cls, settings: Settings) -> "TransactionPolicy":
        return cls(
            accepted_brands=frozenset(settings.ACCEPTED_BRANDS),
            supported_currencies=frozenset(settings.SUPPORTED_CURRENCIES),
            default_currency=settings.DEFAULT_CURRENCY,
            country_code=settings.COUNTRY_CODE,
            accepted_marker=settings.GATEWAY_ACCEPTED_MARKER,
            rejected_marker=settings.GATEWAY_REJECTED_MARKER,
        )

    def brand_list(self) -> str:
        return ", ".join(sorted(self.accepted_brands))
